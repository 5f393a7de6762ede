"""Exception types raised by eventlogger."""


class EventLoggerError(Exception):
    """Base class for eventlogger errors."""


class ConfigurationError(EventLoggerError):
    """Raised when configuration values are missing, malformed or unsupported."""


class ConfigurationWarning(UserWarning):
    """Issued when a configuration value is adjusted, e.g. a negative count."""
