"""Layered configuration: defaults, then a JSON settings file, then environment.

The settings file uses the ``appsettings.json`` layout::

    {
        "EventProcessor": {"Iterations": 5, "DelayMs": 250},
        "Logging": {"Level": "INFO", "Format": "text"}
    }

Environment variables override file values using ``Section__Key`` names,
e.g. ``EventProcessor__Iterations=10``. Names are matched case-insensitively.
"""

import os
import warnings
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from eventlogger.core.processor import (
    DEFAULT_DELAY_MS,
    DEFAULT_ITERATIONS,
    ProcessorSettings,
)
from eventlogger.errors import ConfigurationError, ConfigurationWarning

DEFAULT_SETTINGS_FILE = "appsettings.json"
ENVIRONMENT_VARIABLE = "EVENTLOGGER_ENVIRONMENT"
DEFAULT_ENVIRONMENT = "Production"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["ndjson", "text"]


class EventProcessorSettings(BaseModel):
    """The ``EventProcessor`` section.

    Negative values are clamped to zero and reported as a
    ConfigurationWarning.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    iterations: int = Field(default=DEFAULT_ITERATIONS, alias="Iterations")
    delay_ms: int = Field(default=DEFAULT_DELAY_MS, alias="DelayMs")

    @field_validator("iterations", "delay_ms", mode="before")
    @classmethod
    def reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be an integer, not a boolean")
        return value

    @field_validator("iterations", "delay_ms")
    @classmethod
    def clamp_negative(cls, value: int, info: ValidationInfo) -> int:
        if value < 0:
            alias = cls.model_fields[str(info.field_name)].alias
            warnings.warn(
                f"EventProcessor.{alias} was {value}; using 0",
                ConfigurationWarning,
                stacklevel=2,
            )
            return 0
        return value


class LoggingSettings(BaseModel):
    """The ``Logging`` section.

    Attributes:
        level: Minimum level name emitted by the ``eventlogger`` logger.
        format: ``ndjson`` for structured JSON lines, ``text`` for plain lines.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    level: LogLevel = Field(default="DEBUG", alias="Level")
    format: LogFormat = Field(default="ndjson", alias="Format")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("format", mode="before")
    @classmethod
    def normalize_format(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


class Settings(BaseSettings):
    """Resolved application settings.

    Sources, highest priority first: keyword arguments, environment
    variables, then the JSON settings file (``settings_file``, or
    ``appsettings.json`` in the working directory when present).

    Attributes:
        event_processor: Loop parameters as configured.
        logging: Log sink configuration.
        environment: Deployment environment name, reported at startup.
        settings_file: JSON file read as the lowest-priority source.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    event_processor: EventProcessorSettings = Field(
        default_factory=EventProcessorSettings, alias="EventProcessor"
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings, alias="Logging")
    environment: str = Field(
        default=DEFAULT_ENVIRONMENT, validation_alias=ENVIRONMENT_VARIABLE
    )
    settings_file: Path | None = Field(default=None, exclude=True)

    _warnings: tuple[str, ...] = ()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        json_file: Any = DEFAULT_SETTINGS_FILE
        if isinstance(init_settings, InitSettingsSource):
            json_file = init_settings.init_kwargs.get("settings_file") or json_file
        return (
            init_settings,
            env_settings,
            JsonConfigSettingsSource(settings_cls, json_file=json_file),
        )

    @property
    def processor(self) -> ProcessorSettings:
        """Loop parameters in the form EventProcessor takes."""
        return ProcessorSettings(
            iterations=self.event_processor.iterations,
            delay_ms=self.event_processor.delay_ms,
        )

    @property
    def warnings(self) -> tuple[str, ...]:
        """Adjustments made while resolving values, e.g. clamping."""
        return self._warnings


@contextmanager
def _collect_adjustments() -> Iterator[list[str]]:
    """Collect ConfigurationWarning messages raised inside the block."""
    adjustments: list[str] = []
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ConfigurationWarning)
        yield adjustments
    for warning in caught:
        if issubclass(warning.category, ConfigurationWarning):
            adjustments.append(str(warning.message))
        else:
            warnings.warn_explicit(
                warning.message, warning.category, warning.filename, warning.lineno
            )


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )


def load_settings(path: str | os.PathLike[str] | None = None) -> Settings:
    """Resolve settings from defaults, a JSON file and environment variables.

    Args:
        path: Settings file. When None, ``appsettings.json`` in the working
            directory is used if it exists.

    Returns:
        The resolved Settings.

    Raises:
        ConfigurationError: If the file is missing or unreadable, or a value
            is invalid.
    """
    settings_file = Path(path) if path is not None else None
    if settings_file is not None and not settings_file.is_file():
        raise ConfigurationError(f"cannot read settings file {settings_file}")

    with _collect_adjustments() as adjustments:
        try:
            settings = Settings(settings_file=settings_file)
        except ValidationError as exc:
            raise ConfigurationError(_describe(exc)) from exc
        except (ValueError, TypeError, OSError) as exc:
            source = settings_file or DEFAULT_SETTINGS_FILE
            raise ConfigurationError(f"invalid settings file {source}: {exc}") from exc

    settings._warnings = tuple(adjustments)
    return settings


def with_overrides(
    settings: Settings,
    iterations: int | None = None,
    delay_ms: int | None = None,
) -> Settings:
    """Apply command-line overrides on top of resolved settings."""
    overrides = {
        key: value
        for key, value in (("Iterations", iterations), ("DelayMs", delay_ms))
        if value is not None
    }
    if not overrides:
        return settings

    values = settings.event_processor.model_dump(by_alias=True) | overrides
    with _collect_adjustments() as adjustments:
        try:
            section = EventProcessorSettings.model_validate(values)
        except ValidationError as exc:
            raise ConfigurationError(_describe(exc)) from exc

    updated = settings.model_copy(update={"event_processor": section})
    updated._warnings = settings.warnings + tuple(adjustments)
    return updated
