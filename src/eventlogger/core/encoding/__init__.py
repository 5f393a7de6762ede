"""Encoders for structured log output."""

from eventlogger.core.encoding.ndjson import encode_entry, encode_logs

__all__ = ["encode_entry", "encode_logs"]
