"""Shared utilities for gitstate."""

from ._concurrency import gather
from ._logging import (
    LogFormatType,
    create_cli_logger,
    create_service_logger,
    get_default_log_file,
)
from ._mime import (
    DEFAULT_SNIFF_BYTES,
    MIME_BINARY,
    MIME_TEXT,
    detect_mimes,
    detect_mimes_from_file,
    detect_mimes_from_stream,
)

__all__ = [
    "DEFAULT_SNIFF_BYTES",
    "MIME_BINARY",
    "MIME_TEXT",
    "LogFormatType",
    "create_cli_logger",
    "create_service_logger",
    "detect_mimes",
    "detect_mimes_from_file",
    "detect_mimes_from_stream",
    "gather",
    "get_default_log_file",
]
