"""
Custom formatters for rexport logging.

Job and application records use RexportFormatter; remote API calls use
APICallFormatter.
"""

import logging
from datetime import datetime
from .utils import sanitize_data, sanitize_string
from rexport.constants import SENSITIVE_KEYS


class RexportFormatter(logging.Formatter):
    """
    Structured formatter with optional components and automatic
    sanitization of sensitive data.
    """

    def __init__(
        self,
        include_timestamps: bool = True,
        include_thread_info: bool = False,
        include_process_info: bool = False,
        sanitize_sensitive: bool = True,
        sensitive_keys: tuple = None,
    ):
        self.include_timestamps = include_timestamps
        self.include_thread_info = include_thread_info
        self.include_process_info = include_process_info
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS
        fmt_parts = []
        if include_timestamps:
            fmt_parts.append("%(asctime)s")
        fmt_parts.extend(["%(levelname)s", "[%(name)s]", "%(message)s"])
        if include_thread_info:
            fmt_parts.insert(-1, "[%(threadName)s]")
        if include_process_info:
            fmt_parts.insert(-1, "[PID:%(process)d]")
        super().__init__(fmt=" ".join(fmt_parts), datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        if self.sanitize_sensitive:
            if isinstance(record.msg, (dict, list)):
                record.msg = sanitize_data(record.msg, self.sensitive_keys)
            if isinstance(record.args, (tuple, list)):
                record.args = tuple(
                    sanitize_data(arg, self.sensitive_keys)
                    if isinstance(arg, (dict, list, str))
                    else arg
                    for arg in record.args
                )
            formatted = super().format(record)
            # Exception text and pre-formatted f-strings may carry push URLs
            return sanitize_string(formatted)

        return super().format(record)


class APICallFormatter(logging.Formatter):
    """
    Formatter for remote API call records.

    Example:
        2026-02-02 17:27:34 DEBUG [rexport.api] POST https://host/api/v1/repos -> 201 (120.0ms)
    """

    def __init__(self, sanitize_sensitive: bool = True, sensitive_keys: tuple = None):
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        method = getattr(record, "api_method", "UNKNOWN")
        url = getattr(record, "api_url", "")
        status = getattr(record, "api_status", None) or "---"
        duration = round(getattr(record, "api_duration", 0) * 1000, 2)

        lines = [
            f"{timestamp} {record.levelname} [{record.name}] "
            f"{method} {url} -> {status} ({duration}ms)"
        ]

        api_error = getattr(record, "api_error", None)
        if api_error:
            lines.append(f"    Error: {api_error}")

        text = "\n".join(lines)
        if self.sanitize_sensitive:
            return sanitize_string(text)
        return text
