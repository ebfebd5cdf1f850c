"""
rexport logging module

Structured logging for the export orchestrator: a daily rotated log file,
a stderr handler for warnings, a dedicated logger for remote API calls,
and automatic sanitization of tokens and credentialed URLs.
"""

from .logger import (
    get_logger,
    setup_logging,
    LogLevel,
    log_api_call,
    log_job_event,
)
from .config import LogConfig
from .utils import sanitize_data, get_log_directory

__all__ = [
    "get_logger",
    "setup_logging",
    "log_api_call",
    "log_job_event",
    "LogLevel",
    "LogConfig",
    "sanitize_data",
    "get_log_directory",
]
