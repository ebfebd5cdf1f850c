"""
Main logging module for rexport.

Logger setup with daily rotation, plus helpers for remote API calls and
export job lifecycle events.
"""

import logging
import logging.handlers
import sys
from typing import Optional, Dict, Any

from .config import LogConfig, LogLevel, get_log_file_path
from .formatters import RexportFormatter, APICallFormatter
from .utils import cleanup_old_logs, sanitize_data


_loggers: Dict[str, logging.Logger] = {}
_logging_configured = False
_log_config: Optional[LogConfig] = None


def _config_from_settings() -> LogConfig:
    """Build the default LogConfig, honouring the configured log level."""
    config = LogConfig()
    try:
        from rexport.utils.config_store import ConfigStore

        user_level = ConfigStore().load().log_level
        if user_level and user_level.upper() in [lev.value for lev in LogLevel]:
            config.default_level = LogLevel(user_level.upper())
    except Exception:
        # Unreadable settings fall back to the defaults
        pass
    return config


def _rotating_handler(path, config: LogConfig) -> logging.Handler:
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=path,
        when="midnight",
        interval=1,
        backupCount=config.log_retention_days,
        encoding="utf-8",
        utc=False,
    )
    handler.suffix = "%Y-%m-%d"
    return handler


def setup_logging(config: Optional[LogConfig] = None, force_reconfigure: bool = False) -> None:
    """
    Set up the rexport logging system.

    Args:
        config: LogConfig instance, read from settings if None
        force_reconfigure: Force reconfiguration even if already set up
    """
    global _logging_configured, _log_config

    if _logging_configured and not force_reconfigure:
        return

    if config is None:
        config = _config_from_settings()

    _log_config = config
    log_file_path = get_log_file_path(config)

    root_logger = logging.getLogger("rexport")
    root_logger.setLevel(getattr(logging, config.default_level.value))
    root_logger.handlers.clear()

    file_handler = _rotating_handler(log_file_path, config)
    file_handler.setLevel(getattr(logging, config.default_level.value))
    file_handler.setFormatter(
        RexportFormatter(
            include_timestamps=config.include_timestamps,
            include_thread_info=config.include_thread_info,
            include_process_info=config.include_process_info,
            sanitize_sensitive=config.sanitize_sensitive_data,
            sensitive_keys=config.sensitive_keys,
        )
    )
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, config.console_level.value))
    console_handler.setFormatter(
        RexportFormatter(
            include_timestamps=False,
            sanitize_sensitive=config.sanitize_sensitive_data,
            sensitive_keys=config.sensitive_keys,
        )
    )
    root_logger.addHandler(console_handler)

    api_logger = logging.getLogger("rexport.api")
    api_logger.setLevel(logging.DEBUG)
    api_logger.handlers.clear()
    if config.log_api_calls:
        api_handler = _rotating_handler(log_file_path, config)
        api_handler.setLevel(logging.DEBUG)
        api_handler.setFormatter(
            APICallFormatter(
                sanitize_sensitive=config.sanitize_sensitive_data,
                sensitive_keys=config.sensitive_keys,
            )
        )
        api_logger.addHandler(api_handler)
    api_logger.propagate = False

    try:
        cleanup_old_logs(log_file_path.parent, config.log_retention_days)
    except OSError:
        pass

    _logging_configured = True

    get_logger("rexport.setup").info(
        f"Logging initialized - File: {log_file_path}, "
        f"Level: {config.default_level.value}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified name.

    Args:
        name: Logger name (e.g., 'rexport.exporter.executor')
    """
    if not _logging_configured:
        setup_logging()

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]


def log_api_call(
    method: str,
    url: str,
    status_code: Optional[int] = None,
    duration: Optional[float] = None,
    error: Optional[str] = None,
    logger_name: str = "rexport.api",
) -> None:
    """
    Log a remote API call with structured information.

    Server errors and transport failures are logged as errors, 4xx as
    warnings, everything else at DEBUG.
    """
    logger = get_logger(logger_name)

    extra = {
        "api_method": method,
        "api_url": url,
        "api_status": status_code,
        "api_duration": duration or 0,
    }
    if error:
        extra["api_error"] = error

    if error or (status_code and status_code >= 500):
        logger.error("API call failed", extra=extra)
    elif status_code and 400 <= status_code < 500:
        logger.warning("API call client error", extra=extra)
    else:
        logger.debug("API call completed", extra=extra)


def log_job_event(
    job_uid: str,
    event: str,
    level: str = "info",
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "rexport.jobs",
) -> None:
    """
    Log an export job lifecycle event.

    Args:
        job_uid: Job identity (e.g. export_repo_42)
        event: Short description of the event
        level: Log level (debug, info, warning, error)
        details: Additional details, sanitized before logging
    """
    from rexport.constants import SENSITIVE_KEYS

    logger = get_logger(logger_name)
    extra = {"job_uid": job_uid, "job_event": event}
    message = f"Job {job_uid}: {event}"

    if details:
        sanitized = sanitize_data(details, SENSITIVE_KEYS)
        extra["job_details"] = sanitized
        message += " " + ", ".join(f"{k}={v}" for k, v in sanitized.items())

    log_method = getattr(logger, level.lower(), logger.info)
    log_method(message, extra=extra)
