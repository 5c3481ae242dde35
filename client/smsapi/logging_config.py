"""
Logging configuration for the SMS API client

The library itself only creates module loggers; nothing is configured on
import. Applications (and the smsapi-cli entry point) call setup_logging()
to get console or rotating-file output.
"""

import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone


def setup_logging(log_level=None, log_file=None, max_bytes=10*1024*1024, backup_count=5):
    """
    Set up logging for applications using the SMS API client.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (if None, logs to stderr)
        max_bytes: Maximum size of log file before rotation (default 10MB)
        backup_count: Number of backup log files to keep (default 5)

    Returns:
        Logger for this module
    """

    # Default log level from environment or WARNING
    if log_level is None:
        log_level = os.environ.get('LOG_LEVEL', 'WARNING')
    log_level = log_level.upper()

    # Default log file from environment
    if log_file is None:
        log_file = os.environ.get('LOG_FILE')

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Only the package logger is touched, never the root logger
    package_logger = logging.getLogger('smsapi')
    package_logger.setLevel(getattr(logging, log_level, logging.WARNING))
    package_logger.handlers.clear()

    if log_file:
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count
        )
    else:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(formatter)
    package_logger.addHandler(handler)
    package_logger.propagate = False

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized - Level: {log_level}, Output: {log_file or 'stderr'}")

    return logger


def get_logger(name):
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_request_event(event_type, method=None, endpoint=None, code=None,
                      success=True, error=None):
    """
    Log an API request outcome as key=value pairs.

    Args:
        event_type: Type of event (e.g., 'request_ok', 'request_rejected', 'request_failed')
        method: HTTP verb
        endpoint: Endpoint path relative to the base URL
        code: HTTP status code, if a response was received
        success: Whether the upstream accepted the request
        error: Error message if applicable
    """
    logger = logging.getLogger('smsapi.requests')

    log_data = {
        'event_type': event_type,
        'success': success,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    }

    if method:
        log_data['method'] = method
    if endpoint:
        log_data['endpoint'] = endpoint
    if code is not None:
        log_data['code'] = code
    if error:
        log_data['error'] = error

    log_message = ' '.join([f"{k}={v}" for k, v in log_data.items()])

    if success:
        logger.info(f"API: {log_message}")
    else:
        logger.warning(f"API: {log_message}")
