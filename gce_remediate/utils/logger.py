"""
GCE Remediate - Logging Setup

This module sets up logging for the remediation webhook.

Logging Strategy:
- INFO (default): One line per workflow step (validated, located, acted)
- DEBUG (DEBUG=true): API calls, responses and timings
- WARNING: Rejected reports, unsupported states
- ERROR: Remote call failures
"""

import logging
import sys
import time
from pathlib import Path
from typing import Any

LOGGER_NAME = 'gce_remediate'

REDACTED = '***'

# Payload/header fields that must never reach the logs
SENSITIVE_KEYS = ('secret', 'x-custom-secret', 'authorization')


class CleanFormatter(logging.Formatter):
    """
    Custom formatter for clean logs.

    - INFO: Just the message (clean)
    - WARNING/ERROR/CRITICAL: Show level prefix
    """

    def format(self, record):
        """Format log record based on level."""

        message = record.getMessage()
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            message = f"{message}\n{record.exc_text}"

        if record.levelno == logging.INFO:
            return message
        elif record.levelno == logging.WARNING:
            return f"[!]  WARNING: {message}"
        elif record.levelno == logging.ERROR:
            return f"[X] ERROR: {message}"
        elif record.levelno == logging.CRITICAL:
            return f"[!!] CRITICAL: {message}"
        else:
            return f"[DEBUG] {message}"


def setup_logging(level='INFO', log_file=None, debug=False):
    """
    Setup logging for GCE Remediate.

    Configures logging to:
    1. Output to console (stdout, picked up by Cloud Logging)
    2. Optionally write to log file
    3. Use a detailed format in debug mode

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, only logs to console.
        debug: If True, use DEBUG level and detailed format

    Returns:
        logging.Logger: Configured logger instance
    """

    if debug:
        level = 'DEBUG'

    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Remove existing handlers (in case setup_logging called multiple times)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)

    if debug:
        # Format: [2025-11-02 10:30:45] DEBUG [locate:45]: API call: instances.list(...)
        console_format = logging.Formatter(
            '[%(asctime)s] %(levelname)s [%(funcName)s:%(lineno)d]: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        console_format = CleanFormatter(
            '%(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(
            '[%(asctime)s] %(levelname)s [%(name)s.%(funcName)s:%(lineno)d] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

        logger.debug(f"Logging to file: {log_file}")

    return logger


def redact_payload(payload: Any) -> Any:
    """
    Copy a request payload or header mapping with secrets masked.

    Args:
        payload: Parsed JSON body or header dict (anything else is returned as-is)

    Returns:
        Copy safe to log

    Example:
        redact_payload({'secret': 'abc', 'responseState': 'Not Responding'})
        # {'secret': '***', 'responseState': 'Not Responding'}
    """
    if not isinstance(payload, dict):
        return payload
    return {
        key: REDACTED if str(key).lower() in SENSITIVE_KEYS else value
        for key, value in payload.items()
    }


# Debug logging helpers

def log_api_call(logger, method_name: str, **params):
    """
    Log an API call (DEBUG level).

    Example:
        log_api_call(logger, 'instances.get', project='my-project', zone='us-central1-a', instance='my-vm')
        # Output: API call: instances.get(project=my-project, zone=us-central1-a, instance=my-vm)
    """
    param_str = ', '.join(f'{k}={v}' for k, v in params.items())
    logger.debug(f"API call: {method_name}({param_str})")


def log_api_response(logger, response: Any, truncate: int = 200):
    """
    Log an API response (DEBUG level), truncated to `truncate` characters.
    """
    response_str = str(response)
    if len(response_str) > truncate:
        response_str = response_str[:truncate] + '...'
    logger.debug(f"API response: {response_str}")


def log_operation_start(logger, operation_name: str):
    """
    Log the start of an operation (DEBUG level).

    Returns:
        float: Start time (for use with log_operation_end)
    """
    logger.debug(f"Starting operation: {operation_name}")
    return time.time()


def log_operation_end(logger, operation_name: str, start_time: float):
    """Log the end of an operation with timing (DEBUG level)."""
    duration = time.time() - start_time
    logger.debug(f"Operation completed: {operation_name} (took {duration:.2f}s)")


def print_header(logger, title: str, char='=', length=60):
    """
    Print a formatted header (INFO level).

    Args:
        logger: Logger instance
        title: Header title
        char: Character for border
        length: Total width

    Example:
        print_header(logger, 'GCE Remediate - web-1 (us-central1-b)')
        # Output:
        # ============================================================
        # GCE Remediate - web-1 (us-central1-b)
        # ============================================================
    """
    logger.info(char * length)
    logger.info(title)
    logger.info(char * length)
