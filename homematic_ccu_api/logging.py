import logging
import json
from typing import Any, Optional


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with the appropriate name.

    Args:
        name: Optional specific logger name. If not provided, the package logger is returned.

    Returns:
        A logger instance in the ``homematic_ccu_api`` namespace
    """
    if name is None:
        return logging.getLogger("homematic_ccu_api")
    elif name.startswith("homematic_ccu_api"):
        return logging.getLogger(name)
    else:
        return logging.getLogger(f"homematic_ccu_api.{name}")


def _shorten(text: str, max_length: int) -> str:
    if len(text) > max_length:
        return text[:max_length] + "... [truncated]"
    return text


def log_extra_fields(logger: logging.Logger, record: Any, max_length: int = 300):
    """
    Log the fields a CCU description carried beyond those of its record.

    Args:
        logger: Logger to use
        record: A DeviceRecord or ChannelRecord built from a CCU response.
        max_length: Maximum length for a single value in the log. Default is 300.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    record_type = type(record).__name__
    extra_fields = getattr(record, "_extra_fields", None) or {}
    if not extra_fields:
        logger.debug(f"{record_type} {record.address} has no extra fields")
        return

    shown = {}
    for key, value in extra_fields.items():
        try:
            shown[key] = _shorten(json.dumps(value), max_length)
        except (TypeError, ValueError):
            shown[key] = f"<{type(value).__name__}>"

    logger.debug(
        f"{record_type} {record.address} has extra fields: "
        + ", ".join(f"{k}={v}" for k, v in shown.items())
    )


def log_ccu_response(
    logger: logging.Logger,
    url: str,
    response_data: Any,
    status_code: int,
    elapsed_ms: Optional[float] = None,
    max_length: int = 500,
):
    """
    Log a decoded CCU response together with its status and round-trip time.

    Args:
        logger: Logger to use
        url: The URL that was requested.
        response_data: The decoded JSON body.
        status_code: HTTP status code.
        elapsed_ms: Round-trip time of the request in milliseconds, if measured.
        max_length: Maximum logged length of the body. Default is 500.
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    timing = f", {elapsed_ms:.0f} ms" if elapsed_ms is not None else ""
    try:
        body = _shorten(json.dumps(response_data), max_length)
    except (TypeError, ValueError) as e:
        body = f"<not serializable: {e}>"
    logger.debug(f"CCU response from {url} (Status: {status_code}{timing}): {body}")
