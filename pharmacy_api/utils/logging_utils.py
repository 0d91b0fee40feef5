"""
Logging helpers that prefix messages with the request's correlation ID.

    log_info("Lookup served", request=request, drug="ibuprofen", cached=True)
    -> "[3f2a...] Lookup served (drug=ibuprofen, cached=True)"
"""

import logging
from typing import Any, Optional

from fastapi import Request

logger = logging.getLogger(__name__)


def get_correlation_id_from_request(request: Optional[Request]) -> str:
    if request is None:
        return ""
    return getattr(request.state, "correlation_id", "")


def _format(message: str, correlation_id: str, fields: dict) -> str:
    formatted = f"[{correlation_id}] {message}" if correlation_id else message
    if fields:
        context = ", ".join(f"{key}={value}" for key, value in fields.items())
        formatted = f"{formatted} ({context})"
    return formatted


def log_structured(
    level: str,
    message: str,
    correlation_id: Optional[str] = None,
    request: Optional[Request] = None,
    exc_info: bool = False,
    **fields: Any,
) -> None:
    """
    Log ``message`` with the correlation ID and key=value context.

    Args:
        level: 'debug', 'info', 'warning' or 'error'
        message: Log message
        correlation_id: Explicit ID; taken from ``request`` when omitted
        request: Request whose state carries the correlation ID
        exc_info: Attach the active exception's traceback
        **fields: Extra context appended to the message
    """
    if correlation_id is None:
        correlation_id = get_correlation_id_from_request(request)
    log_func = getattr(logger, level.lower(), logger.info)
    log_func(_format(message, correlation_id, fields), exc_info=exc_info)


def log_info(message: str, correlation_id: Optional[str] = None, request: Optional[Request] = None, **fields: Any) -> None:
    log_structured("info", message, correlation_id, request, **fields)


def log_error(
    message: str,
    correlation_id: Optional[str] = None,
    request: Optional[Request] = None,
    exc_info: bool = False,
    **fields: Any,
) -> None:
    log_structured("error", message, correlation_id, request, exc_info=exc_info, **fields)
