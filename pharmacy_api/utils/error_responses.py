"""
Standardized error bodies.

Every non-2xx response produced by the API has the same shape:
status, message, correlation_id, timestamp, status_code, plus optional
error_type, hint and path. Expected drug-data failures never use these;
they return 200 with a discriminant field instead.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Mapping, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

STATUS_HINTS = {
    400: "Bad request. Please check your input parameters.",
    404: "The requested endpoint was not found. Check the URL.",
    405: "Method not allowed. Check the HTTP method for this endpoint.",
    422: "Request validation failed. Check the JSON body fields and types.",
    500: "Internal server error. Please try again later.",
    504: "The request took too long. Upstream drug or AI services may be slow; try again shortly.",
}


def get_hint_for_status_code(status_code: int) -> Optional[str]:
    return STATUS_HINTS.get(status_code)


def get_correlation_id(request: Request) -> str:
    """Correlation ID from request state, or a fresh one."""
    return getattr(request.state, "correlation_id", "") or uuid.uuid4().hex


def create_error_response(
    message: str,
    status_code: int = 500,
    correlation_id: Optional[str] = None,
    error_type: Optional[str] = None,
    hint: Optional[str] = None,
    path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the standard error body.

    Args:
        message: Human-readable error message
        status_code: HTTP status code
        correlation_id: Request correlation ID; a new one is generated when absent
        error_type: Category such as "ValidationError" or "Timeout"
        hint: Helpful hint for resolving the error
        path: Request path where the error occurred
    """
    body: Dict[str, Any] = {
        "status": "error",
        "message": message,
        "correlation_id": correlation_id or uuid.uuid4().hex,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status_code": status_code,
    }
    optional = {"error_type": error_type, "hint": hint, "path": path}
    body.update({key: value for key, value in optional.items() if value})
    return body


def error_json_response(
    request: Request,
    status_code: int,
    message: str,
    *,
    error_type: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """Standard error body for ``request`` wrapped in a JSONResponse."""
    body = create_error_response(
        message=message,
        status_code=status_code,
        correlation_id=getattr(request.state, "correlation_id", None),
        error_type=error_type,
        hint=get_hint_for_status_code(status_code),
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _field_name(location: Iterable[Any]) -> str:
    parts = [str(part) for part in location if part != "body"]
    return ".".join(parts) or "body"


def format_validation_error(
    errors: list,
    correlation_id: Optional[str] = None,
    path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Collapse pydantic request errors into one standard 422 body.

    Args:
        errors: ``exc.errors()`` from a RequestValidationError
        correlation_id: Request correlation ID
        path: Request path
    """
    problems = [
        f"{_field_name(error.get('loc') or ['unknown'])}: {error.get('msg', 'Validation error')}"
        if isinstance(error, dict)
        else str(error)
        for error in errors
    ]
    return create_error_response(
        message="Validation failed: " + "; ".join(problems),
        status_code=422,
        correlation_id=correlation_id,
        error_type="ValidationError",
        hint=get_hint_for_status_code(422),
        path=path,
    )
