"""
Shares HTTP API - Error Mapping
===============================
Stable transport mapping for domain errors and unexpected failures.
"""

from __future__ import annotations

from typing import Any, Optional

from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse
from core.shares.exceptions import SharesError


def error_response(
    *,
    code: str,
    message: str,
    status_code: int = 400,
    details: Optional[dict[str, Any]] = None,
) -> HttpApiResponse:
    return HttpApiResponse(
        success=False,
        message=message,
        status_code=status_code,
        error=HttpApiErrorBody(code=code, details=details or {}),
    )


def success_response(
    data: Any,
    *,
    message: str,
    status_code: int = 200,
) -> HttpApiResponse:
    return HttpApiResponse(
        success=True,
        message=message,
        status_code=status_code,
        data=data,
    )


def shares_error_response(
    error: SharesError,
    *,
    prefix: Optional[str] = None,
) -> HttpApiResponse:
    """Map a domain error; server-side failures get an operation prefix."""
    message = error.message
    if prefix and error.http_status >= 500:
        message = f"{prefix}: {message}"
    return error_response(
        code=error.code,
        message=message,
        status_code=error.http_status,
        details=error.details,
    )


def unexpected_error_response(exc: Exception, *, prefix: str) -> HttpApiResponse:
    return error_response(
        code="INTERNAL_ERROR",
        message=f"{prefix}: {exc}",
        status_code=500,
    )
