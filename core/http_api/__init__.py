"""
Shares HTTP API - Public API
============================
"""

from core.http_api.contracts import (
    AssociateTokenHttpRequest,
    CreateTokenHttpRequest,
    HttpApiErrorBody,
    HttpApiResponse,
    OwnershipCheckRequest,
    ShareOwnershipHttpRequest,
    redacted,
)
from core.http_api.dependencies import HttpApiDependencies, build_http_dependencies
from core.http_api.errors import (
    error_response,
    shares_error_response,
    success_response,
    unexpected_error_response,
)
from core.http_api.handlers import (
    get_health,
    get_ownership,
    post_associate_token,
    post_create_token,
    post_share_ownership,
)

__all__ = [
    "AssociateTokenHttpRequest",
    "CreateTokenHttpRequest",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "OwnershipCheckRequest",
    "ShareOwnershipHttpRequest",
    "redacted",
    "HttpApiDependencies",
    "build_http_dependencies",
    "error_response",
    "shares_error_response",
    "success_response",
    "unexpected_error_response",
    "get_health",
    "get_ownership",
    "post_associate_token",
    "post_create_token",
    "post_share_ownership",
]
