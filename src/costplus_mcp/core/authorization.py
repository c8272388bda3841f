"""Bearer-token authentication for the streamable HTTP transport.

Stdio sessions are never authenticated. Over HTTP, requests to ``/`` and
``/health`` always pass; everything else needs ``Authorization: Bearer <key>``
with a configured key, but only when ``require_auth`` is on and at least one
key is configured.
"""

import hmac
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from costplus_mcp.config.server import ServerConfig
from costplus_mcp.core.observability import get_audit_logger

logger = logging.getLogger(__name__)

PUBLIC_PATHS = frozenset({"/", "/health"})

MISSING_AUTH = "MISSING_AUTH"
INVALID_AUTH_FORMAT = "INVALID_AUTH_FORMAT"
INVALID_API_KEY = "INVALID_API_KEY"

_FAILURE_MESSAGES = {
    MISSING_AUTH: "Missing Authorization header",
    INVALID_AUTH_FORMAT: "Invalid Authorization header format. Expected: Bearer <api_key>",
    INVALID_API_KEY: "Invalid API key",
}


@dataclass(frozen=True)
class AuthResult:
    allowed: bool
    authenticated: bool = False
    code: Optional[str] = None

    @property
    def message(self) -> str:
        return _FAILURE_MESSAGES.get(self.code or "", "")

    def to_body(self) -> Dict[str, Any]:
        return {"error": "Unauthorized", "message": self.message, "code": self.code}


def _key_matches(candidate: str, config: ServerConfig) -> bool:
    return any(hmac.compare_digest(candidate, key) for key in config.api_keys)


def check_bearer_auth(path: str, authorization: Optional[str], config: ServerConfig) -> AuthResult:
    """Decide whether a request may proceed."""
    if path in PUBLIC_PATHS or not config.auth_enabled:
        return AuthResult(allowed=True)

    if not authorization:
        return AuthResult(allowed=False, code=MISSING_AUTH)

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        return AuthResult(allowed=False, code=INVALID_AUTH_FORMAT)

    if not _key_matches(parts[1], config):
        return AuthResult(allowed=False, code=INVALID_API_KEY)

    return AuthResult(allowed=True, authenticated=True)


class BearerAuthMiddleware:
    """ASGI middleware applying :func:`check_bearer_auth` to HTTP requests."""

    def __init__(self, app: ASGIApp, config: ServerConfig):
        self.app = app
        self.config = config

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        result = check_bearer_auth(request.url.path, request.headers.get("authorization"), self.config)
        if not result.allowed:
            client_ip = request.client.host if request.client else None
            get_audit_logger().auth_failure(reason=result.code or "", ip_address=client_ip, path=request.url.path)
            logger.warning("Rejected %s %s: %s", request.method, request.url.path, result.code)
            response = JSONResponse(result.to_body(), status_code=401)
            await response(scope, receive, send)
            return

        if result.authenticated:
            get_audit_logger().auth_success(path=request.url.path)
        await self.app(scope, receive, send)
