import logging
import secrets
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

PROTECTED_PREFIX = "/golinks"


class BearerTokenMiddleware(BaseHTTPMiddleware):
    """Requires ``Authorization: Bearer <token>`` on the golinks API.

    A missing token disables the check. Health, metrics, redirects and CORS
    preflight requests always pass through.
    """

    def __init__(self, app, token: Optional[str] = None):
        super().__init__(app)
        self.token = token

    async def dispatch(self, request: Request, call_next):
        if not self.token or request.method == "OPTIONS":
            return await call_next(request)

        path = request.url.path
        if path != PROTECTED_PREFIX and not path.startswith(PROTECTED_PREFIX + "/"):
            return await call_next(request)

        scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
        if scheme.lower() != "bearer" or not secrets.compare_digest(
            credentials.strip().encode(), self.token.encode()
        ):
            logger.warning(f"Rejected unauthenticated {request.method} {path}")
            return JSONResponse(
                status_code=401,
                content={"detail": "Missing or invalid bearer token"},
                headers={"WWW-Authenticate": "Bearer"},
            )

        return await call_next(request)
