import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from jose import JWTError

from hydro.config import settings
from hydro.core.security import decode_access_token
from hydro.core.tenant_context import set_current_corporation_id, clear_current_corporation_id

logger = logging.getLogger(__name__)


class TenantMiddleware(BaseHTTPMiddleware):
    """
    Identifies the corporation of EVERY authenticated request
    and sets up the context used for data isolation

    Flow:
    1. Read the JWT from the Authorization header
    2. Decode it and take corporation_id, user_id and role
    3. Store them on request.state
    4. Set corporation_id on the ContextVar for global access
    """

    PUBLIC_PATHS = [
        "/",
        "/health",
        "/docs",
        "/redoc",
        f"{settings.API_V1_STR}/openapi.json",
        f"{settings.API_V1_STR}/auth/login",
        f"{settings.API_V1_STR}/auth/register",
    ]

    @staticmethod
    def _unauthorized(detail: str) -> JSONResponse:
        return JSONResponse(status_code=401, content={"detail": detail})

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        # CORS preflight
        if request.method == "OPTIONS":
            return await call_next(request)

        if path in self.PUBLIC_PATHS or not path.startswith("/api/"):
            clear_current_corporation_id()
            return await call_next(request)

        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            return self._unauthorized("Authentication token not provided")

        token = auth_header[len("Bearer "):]

        try:
            payload = decode_access_token(token)
        except JWTError as e:
            logger.info("Rejected token on %s: %s", path, e)
            return self._unauthorized(str(e))

        corporation_id = payload.get("corporation_id")
        user_id = payload.get("user_id")

        if not corporation_id:
            return self._unauthorized("Invalid token: corporation not identified")
        if not user_id:
            return self._unauthorized("Invalid token: user not identified")

        request.state.corporation_id = corporation_id
        request.state.user_id = user_id
        request.state.user_role = payload.get("role")

        set_current_corporation_id(corporation_id)
        try:
            return await call_next(request)
        finally:
            clear_current_corporation_id()
