"""Redirect unauthenticated requests for protected pages to the sign-in page."""
import logging
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from releaf.deps import get_session_claims

logger = logging.getLogger(__name__)

SIGNIN_PATH = "/signin"


def is_path_protected(path: str, protected_paths: list[str]) -> bool:
    return any(path == p or path.startswith(f"{p}/") for p in protected_paths)


class SessionGateMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, protected_paths: list[str]):
        super().__init__(app)
        self.protected_paths = protected_paths

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if is_path_protected(path, self.protected_paths):
            claims = get_session_claims(request)
            if not claims:
                logger.info("Unauthenticated request for %s, redirecting to sign-in", path)
                return RedirectResponse(url=f"{SIGNIN_PATH}?{urlencode({'callbackUrl': path})}")
            logger.debug("Session user for %s: %s", path, claims.get("email") or claims.get("sub"))
        return await call_next(request)
