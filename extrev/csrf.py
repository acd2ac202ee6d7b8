"""
CSRF protection for the cookie-authenticated form routes.

Double-submit cookie: state-changing requests must echo the csrf_token
cookie in the X-CSRF-Token header (htmx sends it via hx-headers).
Set CSRF_ENABLED=false to turn it off for local development.
"""
import logging
import secrets
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .config import COOKIE_SECURE

logger = logging.getLogger(__name__)

CSRF_COOKIE_NAME = "csrf_token"
CSRF_HEADER_NAME = "X-CSRF-Token"
CSRF_COOKIE_MAX_AGE = 86400

PROTECTED_METHODS = {"POST", "PUT", "PATCH", "DELETE"}

# Nothing to forge before a session exists
EXEMPT_PREFIXES = [
    "/auth/login",
    "/auth/register",
    "/health",
    "/docs",
    "/openapi.json",
    "/csrf-token",
]


def generate_csrf_token() -> str:
    return secrets.token_urlsafe(32)


def is_path_exempt(path: str) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in EXEMPT_PREFIXES)


def set_csrf_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=CSRF_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="strict",
        max_age=CSRF_COOKIE_MAX_AGE,
        path="/",
    )


def _reject(request: Request, reason: str, detail: str) -> JSONResponse:
    logger.warning(f"🚫 CSRF: {reason} for {request.method} {request.url.path}")
    return JSONResponse(status_code=403, content={"detail": detail})


class CSRFMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        csrf_cookie = request.cookies.get(CSRF_COOKIE_NAME)

        if request.method in PROTECTED_METHODS and not is_path_exempt(request.url.path):
            csrf_header = request.headers.get(CSRF_HEADER_NAME)

            if not csrf_cookie:
                return _reject(request, "Missing cookie", "CSRF token missing. Please refresh the page and try again.")
            if not csrf_header:
                return _reject(
                    request, "Missing header", "CSRF token header missing. Please refresh the page and try again."
                )
            if not secrets.compare_digest(csrf_cookie, csrf_header):
                return _reject(request, "Token mismatch", "CSRF token invalid. Please refresh the page and try again.")

        request.state.csrf_token = csrf_cookie or generate_csrf_token()
        response = await call_next(request)

        if not csrf_cookie:
            set_csrf_cookie(response, request.state.csrf_token)

        return response
