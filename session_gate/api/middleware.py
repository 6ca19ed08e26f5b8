"""
Global middleware.

Every request passes the session guard before reaching a handler; API
responses additionally get the security header set.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from session_gate.app.services.session_guard import GuardDecision

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
}


def _is_api_path(path: str, api_prefix: str) -> bool:
    return path == api_prefix or path.startswith(api_prefix + "/")


def register_middleware(app: FastAPI) -> None:
    """Attach the session guard and security headers."""

    @app.middleware("http")
    async def session_guard(request: Request, call_next):
        settings = request.app.state.auth_settings
        guard = request.app.state.session_guard
        path = request.url.path
        is_api = _is_api_path(path, settings.api_prefix)

        # CORS preflight carries no cookies
        if request.method == "OPTIONS":
            decision = GuardDecision.allow
        else:
            decision = guard.decide(path, request.cookies.get(settings.cookie_name))

        if decision == GuardDecision.redirect_to_login:
            if is_api:
                logger.debug(f"Rejected unauthenticated API request {request.method} {path}")
                response = JSONResponse(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    content={"error": {"code": "UNAUTHENTICATED", "message": "Not authenticated"}},
                )
            else:
                response = RedirectResponse(settings.login_path, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
        elif decision == GuardDecision.redirect_to_dashboard:
            response = RedirectResponse(settings.dashboard_path, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
        else:
            response = await call_next(request)

        if is_api:
            for header, value in SECURITY_HEADERS.items():
                response.headers[header] = value
        return response
