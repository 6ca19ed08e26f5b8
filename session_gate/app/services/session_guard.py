"""
Session Guard

Decides, per request, whether it may reach its handler. The decision is a
pure function of the path and the session cookie; the only work done is
in-process signature verification.
"""

from enum import Enum
from typing import Optional

from session_gate.app.services.auth_settings import AuthSettings
from session_gate.app.services.token_issuer import ITokenIssuer


class PathKind(str, Enum):
    """How a request path is treated by the guard"""

    public = "public"  # login/register/reset pages, signed-in users are bounced
    protected = "protected"  # needs a valid session
    root = "root"  # protected, and a valid session goes to the dashboard
    open = "open"  # auth API and health, the handler decides


class GuardDecision(str, Enum):
    allow = "allow"
    redirect_to_login = "redirect_to_login"
    redirect_to_dashboard = "redirect_to_dashboard"


class SessionGuard:
    def __init__(self, settings: AuthSettings, token_issuer: ITokenIssuer):
        self.token_issuer = token_issuer
        self.public_paths = set(settings.public_paths)
        self.open_path_prefixes = tuple(settings.open_path_prefixes)

    def classify(self, path: str) -> PathKind:
        normalized = path.rstrip("/") or "/"
        if normalized == "/":
            return PathKind.root
        if normalized in self.public_paths:
            return PathKind.public
        if self.is_open(normalized):
            return PathKind.open
        return PathKind.protected

    def is_open(self, path: str) -> bool:
        # Entries match whole path segments, so /api/health does not open /api/healthz
        for entry in self.open_path_prefixes:
            base = entry.rstrip("/")
            if path == base or path.startswith(base + "/"):
                return True
        return False

    def is_authenticated(self, token: Optional[str]) -> bool:
        # An expired or malformed cookie counts the same as no cookie
        if not token:
            return False
        return self.token_issuer.verify(token).is_ok()

    def decide(self, path: str, token: Optional[str]) -> GuardDecision:
        """
        Decision table:
            public    + valid   -> redirect_to_dashboard
            public    + invalid -> allow
            protected + valid   -> allow
            protected + invalid -> redirect_to_login
            root      + valid   -> redirect_to_dashboard
            root      + invalid -> redirect_to_login
            open                -> allow
        """
        kind = self.classify(path)
        if kind == PathKind.open:
            return GuardDecision.allow

        authenticated = self.is_authenticated(token)

        if kind == PathKind.public:
            return GuardDecision.redirect_to_dashboard if authenticated else GuardDecision.allow

        if kind == PathKind.root:
            if authenticated:
                return GuardDecision.redirect_to_dashboard
            return GuardDecision.redirect_to_login

        return GuardDecision.allow if authenticated else GuardDecision.redirect_to_login
