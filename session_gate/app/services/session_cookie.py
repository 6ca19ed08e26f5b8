from typing import Optional

from pydantic import BaseModel

from session_gate.app.services.auth_settings import AuthSettings

# Cookie date format, see RFC 6265
EPOCH = "Thu, 01 Jan 1970 00:00:00 GMT"


class CookieInstruction(BaseModel):
    """
    What the HTTP layer must do with the session cookie.

    Field names match Response.set_cookie keyword arguments.
    """

    key: str
    value: str
    max_age: int
    expires: Optional[str] = None
    path: str
    httponly: bool = True
    secure: bool
    samesite: str


class SessionCookieFactory:
    def __init__(self, settings: AuthSettings):
        self.settings = settings

    def issue(self, token: str) -> CookieInstruction:
        return CookieInstruction(
            key=self.settings.cookie_name,
            value=token,
            max_age=int(self.settings.session_lifetime.total_seconds()),
            path=self.settings.cookie_path,
            secure=self.settings.cookie_secure,
            samesite=self.settings.cookie_samesite,
        )

    def clear(self) -> CookieInstruction:
        """An empty, already-expired cookie with the same name and path"""
        return CookieInstruction(
            key=self.settings.cookie_name,
            value="",
            max_age=0,
            expires=EPOCH,
            path=self.settings.cookie_path,
            secure=self.settings.cookie_secure,
            samesite=self.settings.cookie_samesite,
        )
