from session_gate.app.services.session_cookie import SessionCookieFactory
from session_gate.domain.result import Result, Return
from .dtos import LogoutResult


class LogoutUseCase:
    """
    Use case for logout.

    Sessions are stateless, so logout only tells the caller to overwrite the
    cookie with an expired one. A copy of the token kept elsewhere stays
    valid until its own expiry.
    """

    def __init__(self, cookies: SessionCookieFactory):
        self.cookies = cookies

    def execute(self) -> Result[LogoutResult]:
        return Return.ok(LogoutResult(success=True, cookie=self.cookies.clear()))
