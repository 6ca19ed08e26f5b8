import re

from session_gate.app.services.auth_settings import AuthSettings
from session_gate.domain.result import Error, Result, Return

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"\d")
_SYMBOL = re.compile(r"[^A-Za-z0-9\s]")

# bcrypt only accepts up to 72 bytes of input
BCRYPT_MAX_BYTES = 72


class PasswordPolicy:
    """
    Password strength rules shared by registration and password reset.

    A password must be within the configured length bounds, contain a
    lowercase letter, an uppercase letter, a digit and a symbol, and must
    not appear (case-insensitively) on the common-password denylist.
    """

    def __init__(self, settings: AuthSettings):
        self.min_length = settings.password_min_length
        self.max_length = settings.password_max_length
        self.denylist = {p.lower() for p in settings.password_denylist}

    def validate(self, password: str) -> Result[None]:
        if len(password) < self.min_length:
            return self._weak(f"Password must be at least {self.min_length} characters long")

        if len(password) > self.max_length:
            return self._weak(f"Password must be at most {self.max_length} characters long")

        if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            return self._weak(f"Password must be at most {BCRYPT_MAX_BYTES} bytes long")

        if not (
            _LOWER.search(password)
            and _UPPER.search(password)
            and _DIGIT.search(password)
            and _SYMBOL.search(password)
        ):
            return self._weak(
                "Password must contain at least one uppercase letter, one lowercase "
                "letter, one number and one special character"
            )

        if password.lower() in self.denylist:
            return self._weak("Password is too common")

        return Return.ok(None)

    @staticmethod
    def _weak(message: str) -> Result[None]:
        return Return.err(Error("VALIDATION_ERROR", message))
