import logging
from datetime import UTC, datetime
from typing import Callable, Optional

from jose import JWTError, jwt
from pydantic import ValidationError

from session_gate.app.services.auth_settings import AuthSettings
from session_gate.app.services.token_issuer import ITokenIssuer, SessionClaims
from session_gate.domain.base import utc_now
from session_gate.domain.result import Error, Result, Return

logger = logging.getLogger(__name__)

RESERVED_CLAIMS = {"sub", "iat", "exp"}


def _timestamp(moment: datetime) -> int:
    return int(moment.replace(tzinfo=UTC).timestamp())


class JwtTokenIssuer(ITokenIssuer):
    """HS256 session tokens signed with the configured secret"""

    def __init__(self, settings: AuthSettings, clock: Callable[[], datetime] = utc_now):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.lifetime = settings.session_lifetime
        self.clock = clock

    def issue(self, user_id: str, claims: Optional[dict] = None) -> str:
        """
        Generate a signed session token

        Args:
            user_id: User UUID as string
            claims: Extra public claims (e.g. email); cannot override sub/iat/exp

        Returns:
            JWT string expiring one session lifetime from now
        """
        now = self.clock()
        payload = {k: v for k, v in (claims or {}).items() if k not in RESERVED_CLAIMS}
        payload.update(
            {
                "sub": str(user_id),
                "iat": _timestamp(now),
                "exp": _timestamp(now + self.lifetime),
            }
        )
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Result[SessionClaims]:
        """
        Verify signature and expiry, then decode the claims

        Expiry is checked here rather than by jose so that the clock can be
        injected and a token is rejected at exactly its exp second.
        """
        try:
            jwt.get_unverified_claims(token)
        except JWTError:
            return self._reject("MALFORMED_TOKEN", "Session token cannot be parsed")

        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError:
            return self._reject("INVALID_SIGNATURE", "Session token signature mismatch")

        try:
            claims = SessionClaims(
                user_id=payload["sub"],
                email=payload.get("email"),
                iat=payload["iat"],
                exp=payload["exp"],
            )
        except (KeyError, ValidationError):
            return self._reject("MALFORMED_TOKEN", "Session token claims are incomplete")

        if _timestamp(self.clock()) >= claims.exp:
            return self._reject("SESSION_EXPIRED", "Session token has expired")

        return Return.ok(claims)

    def _reject(self, code: str, message: str) -> Result[SessionClaims]:
        logger.info(f"Session token rejected: {code}")
        return Return.err(Error(code, message))
