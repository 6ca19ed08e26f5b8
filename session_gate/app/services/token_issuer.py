from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel

from session_gate.domain.result import Result


class SessionClaims(BaseModel):
    """Decoded session token payload"""

    user_id: str
    email: Optional[str] = None
    iat: int
    exp: int


class ITokenIssuer(ABC):
    """
    Mints and verifies stateless session tokens.

    verify() never touches the credential store. Error codes:
    - INVALID_SIGNATURE: token was not signed with the current secret
    - SESSION_EXPIRED: current time is at or past the embedded expiry
    - MALFORMED_TOKEN: token or its claims cannot be parsed
    """

    @abstractmethod
    def issue(self, user_id: str, claims: Optional[dict] = None) -> str:
        pass

    @abstractmethod
    def verify(self, token: str) -> Result[SessionClaims]:
        pass
