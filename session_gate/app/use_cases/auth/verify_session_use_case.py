from typing import Optional

from session_gate.app.services.token_issuer import ITokenIssuer
from session_gate.domain.result import Error, Result, Return
from .dtos import VerifySessionResponse


class VerifySessionUseCase:
    """
    Use case for checking the session cookie.

    Signature, expiry and parse failures are logged with their own codes by
    the token issuer but all surface as UNAUTHENTICATED.
    """

    def __init__(self, token_issuer: ITokenIssuer):
        self.token_issuer = token_issuer

    def execute(self, token: Optional[str]) -> Result[VerifySessionResponse]:
        if not token:
            return Return.err(Error("UNAUTHENTICATED", "No token provided"))

        verified = self.token_issuer.verify(token)
        if verified.is_err():
            return Return.err(Error("UNAUTHENTICATED", "Invalid token"))

        return Return.ok(VerifySessionResponse(message="Token is valid", user=verified.value))
