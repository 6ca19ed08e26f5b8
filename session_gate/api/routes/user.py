from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from session_gate.api.error import ClientError, ServerError
from session_gate.app.services.token_issuer import SessionClaims
from session_gate.app.services.unit_of_work import UnitOfWork
from session_gate.app.use_cases.auth import UserInfo
from session_gate.app.use_cases.users import GetCurrentUserUseCase
from session_gate.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/users", tags=["User"])


class MeResponse(BaseModel):
    """GET /users/me response payload"""

    user: UserInfo


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(
    current_user: SessionClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Load Current User

    Returns the stored profile of the user behind the session cookie.

    Raises:
        - 401 Unauthorized: Invalid or expired session, or user no longer exists
        - 500 Internal Server Error: Server error
    """
    use_case = GetCurrentUserUseCase(uow)
    result = await use_case.execute(current_user.user_id)

    # Handle errors
    if result.is_err():
        error = result.error
        if error.code == "UNAUTHENTICATED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return MeResponse(user=result.value)
