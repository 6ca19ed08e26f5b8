"""
Page routes.

Rendering is done by the frontend; these endpoints only give the session
guard's redirects a landing target and describe the page to load.
"""

from fastapi import APIRouter, Depends

from session_gate.app.services.token_issuer import SessionClaims
from session_gate.depends import get_current_user

router = APIRouter(tags=["Pages"])


@router.get("/login")
async def login_page():
    return {"page": "login"}


@router.get("/register")
async def register_page():
    return {"page": "register"}


@router.get("/request-reset")
async def request_reset_page():
    return {"page": "request-reset"}


@router.get("/reset-password")
async def reset_password_page(token: str = "", email: str = ""):
    # Reset links carry the token and email as query parameters
    return {"page": "reset-password", "token": token, "email": email}


@router.get("/dashboard")
async def dashboard_page(current_user: SessionClaims = Depends(get_current_user)):
    return {"page": "dashboard", "user": current_user}
