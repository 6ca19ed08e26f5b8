import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from session_gate.api.error import ServerError
from session_gate.depends import get_session
from session_gate.domain.result import Error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    """API and database round-trip"""
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database connection failed")
        raise ServerError(Error("STORE_ERROR", "Database connection failed"))

    return {"message": "API and database are working!"}
