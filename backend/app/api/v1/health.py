import logging

from fastapi import APIRouter, Depends

from app.core.exceptions import ServiceUnavailableError
from app.db.session import Database, get_database
from app.schemas.common import StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=StatusResponse)
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/ready", response_model=StatusResponse)
async def readiness_check(database: Database = Depends(get_database)):
    """Readiness check - verifies database connection is working."""
    try:
        await database.ping()
        return {"status": "ready"}
    except Exception:
        logger.error("Readiness check failed: database connection error")
        raise ServiceUnavailableError(detail="Service not ready") from None
