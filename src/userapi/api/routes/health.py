"""
Health check API route
"""

from fastapi import APIRouter

from userapi.config.settings import SERVICE_NAME

router = APIRouter()

@router.get("/health")
async def health_check():
    """Liveness check; does not touch the database"""
    return {
        "status": "ok",
        "service": SERVICE_NAME
    }
