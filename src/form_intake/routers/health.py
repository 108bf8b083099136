from datetime import datetime, timezone

from fastapi import APIRouter

from form_intake.config import config

health = APIRouter()


@health.get("/health")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": "form-intake",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": config.get("environment") or "development",
    }
