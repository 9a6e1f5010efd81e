"""
Health Routes - Liveness and scheduler status
"""
from fastapi import APIRouter

from habitdesk.services.scheduler import service as scheduler_service

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Report that the API is up and whether the reminder scheduler is running"""
    reminder_scheduler = scheduler_service.scheduler
    return {
        "status": "ok",
        "service": "habitdesk",
        "reminder_scheduler": "running" if reminder_scheduler is not None and reminder_scheduler.running else "stopped"
    }
