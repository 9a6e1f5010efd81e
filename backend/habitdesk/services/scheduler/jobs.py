"""
Scheduler Job Definitions
Builds the reminder engine collaborators and wraps the tick for APScheduler
"""
import logging

from habitdesk.services.external import whatsapp
from habitdesk.services.notifications import NotificationService
from .engine import ReminderEngine

logger = logging.getLogger(__name__)


def build_notification_service() -> NotificationService:
    """
    Notification service delivering over WhatsApp when Twilio is configured,
    otherwise one that only logs
    """
    if whatsapp.is_twilio_configured():
        logger.info("WhatsApp messaging enabled for habit reminders")
        return NotificationService(whatsapp.send_to_recipient)

    logger.warning("Twilio credentials not found. Habit reminders will only be logged.")
    return NotificationService()


def check_and_send_reminders(engine: ReminderEngine) -> int:
    """
    Check for habits needing reminders and send them
    Called every N seconds by the scheduler
    """
    try:
        return engine.tick()
    except Exception as e:
        logger.error(f"[SCHEDULER] Error in check_and_send_reminders: {e}", exc_info=True)
        return 0
