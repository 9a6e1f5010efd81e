"""
Notifications Service - Message formatting and delivery
Centralizes the habit reminder template and sending logic
"""
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


# ============================================================================
# MESSAGE FORMATTING
# ============================================================================

def format_habit_reminder(habit_name: str) -> str:
    """
    Format a reminder message for a due habit

    Args:
        habit_name: The habit name

    Returns:
        Formatted reminder message
    """
    return f"🔔 HABIT REMINDER: {habit_name}\n\nIt's time for your habit. Mark it done once you finish."


# ============================================================================
# NOTIFICATION SENDING
# ============================================================================

class NotificationService:
    """
    Service for sending notifications via a pluggable channel
    """

    def __init__(self, send_callback: Optional[Callable[[str], bool]] = None):
        """
        Initialize notification service

        Args:
            send_callback: Optional callback function for sending messages
                          Should have signature: callback(message: str) -> bool
        """
        self.send_callback = send_callback

    def send_notification(self, message: str) -> bool:
        """
        Send a notification message

        Args:
            message: The message to send

        Returns:
            True if sent successfully, False otherwise
        """
        if not self.send_callback:
            logger.warning("No send callback configured - notification not sent")
            logger.info(f"Would have sent: {message}")
            return False

        try:
            result = bool(self.send_callback(message))
            if result:
                logger.info("Notification sent successfully")
            else:
                logger.warning("Notification send callback returned False")
            return result
        except Exception as e:
            logger.error(f"Failed to send notification: {e}")
            return False

    def send_reminder(self, habit_name: str) -> bool:
        """
        Send a habit reminder

        Args:
            habit_name: The habit name

        Returns:
            True if sent successfully, False otherwise
        """
        return self.send_notification(format_habit_reminder(habit_name))
