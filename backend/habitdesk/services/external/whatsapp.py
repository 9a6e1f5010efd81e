"""
WhatsApp Service - Twilio messaging logic
"""
import logging
from typing import Optional

from twilio.rest import Client

from habitdesk.core.config import settings
from habitdesk.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

_twilio_client: Optional[Client] = None


def get_twilio_client() -> Optional[Client]:
    """Create the Twilio client on first use if credentials are available"""
    global _twilio_client

    if _twilio_client is None and settings.TWILIO_ACCOUNT_SID and settings.TWILIO_AUTH_TOKEN:
        _twilio_client = Client(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)
        logger.info("Twilio client initialized successfully")
    return _twilio_client


def is_twilio_configured() -> bool:
    """Check if Twilio credentials and a recipient are configured"""
    return bool(settings.TWILIO_ACCOUNT_SID and settings.TWILIO_AUTH_TOKEN and settings.WHATSAPP_RECIPIENT)


def send_whatsapp_message(to_number: str, message: str) -> str:
    """
    Send a WhatsApp message via Twilio

    Args:
        to_number: Recipient WhatsApp number (e.g., "whatsapp:+13128856151")
        message: Message text to send

    Returns:
        Message SID from Twilio

    Raises:
        ExternalServiceError if Twilio client not configured or send fails
    """
    client = get_twilio_client()
    if not client:
        raise ExternalServiceError("Twilio client not configured")

    logger.info(f"[TWILIO] Sending message to {to_number}")
    try:
        twilio_message = client.messages.create(
            from_=settings.TWILIO_WHATSAPP_NUMBER or "whatsapp:+14155238886",
            body=message,
            to=to_number
        )
    except Exception as e:
        logger.error(f"[TWILIO] Send failed: {str(e)}")
        raise ExternalServiceError(f"WhatsApp send failed: {e}")

    logger.info(f"[TWILIO] Message sent with SID: {twilio_message.sid}")
    return twilio_message.sid


def send_to_recipient(message: str) -> bool:
    """
    Send a message to the configured WhatsApp recipient

    Returns:
        True if sent successfully, False otherwise
    """
    if not is_twilio_configured():
        logger.warning("Cannot send WhatsApp message - Twilio client or recipient not configured")
        return False

    try:
        send_whatsapp_message(settings.WHATSAPP_RECIPIENT, message)
        return True
    except ExternalServiceError as e:
        logger.error(f"Failed to send WhatsApp message: {e}")
        return False
