"""
Application configuration and environment variables
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables"""

    # Calendar
    APP_TIMEZONE: str = os.getenv("APP_TIMEZONE", "UTC")
    WEEK_START: str = os.getenv("WEEK_START", "sun")

    # Storage (empty path keeps everything in memory)
    STORAGE_PATH: str = os.getenv("STORAGE_PATH", "")

    # Reminders
    REMINDER_CHECK_INTERVAL_SECONDS: int = int(os.getenv("REMINDER_CHECK_INTERVAL_SECONDS", "30"))
    REMINDER_MARKER_TTL_SECONDS: int = int(os.getenv("REMINDER_MARKER_TTL_SECONDS", "120"))

    # WhatsApp / Twilio
    TWILIO_ACCOUNT_SID: str = os.getenv("TWILIO_ACCOUNT_SID", "")
    TWILIO_AUTH_TOKEN: str = os.getenv("TWILIO_AUTH_TOKEN", "")
    TWILIO_WHATSAPP_NUMBER: str = os.getenv("TWILIO_WHATSAPP_NUMBER", "")
    WHATSAPP_RECIPIENT: str = os.getenv("WHATSAPP_RECIPIENT", "")


# Create a global settings instance
settings = Settings()
