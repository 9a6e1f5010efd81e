"""
External integrations module
Handles connections to external delivery channels (WhatsApp)
"""
from . import whatsapp

__all__ = ['whatsapp']
