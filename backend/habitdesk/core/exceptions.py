"""
Custom Exceptions - Application-specific error types
"""


class HabitDeskException(Exception):
    """Base exception for all habit desk errors"""
    pass


class HabitNotFoundError(HabitDeskException):
    """Raised when a habit cannot be found"""
    pass


class InvalidHabitDataError(HabitDeskException):
    """Raised when habit data validation fails"""
    pass


class StorageError(HabitDeskException):
    """Raised when reading or writing the key-value store fails"""
    pass


class ExternalServiceError(HabitDeskException):
    """Raised when external services (Twilio) fail"""
    pass


class SchedulerError(HabitDeskException):
    """Raised when scheduler operations fail"""
    pass
