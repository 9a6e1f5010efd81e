"""
Business logic services
"""
from . import storage
from . import habits
from . import notifications
from . import external
from . import scheduler

__all__ = [
    'storage',
    'habits',
    'notifications',
    'external',
    'scheduler'
]
