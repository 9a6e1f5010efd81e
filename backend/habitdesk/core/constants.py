"""
Application constants
"""

# Storage keys
HABITS_STORAGE_KEY = "habit_tracker_data"
NOTIFICATION_SETTINGS_KEY = "notification_settings"
REMINDER_MARKER_PREFIX = "reminder_sent_"

# Reminder scheduling
REMINDER_GRACE_MINUTES = 1
REMINDER_JOB_ID = "habit_reminder_check"
MARKER_CLEAR_JOB_PREFIX = "reminder_marker_clear"

# Completion rate windows (days)
LIST_COMPLETION_WINDOW_DAYS = 30
DETAIL_COMPLETION_WINDOW_DAYS = 7

# Weekday tokens, Monday first (matches date.weekday())
WEEKDAY_TOKENS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")

HABIT_ICONS = (
    "💧", "🏃", "📚", "🧘", "💪", "🥗", "💊", "😴",
    "🧠", "🎯", "💻", "🎨", "🎵", "🌱", "✍️", "🧹",
)

HABIT_COLORS = (
    "#10b981",  # emerald
    "#3b82f6",  # blue
    "#8b5cf6",  # violet
    "#ec4899",  # pink
    "#f59e0b",  # amber
    "#ef4444",  # red
    "#06b6d4",  # cyan
    "#14b8a6",  # teal
)

DEFAULT_HABIT_ICON = HABIT_ICONS[0]
DEFAULT_HABIT_COLOR = HABIT_COLORS[0]
