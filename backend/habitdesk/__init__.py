"""
HabitDesk - habit recurrence, streak and reminder backend
"""
