"""Constants for FocusFlow.

This module centralizes magic numbers and default values used throughout the application.
"""

# Preference defaults
DEFAULT_POMODORO_MINUTES = 25
DEFAULT_SHORT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 15
DEFAULT_DAILY_GOAL = 8

# Upper bounds for preference values (inclusive)
MAX_PREFERENCE_MINUTES = 240
MAX_DAILY_GOAL = 48

# Preference fields a client may update (API names)
ALLOWED_PREFERENCE_FIELDS = ("pomodoroLength", "shortBreakLength", "longBreakLength", "dailyGoal")

# Registration rules
MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72  # bcrypt input limit

# Productivity rating bounds (inclusive)
MIN_PRODUCTIVITY = 1
MAX_PRODUCTIVITY = 10

# Session listing
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100
DEFAULT_SORT = "startTime:desc"

# Analytics
DEFAULT_TREND_DAYS = 7
MAX_TREND_DAYS = 365
TOP_PRODUCTIVE_HOURS = 3
TOP_INTERRUPTION_REASONS = 5
