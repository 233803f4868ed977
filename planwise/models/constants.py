"""Constants for planwise.

This module centralizes all magic numbers and default values used throughout the application.
"""

from planwise.models.task import Priority


# Calendar
DEFAULT_WEEK_STARTS_ON = 1  # 0 = Sunday ... 6 = Saturday
AGENDA_WINDOW_DAYS = 30
MINUTES_IN_DAY = 24 * 60
DEFAULT_GRID_INTERVAL_MINUTES = 30

# Availability search
MAX_SEARCH_DAYS = 30
SLOT_INCREMENT_MINUTES = 15

# Priority scoring
PRIORITY_WEIGHTS = {
    Priority.CRITICAL.value: 100,
    Priority.HIGH.value: 75,
    Priority.MEDIUM.value: 50,
    Priority.LOW.value: 25,
}
DEFAULT_PRIORITY_WEIGHT = 25

OVERDUE_BONUS = 200
DUE_TODAY_BONUS = 150
DUE_TOMORROW_BONUS = 100
DUE_LATER_BASE = 50
DUE_LATER_DECAY_PER_DAY = 5

TIME_OF_DAY_MATCH_BONUS = 25
AFTERNOON_START_HOUR = 12
EVENING_START_HOUR = 17

HIGH_ENERGY_THRESHOLD = 70
LOW_ENERGY_THRESHOLD = 40
HIGH_ENERGY_CRITICAL_BONUS = 30
LOW_ENERGY_LOW_PRIORITY_BONUS = 20

DEFAULT_ENERGY_LEVEL = 80
DEFAULT_SUGGESTION_LIMIT = 6

# Analytics
COMPLETION_RATE_WINDOW_DAYS = 7

# Colors
PRIORITY_COLORS = {
    Priority.CRITICAL.value: "#ef4444",  # red-500
    Priority.HIGH.value: "#f97316",  # orange-500
    Priority.MEDIUM.value: "#eab308",  # yellow-500
    Priority.LOW.value: "#22c55e",  # green-500
}
DEFAULT_PRIORITY_COLOR = "#6b7280"  # gray-500

CATEGORY_PALETTE = [
    "#3b82f6",  # blue-500
    "#8b5cf6",  # violet-500
    "#ec4899",  # pink-500
    "#06b6d4",  # cyan-500
    "#84cc16",  # lime-500
    "#f59e0b",  # amber-500
    "#ef4444",  # red-500
    "#10b981",  # emerald-500
]
