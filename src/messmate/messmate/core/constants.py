"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_MEAL_RATE = 80
DEFAULT_CYCLE_DAYS = 30
DEFAULT_MEAL_TYPE = "general"
DEFAULT_LIST_LIMIT = 500
QR_VALUE_PREFIX = "meal-attendance"
CSV_COLUMNS = ("Date", "Time", "Email", "MealType")

WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
