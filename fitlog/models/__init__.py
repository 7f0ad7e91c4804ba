from fitlog.models.user import User
from fitlog.models.daily_log import (
    DailyLog,
    SleepLog,
    Workout,
    Meal,
    MealComponent,
    Supplement,
    ActivityRings,
)
from fitlog.models.body_metrics import BodyMetric
from fitlog.models.import_log import ImportLog
from fitlog.models.goal import Goal, MealTemplate

__all__ = [
    "User",
    "DailyLog",
    "SleepLog",
    "Workout",
    "Meal",
    "MealComponent",
    "Supplement",
    "ActivityRings",
    "BodyMetric",
    "ImportLog",
    "Goal",
    "MealTemplate",
]
