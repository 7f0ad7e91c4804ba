# fitlog/models/daily_log.py

from datetime import datetime

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from fitlog.core.db import Base


class DailyLog(Base):
    """
    Root record for one user's calendar day. Everything logged for the day
    hangs off this row and is deleted with it.
    """

    __tablename__ = "daily_logs"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_daily_log_user_date"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)

    weight_kg = Column(Float)          # morning weight
    wake_time = Column(String(16))     # "06:30"
    sleep_time = Column(String(16))
    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    sleep = relationship(
        "SleepLog", back_populates="daily_log", uselist=False, cascade="all, delete-orphan"
    )
    workouts = relationship(
        "Workout", back_populates="daily_log", cascade="all, delete-orphan", order_by="Workout.id"
    )
    meals = relationship(
        "Meal", back_populates="daily_log", cascade="all, delete-orphan", order_by="Meal.id"
    )
    supplements = relationship(
        "Supplement", back_populates="daily_log", cascade="all, delete-orphan", order_by="Supplement.id"
    )
    activity_rings = relationship(
        "ActivityRings", back_populates="daily_log", uselist=False, cascade="all, delete-orphan"
    )


class SleepLog(Base):
    __tablename__ = "sleep_logs"
    __table_args__ = (UniqueConstraint("daily_log_id", name="uq_sleep_log_daily_log"),)

    id = Column(Integer, primary_key=True, index=True)
    daily_log_id = Column(Integer, ForeignKey("daily_logs.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False, index=True)

    bed_time = Column(String(16))
    wake_time = Column(String(16))

    # Stage breakdown, minutes
    total_mins = Column(Integer)
    awake_mins = Column(Integer)
    rem_mins = Column(Integer)
    core_mins = Column(Integer)
    deep_mins = Column(Integer)

    # Derived: round(stage / total * 100)
    deep_sleep_pct = Column(Integer)
    rem_pct = Column(Integer)

    created_at = Column(DateTime, default=datetime.utcnow)

    daily_log = relationship("DailyLog", back_populates="sleep")


class Workout(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, index=True)
    daily_log_id = Column(Integer, ForeignKey("daily_logs.id", ondelete="CASCADE"), nullable=False, index=True)

    type = Column(String(64), nullable=False, default="other")   # free-form tag, e.g. "indoor_walk"
    start_time = Column(String(16))
    end_time = Column(String(16))
    duration_mins = Column(Integer)

    active_calories = Column(Float)
    total_calories = Column(Float)
    avg_heart_rate = Column(Integer)
    max_heart_rate = Column(Integer)
    distance_km = Column(Float)
    avg_pace = Column(String(16))      # "10:54"
    effort_level = Column(Integer)     # subjective, 1-5
    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)

    daily_log = relationship("DailyLog", back_populates="workouts")


class Meal(Base):
    __tablename__ = "meals"

    id = Column(Integer, primary_key=True, index=True)
    daily_log_id = Column(Integer, ForeignKey("daily_logs.id", ondelete="CASCADE"), nullable=False, index=True)

    meal_type = Column(String(32), nullable=False, default="snack")
    name = Column(String(255), nullable=False)

    calories = Column(Float)
    protein_g = Column(Float)
    carbs_g = Column(Float)
    fat_g = Column(Float)
    fibre_g = Column(Float)

    notes = Column(Text)
    photo_url = Column(String(512))

    created_at = Column(DateTime, default=datetime.utcnow)

    daily_log = relationship("DailyLog", back_populates="meals")
    components = relationship(
        "MealComponent", back_populates="meal", cascade="all, delete-orphan", order_by="MealComponent.id"
    )


class MealComponent(Base):
    __tablename__ = "meal_components"

    id = Column(Integer, primary_key=True, index=True)
    meal_id = Column(Integer, ForeignKey("meals.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255))
    weight_g = Column(Float)
    calories = Column(Float)
    protein_g = Column(Float)
    carbs_g = Column(Float)
    fat_g = Column(Float)
    fibre_g = Column(Float)

    meal = relationship("Meal", back_populates="components")


class Supplement(Base):
    __tablename__ = "supplements"

    id = Column(Integer, primary_key=True, index=True)
    daily_log_id = Column(Integer, ForeignKey("daily_logs.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    dose_mg = Column(Float)
    taken_at = Column(String(16))
    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)

    daily_log = relationship("DailyLog", back_populates="supplements")


class ActivityRings(Base):
    __tablename__ = "activity_rings"
    __table_args__ = (UniqueConstraint("daily_log_id", name="uq_activity_rings_daily_log"),)

    id = Column(Integer, primary_key=True, index=True)
    daily_log_id = Column(Integer, ForeignKey("daily_logs.id", ondelete="CASCADE"), nullable=False)

    # actual vs goal
    move_cal = Column(Integer)
    move_goal = Column(Integer)
    exercise_mins = Column(Integer)
    exercise_goal = Column(Integer)
    stand_hrs = Column(Integer)
    stand_goal = Column(Integer)

    step_count = Column(Integer)
    step_distance_km = Column(Float)

    daily_log = relationship("DailyLog", back_populates="activity_rings")
