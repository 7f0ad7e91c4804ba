from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, JSON, String

from fitlog.core.db import Base


class Goal(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    goal_type = Column(String(32), nullable=False)  # weight / calories / protein ...
    target_value = Column(Float, nullable=False)
    start_date = Column(Date, nullable=False)
    target_date = Column(Date)

    created_at = Column(DateTime, default=datetime.utcnow)


class MealTemplate(Base):
    __tablename__ = "meal_templates"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    meal_type = Column(String(32), nullable=False)

    calories = Column(Float)
    protein_g = Column(Float)
    carbs_g = Column(Float)
    fat_g = Column(Float)
    fibre_g = Column(Float)

    # stored as given, not normalized into MealComponent rows
    components = Column(JSON)

    created_at = Column(DateTime, default=datetime.utcnow)
