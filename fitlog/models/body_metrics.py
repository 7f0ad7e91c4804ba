# fitlog/models/body_metrics.py

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, Text

from fitlog.core.db import Base


class BodyMetric(Base):
    """
    Standalone weight / physique sample. Kept apart from DailyLog so the
    weight time series survives daily-log overwrites.
    """

    __tablename__ = "body_metrics"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)

    weight_kg = Column(Float)
    photo_url = Column(String(512))
    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)
