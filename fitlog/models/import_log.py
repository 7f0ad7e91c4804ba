from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, JSON, String, Text

from fitlog.core.db import Base


class ImportLog(Base):
    __tablename__ = "import_logs"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True)
    # Audit rows outlive the log they describe (overwrite imports delete it)
    daily_log_id = Column(Integer, ForeignKey("daily_logs.id", ondelete="SET NULL"))

    date = Column(Date, nullable=False)
    imported_at = Column(DateTime, default=datetime.utcnow, index=True)

    meals_count = Column(Integer, default=0)
    workouts_count = Column(Integer, default=0)
    status = Column(String(16), nullable=False)  # success / error
    error_message = Column(Text)

    raw_json = Column(JSON)
