from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from fitlog.core.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(254), nullable=False, unique=True)
    password_hash = Column(String(128), nullable=False)
    name = Column(String(128))

    created_at = Column(DateTime, default=datetime.utcnow)
