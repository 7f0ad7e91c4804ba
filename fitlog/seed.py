"""
Create the local user and default goals, then print a dev access token.

    fitlog-seed
"""

import calendar
import logging
from datetime import date as DateType

from fitlog.core.config import settings
from fitlog.core.db import Base, SessionLocal, engine
from fitlog.core.security import create_tokens, hash_password
from fitlog.models import Goal, User

log = logging.getLogger("fitlog.seed")

DEFAULT_GOALS = {
    "weight": 75,
    "calories": 2000,
    "protein": 150,
}


def _add_months(d: DateType, months: int) -> DateType:
    month = d.month - 1 + months
    year = d.year + month // 12
    month = month % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return DateType(year, month, day)


def seed(db) -> User:
    user = db.query(User).filter(User.email == settings.SEED_EMAIL).one_or_none()
    if user is None:
        user = User(
            email=settings.SEED_EMAIL,
            password_hash=hash_password(settings.SEED_PASSWORD),
            name=settings.SEED_NAME,
        )
        db.add(user)
        db.flush()
        log.info("created user %s", user.email)

    today = DateType.today()
    existing = {g.goal_type for g in db.query(Goal).filter(Goal.user_id == user.id)}
    for goal_type, target in DEFAULT_GOALS.items():
        if goal_type in existing:
            continue
        db.add(
            Goal(
                user_id=user.id,
                goal_type=goal_type,
                target_value=target,
                start_date=today,
                target_date=_add_months(today, 3),
            )
        )

    db.commit()
    return user


def main():
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(levelname)s %(message)s")

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        user = seed(db)
        email, user_id = user.email, user.id
    finally:
        db.close()

    tokens = create_tokens(user_id)
    print(f"user: {email} (id {user_id})")
    print(f"access token: {tokens['accessToken']}")


if __name__ == "__main__":
    main()
