from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from fitlog.core.config import settings

Base = declarative_base()


def make_engine(url: str) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # FastAPI runs sync handlers in a threadpool
        connect_args["check_same_thread"] = False

    eng = create_engine(url, future=True, connect_args=connect_args)

    if eng.dialect.name == "sqlite":
        # SQLite leaves FK enforcement (and ON DELETE actions) off per connection
        @event.listens_for(eng, "connect")
        def _enable_sqlite_fks(dbapi_conn, _record):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

    return eng


engine = None
SessionLocal = None

if settings.DATABASE_URL:
    engine = make_engine(settings.DATABASE_URL)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
