from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from config.app_config import DATABASE_URL, SQL_ECHO


def apply_sqlite_pragmas(target: Engine) -> Engine:
    """
    Register per-connection pragmas on a SQLite engine.

    Foreign keys are off by default in SQLite, and LIKE ignores ASCII case
    unless case_sensitive_like is switched on. Non-SQLite engines are
    returned untouched.
    """
    if target.dialect.name != 'sqlite':
        return target

    @event.listens_for(target, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA case_sensitive_like=ON")
        cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
        cursor.close()

    return target


connect_args = {'check_same_thread': False} if DATABASE_URL.startswith('sqlite') else {}

engine = apply_sqlite_pragmas(create_engine(
    DATABASE_URL,
    connect_args=connect_args,
    echo=SQL_ECHO,
    pool_pre_ping=True,  # Verify connections are alive before using
))

SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()


def get_db():
    """Dependency for FastAPI routes"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
