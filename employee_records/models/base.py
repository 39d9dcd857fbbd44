"""
Storage client, session management, and base model.

The Database object is constructed once at startup and kept on
app.state. Every request gets a session from get_db(), which
refuses with 503 when the storage engine cannot be reached
instead of hanging or buffering.
"""

from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session

from employee_records.errors import ServiceUnavailableError


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# --- Base Model Class ---
# Every database model (User, Employee, AuditLog) inherits from
# this class. SQLAlchemy uses it to track all models and generate
# the correct SQL for table creation.
class Base(DeclarativeBase):
    pass


class Database:
    """
    Process-wide storage client.

    Holds the engine (a pool of connections) and the session
    factory. pool_pre_ping=True tests connections before using
    them, which handles a database that restarted or a connection
    that went stale.
    """

    def __init__(self, url: str, **engine_kwargs):
        engine_kwargs.setdefault("pool_pre_ping", True)
        self.engine = create_engine(url, **engine_kwargs)
        # autocommit=False: services decide when changes are saved.
        # autoflush=False: SQL is only sent on explicit flush/commit.
        self.session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
        )

    def is_connected(self) -> bool:
        """Ping the storage engine with a trivial query."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError:
            return False
        return True

    def create_all(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise ServiceUnavailableError("Database not connected")
    return database


# --- Dependency for FastAPI ---
def get_db(request: Request):
    """
    Provide a database session for a single request.

    The storage health check runs first, so a request never
    starts work against a database that is down. The
    try/finally guarantees the session is closed even if the
    endpoint raises, which prevents connection leaks.
    """
    database = get_database(request)
    if not database.is_connected():
        raise ServiceUnavailableError("Database not connected")

    db: Session = database.session_factory()
    try:
        yield db
    finally:
        db.close()
