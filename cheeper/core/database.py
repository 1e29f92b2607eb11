import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from sqlalchemy.types import DateTime, TypeDecorator

from cheeper.core.config import settings
from cheeper.utils.exceptions import StoreConnectionError, StoreError

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetime, stored as naive UTC on every engine"""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            value = value.replace(tzinfo=timezone.utc)
        return value


def _engine_options(url: str) -> dict:
    if not url.startswith("sqlite"):
        # One process per command, nothing to pool
        return {"poolclass": NullPool}
    options = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url:
        # In-memory databases live as long as their connection
        options["poolclass"] = StaticPool
    return options


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite leaves foreign key checks off per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


class Store:
    """Handle to the users, messages and friendships collections"""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(
            bind=engine,
            class_=Session,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @classmethod
    def connect(cls, url: Optional[str] = None, echo: Optional[bool] = None) -> "Store":
        """Open the store, check it answers and create missing collections.

        Raises StoreConnectionError when the engine cannot be built or the
        liveness check fails; callers must not continue without a store.
        """
        url = url or settings.DATABASE_URL
        echo = settings.DEBUG if echo is None else echo
        try:
            engine = create_engine(url, echo=echo, **_engine_options(url))
        except (SQLAlchemyError, ValueError) as e:
            raise StoreConnectionError(f"Invalid store url {url!r}: {e}") from e
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)

        store = cls(engine)
        try:
            store.ping()
            store.create_collections()
        except StoreError as e:
            engine.dispose()
            raise StoreConnectionError(f"Cannot connect to store: {e}") from e

        logger.info(f"Connected to store {engine.url.render_as_string(hide_password=True)}")
        return store

    def ping(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StoreError(f"ping failed: {e}") from e

    def create_collections(self) -> None:
        # Models must be registered with Base.metadata before create_all
        import cheeper.models  # noqa: F401

        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StoreError(f"create_collections failed: {e}") from e

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


@contextmanager
def store_operation(db: Session, operation: str) -> Iterator[None]:
    """Re-raise driver errors as StoreError naming the failed operation"""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{operation} failed: {e}")
        raise StoreError(f"{operation} failed: {e}") from e
