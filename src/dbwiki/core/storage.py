"""Storage abstraction for wiki pages."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from sqlalchemy import (
    Column,
    LargeBinary,
    MetaData,
    String,
    Table,
    create_engine,
    insert,
    select,
    text,
    update,
)
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from dbwiki.config import Settings
from dbwiki.core.exceptions import StorageError
from dbwiki.core.models import Page

logger = logging.getLogger(__name__)

metadata = MetaData()

pages = Table(
    "pages",
    metadata,
    Column("title", String(255), primary_key=True),
    Column("content", LargeBinary, nullable=False),
)


def _is_memory_sqlite(url: URL) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


class Storage(ABC):
    """Abstract base class for page storage."""

    def connect(self) -> None:
        """Prepare the backend for use. Called once at startup."""

    def close(self) -> None:
        """Release backend resources. Called once at shutdown."""

    @abstractmethod
    def get_page(self, title: str) -> Page | None:
        """Get a page by title. Returns None if not found."""
        ...

    @abstractmethod
    def update_page(self, page: Page) -> int:
        """Overwrite the body of an existing page. Returns affected rows."""
        ...

    @abstractmethod
    def insert_page(self, page: Page) -> int:
        """Store a page under a new title. Returns affected rows."""
        ...

    def save_page(self, page: Page) -> int:
        """Save a page, updating it if present and inserting it otherwise.

        The update is always tried first. A failed update, or one that
        touches no rows, falls back to an insert. Raises StorageError when
        the insert fails or affects no rows.
        """
        try:
            affected = self.update_page(page)
        except StorageError as exc:
            logger.warning(
                "Updating page %s failed, trying insert: %s", page.title, exc
            )
            affected = 0

        if affected == 0:
            affected = self.insert_page(page)
            if affected == 0:
                raise StorageError("operation did not affect any rows")

        logger.info("Saved page %s (%d rows affected)", page.title, affected)
        return affected


class SQLStorage(Storage):
    """Relational storage implementation.

    Pages live in a single ``pages`` table keyed by title. Each statement
    runs in its own transaction on a connection borrowed from the pool.
    """

    def __init__(self, engine: Engine, create_schema: bool = True):
        self.engine = engine
        self.create_schema = create_schema

    @classmethod
    def from_settings(cls, settings: Settings) -> "SQLStorage":
        """Build storage with a bounded connection pool."""
        url = make_url(settings.database_url)

        # SQLite needs a special flag when used in a multi-threaded web app.
        connect_args: dict[str, object] = {}
        if url.get_backend_name() == "sqlite":
            connect_args = {"check_same_thread": False}

        # An in-memory database lives and dies with its one connection.
        pool_args: dict[str, object]
        if _is_memory_sqlite(url):
            pool_args = {"poolclass": StaticPool}
        else:
            pool_args = {
                "pool_size": settings.pool_size,
                "max_overflow": settings.pool_max_overflow,
                "pool_recycle": settings.pool_recycle,
            }

        engine = create_engine(
            url,
            echo=settings.debug,
            pool_pre_ping=True,
            connect_args=connect_args,
            **pool_args,
        )
        return cls(engine, create_schema=settings.create_schema)

    def connect(self) -> None:
        """Check connectivity and create the pages table if asked to."""
        url = self.engine.url
        if url.get_backend_name() == "sqlite" and not _is_memory_sqlite(url):
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        with self.engine.begin() as conn:
            conn.execute(text("SELECT 1"))
            if self.create_schema:
                metadata.create_all(conn)
        logger.info("Connected to database")

    def close(self) -> None:
        self.engine.dispose()

    def get_page(self, title: str) -> Page | None:
        stmt = (
            select(pages.c.title, pages.c.content)
            .where(pages.c.title == title)
            .limit(1)
        )
        try:
            with self.engine.connect() as conn:
                row = conn.execute(stmt).first()
        except SQLAlchemyError as exc:
            raise StorageError(str(exc)) from exc

        if row is None:
            return None
        return Page(title=row.title, body=row.content)

    def update_page(self, page: Page) -> int:
        stmt = (
            update(pages)
            .where(pages.c.title == page.title)
            .values(content=page.body)
        )
        return self._execute(stmt)

    def insert_page(self, page: Page) -> int:
        stmt = insert(pages).values(title=page.title, content=page.body)
        return self._execute(stmt)

    def _execute(self, stmt) -> int:
        """Run a write statement and return the number of affected rows."""
        try:
            with self.engine.begin() as conn:
                return conn.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            raise StorageError(str(exc)) from exc
