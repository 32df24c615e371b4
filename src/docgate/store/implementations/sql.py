"""
SQLAlchemy-backed document store.

Every document lives in a single ``documents`` table as a JSON body keyed by
``(collection, id)``. Filtering is done on the decoded body, so any SQLAlchemy
dialect with a JSON type works (SQLite via aiosqlite, PostgreSQL via psycopg).
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, MetaData, String, select
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool

from ...logging import get_logger
from ..base import (
    POSTS,
    USERS,
    Document,
    DocumentCollection,
    DocumentStore,
    StoreError,
    matches,
    new_document_id,
)

logger = get_logger(__name__)

naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=naming_convention)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Documents(Base):
    __tablename__ = "documents"
    __table_args__ = (Index("ix_documents_collection", "collection"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    collection: Mapped[str] = mapped_column(String(64), nullable=False)
    body: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(True), default=_utcnow, onupdate=_utcnow)


def to_async_url(database_url: str) -> str:
    """Map plain driver URLs onto their async SQLAlchemy dialects."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+psycopg://", 1)
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return database_url


def create_engine_for_url(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine, pinning in-memory SQLite to a single connection."""
    url = to_async_url(database_url)
    options: dict[str, Any] = {"echo": echo}
    if url.startswith("sqlite") and ":memory:" in url:
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    return create_async_engine(url, **options)


def _as_document(row: Documents) -> Document:
    return {**row.body, "id": row.id}


class SqlCollection(DocumentCollection):
    """A collection stored as rows of the ``documents`` table."""

    def __init__(self, name: str, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__(name)
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session that commits on success and maps driver errors to StoreError."""
        try:
            async with self._session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
        except SQLAlchemyError as e:
            logger.error("Document store operation failed", collection=self.name, error=str(e))
            raise StoreError(f"Document store operation failed on {self.name}: {e}") from e

    async def _get_row(self, session: AsyncSession, id: str) -> Documents | None:
        stmt = select(Documents).where(Documents.id == id, Documents.collection == self.name)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_id(self, id: str) -> Document | None:
        async with self._session() as session:
            row = await self._get_row(session, id)
            return _as_document(row) if row is not None else None

    async def find(self, filter: Document | None = None) -> list[Document]:
        async with self._session() as session:
            stmt = select(Documents).where(Documents.collection == self.name)
            result = await session.execute(stmt)
            documents = [_as_document(row) for row in result.scalars().all()]
        return [document for document in documents if matches(document, filter)]

    async def insert(self, record: Document) -> Document:
        body = {key: value for key, value in record.items() if key != "id"}
        row = Documents(id=new_document_id(), collection=self.name, body=body)
        async with self._session() as session:
            session.add(row)
            await session.flush()
            return _as_document(row)

    async def find_by_id_and_update(self, id: str, patch: Document) -> Document | None:
        async with self._session() as session:
            row = await self._get_row(session, id)
            if row is None:
                return None
            # Reassign so the JSON column registers the change
            row.body = {**row.body, **{key: value for key, value in patch.items() if key != "id"}}
            await session.flush()
            return _as_document(row)

    async def find_by_id_and_remove(self, id: str) -> Document | None:
        async with self._session() as session:
            row = await self._get_row(session, id)
            if row is None:
                return None
            document = _as_document(row)
            await session.delete(row)
            return document


class SqlDocumentStore(DocumentStore):
    """Document store persisted through an async SQLAlchemy engine."""

    def __init__(
        self,
        database_url: str | None = None,
        *,
        engine: AsyncEngine | None = None,
        echo: bool = False,
    ):
        if engine is None:
            if database_url is None:
                raise ValueError("SqlDocumentStore needs a database_url or an engine")
            engine = create_engine_for_url(database_url, echo=echo)
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine, class_=AsyncSession, autoflush=False, expire_on_commit=False
        )
        self.users = SqlCollection(USERS, self.session_factory)
        self.posts = SqlCollection(POSTS, self.session_factory)

    async def create_schema(self) -> None:
        """Create the documents table if it does not exist."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise StoreError(f"Could not create document schema: {e}") from e
        logger.info("Document schema ready", url=self.engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        await self.engine.dispose()
