"""
Microblog Backend — Posts Store
=================================

What:  Persistence for posts: one insert, one select-all.
Why:   Keeps SQL and driver errors out of the service and routes.
How:   Wraps an AsyncEngine plus a session factory. Each operation opens a
       short-lived session, runs one statement, and commits (insert) or
       simply closes (select). Driver failures are re-raised as StoreError.
Who:   Constructed once by create_app(); handed to handlers via get_store().

Connection handling:
    The engine's pool is created lazily with the store and shared by every
    request. No explicit transaction spans more than one statement.
"""

import logging
import uuid
from typing import List, Optional

from fastapi import Request
from sqlalchemy import literal_column, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from microblog.database import Base, build_engine
from microblog.exceptions import StoreError
from microblog.models.post import PostRecord
from microblog.schemas.post import Post

logger = logging.getLogger(__name__)


class PostStore:
    """
    Async access to the `posts` table.

    Error Handling Strategy:
        SQLAlchemyError from either statement becomes StoreError with the
        per-operation client message. A stored id that is not a valid UUID
        fails the whole fetch; the row is not skipped.
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        engine: Optional[AsyncEngine] = None,
    ):
        self.engine = engine or build_engine(database_url)
        # expire_on_commit=False: records stay readable after commit
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_schema(self) -> None:
        """Create the `posts` table if it does not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Posts table ready")

    async def insert(self, post_id: uuid.UUID, title: str, content: str) -> None:
        """
        Append one row.

        Raises:
            StoreError: The write failed (I/O error, constraint violation).
        """
        try:
            async with self._session_factory() as session:
                session.add(
                    PostRecord(id=str(post_id), title=title, content=content)
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreError(
                message="Failed to insert post into database",
                context={
                    "post_id": str(post_id),
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
            ) from e

    async def fetch_all(self) -> List[Post]:
        """
        Return every stored post in insertion order.

        Raises:
            StoreError: The select failed, or a row holds an unparseable id.
        """
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(PostRecord).order_by(literal_column("rowid"))
                )
                records = list(result.scalars().all())
        except SQLAlchemyError as e:
            raise StoreError(
                message="Failed to fetch posts from database",
                context={"error_type": type(e).__name__, "error": str(e)},
            ) from e

        posts = []
        for record in records:
            try:
                post_id = uuid.UUID(record.id)
            except ValueError as e:
                raise StoreError(
                    message="Failed to fetch posts from database",
                    context={"error_type": "InvalidUUID", "stored_id": record.id},
                ) from e
            posts.append(Post(id=post_id, title=record.title, content=record.content))
        return posts

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()


# ── Store Dependency ──────────────────────────────────────────────────────
def get_store(request: Request) -> PostStore:
    """
    FastAPI dependency returning the store attached by create_app().

    Example usage in a route:
        @router.get("/posts")
        async def list_posts(store: PostStore = Depends(get_store)):
            ...
    """
    return request.app.state.store
