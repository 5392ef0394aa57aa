"""
Microblog Backend — Post SQLAlchemy Model
===========================================

What:  ORM model representing the `posts` table.
Who:   Used by PostStore for the insert and select-all statements.

Table Design:
    - id: textual UUID (36 chars, dashed form). Generated in Python at
      creation; no unique index beyond the primary key declaration.
    - title / content: unbounded TEXT, never NULL.

    Rows have no timestamp column. Listing relies on SQLite's implicit
    `rowid` for insertion order.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from microblog.database import Base


class PostRecord(Base):
    """
    A persisted post row.

    Lifecycle:
        Inserted exactly once by the create-post operation. Never updated
        or deleted by the service.
    """

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Textual UUID assigned at creation",
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<PostRecord(id={self.id}, title={self.title!r})>"
