"""
Microblog Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the JSON contract of the posts API.
How:   `PostCreate` reads the create-post payload; `Post` is the domain value
       returned by the store and serialized in responses.

Permissive input:
    A missing or non-string `title`/`content` becomes "" instead of a
    validation failure. The emptiness rule in PostService then decides the
    response, so `{"title": 5, "content": "x"}` answers 400, not 422.
"""

import uuid
from typing import Any

from pydantic import BaseModel, Field, field_validator


class PostCreate(BaseModel):
    """
    What:  Body of POST /posts.
    Who:   Built by the posts route from the parsed JSON document.
    """
    title: str = Field(default="", description="Post title (must be non-empty)")
    content: str = Field(default="", description="Post body (must be non-empty)")

    @field_validator("title", "content", mode="before")
    @classmethod
    def coerce_to_string(cls, v: Any) -> str:
        """Anything that is not a JSON string is treated as empty."""
        return v if isinstance(v, str) else ""


class Post(BaseModel):
    """
    What:  A post as stored and as returned by the API.
    Who:   Returned by PostStore.fetch_all, PostService, and both routes.

    Serialized form:
        {"id": "<uuid>", "title": "...", "content": "..."}
    """
    id: uuid.UUID = Field(description="Unique post identifier (UUID)")
    title: str = Field(description="Post title")
    content: str = Field(description="Post body")
