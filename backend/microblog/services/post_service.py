"""
Microblog Backend — Post Service (Business Logic)
===================================================

What:  Create and list posts.
How:   Applies the non-empty rule, assigns a fresh UUID4, and delegates to the
       PostStore passed in by the caller.
Who:   Called by the posts route handlers.

Design Decision:
    PostService is stateless. It receives the store for each call, so tests
    can hand it an AsyncMock and the route layer owns the wiring.
"""

import logging
import uuid
from typing import List

from microblog.exceptions import ValidationError
from microblog.schemas.post import Post, PostCreate
from microblog.store import PostStore

logger = logging.getLogger(__name__)


class PostService:
    """
    Business logic layer for post operations.

    Error Handling Strategy:
        ValidationError is raised here for empty fields. StoreError from
        the store propagates unchanged; it already carries the client
        message for the failing operation.
    """

    async def create_post(self, store: PostStore, payload: PostCreate) -> Post:
        """
        Validate and persist a new post.

        Args:
            store: Posts store (injected by the route)
            payload: Coerced request body

        Returns:
            The created Post, including its generated id

        Raises:
            ValidationError: Title or content is empty (→ 400)
            StoreError: Insert failed (→ 500)
        """
        if not payload.title or not payload.content:
            raise ValidationError(
                context={
                    "title_empty": not payload.title,
                    "content_empty": not payload.content,
                },
            )

        post = Post(id=uuid.uuid4(), title=payload.title, content=payload.content)
        await store.insert(post.id, post.title, post.content)
        logger.info("Post created: %s", post.id)
        return post

    async def list_posts(self, store: PostStore) -> List[Post]:
        """
        Return every stored post (empty list when there are none).

        Raises:
            StoreError: Select failed or a stored id is corrupt (→ 500)
        """
        posts = await store.fetch_all()
        logger.debug("Fetched %d posts", len(posts))
        return posts


post_service = PostService()
