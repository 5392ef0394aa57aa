"""
Microblog Backend — Posts Route Handlers
==========================================

What:  Handles POST /posts (create) and GET /posts (list).
How:   Reads the request, delegates to PostService, returns JSON. Failures
       are raised as application exceptions and answered by the global
       handlers in main.py.

Why the create handler reads the raw body:
    A declared Pydantic body parameter would answer 422 for malformed JSON
    and for non-string fields. This API answers 500 for unparseable bodies
    and treats non-string fields as empty (→ 400), so the body is parsed by
    hand and then coerced through PostCreate.
"""

import json
import logging
from typing import Any, List

from fastapi import APIRouter, Depends, Request
from starlette.requests import ClientDisconnect

from microblog.exceptions import MalformedRequestError
from microblog.schemas.post import Post, PostCreate
from microblog.services.post_service import post_service
from microblog.store import PostStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Posts"])


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _parse_json(body: bytes) -> Any:
    """
    Decode a request body as strict JSON.

    Rejected as MalformedRequestError:
        - syntax errors and bytes that are not valid text
        - NaN, Infinity, -Infinity (accepted by the json module, not by JSON)
        - nesting deep enough to exhaust the interpreter's recursion limit
        - lone surrogate escapes such as "\\ud800", anywhere in the document
    """
    try:
        data = json.loads(body, parse_constant=_reject_constant)
        # Lone surrogates survive json.loads but cannot be stored as UTF-8
        json.dumps(data, ensure_ascii=False).encode("utf-8")
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError, UnicodeDecodeError, UnicodeEncodeError
        raise MalformedRequestError(
            context={"error_type": type(e).__name__, "error": str(e)[:200]}
        ) from e
    return data


@router.post(
    "/posts",
    response_model=Post,
    summary="Create a post",
)
async def create_post(
    request: Request,
    store: PostStore = Depends(get_store),
) -> Post:
    """
    Create a post from a `{"title": ..., "content": ...}` body.

    Responses:
        200: the created post
        400: title or content empty (or missing / not a string)
        500: body unreadable or not JSON; insert failed
    """
    logger.info("Create post")

    try:
        body = await request.body()
    except ClientDisconnect as e:
        raise MalformedRequestError(context={"error": repr(e)}) from e

    data = _parse_json(body)

    # A JSON value that is not an object has no fields
    if not isinstance(data, dict):
        data = {}

    payload = PostCreate.model_validate(data)
    return await post_service.create_post(store, payload)


@router.get(
    "/posts",
    response_model=List[Post],
    summary="List all posts",
)
async def list_posts(store: PostStore = Depends(get_store)) -> List[Post]:
    """Return every post in insertion order; `[]` when there are none."""
    logger.info("List posts")
    return await post_service.list_posts(store)
