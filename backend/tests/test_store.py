"""
Microblog Backend — PostStore Tests
=====================================

What:  Tests for the persistence layer against a real SQLite file.
How:   Each test gets a fresh database from the `store` fixture.

What we test:
    ✅ Insert then fetch returns the same triple
    ✅ Fetch on an empty table returns []
    ✅ Fetch order follows insertion order
    ✅ Driver failures and corrupt ids surface as StoreError
"""

import uuid

import pytest
from sqlalchemy import text

from microblog.exceptions import StoreError
from microblog.store import PostStore


class TestPostStoreInsertFetch:

    @pytest.mark.asyncio
    async def test_fetch_all_empty(self, store):
        assert await store.fetch_all() == []

    @pytest.mark.asyncio
    async def test_insert_then_fetch(self, store):
        post_id = uuid.uuid4()
        await store.insert(post_id, "Hello", "World")

        posts = await store.fetch_all()

        assert len(posts) == 1
        assert posts[0].id == post_id
        assert posts[0].title == "Hello"
        assert posts[0].content == "World"

    @pytest.mark.asyncio
    async def test_id_stored_in_dashed_text_form(self, store):
        post_id = uuid.uuid4()
        await store.insert(post_id, "t", "c")

        async with store.engine.connect() as conn:
            stored = (await conn.execute(text("SELECT id FROM posts"))).scalar_one()

        assert stored == str(post_id)

    @pytest.mark.asyncio
    async def test_fetch_all_in_insertion_order(self, store):
        ids = [uuid.uuid4() for _ in range(5)]
        for i, post_id in enumerate(ids):
            await store.insert(post_id, f"title {i}", f"content {i}")

        posts = await store.fetch_all()

        assert [p.id for p in posts] == ids

    @pytest.mark.asyncio
    async def test_rows_persist_across_store_instances(self, tmp_path):
        """Data lives in the file, not in the store object."""
        url = f"sqlite+aiosqlite:///{tmp_path / 'persist.db'}"
        first = PostStore(url)
        await first.create_schema()
        post_id = uuid.uuid4()
        await first.insert(post_id, "kept", "on disk")
        await first.dispose()

        second = PostStore(url)
        await second.create_schema()  # no-op for an existing table
        try:
            posts = await second.fetch_all()
        finally:
            await second.dispose()

        assert [p.id for p in posts] == [post_id]


class TestPostStoreErrors:

    @pytest.mark.asyncio
    async def test_duplicate_id_raises_store_error(self, store):
        post_id = uuid.uuid4()
        await store.insert(post_id, "a", "b")

        with pytest.raises(StoreError) as exc_info:
            await store.insert(post_id, "c", "d")

        assert exc_info.value.message == "Failed to insert post into database"
        assert exc_info.value.context["post_id"] == str(post_id)

    @pytest.mark.asyncio
    async def test_missing_table_raises_store_error(self, tmp_path):
        bare = PostStore(f"sqlite+aiosqlite:///{tmp_path / 'bare.db'}")
        try:
            with pytest.raises(StoreError) as fetch_exc:
                await bare.fetch_all()
            with pytest.raises(StoreError) as insert_exc:
                await bare.insert(uuid.uuid4(), "t", "c")
        finally:
            await bare.dispose()

        assert fetch_exc.value.message == "Failed to fetch posts from database"
        assert insert_exc.value.message == "Failed to insert post into database"

    @pytest.mark.asyncio
    async def test_corrupt_id_fails_whole_fetch(self, store):
        """A row with an unparseable id is fatal, not skipped."""
        await store.insert(uuid.uuid4(), "good", "row")
        async with store.engine.begin() as conn:
            await conn.execute(
                text("INSERT INTO posts (id, title, content) VALUES ('not-a-uuid', 'bad', 'row')")
            )

        with pytest.raises(StoreError) as exc_info:
            await store.fetch_all()

        assert exc_info.value.message == "Failed to fetch posts from database"
        assert exc_info.value.context["stored_id"] == "not-a-uuid"
