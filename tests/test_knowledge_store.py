"""Tests for KnowledgeStore and its snapshot cache."""

import pytest

from app.core.errors import ValidationError
from app.services.knowledge_store import KnowledgeCache


@pytest.mark.unit
class TestKnowledgeCache:
    def test_empty_cache(self, ticker) -> None:
        assert KnowledgeCache(clock=ticker).get() is None

    def test_value_expires_after_ttl(self, ticker) -> None:
        cache = KnowledgeCache(ttl=60, clock=ticker)
        cache.put(("doc",))

        ticker.advance(59.9)
        assert cache.get() == ("doc",)

        ticker.advance(0.1)
        assert cache.get() is None

    def test_invalidate(self, ticker) -> None:
        cache = KnowledgeCache(ttl=60, clock=ticker)
        cache.put(())

        cache.invalidate()

        assert cache.get() is None


class TestKnowledgeStore:
    @pytest.mark.asyncio
    async def test_add_and_list_newest_first(self, knowledge_store, clock) -> None:
        await knowledge_store.add("first.txt", "Foundational material")
        clock.advance(minutes=1)
        await knowledge_store.add("  second.txt ", "y" * 500)

        files = await knowledge_store.list()

        assert [f.filename for f in files] == ["second.txt", "first.txt"]
        assert files[0].preview == "y" * 120
        assert files[1].preview == "Foundational material"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("filename,content", [("", "text"), ("a.txt", "  "), (None, "x"), ("a.txt", None)])
    async def test_add_rejects_blank(self, knowledge_store, filename, content) -> None:
        with pytest.raises(ValidationError):
            await knowledge_store.add(filename, content)

    @pytest.mark.asyncio
    async def test_prompt_snapshot_is_oldest_first(self, knowledge_store, clock) -> None:
        await knowledge_store.add("first.txt", "one")
        clock.advance(minutes=1)
        await knowledge_store.add("second.txt", "two")

        docs = await knowledge_store.get_all_for_prompt()

        assert [d.filename for d in docs] == ["first.txt", "second.txt"]
        assert docs[0].content == "one"

    @pytest.mark.asyncio
    async def test_snapshot_cached_within_ttl(self, knowledge_store, ticker, mongo_db) -> None:
        await knowledge_store.add("a.txt", "alpha")
        first = await knowledge_store.get_all_for_prompt()

        # Written behind the store's back: only visible after expiry.
        await mongo_db["knowledge_files"].insert_one(
            {"filename": "b.txt", "content": "beta", "uploaded_at": knowledge_store.now()}
        )
        ticker.advance(30)
        second = await knowledge_store.get_all_for_prompt()

        assert second is first

        ticker.advance(31)
        third = await knowledge_store.get_all_for_prompt()

        assert third is not first
        assert len(third) == 2

    @pytest.mark.asyncio
    async def test_add_invalidates_snapshot(self, knowledge_store) -> None:
        first = await knowledge_store.get_all_for_prompt()
        assert first == ()

        await knowledge_store.add("a.txt", "alpha")
        second = await knowledge_store.get_all_for_prompt()

        assert [d.filename for d in second] == ["a.txt"]

    @pytest.mark.asyncio
    async def test_delete_invalidates_snapshot(self, knowledge_store) -> None:
        file_id = await knowledge_store.add("a.txt", "alpha")
        assert len(await knowledge_store.get_all_for_prompt()) == 1

        await knowledge_store.delete(file_id)

        assert await knowledge_store.get_all_for_prompt() == ()
        assert await knowledge_store.list() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("file_id", ["65a1b2c3d4e5f60718293a4b", "not-an-object-id"])
    async def test_delete_missing_is_not_an_error(self, knowledge_store, file_id) -> None:
        await knowledge_store.add("a.txt", "alpha")

        await knowledge_store.delete(file_id)

        assert len(await knowledge_store.list()) == 1
