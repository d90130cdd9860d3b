# app/services/knowledge_store.py
import logging
import time
from datetime import datetime
from typing import Any, Callable, List, Optional, Tuple

from bson import ObjectId

from app.core.errors import ValidationError
from app.database.mongodb import storage_call
from app.models.knowledge import KnowledgeFileInfo, PromptDocument

logger = logging.getLogger(__name__)


class KnowledgeCache:
    """
    Single-value snapshot that expires `ttl` seconds after it was stored.
    `clock` returns seconds; monotonic by default.
    """

    def __init__(self, ttl: float = 60.0, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.clock = clock
        self._value: Any = None
        self._stored_at: Optional[float] = None

    def get(self) -> Any:
        if self._stored_at is None:
            return None
        if self.clock() - self._stored_at >= self.ttl:
            return None
        return self._value

    def put(self, value: Any) -> None:
        self._value = value
        self._stored_at = self.clock()

    def invalidate(self) -> None:
        self._value = None
        self._stored_at = None


class KnowledgeStore:
    def __init__(self, collection, cache: Optional[KnowledgeCache] = None,
                 now: Callable[[], datetime] = datetime.utcnow):
        self.collection = collection
        self.cache = cache or KnowledgeCache()
        self.now = now

    @storage_call
    async def add(self, filename: Optional[str], content: Optional[str]) -> str:
        if not filename or not filename.strip() or not content or not content.strip():
            raise ValidationError("Filename and content are required.")

        doc = {
            "filename": filename.strip(),
            "content": content,
            "uploaded_at": self.now(),
        }
        res = await self.collection.insert_one(doc)
        self.cache.invalidate()
        logger.info(f"📚 Knowledge file added: {doc['filename']} ({len(content)} chars)")
        return str(res.inserted_id)

    @storage_call
    async def list(self) -> List[KnowledgeFileInfo]:
        docs = await self.collection.find({}).sort(
            [("uploaded_at", -1), ("_id", -1)]
        ).to_list(length=None)
        return [KnowledgeFileInfo.from_document(doc) for doc in docs]

    @storage_call
    async def delete(self, file_id: str) -> None:
        if ObjectId.is_valid(file_id):
            res = await self.collection.delete_one({"_id": ObjectId(file_id)})
            logger.info(f"🗑️ Knowledge file {file_id} delete, removed={res.deleted_count}")
        self.cache.invalidate()

    @storage_call
    async def get_all_for_prompt(self) -> Tuple[PromptDocument, ...]:
        cached = self.cache.get()
        if cached is not None:
            return cached

        # Oldest first: earlier uploads are the foundational material.
        docs = await self.collection.find({}, {"filename": 1, "content": 1}).sort(
            [("uploaded_at", 1), ("_id", 1)]
        ).to_list(length=None)
        documents = tuple(
            PromptDocument(filename=doc.get("filename", ""), content=doc.get("content") or "")
            for doc in docs
        )
        self.cache.put(documents)
        logger.info(f"Knowledge cache reloaded with {len(documents)} file(s)")
        return documents
