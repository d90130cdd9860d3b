# app/api/deps.py
from functools import lru_cache

from app.core.config import get_settings
from app.database.mongodb import knowledge_files_collection, practice_sessions_collection
from app.services.conversation_registry import SessionRegistry
from app.services.knowledge_store import KnowledgeCache, KnowledgeStore
from app.services.session_archive import SessionArchive
from coach.llm.groq_client import GroqChatModel


@lru_cache
def get_registry() -> SessionRegistry:
    return SessionRegistry(idle_ttl=get_settings().session_idle_ttl)


@lru_cache
def get_knowledge_store() -> KnowledgeStore:
    cache = KnowledgeCache(ttl=get_settings().knowledge_cache_ttl)
    return KnowledgeStore(knowledge_files_collection, cache=cache)


@lru_cache
def get_archive() -> SessionArchive:
    return SessionArchive(practice_sessions_collection)


@lru_cache
def get_model() -> GroqChatModel:
    settings = get_settings()
    return GroqChatModel(
        api_key=settings.groq_api_key,
        model=settings.groq_model,
        max_tokens=settings.model_max_tokens,
        temperature=settings.model_temperature,
        timeout=settings.model_timeout,
    )
