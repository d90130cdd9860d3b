# app/core/config.py
import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    value = os.getenv(name)
    if not value:
        return default
    return float(value)


class Settings(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    mongo_url: str = "mongodb://localhost:27017"
    mongo_db: str = "d2d_sales_coach"

    groq_api_key: Optional[str] = None
    groq_model: str = "llama-3.3-70b-versatile"
    model_max_tokens: int = 1024
    model_temperature: float = 0.7
    model_timeout: Optional[float] = None  # seconds, None = wait forever

    manager_pin: Optional[str] = None
    knowledge_cache_ttl: float = 60.0
    session_idle_ttl: float = 6 * 60 * 60
    strict_analysis: bool = False

    cors_origins: List[str] = ["http://localhost:3000"]
    public_dir: str = "public"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS", "http://localhost:3000")
        return cls(
            mongo_url=os.getenv("MONGO_URL", "mongodb://localhost:27017"),
            mongo_db=os.getenv("MONGO_DB", "d2d_sales_coach"),
            groq_api_key=os.getenv("GROQ_API_KEY") or None,
            groq_model=os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile"),
            model_max_tokens=int(os.getenv("MODEL_MAX_TOKENS", "1024")),
            model_temperature=float(os.getenv("MODEL_TEMPERATURE", "0.7")),
            model_timeout=_env_float("MODEL_TIMEOUT", None),
            manager_pin=os.getenv("MANAGER_PIN") or None,
            knowledge_cache_ttl=_env_float("KNOWLEDGE_CACHE_TTL", 60.0),
            session_idle_ttl=_env_float("SESSION_IDLE_TTL", 6 * 60 * 60),
            strict_analysis=_env_bool("STRICT_ANALYSIS"),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            public_dir=os.getenv("PUBLIC_DIR", "public"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
