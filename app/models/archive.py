# backend/app/models/archive.py

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SaveSessionRequest(BaseModel):
    repName: Optional[str] = None
    duration: Optional[Any] = None
    repMessages: Optional[Any] = None
    analysis: Optional[Dict[str, Any]] = None


class SessionSummary(CamelModel):
    id: str
    rep_name: str
    created_at: datetime
    duration_seconds: int = 0
    rep_message_count: int = 0
    analysis: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_document(cls, doc: dict) -> "SessionSummary":
        return cls(
            id=str(doc["_id"]),
            rep_name=doc.get("rep_name", ""),
            created_at=doc["created_at"],
            duration_seconds=doc.get("duration_seconds") or 0,
            rep_message_count=doc.get("rep_message_count") or 0,
            analysis=doc.get("analysis") or {},
        )


class RepStats(CamelModel):
    name: str
    session_count: int
    avg_score: int
    best_score: int
    latest_score: int
    last_active: Optional[datetime]
    improvement_trend: Optional[int] = None
    category_averages: Dict[str, Optional[int]]
    top_issues: List[str] = Field(default_factory=list)
