# backend/app/models/knowledge.py

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

PREVIEW_LENGTH = 120


class KnowledgeFileRequest(BaseModel):
    filename: Optional[str] = None
    content: Optional[str] = None


class KnowledgeFileInfo(BaseModel):
    id: str
    filename: str
    preview: str
    uploadedAt: datetime

    @classmethod
    def from_document(cls, doc: dict) -> "KnowledgeFileInfo":
        return cls(
            id=str(doc["_id"]),
            filename=doc.get("filename", ""),
            preview=(doc.get("content") or "")[:PREVIEW_LENGTH],
            uploadedAt=doc["uploaded_at"],
        )


@dataclass(frozen=True)
class PromptDocument:
    filename: str
    content: str
