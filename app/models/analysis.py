# backend/app/models/analysis.py

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

ANALYSIS_CATEGORIES = (
    "opening",
    "objectionHandling",
    "rapport",
    "tonality",
    "timing",
    "closing",
)


class CategoryScore(BaseModel):
    model_config = ConfigDict(extra="allow")

    score: int = Field(ge=0, le=100)
    feedback: str = ""


class AnalysisRecord(BaseModel):
    """
    Shape the analysis prompt asks the model for. Used only for optional
    validation; stored analyses are whatever the model returned.
    """
    model_config = ConfigDict(extra="allow")

    overall: int = Field(ge=0, le=100)
    breakdown: Dict[str, CategoryScore]
    summary: str
    keyStrength: str
    keyImprovement: str
