# coach/evaluator/extractor.py
"""
Turns raw model text into something the API can return.

The analysis prompt asks for bare JSON, but models regularly wrap it in a
fenced block or add a sentence before/after it. Extraction order:

1. interior of the first ``` fenced block (language tag optional), else the
   whole trimmed text;
2. parse that candidate as a whole;
3. parse the span from its first "{" to its last "}".

Anything that does not end up as a JSON object raises MalformedResponseError.
"""
import json
import logging
from typing import Any, List, Optional

from pydantic import ValidationError as SchemaError

from app.core.errors import MalformedResponseError
from app.models.analysis import ANALYSIS_CATEGORIES, AnalysisRecord

logger = logging.getLogger(__name__)

FENCE = "```"


def extract_scorecard(raw: Optional[str]) -> str:
    return (raw or "").strip()


def _is_language_tag(text: str) -> bool:
    return text.replace("-", "").replace("_", "").replace("+", "").isalnum()


def fenced_block(text: str) -> Optional[str]:
    start = text.find(FENCE)
    if start == -1:
        return None

    body_start = start + len(FENCE)
    line_end = text.find("\n", body_start)
    if line_end != -1:
        opening_line = text[body_start:line_end].strip()
        if not opening_line or _is_language_tag(opening_line):
            body_start = line_end + 1

    end = text.find(FENCE, body_start)
    if end == -1:
        return None
    return text[body_start:end].strip()


def _loads_object(candidate: str) -> Optional[dict]:
    try:
        value = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


def outermost_braces(text: str) -> Optional[str]:
    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last <= first:
        return None
    return text[first:last + 1]


def extract_analysis(raw: Optional[str]) -> dict:
    text = (raw or "").strip()
    candidate = fenced_block(text)
    if candidate is None:
        candidate = text

    parsed = _loads_object(candidate)
    if parsed is None:
        span = outermost_braces(candidate)
        if span is not None:
            parsed = _loads_object(span)

    if parsed is None:
        logger.warning(f"❌ Could not parse analysis from model output: {raw!r}")
        raise MalformedResponseError("Model response did not contain a JSON object.", raw=raw or "")
    return parsed


def validate_analysis(data: Any) -> List[str]:
    """List shape problems of an extracted analysis; empty when it looks right."""
    problems: List[str] = []
    try:
        record = AnalysisRecord.model_validate(data)
    except SchemaError as exc:
        for err in exc.errors():
            location = ".".join(str(part) for part in err["loc"]) or "analysis"
            problems.append(f"{location}: {err['msg']}")
        return problems

    for category in ANALYSIS_CATEGORIES:
        if category not in record.breakdown:
            problems.append(f"breakdown.{category}: missing")
    return problems
