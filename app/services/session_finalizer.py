from datetime import datetime
from typing import Any, Optional

from app.core.errors import ValidationError


def _as_count(value: Any) -> int:
    if value is None or value == "":
        return 0
    try:
        return max(0, int(float(value)))
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"Expected a number, got {value!r}")


def finalize_practice_session(
    rep_name: Optional[str],
    duration_seconds: Any,
    rep_message_count: Any,
    analysis: Optional[dict],
    created_at: datetime,
) -> dict:
    """Build the document stored for a finished practice session."""
    name = (rep_name or "").strip()
    if not name:
        raise ValidationError("repName is required.")
    if analysis is None:
        raise ValidationError("analysis is required.")

    return {
        "rep_name": name,
        "rep_key": name.lower(),
        "created_at": created_at,
        "duration_seconds": _as_count(duration_seconds),
        "rep_message_count": _as_count(rep_message_count),
        "analysis": analysis,
    }

