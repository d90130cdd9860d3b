# app/services/session_archive.py
import logging
import math
from collections import OrderedDict
from datetime import datetime, timedelta
from numbers import Number
from typing import Any, Callable, Dict, List, Optional

from app.core.errors import ValidationError
from app.database.mongodb import storage_call
from app.models.analysis import ANALYSIS_CATEGORIES
from app.models.archive import RepStats, SessionSummary
from app.services.session_finalizer import finalize_practice_session

logger = logging.getLogger(__name__)

TREND_MIN_SESSIONS = 4
TOP_ISSUES = 3
MAX_WINDOW_DAYS = 36500


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _score(value: Any) -> Optional[float]:
    # bool is a Number too; a True "score" is not a score
    if isinstance(value, Number) and not isinstance(value, bool):
        return float(value)
    return None


def _mean(values: List[float]) -> float:
    return sum(values) / len(values)


def improvement_trend(scores_newest_first: List[float]) -> Optional[int]:
    """Newer half average minus older half average, or None below four scores."""
    if len(scores_newest_first) < TREND_MIN_SESSIONS:
        return None
    half = len(scores_newest_first) // 2
    newer = _mean(scores_newest_first[:half])
    older = _mean(scores_newest_first[-half:])
    return round_half_up(newer - older)


def category_averages(analyses: List[dict]) -> Dict[str, Optional[int]]:
    averages: Dict[str, Optional[int]] = {}
    for category in ANALYSIS_CATEGORIES:
        values = []
        for analysis in analyses:
            breakdown = analysis.get("breakdown")
            if not isinstance(breakdown, dict):
                continue
            entry = breakdown.get(category)
            if not isinstance(entry, dict):
                continue
            score = _score(entry.get("score"))
            if score is not None:
                values.append(score)
        averages[category] = round_half_up(_mean(values)) if values else None
    return averages


def build_rep_stats(docs_newest_first: List[dict]) -> RepStats:
    analyses = [d.get("analysis") if isinstance(d.get("analysis"), dict) else {}
                for d in docs_newest_first]
    scores = [s for s in (_score(a.get("overall")) for a in analyses) if s is not None]

    latest = docs_newest_first[0] if docs_newest_first else None
    latest_score = _score(analyses[0].get("overall")) if analyses else None

    issues = []
    for analysis in analyses:
        issue = analysis.get("keyImprovement")
        if isinstance(issue, str) and issue.strip():
            issues.append(issue)
        if len(issues) == TOP_ISSUES:
            break

    return RepStats(
        name=latest.get("rep_name", "") if latest else "",
        session_count=len(docs_newest_first),
        avg_score=round_half_up(_mean(scores)) if scores else 0,
        best_score=round_half_up(max(scores)) if scores else 0,
        latest_score=round_half_up(latest_score) if latest_score is not None else 0,
        last_active=latest.get("created_at") if latest else None,
        improvement_trend=improvement_trend(scores),
        category_averages=category_averages(analyses),
        top_issues=issues,
    )


class SessionArchive:
    def __init__(self, collection, now: Callable[[], datetime] = datetime.utcnow):
        self.collection = collection
        self.now = now

    def _window_start(self, since_days: Optional[int]) -> Optional[datetime]:
        if not since_days or since_days <= 0:
            return None
        if since_days > MAX_WINDOW_DAYS:
            raise ValidationError(f"days must be at most {MAX_WINDOW_DAYS}.")
        return self.now() - timedelta(days=since_days)

    @storage_call
    async def save(self, rep_name: Optional[str], duration_seconds: Any = 0,
                   rep_message_count: Any = 0, analysis: Optional[dict] = None) -> str:
        doc = finalize_practice_session(
            rep_name=rep_name,
            duration_seconds=duration_seconds,
            rep_message_count=rep_message_count,
            analysis=analysis,
            created_at=self.now(),
        )
        res = await self.collection.insert_one(doc)
        logger.info(
            f"💾 Saved session for {doc['rep_name']} "
            f"(overall={analysis.get('overall')}, messages={doc['rep_message_count']})"
        )
        return str(res.inserted_id)

    @storage_call
    async def list_by_rep(self, rep_name: Optional[str], limit: int = 100) -> List[SessionSummary]:
        return await self._find_for_rep(rep_name, since=None, limit=limit)

    @storage_call
    async def list_for_rep_windowed(self, rep_name: Optional[str],
                                    since_days: Optional[int] = None) -> List[SessionSummary]:
        return await self._find_for_rep(rep_name, since=self._window_start(since_days), limit=None)

    async def _find_for_rep(self, rep_name: Optional[str], since: Optional[datetime],
                            limit: Optional[int]) -> List[SessionSummary]:
        key = (rep_name or "").strip().lower()
        if not key:
            raise ValidationError("Rep name is required.")

        query: Dict[str, Any] = {"rep_key": key}
        if since is not None:
            query["created_at"] = {"$gte": since}

        cursor = self.collection.find(query).sort([("created_at", -1), ("_id", -1)])
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(length=limit)
        return [SessionSummary.from_document(doc) for doc in docs]

    @storage_call
    async def aggregate_by_rep(self, since_days: Optional[int] = None) -> List[RepStats]:
        query: Dict[str, Any] = {}
        since = self._window_start(since_days)
        if since is not None:
            query["created_at"] = {"$gte": since}

        docs = await self.collection.find(query).sort(
            [("created_at", -1), ("_id", -1)]
        ).to_list(length=None)

        grouped: "OrderedDict[str, List[dict]]" = OrderedDict()
        for doc in docs:
            key = doc.get("rep_key") or (doc.get("rep_name") or "").strip().lower()
            if not key:
                continue
            grouped.setdefault(key, []).append(doc)

        stats = [build_rep_stats(rep_docs) for rep_docs in grouped.values()]
        stats.sort(key=lambda s: (-s.avg_score, s.name.lower()))
        logger.info(f"Aggregated {len(docs)} session(s) across {len(stats)} rep(s)")
        return stats
