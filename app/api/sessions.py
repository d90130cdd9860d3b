from fastapi import APIRouter, Depends, Query
from typing import Optional

from app.api.deps import get_archive
from app.core.errors import ValidationError
from app.models.archive import SaveSessionRequest
from app.routes.auth import require_manager_pin
from app.services.session_archive import SessionArchive

router = APIRouter(tags=["Sessions"])


def _dump(items):
    return [item.model_dump(mode="json", by_alias=True) for item in items]


# =========================
# SAVE A FINISHED SESSION
# =========================
@router.post("/save-session")
async def save_session(req: SaveSessionRequest, archive: SessionArchive = Depends(get_archive)):
    session_id = await archive.save(
        rep_name=req.repName,
        duration_seconds=req.duration,
        rep_message_count=req.repMessages,
        analysis=req.analysis,
    )
    return {"success": True, "id": session_id}


# =========================
# REP HISTORY
# =========================
@router.get("/sessions")
async def rep_sessions(name: Optional[str] = None, archive: SessionArchive = Depends(get_archive)):
    if not name or not name.strip():
        raise ValidationError("Query parameter 'name' is required.")
    return {"sessions": _dump(await archive.list_by_rep(name))}


# =========================
# MANAGER VIEWS (PIN GATED)
# =========================
@router.get("/manager/reps", dependencies=[Depends(require_manager_pin)])
async def manager_reps(
    days: Optional[int] = Query(default=None),
    archive: SessionArchive = Depends(get_archive),
):
    return {"reps": _dump(await archive.aggregate_by_rep(since_days=days))}


@router.get("/manager/sessions", dependencies=[Depends(require_manager_pin)])
async def manager_sessions(
    rep: Optional[str] = None,
    days: Optional[int] = Query(default=None),
    archive: SessionArchive = Depends(get_archive),
):
    if not rep or not rep.strip():
        raise ValidationError("Query parameter 'rep' is required.")
    return {"sessions": _dump(await archive.list_for_rep_windowed(rep, since_days=days))}
