# backend/app/routes/auth.py
import logging
import secrets
import uuid
from typing import Optional

from fastapi import Cookie, Depends, Query, Response

from app.api.deps import get_registry
from app.core.config import Settings, get_settings
from app.core.errors import AuthorizationError
from app.models.session import ConversationSession
from app.services.conversation_registry import SessionRegistry

logger = logging.getLogger(__name__)

PRACTICE_COOKIE = "practice_session"


# ------------------------------- Practice Session Cookie -------------------------------
async def get_practice_session(
    response: Response,
    practice_session: Optional[str] = Cookie(default=None),
    registry: SessionRegistry = Depends(get_registry),
) -> ConversationSession:
    """Conversation for the calling client, issuing a session cookie on first contact."""
    session_id = practice_session
    if not session_id:
        session_id = str(uuid.uuid4())
        response.set_cookie(
            key=PRACTICE_COOKIE,
            value=session_id,
            httponly=True,
            samesite="lax",
            secure=False,
            path="/"
        )
    return registry.get_or_create(session_id)


# ------------------------------- Manager PIN -------------------------------
async def require_manager_pin(
    pin: Optional[str] = Query(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    expected = settings.manager_pin
    if not expected or not pin or not secrets.compare_digest(pin.encode(), expected.encode()):
        logger.warning("Rejected manager request with invalid PIN")
        raise AuthorizationError("Invalid manager PIN.")
