# backend/app/models/session.py

from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from app.core.errors import ValidationError


class Speaker(str, Enum):
    REP = "rep"
    HOMEOWNER = "homeowner"


# Labels are embedded verbatim in the scoring and analysis prompts.
TRANSCRIPT_LABELS = {
    Speaker.REP: "SALES REP",
    Speaker.HOMEOWNER: "HOMEOWNER/COACH",
}


class ConversationTurn(BaseModel):
    """
    A single turn of the practice dialogue.
    role: rep | homeowner
    content: what was said (the homeowner turn includes the COACH note)
    timestamp: UTC datetime of the turn
    """
    model_config = ConfigDict(frozen=True)

    role: Speaker
    content: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ConversationSession:
    """
    Ordered, append-only log of turns for one client's practice run.

    The log does not enforce Rep/Homeowner alternation. `epoch` is bumped
    on every reset so that a reply requested before the reset can be
    recognised and dropped.
    """

    def __init__(self, session_id: str, now: Optional[datetime] = None):
        self.session_id = session_id
        self.created_at = now or datetime.utcnow()
        self.last_active = self.created_at
        self.epoch = 0
        self._turns: List[ConversationTurn] = []

    def append_rep(self, text: Optional[str]) -> ConversationTurn:
        if not text or not text.strip():
            raise ValidationError("Message is required.")
        return self._append(Speaker.REP, text)

    def append_homeowner(self, text: str, epoch: Optional[int] = None) -> bool:
        if epoch is not None and epoch != self.epoch:
            return False
        self._append(Speaker.HOMEOWNER, text)
        return True

    def _append(self, role: Speaker, text: str) -> ConversationTurn:
        turn = ConversationTurn(role=role, content=text)
        self._turns.append(turn)
        self.last_active = turn.timestamp
        return turn

    def transcript(self) -> Tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    def render_for_scoring(self) -> str:
        return "\n\n".join(
            f"{TRANSCRIPT_LABELS[turn.role]}: {turn.content}" for turn in self._turns
        )

    def rep_message_count(self) -> int:
        return sum(1 for turn in self._turns if turn.role == Speaker.REP)

    def reset(self) -> None:
        self._turns = []
        self.epoch += 1
        self.last_active = datetime.utcnow()

    def is_empty(self) -> bool:
        return not self._turns

    def __len__(self) -> int:
        return len(self._turns)
