from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Optional
import logging

from app.api.deps import get_knowledge_store, get_model
from app.core.config import Settings, get_settings
from app.models.session import ConversationSession
from app.routes.auth import get_practice_session
from app.services.knowledge_store import KnowledgeStore
from coach.evaluator.prompt_builder import build_system_prompt
from coach.evaluator.rubric import HOMEOWNER_SCRIPT
from coach.evaluator.scoring import analyze_conversation, score_conversation

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Practice"])

# ================= MODELS =================
class ChatRequest(BaseModel):
    message: Optional[str] = None

# ================= CHAT =================
@router.post("/chat")
async def chat(
    req: ChatRequest,
    session: ConversationSession = Depends(get_practice_session),
    knowledge: KnowledgeStore = Depends(get_knowledge_store),
    model=Depends(get_model),
):
    session.append_rep(req.message)
    epoch = session.epoch

    documents = await knowledge.get_all_for_prompt()
    system_prompt = build_system_prompt(HOMEOWNER_SCRIPT, documents)

    reply = await model.generate(system_prompt, session.transcript())
    if not session.append_homeowner(reply, epoch=epoch):
        logger.info(f"Session {session.session_id} was reset during the model call; reply dropped")

    return {"response": reply}

@router.get("/transcript")
async def transcript(session: ConversationSession = Depends(get_practice_session)):
    return {"turns": [turn.model_dump(mode="json") for turn in session.transcript()]}

# ================= EVALUATION =================
@router.post("/scorecard")
async def scorecard(
    session: ConversationSession = Depends(get_practice_session),
    model=Depends(get_model),
):
    return {"scorecard": await score_conversation(session, model)}

@router.post("/analyze")
async def analyze(
    session: ConversationSession = Depends(get_practice_session),
    model=Depends(get_model),
    settings: Settings = Depends(get_settings),
):
    analysis = await analyze_conversation(session, model, strict=settings.strict_analysis)
    return {"analysis": analysis}

# ================= RESET =================
@router.post("/reset")
async def reset(session: ConversationSession = Depends(get_practice_session)):
    session.reset()
    return {"success": True}
