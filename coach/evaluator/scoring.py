import logging

from app.core.errors import MalformedResponseError, PreconditionError
from app.models.session import ConversationSession, ConversationTurn, Speaker
from coach.evaluator.extractor import extract_analysis, extract_scorecard, validate_analysis
from coach.evaluator.prompt_builder import build_analysis_prompt, build_scorecard_prompt

logger = logging.getLogger(__name__)


def _require_conversation(session: ConversationSession, action: str) -> str:
    if session.is_empty():
        raise PreconditionError(f"No conversation to {action} yet.")
    return session.render_for_scoring()


async def score_conversation(session: ConversationSession, model) -> str:
    transcript_text = _require_conversation(session, "score")
    prompt = build_scorecard_prompt(transcript_text)

    raw = await model.generate(None, [ConversationTurn(role=Speaker.REP, content=prompt)])
    return extract_scorecard(raw)


async def analyze_conversation(session: ConversationSession, model, strict: bool = False) -> dict:
    transcript_text = _require_conversation(session, "analyze")
    logger.info(f"🔍 Analyzing session {session.session_id} ({len(session)} turns)")
    prompt = build_analysis_prompt(transcript_text)

    raw = await model.generate(None, [ConversationTurn(role=Speaker.REP, content=prompt)])
    analysis = extract_analysis(raw)

    problems = validate_analysis(analysis)
    if problems:
        logger.warning(f"Analysis shape problems: {problems}")
        if strict:
            raise MalformedResponseError("; ".join(problems), raw=raw)
    return analysis
