from typing import Sequence

from app.models.knowledge import PromptDocument
from coach.evaluator.rubric import ANALYSIS_RUBRIC, KNOWLEDGE_HEADER, SCORECARD_RUBRIC

MAX_DOCUMENT_CHARS = 3000
TRUNCATION_MARKER = "[truncated]"


def _document_block(document: PromptDocument) -> str:
    content = document.content
    if len(content) > MAX_DOCUMENT_CHARS:
        content = content[:MAX_DOCUMENT_CHARS] + "\n" + TRUNCATION_MARKER
    return f"--- {document.filename} ---\n{content}"


def build_system_prompt(base_script: str, documents: Sequence[PromptDocument]) -> str:
    """
    Fold the knowledge base into the persona script.
    Each document is cut to its first MAX_DOCUMENT_CHARS characters.
    """
    if not documents:
        return base_script

    blocks = "\n\n".join(_document_block(doc) for doc in documents)
    return f"{base_script}\n\n{KNOWLEDGE_HEADER}\n\n{blocks}"


def build_scorecard_prompt(transcript_text: str) -> str:
    return (
        f"Here is the full practice sales conversation:\n\n"
        f"{transcript_text}\n\n"
        f"{SCORECARD_RUBRIC}"
    )


def build_analysis_prompt(transcript_text: str) -> str:
    return f"""
Here is the full practice sales conversation:

========================
CONVERSATION
========================
{transcript_text}

{ANALYSIS_RUBRIC}
""".strip()
