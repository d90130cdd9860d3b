# llm/groq_client.py
import asyncio
import logging
from typing import Dict, List, Optional, Sequence

from groq import Groq, GroqError

from app.core.errors import CollaboratorError
from app.models.session import ConversationTurn, Speaker

logger = logging.getLogger(__name__)

PROVIDER_ROLES = {
    Speaker.REP: "user",
    Speaker.HOMEOWNER: "assistant",
}


def to_messages(system: Optional[str], turns: Sequence[ConversationTurn]) -> List[Dict[str, str]]:
    messages = []
    if system:
        messages.append({"role": "system", "content": system})
    for turn in turns:
        messages.append({"role": PROVIDER_ROLES[turn.role], "content": turn.content})
    return messages


class GroqChatModel:
    """
    Text generation over Groq chat completions.
    The SDK is synchronous, so each call runs in a worker thread.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "llama-3.3-70b-versatile",
        max_tokens: int = 1024,
        temperature: float = 0.7,
        timeout: Optional[float] = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.client = None
        if api_key:
            # No retries: a failed call goes straight back to the caller.
            self.client = Groq(api_key=api_key, timeout=timeout, max_retries=0)

    def _complete(self, messages: List[Dict[str, str]]) -> str:
        res = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        return res.choices[0].message.content or ""

    async def generate(self, system: Optional[str], turns: Sequence[ConversationTurn]) -> str:
        if self.client is None:
            raise CollaboratorError("GROQ_API_KEY is not configured.")
        messages = to_messages(system, turns)
        logger.info(f"🤖 Calling {self.model} with {len(messages)} message(s)")
        try:
            text = await asyncio.to_thread(self._complete, messages)
        except GroqError as exc:
            logger.error(f"Model call failed: {exc}")
            raise CollaboratorError(str(exc)) from exc
        logger.info(f"Model response received, length={len(text)}")
        return text
