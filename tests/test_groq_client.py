"""Unit tests for the Groq model adapter with the SDK client mocked out."""

from types import SimpleNamespace
from unittest.mock import Mock

import httpx
import pytest
from groq import APIConnectionError

from app.core.errors import CollaboratorError
from app.models.session import ConversationTurn, Speaker
from coach.llm.groq_client import GroqChatModel, to_messages


def _completion(text: str) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


@pytest.fixture
def turns():
    return [
        ConversationTurn(role=Speaker.REP, content="Hi, I'm with Summit Roofing."),
        ConversationTurn(role=Speaker.HOMEOWNER, content="What do you want?"),
        ConversationTurn(role=Speaker.REP, content="We're inspecting storm damage on your street."),
    ]


@pytest.mark.unit
class TestGroqChatModel:
    @pytest.mark.asyncio
    async def test_missing_api_key(self, turns) -> None:
        model = GroqChatModel(api_key=None)

        with pytest.raises(CollaboratorError, match="GROQ_API_KEY"):
            await model.generate("persona", turns)

    def test_to_messages_maps_roles(self, turns) -> None:
        messages = to_messages("persona", turns)

        assert [m["role"] for m in messages] == ["system", "user", "assistant", "user"]
        assert messages[0]["content"] == "persona"
        assert messages[-1]["content"] == turns[-1].content

    def test_to_messages_without_system(self, turns) -> None:
        assert to_messages(None, turns[:1]) == [{"role": "user", "content": turns[0].content}]

    @pytest.mark.asyncio
    async def test_generate_returns_text(self, turns) -> None:
        model = GroqChatModel(api_key="test-key", model="test-model", max_tokens=256, temperature=0.2)
        model.client = Mock()
        model.client.chat.completions.create = Mock(return_value=_completion("Fine, you have one minute."))

        text = await model.generate("persona", turns)

        assert text == "Fine, you have one minute."
        kwargs = model.client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 256
        assert len(kwargs["messages"]) == 4

    @pytest.mark.asyncio
    async def test_provider_error_becomes_collaborator_error(self, turns) -> None:
        model = GroqChatModel(api_key="test-key")
        model.client = Mock()
        request = httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")
        model.client.chat.completions.create = Mock(side_effect=APIConnectionError(request=request))

        with pytest.raises(CollaboratorError):
            await model.generate("persona", turns)
