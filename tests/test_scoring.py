"""Tests for the scorecard and analysis flows."""

import json

import pytest

from app.core.errors import MalformedResponseError, PreconditionError
from app.models.session import ConversationSession, Speaker
from coach.evaluator.scoring import analyze_conversation, score_conversation


@pytest.fixture
def session() -> ConversationSession:
    session = ConversationSession("s1")
    session.append_rep("Hi, I'm with Summit Roofing.")
    session.append_homeowner("Not interested.\nCOACH: Give a reason for knocking.")
    return session


class TestScoring:
    @pytest.mark.asyncio
    async def test_empty_session_cannot_be_scored(self, mock_model) -> None:
        with pytest.raises(PreconditionError):
            await score_conversation(ConversationSession("s1"), mock_model)
        with pytest.raises(PreconditionError):
            await analyze_conversation(ConversationSession("s1"), mock_model)

        mock_model.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_scorecard_sends_transcript(self, session, mock_model) -> None:
        mock_model.generate.return_value = "  Opening: 6/10 - Decent.\n"

        scorecard = await score_conversation(session, mock_model)

        assert scorecard == "Opening: 6/10 - Decent."
        system, turns = mock_model.generate.call_args.args
        assert system is None
        assert len(turns) == 1
        assert turns[0].role == Speaker.REP
        assert "SALES REP: Hi, I'm with Summit Roofing." in turns[0].content
        assert "HOMEOWNER/COACH: Not interested." in turns[0].content

    @pytest.mark.asyncio
    async def test_analysis_is_extracted(self, session, mock_model, analysis_factory) -> None:
        analysis = analysis_factory(64, opening=60, objectionHandling=55, rapport=70,
                                    tonality=65, timing=60, closing=50)
        mock_model.generate.return_value = f"```json\n{json.dumps(analysis)}\n```"

        assert await analyze_conversation(session, mock_model) == analysis

    @pytest.mark.asyncio
    async def test_incomplete_analysis_accepted_by_default(self, session, mock_model) -> None:
        mock_model.generate.return_value = '{"overall": 70}'

        assert await analyze_conversation(session, mock_model) == {"overall": 70}

    @pytest.mark.asyncio
    async def test_incomplete_analysis_rejected_when_strict(self, session, mock_model) -> None:
        mock_model.generate.return_value = '{"overall": 70}'

        with pytest.raises(MalformedResponseError):
            await analyze_conversation(session, mock_model, strict=True)

    @pytest.mark.asyncio
    async def test_garbled_analysis(self, session, mock_model) -> None:
        mock_model.generate.return_value = "I cannot evaluate this."

        with pytest.raises(MalformedResponseError):
            await analyze_conversation(session, mock_model)
