"""Tests for input validation and the action envelope builder."""

import json
from unittest.mock import AsyncMock

import pytest

from brainstorm_buddy.strategy.actions import (
    get_strategy_action,
    perform_strategy_action,
    regenerate_strategy_action,
    validate_request,
)
from brainstorm_buddy.strategy.exceptions import GenerationError
from brainstorm_buddy.strategy.schemas import StrategyRequest
from conftest import ALTERNATIVE_RESULT, IDEA, SAMPLE_RESULT, make_client

pytestmark = pytest.mark.unit

TOO_SHORT = "Please describe your idea in at least 10 characters."
TOO_LONG = "Idea is too long, please keep it under 500 characters."


class TestValidateRequest:
    @pytest.mark.parametrize("idea", ["x" * 10, "x" * 500, IDEA])
    def test_accepts_bounds(self, idea):
        assert isinstance(validate_request({"startupIdea": idea}), StrategyRequest)

    @pytest.mark.parametrize("idea,message", [
        ("", TOO_SHORT),
        ("x" * 9, TOO_SHORT),
        ("x" * 501, TOO_LONG),
    ])
    def test_rejects_out_of_bounds(self, idea, message):
        assert validate_request({"startupIdea": idea}) == [message]

    def test_missing_idea(self):
        assert validate_request({"market": "AI"}) == ["Please describe your startup idea."]

    def test_reports_every_violation(self):
        messages = validate_request({"startupIdea": 12345, "market": 7})
        assert messages == ["Startup idea must be text.", "Market must be text."]

    def test_market_optional(self):
        req = validate_request({"startupIdea": IDEA, "market": ""})
        assert req.market is None

    def test_never_raises_on_junk(self):
        assert isinstance(validate_request({}), list)


class TestEnvelope:
    @pytest.mark.parametrize("idea,message", [
        ("x" * 9, TOO_SHORT),
        ("", TOO_SHORT),
        ("x" * 501, TOO_LONG),
    ])
    async def test_validation_failure_skips_flow(self, settings, idea, message):
        flow = AsyncMock()
        env = await perform_strategy_action(flow, {"startupIdea": idea}, settings)

        assert env.data is None
        assert env.error == message
        flow.assert_not_awaited()

    async def test_invalid_idea_never_reaches_provider(self, settings, openai_client):
        env = await get_strategy_action({"startupIdea": "x" * 9}, settings=settings, client=openai_client)

        assert env.error == TOO_SHORT
        openai_client.chat.completions.parse.assert_not_awaited()

    async def test_success(self, settings, openai_client):
        env = await get_strategy_action({"startupIdea": IDEA, "market": "Health"}, settings, openai_client)

        assert env.error is None
        assert env.data.model_dump(by_alias=True) == SAMPLE_RESULT

    async def test_regenerate_success(self, settings):
        client = make_client(json.dumps(ALTERNATIVE_RESULT))
        env = await regenerate_strategy_action({"startupIdea": IDEA}, settings, client)

        assert env.data.model_dump(by_alias=True) == ALTERNATIVE_RESULT

    async def test_flow_error_is_prefixed(self, settings):
        flow = AsyncMock(side_effect=GenerationError("Connection error."))
        env = await perform_strategy_action(flow, {"startupIdea": IDEA}, settings)

        assert env.data is None
        assert env.error == "Failed to generate strategy. Connection error."

    async def test_unexpected_error_is_caught(self, settings):
        flow = AsyncMock(side_effect=RuntimeError())
        env = await perform_strategy_action(flow, {"startupIdea": IDEA}, settings)

        assert env.data is None
        assert env.error == "Failed to generate strategy. An unknown error occurred."

    async def test_malformed_model_output(self, settings):
        client = make_client("not json at all")
        env = await get_strategy_action({"startupIdea": IDEA}, settings, client)

        assert env.data is None
        assert env.error.startswith("Failed to generate strategy.")

    @pytest.mark.parametrize("outcome", ["ok", "raise"])
    @pytest.mark.parametrize("market", [None, "", "AI", "Underwater Basket Weaving"])
    async def test_exactly_one_of_data_or_error(self, settings, outcome, market):
        if outcome == "ok":
            client = make_client(json.dumps(SAMPLE_RESULT))
        else:
            client = make_client()
            client.chat.completions.parse.side_effect = TimeoutError("timed out")
        env = await get_strategy_action({"startupIdea": IDEA, "market": market}, settings, client)

        assert (env.data is None) != (env.error is None)
