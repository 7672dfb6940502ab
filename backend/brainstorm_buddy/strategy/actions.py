import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from openai import AsyncOpenAI
from pydantic import ValidationError

from brainstorm_buddy.config import Settings
from brainstorm_buddy.strategy.flows import generate_strategy, regenerate_analysis
from brainstorm_buddy.strategy.schemas import (
    IDEA_MAX_LENGTH,
    IDEA_MIN_LENGTH,
    ActionEnvelope,
    StrategyRequest,
    StrategyResult,
)

logger = logging.getLogger(__name__)

FAILURE_PREFIX = "Failed to generate strategy."
UNKNOWN_ERROR = "An unknown error occurred."

# (field, pydantic error type) -> user-facing message
_MESSAGES = {
    ("startupIdea", "string_too_short"): f"Please describe your idea in at least {IDEA_MIN_LENGTH} characters.",
    ("startupIdea", "string_too_long"): f"Idea is too long, please keep it under {IDEA_MAX_LENGTH} characters.",
    ("startupIdea", "missing"): "Please describe your startup idea.",
    ("startupIdea", "string_type"): "Startup idea must be text.",
    ("market", "string_type"): "Market must be text.",
}

StrategyFlow = Callable[..., Awaitable[StrategyResult]]


def validate_request(raw: Mapping[str, Any]) -> Union[StrategyRequest, list[str]]:
    """Validate raw form values. Returns the request, or every violated rule's message."""
    values = {
        "startupIdea": raw.get("startupIdea"),
        "market": raw.get("market"),
    }
    if values["startupIdea"] is None:
        del values["startupIdea"]
    try:
        return StrategyRequest.model_validate(values)
    except ValidationError as e:
        messages = []
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else ""
            messages.append(_MESSAGES.get((field, err["type"]), err["msg"]))
        return messages


async def perform_strategy_action(
    flow: StrategyFlow,
    raw: Mapping[str, Any],
    settings: Settings,
    client: Optional[AsyncOpenAI] = None,
) -> ActionEnvelope:
    """Validate, run the flow, and normalize the outcome into an envelope. Never raises."""
    try:
        validated = validate_request(raw)
        if not isinstance(validated, StrategyRequest):
            return ActionEnvelope.failure(", ".join(validated))

        result = await flow(validated, settings, client=client)
        return ActionEnvelope.success(result)
    except Exception as e:
        logger.exception("Strategy generation failed")
        message = str(e) or UNKNOWN_ERROR
        return ActionEnvelope.failure(f"{FAILURE_PREFIX} {message}")


async def get_strategy_action(
    raw: Mapping[str, Any], settings: Settings, client: Optional[AsyncOpenAI] = None,
) -> ActionEnvelope:
    return await perform_strategy_action(generate_strategy, raw, settings, client)


async def regenerate_strategy_action(
    raw: Mapping[str, Any], settings: Settings, client: Optional[AsyncOpenAI] = None,
) -> ActionEnvelope:
    return await perform_strategy_action(regenerate_analysis, raw, settings, client)
