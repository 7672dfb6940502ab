"""Shared test fixtures for all test groups."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from brainstorm_buddy.config import Settings
from brainstorm_buddy.middleware import limiter
from brainstorm_buddy.strategy.schemas import StrategyResult

IDEA = "A mobile app that uses AI to create personalized workout plans."

SAMPLE_RESULT = {
    "gtmStrategy": {
        "targetUsers": "Busy professionals aged 25-40",
        "acquisitionChannels": "Instagram ads, fitness influencers",
        "monetizationModel": "Freemium with $9.99/month premium tier",
        "positioningStatement": "The personal trainer in your pocket.",
    },
    "featureRoadmap": {
        "mvpFeatures": "AI workout generator, progress tracking",
        "v1Improvements": "Wearable integration",
        "stretchFeatures": "Live coaching marketplace",
    },
    "swotAnalysis": {
        "strengths": "Personalization at scale",
        "weaknesses": "Crowded app stores",
        "opportunities": "Corporate wellness programs",
        "threats": "Big fitness brands adding AI",
    },
}

ALTERNATIVE_RESULT = {
    "gtmStrategy": {
        "targetUsers": "Physiotherapy clinics",
        "acquisitionChannels": "Direct sales to clinic chains",
        "monetizationModel": "Per-seat B2B licensing",
        "positioningStatement": "Rehab plans patients actually follow.",
    },
    "featureRoadmap": {
        "mvpFeatures": "Clinician-approved plan templates",
        "v1Improvements": "Patient adherence dashboard",
        "stretchFeatures": "Insurance billing integration",
    },
    "swotAnalysis": {
        "strengths": "Clinical credibility",
        "weaknesses": "Long B2B sales cycles",
        "opportunities": "Aging population",
        "threats": "Regulatory scrutiny of health AI",
    },
}


def make_completion(parsed=None, refusal=None):
    """Shape of a ParsedChatCompletion, as far as the flows read it."""
    message = SimpleNamespace(parsed=parsed, refusal=refusal, content=None)
    usage = SimpleNamespace(prompt_tokens=120, completion_tokens=340, total_tokens=460)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)], usage=usage)


def make_client(*raw_json: str) -> MagicMock:
    """OpenAI client whose parse() validates each raw JSON body in turn, like the SDK does."""
    bodies = list(raw_json)

    async def parse(**kwargs):
        return make_completion(parsed=kwargs["response_format"].model_validate_json(bodies.pop(0)))

    client = MagicMock()
    client.chat.completions.parse = AsyncMock(side_effect=parse)
    return client


@pytest.fixture(autouse=True)
def no_rate_limit():
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def settings():
    return Settings(openai_api_key="sk-test", openai_model="gpt-test", debug=False, max_sessions=10)


@pytest.fixture
def sample_result():
    return StrategyResult.model_validate(SAMPLE_RESULT)


@pytest.fixture
def openai_client():
    """Client returning SAMPLE_RESULT once."""
    return make_client(json.dumps(SAMPLE_RESULT))
