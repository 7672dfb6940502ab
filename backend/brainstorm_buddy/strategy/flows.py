"""
Brainstorm Buddy Flows

A flow pairs a prompt template with typed input/output and makes exactly one
structured-output call to OpenAI. No retry, no caching. Anything that goes
wrong during or after the call is raised as GenerationError; the action layer
turns it into an envelope.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

import httpx
from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from brainstorm_buddy.config import Settings, get_openai_client
from brainstorm_buddy.strategy.exceptions import GenerationError
from brainstorm_buddy.strategy.prompts import GENERATE_PROMPT, REGENERATE_PROMPT, PromptTemplate
from brainstorm_buddy.strategy.schemas import StrategyRequest, StrategyResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Flow:
    name: str
    prompt: PromptTemplate

    async def __call__(
        self,
        request: StrategyRequest,
        settings: Settings,
        client: Optional[AsyncOpenAI] = None,
    ) -> StrategyResult:
        start = time.time()
        logger.info(f"[{self.name}] idea={request.startup_idea[:80]!r} market={request.market!r}")

        try:
            if client is None:
                client = get_openai_client(settings)
            completion = await client.chat.completions.parse(
                model=settings.openai_model,
                messages=[
                    {"role": "system", "content": self.prompt.system},
                    {"role": "user", "content": self.prompt.render(request)},
                ],
                response_format=StrategyResult,
                max_tokens=settings.openai_max_tokens,
                temperature=settings.openai_temperature,
            )
        except (OpenAIError, httpx.HTTPError, ValidationError) as e:
            logger.warning(f"[{self.name}] model call failed: {e}")
            raise GenerationError(str(e)) from e

        if completion.usage:
            u = completion.usage
            logger.info(f"[{self.name}] tokens: {u.prompt_tokens}+{u.completion_tokens}={u.total_tokens}")

        if not completion.choices:
            raise GenerationError("Model returned no choices.")
        msg = completion.choices[0].message
        if msg.refusal:
            logger.warning(f"[{self.name}] refused: {msg.refusal}")
            raise GenerationError(f"Model refused the request: {msg.refusal}")
        if msg.parsed is None:
            raise GenerationError("Model output did not match the expected format.")

        logger.info(f"[{self.name}] done in {time.time() - start:.1f}s")
        return msg.parsed


generate_strategy = Flow(name="generateStrategyFlow", prompt=GENERATE_PROMPT)
regenerate_analysis = Flow(name="regenerateAnalysisFlow", prompt=REGENERATE_PROMPT)
