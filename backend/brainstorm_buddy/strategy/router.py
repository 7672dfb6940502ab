"""
Brainstorm Buddy Strategy Router

POST /api/strategy             initial generation -> ActionEnvelope
POST /api/strategy/regenerate  alternative perspective -> ActionEnvelope
POST /api/strategy/export      result -> strategy.md
GET  /api/markets              market suggestions

Envelope endpoints answer 200 for validation and generation failures alike;
the error lives in the envelope. Rate limits (slowapi) are per remote address.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response

from brainstorm_buddy.config import get_settings, Settings
from brainstorm_buddy.middleware import limiter, rate_limit
from brainstorm_buddy.presentation.export import EXPORT_FILENAME, full_strategy_text
from brainstorm_buddy.strategy.actions import get_strategy_action, regenerate_strategy_action
from brainstorm_buddy.strategy.schemas import MARKETS, ActionEnvelope, ExportRequest

logger = logging.getLogger(__name__)
router = APIRouter()


async def read_submission(request: Request) -> dict[str, Any]:
    """Raw form values from a JSON or form-encoded body. Validation happens later."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def _require_openai(settings: Settings):
    if not settings.openai_api_key:
        raise HTTPException(status_code=503, detail="OpenAI API key not configured")


# ═══════════════════════════════════════
# Generation
# ═══════════════════════════════════════

@router.post("/strategy", response_model=ActionEnvelope)
@limiter.limit(rate_limit)
async def create_strategy(
    request: Request,
    settings: Settings = Depends(get_settings),
):
    _require_openai(settings)
    raw = await read_submission(request)
    return await get_strategy_action(raw, settings)


@router.post("/strategy/regenerate", response_model=ActionEnvelope)
@limiter.limit(rate_limit)
async def regenerate_strategy(
    request: Request,
    settings: Settings = Depends(get_settings),
):
    _require_openai(settings)
    raw = await read_submission(request)
    return await regenerate_strategy_action(raw, settings)


# ═══════════════════════════════════════
# Export
# ═══════════════════════════════════════

@router.post("/strategy/export")
async def export_strategy(body: ExportRequest):
    text = full_strategy_text(body.startup_idea, body.market, body.result)
    return Response(
        content=text,
        media_type="text/markdown",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.get("/markets")
async def get_markets():
    return {"markets": list(MARKETS)}
