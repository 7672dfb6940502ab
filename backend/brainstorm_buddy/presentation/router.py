"""
Server-rendered strategy page.

GET  /           form, plus the held result or error notice for this session
POST /generate   submit the form, then redirect back to /
POST /regenerate alternative perspective for the held idea
GET  /export.md  download the held result
"""

import logging
from functools import partial
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from brainstorm_buddy.config import get_settings, Settings
from brainstorm_buddy.middleware import limiter, rate_limit
from brainstorm_buddy.presentation.export import (
    EXPORT_FILENAME, SECTIONS, format_section_text, full_strategy_text, section_fields,
)
from brainstorm_buddy.presentation.session import SessionStore, StrategySession, get_session_store
from brainstorm_buddy.strategy.actions import get_strategy_action, regenerate_strategy_action
from brainstorm_buddy.strategy.router import read_submission
from brainstorm_buddy.strategy.schemas import IDEA_MAX_LENGTH, IDEA_MIN_LENGTH, MARKETS

logger = logging.getLogger(__name__)
router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def _find_session(request: Request, settings: Settings, store: SessionStore) -> Optional[StrategySession]:
    return store.get(request.cookies.get(settings.session_cookie))


def _with_cookie(request: Request, response: Response, session: StrategySession, settings: Settings) -> Response:
    response.set_cookie(
        settings.session_cookie, session.id,
        httponly=True, samesite="lax", secure=request.url.scheme == "https",
    )
    return response


def _back_to_page(request: Request, session: Optional[StrategySession], settings: Settings) -> Response:
    response = RedirectResponse("/", status_code=303)
    if session is None:
        return response
    return _with_cookie(request, response, session, settings)


def _result_context(session: StrategySession) -> dict:
    if session.result is None:
        return {"sections": [], "full_text": ""}
    sections = []
    for attr, _, title in SECTIONS:
        section = getattr(session.result, attr)
        sections.append({
            "id": attr.replace("_", "-"),
            "title": title,
            "fields": section_fields(section),
            "copy_text": format_section_text(section),
        })
    return {
        "sections": sections,
        "full_text": full_strategy_text(session.startup_idea, session.market, session.result),
    }


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
):
    # Sessions are only stored once a form is submitted.
    session = _find_session(request, settings, store) or StrategySession(id="")
    return templates.TemplateResponse(request, "index.html", {
        "session": session,
        "markets": MARKETS,
        "idea_min": IDEA_MIN_LENGTH,
        "idea_max": IDEA_MAX_LENGTH,
        **_result_context(session),
    })


@router.post("/generate")
@limiter.limit(rate_limit)
async def generate(
    request: Request,
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
):
    session = store.get_or_create(request.cookies.get(settings.session_cookie))
    form = await read_submission(request)
    await session.submit(partial(get_strategy_action, settings=settings), form)
    return _back_to_page(request, session, settings)


@router.post("/regenerate")
@limiter.limit(rate_limit)
async def regenerate(
    request: Request,
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
):
    session = _find_session(request, settings, store)
    if session is not None:
        await session.regenerate(partial(regenerate_strategy_action, settings=settings))
    return _back_to_page(request, session, settings)


@router.get("/export.md")
async def export_markdown(
    request: Request,
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
):
    session = _find_session(request, settings, store)
    if session is None or session.result is None:
        raise HTTPException(status_code=404, detail="No strategy to export yet")
    return Response(
        content=full_strategy_text(session.startup_idea, session.market, session.result),
        media_type="text/markdown",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
