"""
Per-browser-session state for the strategy page.

    idle -> pending -> success | failure
    success -> pending (regenerate)

One request in flight per session. A submit that arrives while pending is
ignored. Sessions live in process memory only and are dropped least recently
used first once the store is full.
"""

import logging
import secrets
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Awaitable, Callable, Mapping, Optional

from brainstorm_buddy.config import get_settings
from brainstorm_buddy.strategy.actions import validate_request
from brainstorm_buddy.strategy.schemas import ActionEnvelope, StrategyRequest, StrategyResult

logger = logging.getLogger(__name__)

StrategyAction = Callable[[Mapping[str, Any]], Awaitable[ActionEnvelope]]


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


class SessionState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class StrategySession:
    id: str
    state: SessionState = SessionState.IDLE
    result: Optional[StrategyResult] = None
    error: Optional[str] = None
    form_errors: list[str] = field(default_factory=list)
    startup_idea: str = ""
    market: Optional[str] = None
    # what the form shows, accepted or not
    idea_input: str = ""
    market_input: str = ""

    @property
    def pending(self) -> bool:
        return self.state is SessionState.PENDING

    async def submit(self, action: StrategyAction, form: Mapping[str, Any]) -> bool:
        """Validate locally, then run the action. Returns False if nothing was sent."""
        if self.pending:
            logger.info(f"Session {self.id[:8]}: submit ignored, request already pending")
            return False

        self.idea_input = _text(form.get("startupIdea"))
        self.market_input = _text(form.get("market"))

        validated = validate_request(form)
        if not isinstance(validated, StrategyRequest):
            self.form_errors = validated
            self.error = None
            return False

        self.form_errors = []
        self.startup_idea = validated.startup_idea
        self.market = validated.market
        await self._run(action)
        return True

    async def regenerate(self, action: StrategyAction) -> bool:
        if self.state is not SessionState.SUCCESS:
            logger.info(f"Session {self.id[:8]}: regenerate ignored in state {self.state.value}")
            return False
        await self._run(action)
        return True

    async def _run(self, action: StrategyAction):
        self.state = SessionState.PENDING
        self.result = None
        self.error = None
        try:
            envelope = await action({"startupIdea": self.startup_idea, "market": self.market})
        except BaseException:
            self.state = SessionState.IDLE
            raise

        if envelope.error is not None:
            self.state = SessionState.FAILURE
            self.error = envelope.error
        else:
            self.state = SessionState.SUCCESS
            self.result = envelope.data


class SessionStore:
    def __init__(self, max_sessions: int):
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, StrategySession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: Optional[str]) -> Optional[StrategySession]:
        if not session_id or session_id not in self._sessions:
            return None
        self._sessions.move_to_end(session_id)
        return self._sessions[session_id]

    def get_or_create(self, session_id: Optional[str]) -> StrategySession:
        session = self.get(session_id)
        if session is not None:
            return session

        session = StrategySession(id=secrets.token_urlsafe(16))
        self._sessions[session.id] = session
        while len(self._sessions) > self.max_sessions:
            dropped, _ = self._sessions.popitem(last=False)
            logger.debug(f"Dropped session {dropped[:8]} (store full)")
        return session


@lru_cache
def get_session_store() -> SessionStore:
    return SessionStore(get_settings().max_sessions)
