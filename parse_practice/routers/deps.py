"""Shared state and dependencies for the API routers."""

from typing import Optional

from fastapi import Header, HTTPException

from parse_practice.core.config import settings
from parse_practice.core.constants import DEFAULT_SESSION_ID
from parse_practice.core.session_store import SessionStore
from parse_practice.services.extraction_service import ExtractionService
from parse_practice.services.quiz_session import QuizSession
from parse_practice.services.test_builder import PracticeTestBuilder


# Global state
class AppState:
    session_store: SessionStore = None
    extraction: ExtractionService = None
    builder: PracticeTestBuilder = None


state = AppState()


def get_session_id(x_session_id: Optional[str] = Header(None)) -> str:
    """Session chosen by the ``X-Session-ID`` header."""
    return (x_session_id or DEFAULT_SESSION_ID).strip() or DEFAULT_SESSION_ID


def require_services() -> AppState:
    if state.session_store is None or state.builder is None:
        raise HTTPException(status_code=500, detail="Services not initialized")
    return state


def load_session(session_id: str) -> QuizSession:
    snapshot = require_services().session_store.get(session_id)
    if snapshot is None:
        return QuizSession(session_id=session_id, shuffle_size=settings.SHUFFLE_SAMPLE_SIZE)
    return QuizSession.from_snapshot(snapshot, session_id=session_id, shuffle_size=settings.SHUFFLE_SAMPLE_SIZE)


def save_session(session: QuizSession) -> None:
    require_services().session_store.set(session.session_id, session.snapshot())
