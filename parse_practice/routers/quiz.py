"""
Quiz attempt endpoints.

Every call loads the caller's session, applies one state machine operation
and stores the session again. Operations that do not apply in the current
state come back with ``applied=false`` rather than an error.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from parse_practice.core.config import settings
from parse_practice.routers.deps import get_session_id, load_session, save_session
from parse_practice.schemas import (
    AnswerRequest,
    GoToRequest,
    Progress,
    QuizActionResponse,
    QuizStateResponse,
    ShuffleRequest,
    TestResult,
)
from parse_practice.services.quiz_session import QuizSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.API_V1_STR}/quiz", tags=["quiz"])


def describe(session: QuizSession) -> QuizStateResponse:
    return QuizStateResponse(
        status=session.status,
        title=session.current_test.title if session.current_test else None,
        currentQuestionIndex=session.current_question_index,
        currentQuestion=session.current_question,
        canGoNext=session.can_go_next,
        canGoPrevious=session.can_go_previous,
        progress=session.get_progress(),
        userAnswers=session.user_answers,
        testResult=session.test_result,
    )


def _apply(session: QuizSession, applied: bool) -> QuizActionResponse:
    if applied:
        save_session(session)
    return QuizActionResponse(applied=applied, state=describe(session))


@router.get("", response_model=QuizStateResponse)
async def quiz_state(session_id: str = Depends(get_session_id)):
    return describe(load_session(session_id))


@router.post("/start", response_model=QuizActionResponse)
async def start(session_id: str = Depends(get_session_id)):
    session = load_session(session_id)
    return _apply(session, session.start_test())


@router.post("/answer", response_model=QuizActionResponse)
async def answer(request: AnswerRequest, session_id: str = Depends(get_session_id)):
    session = load_session(session_id)
    applied = session.answer_question(request.questionId, request.selectedIndex, request.selectedOption)
    return _apply(session, applied)


@router.post("/goto", response_model=QuizActionResponse)
async def go_to(request: GoToRequest, session_id: str = Depends(get_session_id)):
    session = load_session(session_id)
    return _apply(session, session.go_to_question(request.index))


@router.post("/next", response_model=QuizActionResponse)
async def next_question(session_id: str = Depends(get_session_id)):
    session = load_session(session_id)
    return _apply(session, session.next_question())


@router.post("/previous", response_model=QuizActionResponse)
async def previous_question(session_id: str = Depends(get_session_id)):
    session = load_session(session_id)
    return _apply(session, session.previous_question())


@router.post("/submit", response_model=QuizActionResponse)
async def submit(session_id: str = Depends(get_session_id)):
    session = load_session(session_id)
    return _apply(session, session.submit_test())


@router.post("/reset", response_model=QuizActionResponse)
async def reset(session_id: str = Depends(get_session_id)):
    session = load_session(session_id)
    return _apply(session, session.reset_test())


@router.post("/shuffle", response_model=QuizActionResponse)
async def shuffle(request: Optional[ShuffleRequest] = None, session_id: str = Depends(get_session_id)):
    session = load_session(session_id)
    count = request.count if request else None
    return _apply(session, session.shuffle_questions(count))


@router.get("/progress", response_model=Progress)
async def progress(session_id: str = Depends(get_session_id)):
    return load_session(session_id).get_progress()


@router.get("/result", response_model=TestResult)
async def result(session_id: str = Depends(get_session_id)):
    session = load_session(session_id)
    if session.test_result is None:
        raise HTTPException(status_code=404, detail="Test has not been submitted")
    return session.test_result
