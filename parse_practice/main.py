import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException

from parse_practice.core.config import settings
from parse_practice.core.exceptions import LLMError
from parse_practice.core.logging_config import setup_logging
from parse_practice.core.session_store import create_session_store
from parse_practice.routers import practice_tests, quiz
from parse_practice.routers.deps import require_services, state
from parse_practice.schemas import ChatRequest, ChatResponse
from parse_practice.services.extraction_service import ExtractionService
from parse_practice.services.test_builder import PracticeTestBuilder

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging(settings.ENVIRONMENT, settings.LOG_LEVEL, settings.LOG_DIR)
    logger.info("🚀 Starting Parse & Practice API...")

    if state.session_store is None:
        state.session_store = create_session_store()
    if state.extraction is None:
        state.extraction = ExtractionService()
    if state.builder is None:
        state.builder = PracticeTestBuilder(extraction=state.extraction)

    yield
    # Shutdown
    logger.info("🛑 Shutting down Parse & Practice API...")


app = FastAPI(
    title=settings.APP_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan
)
app.include_router(practice_tests.router)
app.include_router(quiz.router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "version": "0.1.0"}


@app.post(f"{settings.API_V1_STR}/chat", response_model=ChatResponse)
async def chat(request: ChatRequest):
    """
    Conversational follow-up for content without questions.
    """
    extraction = require_services().extraction
    if extraction is None:
        raise HTTPException(status_code=503, detail="AI chat is not configured")

    try:
        reply = await extraction.chat(request.message, request.context)
    except LLMError as e:
        logger.error(f"Chat Error: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    return ChatResponse(reply=reply)
