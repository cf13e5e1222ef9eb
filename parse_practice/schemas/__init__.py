"""Schemas package."""

from .question import ParsedTest, Question, QuestionCandidate
from .quiz import Progress, QuizStatus, SessionSnapshot, TestResult, UserAnswer
from .extraction import (
    BuiltTest,
    ExtractionFailure,
    ExtractionResult,
    ExtractionSuccess,
    NoQuestionsDetected,
    TextAnalysis,
)
from .requests import (
    AnswerRequest,
    ChatRequest,
    ExtractRequest,
    GoToRequest,
    ImportRequest,
    ParseRequest,
    ShuffleRequest,
)
from .responses import (
    ChatResponse,
    NoQuestionsResponse,
    ParsedTestResponse,
    QuizActionResponse,
    QuizStateResponse,
)

__all__ = [
    # Questions
    "ParsedTest",
    "Question",
    "QuestionCandidate",
    # Quiz
    "Progress",
    "QuizStatus",
    "SessionSnapshot",
    "TestResult",
    "UserAnswer",
    # Extraction
    "BuiltTest",
    "ExtractionFailure",
    "ExtractionResult",
    "ExtractionSuccess",
    "NoQuestionsDetected",
    "TextAnalysis",
    # Requests
    "AnswerRequest",
    "ChatRequest",
    "ExtractRequest",
    "GoToRequest",
    "ImportRequest",
    "ParseRequest",
    "ShuffleRequest",
    # Responses
    "ChatResponse",
    "NoQuestionsResponse",
    "ParsedTestResponse",
    "QuizActionResponse",
    "QuizStateResponse",
]
