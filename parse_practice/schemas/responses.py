"""Response schemas."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from parse_practice.schemas.question import ParsedTest, Question
from parse_practice.schemas.quiz import Progress, QuizStatus, TestResult, UserAnswer


class ParsedTestResponse(BaseModel):
    test: ParsedTest
    source: Literal["parser", "ai"]
    totalFound: int = Field(..., description="Questions found before sampling")


class NoQuestionsResponse(BaseModel):
    status: str = "no_questions"
    message: str
    summary: str = ""


class ChatResponse(BaseModel):
    reply: str


class QuizStateResponse(BaseModel):
    status: QuizStatus
    title: Optional[str] = None
    currentQuestionIndex: int = 0
    currentQuestion: Optional[Question] = None
    canGoNext: bool = False
    canGoPrevious: bool = False
    progress: Progress
    userAnswers: List[UserAnswer] = Field(default_factory=list)
    testResult: Optional[TestResult] = None


class QuizActionResponse(BaseModel):
    applied: bool
    state: QuizStateResponse
