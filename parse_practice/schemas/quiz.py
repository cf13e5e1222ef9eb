"""
Quiz attempt Pydantic schemas.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from parse_practice.schemas.question import ParsedTest, Question


class QuizStatus(str, Enum):
    NO_TEST = "no_test"
    TEST_LOADED = "test_loaded"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class UserAnswer(BaseModel):
    """The option a user picked for one question."""
    questionId: str
    selectedIndex: int
    selectedOption: str


class Progress(BaseModel):
    answered: int = 0
    total: int = 0
    percentage: int = 0


class TestResult(BaseModel):
    """Snapshot produced by a submit."""
    score: int = Field(..., ge=0)
    totalQuestions: int = Field(..., ge=0)
    percentage: int = Field(..., ge=0, le=100)
    userAnswers: List[UserAnswer] = Field(default_factory=list)
    questions: List[Question] = Field(default_factory=list)
    completedAt: datetime
    message: str = ""


class SessionSnapshot(BaseModel):
    """Everything needed to restore a QuizSession from the durable store."""
    currentTest: Optional[ParsedTest] = None
    originalQuestions: Optional[List[Question]] = None
    userAnswers: List[UserAnswer] = Field(default_factory=list)
    currentQuestionIndex: int = 0
    status: QuizStatus = QuizStatus.NO_TEST
    testResult: Optional[TestResult] = None
