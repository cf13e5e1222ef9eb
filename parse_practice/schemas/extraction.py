"""
AI extraction result schemas.

The LLM collaborator's outcome is a tagged union so callers branch on
``kind`` instead of probing which fields happen to be present.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from parse_practice.schemas.question import ParsedTest, Question


class TextAnalysis(BaseModel):
    """Raw shape of the analysis answer returned by the model."""
    hasQuestions: bool = False
    questionCount: Optional[int] = None
    summary: Optional[str] = None


class ExtractionSuccess(BaseModel):
    kind: Literal["success"] = "success"
    questions: List[Question] = Field(default_factory=list)
    question_count: Optional[int] = None


class NoQuestionsDetected(BaseModel):
    kind: Literal["no_questions"] = "no_questions"
    summary: str = ""


class ExtractionFailure(BaseModel):
    kind: Literal["failure"] = "failure"
    reason: str


ExtractionResult = Annotated[
    Union[ExtractionSuccess, NoQuestionsDetected, ExtractionFailure],
    Field(discriminator="kind"),
]


class BuiltTest(BaseModel):
    """A test ready to load into a QuizSession, plus the pool it was drawn from."""
    test: ParsedTest
    original_questions: List[Question] = Field(default_factory=list)
    source: Literal["parser", "ai"] = "parser"

    @property
    def is_empty(self) -> bool:
        return not self.test.questions
