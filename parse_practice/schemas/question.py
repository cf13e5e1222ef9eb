"""
Question-related Pydantic schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from parse_practice.core.constants import OPTION_COUNT, build_test_title


class QuestionCandidate(BaseModel):
    """
    Unvalidated question-shaped record from the text parser or the AI.

    Nothing is guaranteed here; ``normalize_candidate`` turns it into a
    ``Question`` or drops it.
    """
    id: Optional[str] = None
    question: str = ""
    options: List[str] = Field(default_factory=list)
    answer: str = ""
    answerIndex: int = -1


class Question(BaseModel):
    """A finalized multiple-choice question with exactly four options."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    answer: str
    answerIndex: int = Field(..., ge=0, le=OPTION_COUNT - 1)

    @model_validator(mode="after")
    def _answer_matches_option(self) -> "Question":
        if self.options[self.answerIndex] != self.answer:
            raise ValueError(
                f"answer {self.answer!r} does not match option {self.answerIndex} "
                f"({self.options[self.answerIndex]!r})"
            )
        return self


class ParsedTest(BaseModel):
    """An ordered set of questions; order drives numbering and default quiz order."""
    questions: List[Question] = Field(default_factory=list)
    title: str = ""

    @model_validator(mode="after")
    def _derive_title(self) -> "ParsedTest":
        if not self.title:
            self.title = build_test_title(len(self.questions))
        return self

    @classmethod
    def from_questions(cls, questions: List[Question]) -> "ParsedTest":
        return cls(questions=list(questions), title=build_test_title(len(questions)))
