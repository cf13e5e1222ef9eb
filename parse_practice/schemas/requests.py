"""Request schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from parse_practice.core.constants import OPTION_COUNT


class ParseRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Raw question text to parse")


class ExtractRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Raw text for AI extraction")
    max_questions: Optional[int] = Field(None, ge=1, description="Ask the model for this many questions")


class ImportRequest(BaseModel):
    text: str = Field(..., min_length=1)
    use_ai_fallback: Optional[bool] = Field(
        None, description="Fall back to AI extraction when parsing finds nothing"
    )


class AnswerRequest(BaseModel):
    questionId: str
    selectedIndex: int = Field(..., ge=0, le=OPTION_COUNT - 1)
    selectedOption: str


class GoToRequest(BaseModel):
    index: int


class ShuffleRequest(BaseModel):
    count: Optional[int] = Field(None, ge=1)


class ChatRequest(BaseModel):
    """Chat about uploaded content that had no questions."""
    message: str = Field(..., min_length=1, max_length=5000, description="User's message")
    context: str = Field("", description="The uploaded content")

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Summarize the key points",
                "context": "Project management is the practice of...",
            }
        }
