"""
Custom exceptions for Parse & Practice.

Provides specific exception types for better error handling and debugging.
"""


class ParsePracticeException(Exception):
    """Base exception for all Parse & Practice errors."""
    pass


class JSONParseError(ParsePracticeException):
    """Raised when JSON parsing of a model response fails."""

    def __init__(self, message: str, raw_text: str = None):
        self.raw_text = raw_text
        super().__init__(message)


class PromptTemplateError(ParsePracticeException):
    """Raised when prompt template loading or formatting fails."""
    pass


class LLMError(ParsePracticeException):
    """Raised when the LLM call fails or returns no content."""
    pass


class LLMRateLimitError(LLMError):
    """Raised when the LLM provider rejects the call with HTTP 429."""

    def __init__(self, message: str = "API rate limit exceeded. Please try again in a moment."):
        super().__init__(message)


class SessionStoreError(ParsePracticeException):
    """Raised when the durable session store cannot be read or written."""

    def __init__(self, message: str, session_id: str = None):
        self.session_id = session_id
        super().__init__(message)
