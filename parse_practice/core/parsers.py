# parsers.py
"""
Output parsers for LLM responses.
Handles question-list extraction and text analysis outputs.
"""

import json
import logging
import re
from typing import Any, Dict, List

from langchain_core.output_parsers import BaseOutputParser

from parse_practice.core.exceptions import JSONParseError

logger = logging.getLogger(__name__)

CODE_FENCE_RE = re.compile(r"```(?:json)?\s*")
TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")


def clean_text(text: str) -> str:
    """Strip whitespace, a BOM and markdown code fences."""
    text = (text or "").strip()
    if text.startswith("\ufeff"):
        text = text[1:]
    return CODE_FENCE_RE.sub("", text).strip()


def fix_common_issues(json_str: str) -> str:
    """Remove trailing commas before a closing bracket or brace."""
    return TRAILING_COMMA_RE.sub(r"\1", json_str)


def _loads(json_str: str, raw_text: str) -> Any:
    try:
        return json.loads(json_str)
    except json.JSONDecodeError:
        pass

    try:
        return json.loads(fix_common_issues(json_str))
    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {e}")
        logger.debug(f"Failed text: {raw_text[:300]}")
        raise JSONParseError(f"Invalid JSON format: {e}", raw_text=raw_text) from e


class QuestionListOutputParser(BaseOutputParser):
    """
    Parser for question extraction responses.

    Expects a JSON array of question objects, possibly wrapped in markdown
    or chatter. ``{"questions": [...]}`` is unwrapped as well.
    """

    def parse(self, text: str) -> List[Dict[str, Any]]:
        cleaned = clean_text(text)

        match = re.search(r"\[.*\]", cleaned, re.DOTALL)
        if match:
            data = _loads(match.group(0), text)
        else:
            match = re.search(r"\{.*\}", cleaned, re.DOTALL)
            if not match:
                raise JSONParseError("Could not find JSON array in AI response", raw_text=text)
            data = _loads(match.group(0), text)

        if isinstance(data, dict):
            data = data.get("questions", data.get("Questions"))
        if not isinstance(data, list):
            raise JSONParseError("AI response is not a list of questions", raw_text=text)

        items = [item for item in data if isinstance(item, dict)]
        logger.debug(f"Parsed {len(items)} question object(s) from AI response")
        return items

    @property
    def _type(self) -> str:
        return "question_list_json"


class TextAnalysisOutputParser(BaseOutputParser):
    """Parser for the ``{hasQuestions, questionCount, summary}`` analysis object."""

    def parse(self, text: str) -> Dict[str, Any]:
        cleaned = clean_text(text)
        match = re.search(r"\{.*\}", cleaned, re.DOTALL)
        if not match:
            raise JSONParseError("Invalid AI response format", raw_text=text)

        data = _loads(match.group(0), text)
        if not isinstance(data, dict):
            raise JSONParseError("AI analysis is not a JSON object", raw_text=text)
        return data

    @property
    def _type(self) -> str:
        return "text_analysis_json"


def parse_question_list(text: str) -> List[Dict[str, Any]]:
    return QuestionListOutputParser().parse(text)


def parse_text_analysis(text: str) -> Dict[str, Any]:
    return TextAnalysisOutputParser().parse(text)
