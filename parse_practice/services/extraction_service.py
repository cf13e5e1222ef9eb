"""
AI extraction adapter.

All guessing about the shape of model output happens here: the raw reply
is parsed, each object is coerced into a QuestionCandidate, and the batch
goes through the normalizer. Callers only ever see an ExtractionResult.
"""

import logging
from typing import Any, List, Optional

from parse_practice.core.config import settings
from parse_practice.core.exceptions import JSONParseError, LLMError
from parse_practice.core.llm import LLMClient
from parse_practice.core.parsers import parse_question_list, parse_text_analysis
from parse_practice.core.prompt_manager import PromptManager, get_prompt_manager
from parse_practice.parsing.normalizer import normalize_candidates
from parse_practice.schemas.extraction import (
    ExtractionFailure,
    ExtractionResult,
    ExtractionSuccess,
    NoQuestionsDetected,
    TextAnalysis,
)
from parse_practice.schemas.question import QuestionCandidate

logger = logging.getLogger(__name__)


def _coerce_options(raw_options: Any) -> List[str]:
    # {"A": "...", "B": "..."} is a common variant
    if isinstance(raw_options, dict):
        raw_options = [raw_options[key] for key in sorted(raw_options)]
    if not isinstance(raw_options, (list, tuple)):
        return []
    # null keeps its slot so answerIndex still points at the same option
    return ["" if option is None else str(option) for option in raw_options]


def _coerce_index(raw_index: Any) -> int:
    if isinstance(raw_index, bool):
        return -1
    try:
        return int(raw_index)
    except (TypeError, ValueError):
        return -1


def coerce_candidate(raw: Any) -> Optional[QuestionCandidate]:
    """Best-effort conversion of one model-produced object; None if hopeless."""
    if not isinstance(raw, dict):
        return None

    question = raw.get("question") or raw.get("questionText") or ""
    answer = raw.get("answer") or raw.get("answerText") or ""
    index = raw.get("answerIndex", raw.get("answer_index"))

    return QuestionCandidate(
        question=str(question),
        options=_coerce_options(raw.get("options")),
        answer=str(answer),
        answerIndex=_coerce_index(index),
    )


class ExtractionService:
    """Question extraction, content analysis and chat through the LLM client."""

    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        prompts: Optional[PromptManager] = None,
        strict: Optional[bool] = None,
    ):
        self.llm = llm or LLMClient()
        self.prompts = prompts or get_prompt_manager()
        self.strict = settings.STRICT_ANSWER_RESOLUTION if strict is None else strict

    async def extract_questions(self, text: str, max_questions: Optional[int] = None) -> ExtractionResult:
        """
        Ask the model for multiple-choice questions found in ``text``.

        Returns ExtractionSuccess with normalized questions, NoQuestionsDetected
        when nothing usable came back, or ExtractionFailure when the call or
        the reply parsing failed.
        """
        if max_questions:
            question_limit = f"Extract exactly {max_questions} questions."
        else:
            question_limit = "Extract all questions you can find."
        prompt = self.prompts.load_prompt("extract_questions", TEXT=text, QUESTION_LIMIT=question_limit)

        logger.info("📤 Sending extraction request")
        try:
            reply = await self.llm.generate(prompt)
            raw_items = parse_question_list(reply)
        except (LLMError, JSONParseError) as e:
            logger.error(f"❌ AI question extraction error: {e}")
            return ExtractionFailure(reason=f"Failed to extract questions with AI: {e}")

        candidates = [c for c in (coerce_candidate(item) for item in raw_items) if c is not None]
        questions = normalize_candidates(candidates, id_prefix="q", strict=self.strict)
        logger.info(f"✅ Extracted {len(raw_items)} question(s), validated {len(questions)}")

        if not questions:
            return NoQuestionsDetected(summary="No multiple-choice questions could be extracted from the text.")
        return ExtractionSuccess(questions=questions, question_count=len(questions))

    async def analyze_text(self, text: str) -> ExtractionResult:
        """
        Decide whether ``text`` contains questions at all.

        On a positive answer the result is an ExtractionSuccess without
        questions, carrying the model's ``question_count``.
        """
        excerpt = text[:settings.ANALYSIS_CHAR_LIMIT]
        prompt = self.prompts.load_prompt("analyze_text", TEXT=excerpt)

        logger.info("🔍 Sending analysis request")
        try:
            reply = await self.llm.generate(prompt)
            analysis = TextAnalysis.model_validate(parse_text_analysis(reply))
        except (LLMError, JSONParseError) as e:
            logger.error(f"❌ AI analysis error: {e}")
            return ExtractionFailure(reason=f"Failed to analyze text with AI: {e}")
        except ValueError as e:
            logger.error(f"❌ AI analysis returned an unexpected object: {e}")
            return ExtractionFailure(reason=f"Failed to analyze text with AI: {e}")

        if not analysis.hasQuestions:
            return NoQuestionsDetected(summary=analysis.summary or "")
        return ExtractionSuccess(questions=[], question_count=analysis.questionCount)

    async def chat(self, message: str, context: str) -> str:
        """
        Free-form answer about uploaded content.

        Raises:
            LLMError: the model call failed
        """
        prompt = self.prompts.load_prompt(
            "chat",
            CONTEXT=context[:settings.CHAT_CONTEXT_CHAR_LIMIT],
            MESSAGE=message,
        )
        logger.info("💬 Sending chat message")
        return await self.llm.generate(prompt)
