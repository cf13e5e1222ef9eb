"""
Repairs question candidates into valid ``Question`` objects.

Every candidate, parsed or AI-extracted, goes through here. The result
always has exactly four trimmed options and an answer index that points at
the answer text, or the candidate is dropped.
"""

import logging
import uuid
from typing import Iterable, List, Optional

from parse_practice.core.constants import OPTION_COUNT, placeholder_option
from parse_practice.parsing.answer_resolver import find_exact_option
from parse_practice.schemas.question import Question, QuestionCandidate

logger = logging.getLogger(__name__)

MIN_RAW_OPTIONS = 2


def fit_options(options: List[str]) -> List[str]:
    """Truncate to four, pad with ``Option N``, replace blanks, trim."""
    fitted = [str(option).strip() for option in options[:OPTION_COUNT]]
    while len(fitted) < OPTION_COUNT:
        fitted.append("")
    return [option or placeholder_option(position) for position, option in enumerate(fitted, 1)]


def normalize_candidate(
    candidate: QuestionCandidate,
    question_id: Optional[str] = None,
    strict: bool = False,
) -> Optional[Question]:
    """
    Return a valid Question for ``candidate`` or None.

    An index outside the option list is re-derived from the answer text.
    When that fails too, the first option is used; with ``strict`` the
    candidate is dropped instead.
    """
    stem = (candidate.question or "").strip()
    if not stem:
        logger.debug("Dropping candidate: empty question text")
        return None
    if len(candidate.options) < MIN_RAW_OPTIONS:
        logger.debug(f"Dropping candidate {stem[:40]!r}: {len(candidate.options)} option(s)")
        return None

    options = fit_options(candidate.options)

    answer_index = candidate.answerIndex
    if not 0 <= answer_index < len(options):
        answer_index = find_exact_option(candidate.answer, options)
        if answer_index is None:
            if strict:
                logger.warning(f"Dropping candidate {stem[:40]!r}: answer {candidate.answer!r} not among options")
                return None
            logger.warning(
                f"Answer {candidate.answer!r} for {stem[:40]!r} not among options; "
                f"defaulting to the first option"
            )
            answer_index = 0

    return Question(
        id=question_id or candidate.id or f"q_{uuid.uuid4().hex[:8]}",
        question=stem,
        options=options,
        answer=options[answer_index],
        answerIndex=answer_index,
    )


def normalize_candidates(
    candidates: Iterable[QuestionCandidate],
    id_prefix: str = "q",
    strict: bool = False,
) -> List[Question]:
    """
    Normalize a batch. Candidates without an id get ``{id_prefix}_{n}`` by
    their position among the kept questions.
    """
    questions: List[Question] = []
    dropped = 0
    for candidate in candidates:
        question_id = candidate.id or f"{id_prefix}_{len(questions) + 1}"
        question = normalize_candidate(candidate, question_id=question_id, strict=strict)
        if question is None:
            dropped += 1
            continue
        questions.append(question)

    if dropped:
        logger.info(f"Normalized {len(questions)} question(s), dropped {dropped}")
    return questions
