"""
Splits raw text into question candidates.

Supported input looks like::

    Q1. Question text            (or "1) Question text", or no numbering)
    A. Option text               (or "a) Option text")
    B. Option text
    👉 Answer: B. Option text    (or "Answer: B", "Correct Answer: text")

Blocks are separated by blank lines. The answer may sit in the following
block. Blocks that do not yield a question, two options and a resolvable
answer are skipped without raising.
"""

import logging
import re
from typing import List, Optional, Tuple

from parse_practice.parsing.answer_resolver import resolve_answer
from parse_practice.parsing.line_classifier import (
    is_answer_line,
    is_numbered_question_line,
    is_option_line,
    is_question_line,
    strip_option_marker,
    strip_question_number,
)
from parse_practice.schemas.question import QuestionCandidate

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR_RE = re.compile(r"\n\s*\n+")
MIN_PARSED_OPTIONS = 2


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_blocks(text: str) -> List[str]:
    """Blank-line delimited, trimmed, non-empty blocks."""
    clean = normalize_line_endings(text or "").strip()
    if not clean:
        return []
    blocks = (block.strip() for block in BLOCK_SEPARATOR_RE.split(clean))
    return [block for block in blocks if block]


def split_lines(block: str) -> List[str]:
    lines = (line.strip() for line in block.split("\n"))
    return [line for line in lines if line]


def find_question_line(lines: List[str]) -> Optional[Tuple[int, str]]:
    """
    Position and stripped text of the question line.

    A numbered line wins wherever it sits; otherwise the first line is used
    when it is not an option or answer line.
    """
    for index, line in enumerate(lines):
        if is_numbered_question_line(line):
            return index, strip_question_number(line)

    if lines and is_question_line(lines[0], is_first_line_of_block=True):
        return 0, strip_question_number(lines[0])

    return None


def collect_options(lines: List[str], start: int) -> List[str]:
    """Option texts from ``start`` up to the first answer line."""
    options = []
    for line in lines[start:]:
        if is_answer_line(line):
            break
        if is_option_line(line):
            options.append(strip_option_marker(line))
    return options


def build_answer_search_text(blocks: List[str], index: int) -> str:
    """The block itself plus the next one, where answers sometimes land."""
    if index + 1 < len(blocks):
        return blocks[index] + "\n\n" + blocks[index + 1]
    return blocks[index]


def segment_block(blocks: List[str], index: int) -> Optional[QuestionCandidate]:
    """Candidate for ``blocks[index]``, or None when the block is unusable."""
    lines = split_lines(blocks[index])

    found = find_question_line(lines)
    if found is None:
        logger.debug(f"Block {index}: no question line")
        return None
    question_index, question_text = found
    if not question_text:
        logger.debug(f"Block {index}: empty question text")
        return None

    options = collect_options(lines, question_index + 1)
    if len(options) < MIN_PARSED_OPTIONS:
        logger.debug(f"Block {index}: {len(options)} option(s), need {MIN_PARSED_OPTIONS}")
        return None

    answer_index = resolve_answer(build_answer_search_text(blocks, index), options)
    if answer_index is None:
        logger.debug(f"Block {index}: answer not resolved")
        return None

    return QuestionCandidate(
        question=question_text,
        options=options,
        answer=options[answer_index],
        answerIndex=answer_index,
    )


def parse_questions_from_text(text: str) -> List[QuestionCandidate]:
    """
    Parse multiple-choice question candidates from free-form text.

    Ids are ``q_1``, ``q_2``, ... in emission order. An empty list is a normal
    outcome, not an error.
    """
    blocks = split_blocks(text)
    candidates: List[QuestionCandidate] = []

    for index in range(len(blocks)):
        candidate = segment_block(blocks, index)
        if candidate is None:
            continue
        candidate.id = f"q_{len(candidates) + 1}"
        candidates.append(candidate)

    logger.info(f"Parsed {len(candidates)} question(s) from {len(blocks)} block(s)")
    return candidates
