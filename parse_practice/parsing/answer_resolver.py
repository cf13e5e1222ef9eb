"""
Maps an answer declaration back to one of a question's options.

Resolution works on the first answer declaration found in the search text
and tries these rules in order, stopping at the first that yields an index
inside the option list:

1. ``Answer: C. Option text``  letter plus trailing text, the letter decides
2. ``Answer: C``               letter alone at the end of the line
3. ``Answer: Option text``     exact (case-insensitive) option match, then a
                               substring match in either direction

Letters beat text so that option wording that happens to contain another
option's text cannot steal the answer. A single-letter first word counts as
a letter, so ``Answer: a lot of water`` means option A.
"""

import logging
import re
from typing import Callable, List, Optional, Sequence

from parse_practice.parsing.line_classifier import (
    ANSWER_DECLARATION_PATTERN,
    ANSWER_LINE_RE,
    option_letter_index,
)

logger = logging.getLogger(__name__)

LETTER_WITH_TEXT_RE = re.compile(
    ANSWER_DECLARATION_PATTERN + r"[ \t]*([A-Za-z])(?:[.)][ \t]*|[ \t]+)(\S.*)$",
    re.IGNORECASE,
)
LETTER_ONLY_RE = re.compile(
    ANSWER_DECLARATION_PATTERN + r"[ \t]*([A-Za-z])[.)]?[ \t]*$",
    re.IGNORECASE,
)
ANSWER_TEXT_RE = re.compile(
    ANSWER_DECLARATION_PATTERN + r"[ \t]*(.+)$",
    re.IGNORECASE,
)


def find_answer_declaration(search_text: str) -> Optional[str]:
    """
    Return the first answer declaration in ``search_text``, from the label
    to the end of its line, or None.
    """
    for line in search_text.split("\n"):
        match = ANSWER_LINE_RE.search(line)
        if match:
            return line[match.start():].strip()
    return None


def find_exact_option(answer_text: str, options: Sequence[str]) -> Optional[int]:
    """Case-insensitive, whitespace-trimmed exact match."""
    wanted = (answer_text or "").strip().lower()
    if not wanted:
        return None
    for index, option in enumerate(options):
        if option.strip().lower() == wanted:
            return index
    return None


def find_fuzzy_option(answer_text: str, options: Sequence[str]) -> Optional[int]:
    """First option that contains the answer text, or is contained by it."""
    wanted = (answer_text or "").strip().lower()
    if not wanted:
        return None
    for index, option in enumerate(options):
        candidate = option.strip().lower()
        if not candidate:
            continue
        if wanted in candidate or candidate in wanted:
            return index
    return None


def _letter_to_index(letter: str, options: Sequence[str]) -> Optional[int]:
    index = option_letter_index(letter)
    if 0 <= index < len(options):
        return index
    logger.debug(f"Answer letter {letter!r} is outside {len(options)} options")
    return None


def resolve_letter_with_text(declaration: str, options: Sequence[str]) -> Optional[int]:
    match = LETTER_WITH_TEXT_RE.match(declaration)
    if not match:
        return None
    return _letter_to_index(match.group(1), options)


def resolve_letter_only(declaration: str, options: Sequence[str]) -> Optional[int]:
    match = LETTER_ONLY_RE.match(declaration)
    if not match:
        return None
    return _letter_to_index(match.group(1), options)


def resolve_answer_text(declaration: str, options: Sequence[str]) -> Optional[int]:
    match = ANSWER_TEXT_RE.match(declaration)
    if not match:
        return None
    answer_text = match.group(1).strip()
    index = find_exact_option(answer_text, options)
    if index is None:
        index = find_fuzzy_option(answer_text, options)
    return index


AnswerRule = Callable[[str, Sequence[str]], Optional[int]]

ANSWER_RULES: List[AnswerRule] = [
    resolve_letter_with_text,
    resolve_letter_only,
    resolve_answer_text,
]


def resolve_answer(search_text: str, options: Sequence[str]) -> Optional[int]:
    """
    Resolve the correct option index for ``options`` from ``search_text``.

    Returns None when there is no declaration or no rule can place it.
    """
    if not options:
        return None

    declaration = find_answer_declaration(search_text)
    if declaration is None:
        return None

    for rule in ANSWER_RULES:
        index = rule(declaration, options)
        if index is not None:
            return index

    logger.debug(f"Unresolved answer declaration: {declaration[:80]!r}")
    return None
