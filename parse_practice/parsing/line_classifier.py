"""
Line-level predicates for the question text grammar.

Every function here is pure: it looks at one (already trimmed) line and
answers a yes/no question or strips a recognised prefix. The block
segmenter and the answer resolver are built on top of these.
"""

import re

from parse_practice.core.constants import ANSWER_LABELS, ANSWER_MARKERS


def _label_pattern(label: str) -> str:
    return r"\s*".join(re.escape(word) for word in label.split())


# Optional glyph (with an optional emoji variation selector) before the label
ANSWER_MARKER_PATTERN = (
    r"(?:[" + "".join(re.escape(m) for m in ANSWER_MARKERS) + r"]\ufe0f?\s*)?"
)
ANSWER_LABEL_PATTERN = "(?:" + "|".join(_label_pattern(label) for label in ANSWER_LABELS) + ")"
ANSWER_DECLARATION_PATTERN = ANSWER_MARKER_PATTERN + ANSWER_LABEL_PATTERN + r"[ \t]*:"

ANSWER_LINE_RE = re.compile(ANSWER_DECLARATION_PATTERN, re.IGNORECASE)
OPTION_LINE_RE = re.compile(r"^[A-Za-z][.)]\s+")
OPTION_MARKER_RE = re.compile(r"^[A-Za-z][.)]\s*")
NUMBERED_QUESTION_RE = re.compile(r"^Q?\d+[.)]\s+")
QUESTION_NUMBER_RE = re.compile(r"^Q?\d+[.)]\s*")


def is_option_line(line: str) -> bool:
    """``A. text``, ``b) text``: one letter, ``.`` or ``)``, whitespace, content."""
    return bool(OPTION_LINE_RE.match(line)) and bool(strip_option_marker(line))


def is_answer_line(line: str) -> bool:
    """True when the line carries an ``Answer:`` / ``Correct Answer:`` / ``Solution:`` declaration."""
    return bool(ANSWER_LINE_RE.search(line))


def is_numbered_question_line(line: str) -> bool:
    """``Q3. text`` or ``3) text``."""
    return bool(NUMBERED_QUESTION_RE.match(line))


def is_question_line(line: str, is_first_line_of_block: bool = False) -> bool:
    """
    A numbered line is always a question line. Without numbering, only the
    first line of a block qualifies, and only if it is not an option or an
    answer declaration.
    """
    if is_numbered_question_line(line):
        return True
    return is_first_line_of_block and not is_option_line(line) and not is_answer_line(line)


def strip_question_number(line: str) -> str:
    return QUESTION_NUMBER_RE.sub("", line, count=1).strip()


def strip_option_marker(line: str) -> str:
    return OPTION_MARKER_RE.sub("", line, count=1).strip()


def option_letter_index(letter: str) -> int:
    """Zero-based position for an option letter (``"c"`` -> 2)."""
    return ord(letter.upper()) - ord("A")
