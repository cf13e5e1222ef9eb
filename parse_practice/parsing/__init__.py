"""Text-to-question pipeline: classify, segment, resolve, normalize, sample."""

from .answer_resolver import resolve_answer
from .line_classifier import is_answer_line, is_option_line, is_question_line
from .normalizer import normalize_candidate, normalize_candidates
from .sampler import fisher_yates_shuffle, limit_questions, sample_questions
from .segmenter import parse_questions_from_text, split_blocks

__all__ = [
    "resolve_answer",
    "is_answer_line",
    "is_option_line",
    "is_question_line",
    "normalize_candidate",
    "normalize_candidates",
    "fisher_yates_shuffle",
    "limit_questions",
    "sample_questions",
    "parse_questions_from_text",
    "split_blocks",
]
