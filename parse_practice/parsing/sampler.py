"""
Random question subsets, drawn without replacement.
"""

import logging
import random
from typing import List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def fisher_yates_shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Uniformly random permutation of a copy of ``items``."""
    rng = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def sample_questions(questions: Sequence[T], k: int, rng: Optional[random.Random] = None) -> List[T]:
    """
    ``k`` distinct elements of ``questions`` in random order.

    Raises:
        ValueError: unless ``0 < k <= len(questions)``
    """
    if not 0 < k <= len(questions):
        raise ValueError(f"Sample size must be between 1 and {len(questions)}, got {k}")
    return fisher_yates_shuffle(questions, rng)[:k]


def limit_questions(questions: Sequence[T], ceiling: int, rng: Optional[random.Random] = None) -> List[T]:
    """Keep everything up to ``ceiling``; above it, a random sample of ``ceiling``."""
    if ceiling <= 0 or len(questions) <= ceiling:
        return list(questions)
    logger.info(f"Sampling {ceiling} of {len(questions)} questions")
    return sample_questions(questions, ceiling, rng)
