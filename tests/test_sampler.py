"""Tests for random sampling without replacement."""

import random
from collections import Counter

import pytest

from parse_practice.parsing.sampler import (
    fisher_yates_shuffle,
    limit_questions,
    sample_questions,
)


@pytest.mark.parametrize("k", [1, 2, 7, 15])
def test_sample_returns_k_distinct_members(k):
    pool = list(range(15))

    sample = sample_questions(pool, k)

    assert len(sample) == k
    assert len(set(sample)) == k
    assert set(sample) <= set(pool)


@pytest.mark.parametrize("k", [0, -1, 4])
def test_sample_size_out_of_range(k):
    with pytest.raises(ValueError):
        sample_questions([1, 2, 3], k)


def test_input_is_not_mutated():
    pool = list(range(10))
    fisher_yates_shuffle(pool)
    sample_questions(pool, 5)
    assert pool == list(range(10))


def test_seeded_rng_is_reproducible():
    pool = list(range(20))
    assert sample_questions(pool, 5, random.Random(7)) == sample_questions(pool, 5, random.Random(7))


def test_shuffle_positions_are_roughly_uniform():
    rng = random.Random(1234)
    first_positions = Counter(fisher_yates_shuffle("abcd", rng)[0] for _ in range(4000))

    assert set(first_positions) == set("abcd")
    for count in first_positions.values():
        assert 800 < count < 1200


def test_limit_under_ceiling_keeps_order():
    pool = list(range(5))
    assert limit_questions(pool, 20) == pool


def test_limit_over_ceiling_samples():
    pool = list(range(30))

    limited = limit_questions(pool, 20)

    assert len(limited) == 20
    assert len(set(limited)) == 20


def test_non_positive_ceiling_keeps_everything():
    assert limit_questions([3, 1, 2], 0) == [3, 1, 2]
