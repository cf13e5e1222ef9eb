"""Tests for the line-level grammar predicates."""

from parse_practice.parsing.line_classifier import (
    is_answer_line,
    is_numbered_question_line,
    is_option_line,
    is_question_line,
    option_letter_index,
    strip_option_marker,
    strip_question_number,
)


def test_option_lines():
    assert is_option_line("A. Paris")
    assert is_option_line("b) Berlin")
    assert is_option_line("D.   spaced out")


def test_not_option_lines():
    assert not is_option_line("A.Paris")
    assert not is_option_line("A.")
    assert not is_option_line("Q1. What is it?")
    assert not is_option_line("12. Twelve")
    assert not is_option_line("AB. two letters")


def test_answer_lines():
    assert is_answer_line("Answer: B")
    assert is_answer_line("👉 Answer: C. Ongoing and repetitive")
    assert is_answer_line("correct answer: b")
    assert is_answer_line("Correct Answer : Paris")
    assert is_answer_line("Solution: 42")
    assert is_answer_line("✅ ANSWER: d")


def test_not_answer_lines():
    assert not is_answer_line("The answer is B")
    assert not is_answer_line("A. Solution")
    assert not is_answer_line("Q1. What is the answer")


def test_numbered_question_lines():
    assert is_numbered_question_line("Q1. 2+2?")
    assert is_numbered_question_line("12) Which one?")
    assert not is_numbered_question_line("Q. Which one?")
    assert not is_numbered_question_line("What is 2+2?")


def test_question_line_numbered_anywhere():
    assert is_question_line("Q3. Anything", is_first_line_of_block=False)
    assert is_question_line("3. Anything", is_first_line_of_block=True)


def test_question_line_fallback_only_for_first_line():
    assert is_question_line("What color is the sky?", is_first_line_of_block=True)
    assert not is_question_line("What color is the sky?", is_first_line_of_block=False)


def test_first_line_option_or_answer_is_not_a_question():
    assert not is_question_line("A. Blue", is_first_line_of_block=True)
    assert not is_question_line("Answer: B", is_first_line_of_block=True)


def test_strip_prefixes():
    assert strip_question_number("Q12. What is it?") == "What is it?"
    assert strip_question_number("3) Which?") == "Which?"
    assert strip_question_number("No number here") == "No number here"
    assert strip_option_marker("b)   Blue ") == "Blue"
    assert strip_option_marker("C. Ongoing and repetitive") == "Ongoing and repetitive"


def test_letter_mapping():
    assert option_letter_index("A") == 0
    assert option_letter_index("d") == 3
