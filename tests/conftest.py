"""Shared fixtures for the test suite."""

import pytest

from parse_practice.schemas import ParsedTest, Question


class FakeLLM:
    """Stands in for LLMClient: replays canned replies and records prompts."""

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.prompts = []

    async def generate(self, prompt, system_prompt=None):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else ""


@pytest.fixture
def make_question():
    def _make(number: int, answer_index: int = 0) -> Question:
        options = [f"{number}-{letter}" for letter in "abcd"]
        return Question(
            id=f"q_{number}",
            question=f"Question {number}?",
            options=options,
            answer=options[answer_index],
            answerIndex=answer_index,
        )
    return _make


@pytest.fixture
def make_pool(make_question):
    def _pool(size: int):
        return [make_question(n, answer_index=n % 4) for n in range(1, size + 1)]
    return _pool


@pytest.fixture
def small_test(make_pool) -> ParsedTest:
    return ParsedTest.from_questions(make_pool(3))


@pytest.fixture
def fake_llm():
    return FakeLLM


def numbered_questions_text(count: int) -> str:
    blocks = []
    for n in range(1, count + 1):
        blocks.append(
            f"Q{n}. What is {n} + 1?\n"
            f"A. {n}\n"
            f"B. {n + 1}\n"
            f"C. {n + 2}\n"
            f"D. {n + 3}\n"
            f"Answer: B"
        )
    return "\n\n".join(blocks)


@pytest.fixture
def questions_text():
    return numbered_questions_text
