"""Tests for building practice tests from text, with and without the AI."""

import asyncio
import json

from parse_practice.core.constants import SAMPLE_TEXT
from parse_practice.schemas import BuiltTest, ExtractionFailure, NoQuestionsDetected
from parse_practice.services.extraction_service import ExtractionService
from parse_practice.services.test_builder import PracticeTestBuilder

AI_REPLY = json.dumps([
    {"question": f"AI question {n}?", "options": ["w", "x", "y", "z"], "answer": "y", "answerIndex": 2}
    for n in range(1, 6)
])


def test_parse_sample_text():
    built = PracticeTestBuilder().parse_text(SAMPLE_TEXT)

    assert built.source == "parser"
    assert built.test.title == "Practice Test (3 questions)"
    assert [q.id for q in built.test.questions] == ["q_1", "q_2", "q_3"]
    assert [q.answerIndex for q in built.test.questions] == [2, 1, 1]


def test_parse_caps_initial_questions(questions_text):
    built = PracticeTestBuilder(max_initial_questions=20).parse_text(questions_text(30))

    assert len(built.test.questions) == 20
    assert len(built.original_questions) == 30
    assert {q.id for q in built.test.questions} <= {q.id for q in built.original_questions}
    assert built.test.title == "Practice Test (20 questions)"


def test_parse_nothing_is_empty_not_an_error():
    built = PracticeTestBuilder().parse_text("just some prose")

    assert built.is_empty
    assert built.original_questions == []


def test_import_without_fallback(fake_llm):
    llm = fake_llm(replies=[AI_REPLY])
    builder = PracticeTestBuilder(extraction=ExtractionService(llm=llm))

    result = asyncio.run(builder.import_text("just some prose", use_ai_fallback=False))

    assert isinstance(result, NoQuestionsDetected)
    assert llm.prompts == []


def test_import_prefers_parser(fake_llm, questions_text):
    llm = fake_llm(replies=[AI_REPLY])
    builder = PracticeTestBuilder(extraction=ExtractionService(llm=llm))

    result = asyncio.run(builder.import_text(questions_text(2), use_ai_fallback=True))

    assert isinstance(result, BuiltTest)
    assert result.source == "parser"
    assert llm.prompts == []


def test_import_falls_back_to_ai(fake_llm):
    builder = PracticeTestBuilder(extraction=ExtractionService(llm=fake_llm(replies=[AI_REPLY])))

    result = asyncio.run(builder.import_text("just some prose", use_ai_fallback=True))

    assert isinstance(result, BuiltTest)
    assert result.source == "ai"
    assert len(result.test.questions) == 5
    assert result.test.questions[0].answer == "y"


def test_ai_extraction_respects_requested_count(fake_llm):
    builder = PracticeTestBuilder(extraction=ExtractionService(llm=fake_llm(replies=[AI_REPLY])))

    result = asyncio.run(builder.extract_with_ai("text", max_questions=3))

    assert len(result.test.questions) == 3
    assert len(result.original_questions) == 5


def test_ai_without_extraction_configured():
    result = asyncio.run(PracticeTestBuilder().extract_with_ai("text"))
    assert isinstance(result, ExtractionFailure)


def test_ai_failure_is_passed_through(fake_llm):
    builder = PracticeTestBuilder(extraction=ExtractionService(llm=fake_llm(replies=["garbage"])))

    result = asyncio.run(builder.import_text("just some prose", use_ai_fallback=True))

    assert isinstance(result, ExtractionFailure)
