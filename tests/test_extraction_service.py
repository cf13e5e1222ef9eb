"""Tests for the AI extraction adapter, driven by a fake LLM client."""

import asyncio
import json

import pytest

from parse_practice.core.exceptions import LLMError, LLMRateLimitError
from parse_practice.schemas import ExtractionFailure, ExtractionSuccess, NoQuestionsDetected
from parse_practice.services.extraction_service import ExtractionService, coerce_candidate


def extraction_reply(*items):
    return "```json\n" + json.dumps(list(items)) + "\n```"


def test_successful_extraction_is_normalized(fake_llm):
    llm = fake_llm(replies=[extraction_reply(
        {"question": "Capital of Italy?", "options": ["Rome", "Milan"], "answer": "Rome", "answerIndex": 0},
        {"question": "2+2?", "options": ["3", "4", "5", "6", "7"], "answer": "4", "answerIndex": 9},
    )])
    service = ExtractionService(llm=llm)

    result = asyncio.run(service.extract_questions("some text", max_questions=2))

    assert isinstance(result, ExtractionSuccess)
    assert result.question_count == 2
    first, second = result.questions
    assert first.id == "q_1"
    assert first.options == ["Rome", "Milan", "Option 3", "Option 4"]
    assert second.options == ["3", "4", "5", "6"]
    assert second.answerIndex == 1
    assert "Extract exactly 2 questions." in llm.prompts[0]
    assert "some text" in llm.prompts[0]


def test_prompt_without_limit_asks_for_all(fake_llm):
    llm = fake_llm(replies=["[]"])
    asyncio.run(ExtractionService(llm=llm).extract_questions("text"))
    assert "Extract all questions you can find." in llm.prompts[0]


def test_empty_or_invalid_items_mean_no_questions(fake_llm):
    llm = fake_llm(replies=[extraction_reply({"question": "", "options": ["a", "b"]}, "not an object")])

    result = asyncio.run(ExtractionService(llm=llm).extract_questions("text"))

    assert isinstance(result, NoQuestionsDetected)


@pytest.mark.parametrize("error", [LLMError("boom"), LLMRateLimitError()])
def test_llm_errors_become_failures(fake_llm, error):
    result = asyncio.run(ExtractionService(llm=fake_llm(error=error)).extract_questions("text"))

    assert isinstance(result, ExtractionFailure)
    assert result.reason.startswith("Failed to extract questions with AI")


def test_unparseable_reply_is_a_failure(fake_llm):
    llm = fake_llm(replies=["Sorry, I cannot help with that."])

    result = asyncio.run(ExtractionService(llm=llm).extract_questions("text"))

    assert isinstance(result, ExtractionFailure)


def test_strict_extraction_drops_unmatched_answers(fake_llm):
    llm = fake_llm(replies=[extraction_reply(
        {"question": "Q", "options": ["a", "b"], "answer": "z", "answerIndex": -1},
    )])

    result = asyncio.run(ExtractionService(llm=llm, strict=True).extract_questions("text"))

    assert isinstance(result, NoQuestionsDetected)


def test_null_option_keeps_answer_position(fake_llm):
    llm = fake_llm(replies=[extraction_reply(
        {"question": "Q", "options": ["a", None, "c", "d"], "answer": "c", "answerIndex": 2},
    )])

    result = asyncio.run(ExtractionService(llm=llm).extract_questions("text"))

    question = result.questions[0]
    assert question.options == ["a", "Option 2", "c", "d"]
    assert question.answerIndex == 2
    assert question.answer == "c"


def test_analysis_outcomes(fake_llm):
    llm = fake_llm(replies=[
        '{"hasQuestions": true, "questionCount": 4, "summary": "A quiz"}',
        '{"hasQuestions": false, "summary": "A recipe"}',
        "nope",
    ])
    service = ExtractionService(llm=llm)

    positive = asyncio.run(service.analyze_text("x" * 5000))
    negative = asyncio.run(service.analyze_text("recipe"))
    broken = asyncio.run(service.analyze_text("?"))

    assert isinstance(positive, ExtractionSuccess)
    assert positive.question_count == 4
    assert positive.questions == []
    assert "x" * 2001 not in llm.prompts[0]
    assert isinstance(negative, NoQuestionsDetected)
    assert negative.summary == "A recipe"
    assert isinstance(broken, ExtractionFailure)


def test_chat_truncates_context_and_propagates_errors(fake_llm):
    llm = fake_llm(replies=["It is about tests."])
    service = ExtractionService(llm=llm)

    reply = asyncio.run(service.chat("What is this?", "c" * 4000))

    assert reply == "It is about tests."
    assert "c" * 3000 in llm.prompts[0]
    assert "c" * 3001 not in llm.prompts[0]
    assert "What is this?" in llm.prompts[0]

    with pytest.raises(LLMError):
        asyncio.run(ExtractionService(llm=fake_llm(error=LLMError("down"))).chat("hi", ""))


def test_coerce_candidate_variants():
    candidate = coerce_candidate({
        "questionText": "Pick",
        "options": {"B": "second", "A": "first", "C": None},
        "answerText": "second",
        "answer_index": "1",
    })

    assert candidate.question == "Pick"
    assert candidate.options == ["first", "second", ""]
    assert candidate.answer == "second"
    assert candidate.answerIndex == 1


def test_coerce_candidate_rejects_odd_values():
    assert coerce_candidate(["not", "a", "dict"]) is None
    assert coerce_candidate({"question": "Q", "answerIndex": True}).answerIndex == -1
    assert coerce_candidate({"question": "Q", "answerIndex": "two"}).answerIndex == -1
    assert coerce_candidate({"question": "Q", "options": "a, b"}).options == []
