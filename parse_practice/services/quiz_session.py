"""
Quiz attempt state machine.

    NO_TEST -> TEST_LOADED -> IN_PROGRESS -> COMPLETED

A ``QuizSession`` is a plain object owned by its caller; nothing here is
global, so several sessions can run side by side. Operations called in the
wrong state, or with an out-of-range position, are ignored and return False
instead of raising.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Dict, List, Optional

from parse_practice.core.config import settings
from parse_practice.core.constants import DEFAULT_SESSION_ID, get_score_message
from parse_practice.parsing.sampler import sample_questions
from parse_practice.schemas.question import ParsedTest, Question
from parse_practice.schemas.quiz import (
    Progress,
    QuizStatus,
    SessionSnapshot,
    TestResult,
    UserAnswer,
)

logger = logging.getLogger(__name__)


def round_percentage(part: int, total: int) -> int:
    """``round(part / total * 100)`` rounding halves up; 0 for an empty total."""
    if total <= 0:
        return 0
    return int(math.floor(part / total * 100 + 0.5))


class QuizSession:
    """
    One quiz attempt over one parsed test.

    The active question list can shrink or change through sampling, but
    ``original_questions`` keeps the full pool that shuffles draw from.
    """

    def __init__(self, session_id: str = DEFAULT_SESSION_ID, shuffle_size: Optional[int] = None):
        self.session_id = session_id
        self.shuffle_size = shuffle_size or settings.SHUFFLE_SAMPLE_SIZE

        self.status = QuizStatus.NO_TEST
        self.current_test: Optional[ParsedTest] = None
        self.original_questions: Optional[List[Question]] = None
        self.current_question_index = 0
        self.test_result: Optional[TestResult] = None
        self._answers: Dict[str, UserAnswer] = {}

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def set_test(self, test: ParsedTest, original_questions: Optional[List[Question]] = None) -> bool:
        """
        Load ``test``, replacing whatever was active.

        ``original_questions`` is the pool later shuffles draw from; it
        defaults to the test's own questions.
        """
        self.current_test = test
        self.original_questions = list(original_questions or test.questions)
        self._clear_attempt()
        self.status = QuizStatus.TEST_LOADED
        self._log(f"Loaded test with {len(test.questions)} question(s), pool of {len(self.original_questions)}")
        return True

    def start_test(self) -> bool:
        if self.status == QuizStatus.NO_TEST:
            return self._ignored("start_test")
        self._clear_attempt()
        self.status = QuizStatus.IN_PROGRESS
        self._log("Test started")
        return True

    def answer_question(self, question_id: str, selected_index: int, selected_option: str) -> bool:
        """Record an answer; answering the same question again overwrites it."""
        if self.status != QuizStatus.IN_PROGRESS:
            return self._ignored("answer_question")
        self._answers[question_id] = UserAnswer(
            questionId=question_id,
            selectedIndex=selected_index,
            selectedOption=selected_option,
        )
        return True

    def go_to_question(self, index: int) -> bool:
        if self.current_test is None or not 0 <= index < len(self.current_test.questions):
            return self._ignored(f"go_to_question({index})")
        self.current_question_index = index
        return True

    def next_question(self) -> bool:
        return self.go_to_question(self.current_question_index + 1)

    def previous_question(self) -> bool:
        return self.go_to_question(self.current_question_index - 1)

    def submit_test(self) -> bool:
        """
        Score the attempt and store a TestResult. Calling it again after
        completion recomputes and overwrites the result.
        """
        if self.status not in (QuizStatus.IN_PROGRESS, QuizStatus.COMPLETED):
            return self._ignored("submit_test")

        questions = list(self.current_test.questions)
        score = 0
        for question in questions:
            answer = self._answers.get(question.id)
            if answer is not None and answer.selectedIndex == question.answerIndex:
                score += 1

        percentage = round_percentage(score, len(questions))
        self.test_result = TestResult(
            score=score,
            totalQuestions=len(questions),
            percentage=percentage,
            userAnswers=[answer.model_copy() for answer in self._answers_for_active_questions()],
            questions=questions,
            completedAt=datetime.now(timezone.utc),
            message=get_score_message(percentage),
        )
        self.status = QuizStatus.COMPLETED
        self._log(f"Test submitted: {score}/{len(questions)} ({percentage}%)")
        return True

    def reset_test(self) -> bool:
        """Back to TEST_LOADED; the original question pool is kept."""
        if self.status not in (QuizStatus.IN_PROGRESS, QuizStatus.COMPLETED):
            return self._ignored("reset_test")
        self._clear_attempt()
        self.status = QuizStatus.TEST_LOADED
        self._log("Test reset")
        return True

    def shuffle_questions(self, count: Optional[int] = None) -> bool:
        """
        Replace the active questions with a fresh random draw from the
        original pool and clear the attempt. The state itself is unchanged.
        """
        if self.status not in (QuizStatus.TEST_LOADED, QuizStatus.IN_PROGRESS):
            return self._ignored("shuffle_questions")

        pool = self.original_questions or self.current_test.questions
        if not pool:
            return self._ignored("shuffle_questions (empty pool)")

        size = min(count or self.shuffle_size, len(pool))
        self.current_test = ParsedTest.from_questions(sample_questions(pool, size))
        self._clear_attempt()
        self._log(f"Shuffled {size} of {len(pool)} question(s)")
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def questions(self) -> List[Question]:
        return list(self.current_test.questions) if self.current_test else []

    @property
    def user_answers(self) -> List[UserAnswer]:
        return list(self._answers.values())

    @property
    def current_question(self) -> Optional[Question]:
        questions = self.questions
        if 0 <= self.current_question_index < len(questions):
            return questions[self.current_question_index]
        return None

    @property
    def can_go_next(self) -> bool:
        return self.current_question_index < len(self.questions) - 1

    @property
    def can_go_previous(self) -> bool:
        return self.current_question_index > 0

    def get_answer_for_question(self, question_id: str) -> Optional[UserAnswer]:
        return self._answers.get(question_id)

    def is_question_answered(self, question_id: str) -> bool:
        return question_id in self._answers

    def get_progress(self) -> Progress:
        total = len(self.questions)
        answered = len(self._answers_for_active_questions())
        return Progress(answered=answered, total=total, percentage=round_percentage(answered, total))

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            currentTest=self.current_test,
            originalQuestions=self.original_questions,
            userAnswers=self.user_answers,
            currentQuestionIndex=self.current_question_index,
            status=self.status,
            testResult=self.test_result,
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: SessionSnapshot,
        session_id: str = DEFAULT_SESSION_ID,
        shuffle_size: Optional[int] = None,
    ) -> "QuizSession":
        session = cls(session_id=session_id, shuffle_size=shuffle_size)
        session.current_test = snapshot.currentTest
        session.original_questions = snapshot.originalQuestions
        session._answers = {answer.questionId: answer for answer in snapshot.userAnswers}
        session.current_question_index = snapshot.currentQuestionIndex
        session.status = snapshot.status if snapshot.currentTest else QuizStatus.NO_TEST
        session.test_result = snapshot.testResult
        return session

    # ------------------------------------------------------------------

    def _answers_for_active_questions(self) -> List[UserAnswer]:
        # Answers to ids outside the active test are kept but never counted
        active_ids = {question.id for question in self.questions}
        return [answer for answer in self._answers.values() if answer.questionId in active_ids]

    def _clear_attempt(self) -> None:
        self._answers = {}
        self.current_question_index = 0
        self.test_result = None

    def _ignored(self, operation: str) -> bool:
        logger.debug(
            f"Ignoring {operation} in state {self.status.value}",
            extra={"session_id": self.session_id},
        )
        return False

    def _log(self, message: str) -> None:
        logger.info(message, extra={"session_id": self.session_id})
