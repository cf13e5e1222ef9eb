"""Tests for session snapshot storage backends."""

import pytest
from redis import RedisError

from parse_practice.core.exceptions import SessionStoreError
from parse_practice.core.session_store import InMemorySessionStore, RedisSessionStore
from parse_practice.schemas import ParsedTest, QuizStatus, SessionSnapshot
from parse_practice.services.quiz_session import QuizSession


class FakeRedis:
    """Just the commands the store uses, on a dict."""

    def __init__(self, fail=False):
        self.data = {}
        self.expiry = {}
        self.fail = fail

    def _check(self):
        if self.fail:
            raise RedisError("connection lost")

    def get(self, key):
        self._check()
        return self.data.get(key)

    def set(self, key, value):
        self._check()
        self.data[key] = value

    def setex(self, key, ttl, value):
        self._check()
        self.data[key] = value
        self.expiry[key] = ttl

    def delete(self, key):
        self._check()
        self.data.pop(key, None)


@pytest.fixture
def snapshot(small_test):
    quiz = QuizSession(session_id="abc")
    quiz.set_test(small_test)
    quiz.start_test()
    quiz.answer_question("q_1", 1, "1-b")
    quiz.submit_test()
    return quiz.snapshot()


def test_in_memory_round_trip(snapshot):
    store = InMemorySessionStore()

    store.set("abc", snapshot)
    loaded = store.get("abc")

    assert loaded == snapshot
    assert loaded is not snapshot
    assert store.get("other") is None

    store.delete("abc")
    assert store.get("abc") is None


def test_redis_round_trip_with_prefix_and_ttl(snapshot):
    fake = FakeRedis()
    store = RedisSessionStore(key_prefix="pp", ttl=60, client=fake)

    store.set("abc", snapshot)

    assert list(fake.data) == ["pp:abc"]
    assert fake.expiry == {"pp:abc": 60}
    restored = QuizSession.from_snapshot(store.get("abc"))
    assert restored.status == QuizStatus.COMPLETED
    assert restored.test_result.score == 1

    store.delete("abc")
    assert store.get("abc") is None


def test_redis_without_ttl_uses_plain_set():
    fake = FakeRedis()
    store = RedisSessionStore(client=fake)

    store.set("abc", SessionSnapshot(currentTest=ParsedTest.from_questions([])))

    assert fake.expiry == {}
    assert "practice-test-storage:abc" in fake.data


def test_redis_unreadable_payload_is_discarded():
    fake = FakeRedis()
    fake.data["practice-test-storage:abc"] = "{not json"

    assert RedisSessionStore(client=fake).get("abc") is None


def test_redis_errors_are_wrapped(snapshot):
    store = RedisSessionStore(client=FakeRedis(fail=True))

    with pytest.raises(SessionStoreError) as excinfo:
        store.get("abc")
    assert excinfo.value.session_id == "abc"

    with pytest.raises(SessionStoreError):
        store.set("abc", snapshot)
    with pytest.raises(SessionStoreError):
        store.delete("abc")
