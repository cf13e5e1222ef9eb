"""JSON export of a parsed test for download."""

import time

from parse_practice.schemas.question import ParsedTest


def export_test_as_json(test: ParsedTest) -> str:
    return test.model_dump_json(indent=2)


def export_filename(now: float = None) -> str:
    timestamp_ms = int((time.time() if now is None else now) * 1000)
    return f"practice-test-{timestamp_ms}.json"
