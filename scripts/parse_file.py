"""
Parse a question file and print the resulting test as JSON.

Usage:
    python scripts/parse_file.py questions.txt
    python scripts/parse_file.py questions.txt --ai --max-questions 10 > test.json
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

sys.path.append(os.getcwd())

from parse_practice.core.logging_config import setup_logging
from parse_practice.schemas import BuiltTest
from parse_practice.services.export import export_test_as_json
from parse_practice.services.extraction_service import ExtractionService
from parse_practice.services.test_builder import PracticeTestBuilder

logger = logging.getLogger(__name__)


async def run(path: Path, use_ai: bool, max_questions: int = None) -> int:
    text = path.read_text(encoding="utf-8")
    builder = PracticeTestBuilder(
        extraction=ExtractionService() if use_ai else None,
        max_initial_questions=max_questions,
    )

    if use_ai:
        result = await builder.extract_with_ai(text, max_questions=max_questions)
    else:
        result = builder.parse_text(text)

    if not isinstance(result, BuiltTest) or result.is_empty:
        reason = getattr(result, "reason", None) or getattr(result, "summary", None) or "no questions found"
        logger.error(f"❌ {path}: {reason}")
        return 1

    logger.info(
        f"✅ {path}: {len(result.test.questions)} of {len(result.original_questions)} "
        f"question(s) via {result.source}"
    )
    print(export_test_as_json(result.test))
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Parse practice questions from a text file")
    parser.add_argument("path", type=Path, help="Text file with questions")
    parser.add_argument("--ai", action="store_true", help="Use AI extraction instead of the text parser")
    parser.add_argument("--max-questions", type=int, default=None, help="Question ceiling for the test")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    # stdout carries the exported JSON
    setup_logging("development", args.log_level, stream=sys.stderr)

    if not args.path.exists():
        logger.error(f"File not found: {args.path}")
        return 1
    return asyncio.run(run(args.path, args.ai, args.max_questions))


if __name__ == "__main__":
    sys.exit(main())
