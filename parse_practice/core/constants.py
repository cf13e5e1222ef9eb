"""
Centralized constants for Parse & Practice.

Single source of truth for the text grammar vocabulary (answer labels,
marker glyphs), the fixed option count and the demo text.
"""

from typing import List


# ============================================================================
# Question shape
# ============================================================================

OPTION_COUNT = 4
PLACEHOLDER_OPTION = "Option {n}"


def placeholder_option(position: int) -> str:
    """Placeholder text for the 1-based option ``position``."""
    return PLACEHOLDER_OPTION.format(n=position)


def build_test_title(question_count: int) -> str:
    return f"Practice Test ({question_count} questions)"


# ============================================================================
# Answer declarations
# ============================================================================

# Labels are matched case-insensitively; inner spaces are flexible.
ANSWER_LABELS: List[str] = ["Correct Answer", "Answer", "Solution"]

# Glyphs that may precede an answer label, e.g. "👉 Answer: C"
ANSWER_MARKERS: List[str] = ["👉", "➡", "→", "✅", "✔", "*", "-"]


# ============================================================================
# Results
# ============================================================================

# (minimum percentage, message), checked top-down
SCORE_MESSAGES: List[tuple] = [
    (90, "Excellent work!"),
    (80, "Great job!"),
    (70, "Good work!"),
    (60, "Not bad, keep practicing!"),
    (0, "Keep studying and try again!"),
]


def get_score_message(percentage: int) -> str:
    for threshold, message in SCORE_MESSAGES:
        if percentage >= threshold:
            return message
    return SCORE_MESSAGES[-1][1]


# ============================================================================
# Session store
# ============================================================================

DEFAULT_SESSION_ID = "default"


SAMPLE_TEXT = """Q1. Which of the following is NOT a characteristic of a project?
A. Temporary in nature
B. Unique deliverables
C. Ongoing and repetitive
D. Has defined start and end dates
👉 Answer: C. Ongoing and repetitive

Q2. What is the primary purpose of project management?
A. To increase company profits
B. To deliver project objectives within scope, time, and budget
C. To manage team conflicts
D. To create detailed documentation
👉 Answer: B. To deliver project objectives within scope, time, and budget

Q3. Which project management methodology emphasizes iterative development?
A. Waterfall
B. Agile
C. Critical Path Method
D. PRINCE2
👉 Answer: B. Agile"""
