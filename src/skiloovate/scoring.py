"""Turns collected answers into a scored test result."""
import math
import uuid
from datetime import datetime

from skiloovate.models import UNANSWERED, AnswerRecord, Subject, TestResult


def score(
    questions,
    selections: dict,
    elapsed_seconds: int,
    *,
    subject: Subject | None = None,
    result_id: str | None = None,
    completed_at: str | None = None,
) -> TestResult:
    """Score a finished test.

    Args:
        questions: Ordered questions as presented to the user.
        selections: Mapping question id -> chosen option index. Missing
            questions count as unanswered; ids not in ``questions`` are ignored.
        elapsed_seconds: Time spent on the test, non-negative.

    Returns:
        An immutable TestResult. Unanswered questions are scored as wrong and
        also counted separately in ``unanswered_count``.
    """
    if elapsed_seconds < 0:
        raise ValueError(f"elapsed_seconds must be non-negative, got {elapsed_seconds}")
    answers = []
    for q in questions:
        selected = selections.get(q.id, UNANSWERED)
        answers.append(AnswerRecord(
            question_id=q.id,
            selected_option_index=selected,
            is_correct=selected == q.correct_option_index,
        ))
    total = len(answers)
    correct = sum(1 for a in answers if a.is_correct)
    unanswered = sum(1 for a in answers if not a.is_answered)
    if subject is None:
        subject = questions[0].subject if questions else Subject.APTITUDE
    return TestResult(
        id=result_id or uuid.uuid4().hex,
        subject=Subject(subject),
        total_questions=total,
        correct_count=correct,
        wrong_count=total - correct,
        unanswered_count=unanswered,
        elapsed_seconds=int(elapsed_seconds),
        completed_at=completed_at or datetime.now().isoformat(),
        answers=tuple(answers),
    )


def round_half_up(value: float) -> int:
    """Nearest integer with halves rounded up, so 72.5 becomes 73 rather than 72."""
    return math.floor(value + 0.5)


def get_score_message(percentage: float) -> str:
    if percentage >= 90:
        return "Outstanding Performance!"
    elif percentage >= 70:
        return "Great Job!"
    elif percentage >= 50:
        return "Good Effort!"
    return "Keep Practicing!"


def get_score_color(percentage: float) -> str:
    if percentage >= 70:
        return "green"
    elif percentage >= 50:
        return "yellow"
    return "red"


def format_duration(seconds: int) -> str:
    mins, secs = divmod(int(seconds), 60)
    return f"{mins}m {secs}s"
