"""Per-user test history and lifetime score aggregation."""
import json
import logging

from skiloovate.auth import get_user
from skiloovate.db import get_connection
from skiloovate.models import AnswerRecord, Subject, TestResult, User
from skiloovate.scoring import round_half_up

logger = logging.getLogger(__name__)


def _answers_to_json(answers) -> str:
    return json.dumps([
        {"question_id": a.question_id, "selected_option_index": a.selected_option_index, "is_correct": a.is_correct}
        for a in answers
    ])


def _row_to_result(row) -> TestResult:
    answers = tuple(
        AnswerRecord(a["question_id"], int(a["selected_option_index"]), bool(a["is_correct"]))
        for a in json.loads(row["answers"])
    )
    return TestResult(
        id=row["id"],
        subject=Subject(row["subject"]),
        total_questions=row["total_questions"],
        correct_count=row["correct_count"],
        wrong_count=row["wrong_count"],
        unanswered_count=row["unanswered_count"],
        elapsed_seconds=row["elapsed_seconds"],
        completed_at=row["completed_at"],
        answers=answers,
    )


def lifetime_average(results) -> int:
    """Rounded mean of per-test percentages, 0 when there is no history."""
    if not results:
        return 0
    return round_half_up(sum(r.percentage for r in results) / len(results))


def _fetch_results(conn, user_id: str, subject: Subject | None = None) -> list[TestResult]:
    if subject is None:
        rows = conn.execute(
            "SELECT * FROM test_results WHERE user_id = ? ORDER BY seq", (user_id,)
        ).fetchall()
    else:
        rows = conn.execute(
            "SELECT * FROM test_results WHERE user_id = ? AND subject = ? ORDER BY seq",
            (user_id, Subject(subject).value),
        ).fetchall()
    return [_row_to_result(r) for r in rows]


def add_test_result(db_path: str, user_id: str, result: TestResult) -> User:
    """Append a result to the user's history and refresh their lifetime stats.

    The insert and the stats update commit together, so a failure leaves
    neither behind.
    """
    conn = get_connection(db_path)
    try:
        conn.execute(
            """INSERT INTO test_results
            (id, user_id, subject, total_questions, correct_count, wrong_count, unanswered_count,
             elapsed_seconds, completed_at, answers)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                result.id, user_id, result.subject.value, result.total_questions, result.correct_count,
                result.wrong_count, result.unanswered_count, result.elapsed_seconds, result.completed_at,
                _answers_to_json(result.answers),
            ),
        )
        history = _fetch_results(conn, user_id)
        conn.execute(
            "UPDATE users SET tests_completed = ?, average_score = ? WHERE id = ?",
            (len(history), lifetime_average(history), user_id),
        )
        conn.commit()
    finally:
        conn.close()
    logger.info(
        "Saved %s result %s for user %s: %d/%d",
        result.subject.value, result.id, user_id, result.correct_count, result.total_questions,
    )
    return get_user(db_path, user_id)


def get_test_results(db_path: str, user_id: str, subject: Subject | None = None) -> list[TestResult]:
    conn = get_connection(db_path)
    results = _fetch_results(conn, user_id, subject)
    conn.close()
    return results


def clear_test_results(db_path: str, user_id: str) -> None:
    conn = get_connection(db_path)
    conn.execute("DELETE FROM test_results WHERE user_id = ?", (user_id,))
    conn.execute("UPDATE users SET tests_completed = 0, average_score = 0 WHERE id = ?", (user_id,))
    conn.commit()
    conn.close()
    logger.info("Cleared test history for user %s", user_id)
