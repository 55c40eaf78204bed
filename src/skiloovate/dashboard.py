"""Dashboard and profile statistics."""
from skiloovate.auth import get_user
from skiloovate.models import Subject
from skiloovate.scoring import round_half_up
from skiloovate.store import get_test_results

RECENT_LIMIT = 5


def subject_average(results, subject: Subject) -> int | None:
    scores = [r.percentage for r in results if r.subject == subject]
    if not scores:
        return None
    return round_half_up(sum(scores) / len(scores))


def best_score(results) -> int:
    if not results:
        return 0
    return max(round_half_up(r.percentage) for r in results)


def get_dashboard_stats(db_path: str, user_id: str) -> dict:
    user = get_user(db_path, user_id)
    results = get_test_results(db_path, user_id)
    return {
        "tests_completed": user.tests_completed if user else 0,
        "average_score": user.average_score if user else 0,
        "aptitude_average": subject_average(results, Subject.APTITUDE),
        "technical_average": subject_average(results, Subject.TECHNICAL),
        "best_score": best_score(results),
        "recent": list(reversed(results))[:RECENT_LIMIT],
    }
