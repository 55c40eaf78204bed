# tests/test_dashboard.py
from skiloovate.auth import signup
from skiloovate.bank import get_questions
from skiloovate.dashboard import best_score, get_dashboard_stats, subject_average
from skiloovate.models import Subject
from skiloovate.scoring import score
from skiloovate.store import add_test_result


def _scored(subject, correct):
    questions = get_questions(subject)
    return score(questions, {q.id: q.correct_option_index for q in questions[:correct]}, 200)


def test_subject_average():
    results = [_scored(Subject.APTITUDE, 4), _scored(Subject.APTITUDE, 7), _scored(Subject.TECHNICAL, 9)]
    assert subject_average(results, Subject.APTITUDE) == 55
    assert subject_average(results, Subject.TECHNICAL) == 90
    assert subject_average([], Subject.TECHNICAL) is None


def test_best_score():
    assert best_score([]) == 0
    assert best_score([_scored(Subject.APTITUDE, 3), _scored(Subject.TECHNICAL, 8)]) == 80


def test_dashboard_stats_no_tests(ready_db):
    user = signup(ready_db, "ana@example.com", "secret", "Ana")
    stats = get_dashboard_stats(ready_db, user.id)
    assert stats["tests_completed"] == 0
    assert stats["average_score"] == 0
    assert stats["aptitude_average"] is None
    assert stats["technical_average"] is None
    assert stats["best_score"] == 0
    assert stats["recent"] == []


def test_dashboard_stats_with_data(ready_db):
    user = signup(ready_db, "ana@example.com", "secret", "Ana")
    results = [_scored(Subject.APTITUDE, i) for i in range(1, 8)]
    for r in results:
        add_test_result(ready_db, user.id, r)
    stats = get_dashboard_stats(ready_db, user.id)
    assert stats["tests_completed"] == 7
    assert stats["average_score"] == 40
    assert stats["aptitude_average"] == 40
    assert stats["best_score"] == 70
    assert [r.id for r in stats["recent"]] == [r.id for r in reversed(results)][:5]


def test_subject_average_rounds_halves_up():
    results = [_scored(Subject.TECHNICAL, c) for c in (7, 7, 7, 8)]
    assert subject_average(results, Subject.TECHNICAL) == 73
