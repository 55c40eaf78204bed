# tests/test_store.py
import pytest

from skiloovate.auth import get_user, signup
from skiloovate.bank import get_questions
from skiloovate.models import Subject
from skiloovate.scoring import score
from skiloovate.store import (
    add_test_result, clear_test_results, get_test_results, lifetime_average,
)


@pytest.fixture
def user(ready_db):
    return signup(ready_db, "ana@example.com", "secret", "Ana")


def _scored(subject, correct, elapsed=300):
    questions = get_questions(subject)
    selections = {q.id: q.correct_option_index for q in questions[:correct]}
    return score(questions, selections, elapsed)


def test_add_test_result_updates_lifetime_stats(ready_db, user):
    updated = add_test_result(ready_db, user.id, _scored(Subject.APTITUDE, 6))
    assert updated.tests_completed == 1
    assert updated.average_score == 60
    updated = add_test_result(ready_db, user.id, _scored(Subject.TECHNICAL, 9))
    assert updated.tests_completed == 2
    assert updated.average_score == 75
    assert get_user(ready_db, user.id).average_score == 75


def test_results_roundtrip_with_answers(ready_db, user):
    result = _scored(Subject.TECHNICAL, 4, elapsed=42)
    add_test_result(ready_db, user.id, result)
    [loaded] = get_test_results(ready_db, user.id)
    assert loaded == result
    assert loaded.unanswered_count == 6
    assert loaded.answers[0].is_correct is True


def test_get_test_results_in_completion_order(ready_db, user):
    first = _scored(Subject.APTITUDE, 1)
    second = _scored(Subject.TECHNICAL, 2)
    third = _scored(Subject.APTITUDE, 3)
    for r in (first, second, third):
        add_test_result(ready_db, user.id, r)
    assert [r.id for r in get_test_results(ready_db, user.id)] == [first.id, second.id, third.id]
    aptitude = get_test_results(ready_db, user.id, Subject.APTITUDE)
    assert [r.id for r in aptitude] == [first.id, third.id]


def test_results_are_scoped_per_user(ready_db, user):
    other = signup(ready_db, "bo@example.com", "secret", "Bo")
    add_test_result(ready_db, user.id, _scored(Subject.APTITUDE, 5))
    assert get_test_results(ready_db, other.id) == []


def test_clear_test_results(ready_db, user):
    add_test_result(ready_db, user.id, _scored(Subject.APTITUDE, 5))
    clear_test_results(ready_db, user.id)
    assert get_test_results(ready_db, user.id) == []
    refreshed = get_user(ready_db, user.id)
    assert refreshed.tests_completed == 0
    assert refreshed.average_score == 0


def test_lifetime_average_rounds():
    results = [_scored(Subject.APTITUDE, 1), _scored(Subject.APTITUDE, 2)]
    # mean of 10% and 20%
    assert lifetime_average(results) == 15
    assert lifetime_average([]) == 0


def test_lifetime_average_rounds_halves_up(ready_db, user):
    results = [_scored(Subject.APTITUDE, c) for c in (7, 7, 7, 8)]
    assert lifetime_average(results) == 73
    for r in results:
        updated = add_test_result(ready_db, user.id, r)
    assert updated.average_score == 73


def test_failed_stats_update_keeps_history_unchanged(ready_db, user, monkeypatch):
    add_test_result(ready_db, user.id, _scored(Subject.APTITUDE, 5))

    def broken(results):
        raise RuntimeError("disk full")

    monkeypatch.setattr("skiloovate.store.lifetime_average", broken)
    with pytest.raises(RuntimeError):
        add_test_result(ready_db, user.id, _scored(Subject.TECHNICAL, 9))
    assert len(get_test_results(ready_db, user.id)) == 1
    refreshed = get_user(ready_db, user.id)
    assert refreshed.tests_completed == 1
    assert refreshed.average_score == 50
