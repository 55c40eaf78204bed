# tests/test_integration.py
"""End-to-end flow: account, timed test, history, assistant and report."""
from skiloovate.assistant import respond
from skiloovate.auth import get_current_user, login, logout, signup
from skiloovate.bank import get_test, questions_for_test
from skiloovate.dashboard import get_dashboard_stats
from skiloovate.recommend import recommend_for_result
from skiloovate.report import export_result_pdf
from skiloovate.session import TestSession
from skiloovate.store import add_test_result, get_test_results


def _take(db, user, test_id, correct, seconds):
    now = [0.0]
    test = get_test(test_id)
    session = TestSession(test, questions_for_test(test), user=user, clock=lambda: now[0])
    for q in session.questions[:correct]:
        session.answer(q.correct_option_index)
        session.next()
    now[0] += seconds
    result = session.submit()
    add_test_result(db, user.id, result)
    return result, session.questions


def test_full_flow(ready_db, tmp_path):
    user = signup(ready_db, "ana@example.com", "secret", "Ana", "B.Tech")
    logout(ready_db)
    assert get_current_user(ready_db) is None
    user = login(ready_db, "ana@example.com", "secret")
    assert get_current_user(ready_db) == user

    apt, apt_questions = _take(ready_db, user, "aptitude-test", 9, 200)
    tech, _ = _take(ready_db, user, "technical-test", 4, 600)

    stats = get_dashboard_stats(ready_db, user.id)
    assert stats["tests_completed"] == 2
    assert stats["average_score"] == 65
    assert stats["aptitude_average"] == 90
    assert stats["technical_average"] == 40
    assert [r.id for r in stats["recent"]] == [tech.id, apt.id]

    titles = [r.title for r in recommend_for_result(apt, apt_questions)]
    assert "Slow Down" in titles

    history = get_test_results(ready_db, user.id)
    assert "Technical: 40%" in respond("how am I doing?", history, user.name)
    assert "technical" in respond("give me some tips", history, user.name).lower()

    out = export_result_pdf(apt, apt_questions, tmp_path / "apt.pdf", user=user)
    assert out.read_bytes().startswith(b"%PDF")
