# tests/test_breakdown.py
from skiloovate.bank import get_questions
from skiloovate.breakdown import breakdown, tier_accuracy
from skiloovate.models import Difficulty, Question, Subject, TierStats
from skiloovate.scoring import score


def _q(qid, difficulty):
    return Question(qid, "prompt", ("a", "b", "c", "d"), 0, Subject.TECHNICAL, difficulty)


def test_breakdown_counts_per_tier():
    questions = (
        [_q(f"e{i}", Difficulty.EASY) for i in range(5)]
        + [_q(f"m{i}", Difficulty.MEDIUM) for i in range(3)]
        + [_q(f"h{i}", Difficulty.HARD) for i in range(2)]
    )
    selections = {"e0": 0, "e1": 0, "e2": 0, "e3": 0, "e4": 1, "m0": 0, "m1": 2}
    result = score(questions, selections, 100)
    tiers = breakdown(questions, result.answers)
    assert tiers[Difficulty.EASY] == TierStats(total=5, correct=4)
    assert tiers[Difficulty.MEDIUM] == TierStats(total=3, correct=1)
    assert tiers[Difficulty.HARD] == TierStats(total=2, correct=0)
    assert tiers[Difficulty.EASY].accuracy == 80.0
    assert round(tiers[Difficulty.MEDIUM].accuracy) == 33
    assert tiers[Difficulty.HARD].accuracy == 0.0


def test_breakdown_conserves_totals():
    questions = get_questions(Subject.APTITUDE)
    selections = {q.id: q.correct_option_index for q in questions[::2]}
    result = score(questions, selections, 200)
    tiers = breakdown(questions, result.answers)
    assert sum(t.total for t in tiers.values()) == result.total_questions
    assert sum(t.correct for t in tiers.values()) == result.correct_count


def test_breakdown_reports_empty_tiers():
    questions = [_q("e0", Difficulty.EASY)]
    result = score(questions, {"e0": 0}, 10)
    tiers = breakdown(questions, result.answers)
    assert set(tiers) == set(Difficulty)
    assert tiers[Difficulty.HARD] == TierStats(total=0, correct=0)
    assert tier_accuracy(tiers[Difficulty.HARD]) == 100.0


def test_breakdown_question_without_answer_counts_total_only():
    questions = [_q("e0", Difficulty.EASY), _q("e1", Difficulty.EASY)]
    result = score(questions[:1], {"e0": 0}, 10)
    tiers = breakdown(questions, result.answers)
    assert tiers[Difficulty.EASY] == TierStats(total=2, correct=1)
