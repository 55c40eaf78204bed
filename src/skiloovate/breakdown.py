"""Per-difficulty accuracy for a scored test."""
from skiloovate.models import Difficulty, TierStats


def breakdown(questions, answers) -> dict[Difficulty, TierStats]:
    """Count total and correct answers per difficulty tier.

    Every tier is present in the result, empty ones as 0/0. Answers are
    matched to questions by question id.
    """
    correct_by_id = {a.question_id: a.is_correct for a in answers}
    totals = {tier: 0 for tier in Difficulty}
    correct = {tier: 0 for tier in Difficulty}
    for q in questions:
        totals[q.difficulty] += 1
        if correct_by_id.get(q.id, False):
            correct[q.difficulty] += 1
    return {tier: TierStats(total=totals[tier], correct=correct[tier]) for tier in Difficulty}


def tier_accuracy(stats: TierStats) -> float:
    return stats.accuracy
