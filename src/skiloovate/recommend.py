"""Rule-based study recommendations for a scored test."""
from dataclasses import dataclass

from skiloovate.breakdown import breakdown
from skiloovate.models import Difficulty, Priority, Recommendation, Subject, TierStats

MAX_RECOMMENDATIONS = 4
DEFAULT_RUSHED_SECONDS_PER_QUESTION = 30

EASY_THRESHOLD = 70
MEDIUM_THRESHOLD = 60
HARD_THRESHOLD = 50
EXCELLENCE_THRESHOLD = 70


@dataclass(frozen=True)
class Performance:
    subject: Subject
    easy: float
    medium: float
    hard: float
    overall: float
    elapsed_seconds: int
    total_questions: int
    rushed_seconds_per_question: int


def _fundamentals(p: Performance) -> Recommendation:
    if p.subject is Subject.APTITUDE:
        desc = "Review basic arithmetic, percentages and ratios until easy questions feel automatic."
    else:
        desc = "Revisit core programming concepts: data types, control flow and common web terms."
    return Recommendation("Strengthen Fundamentals", desc, Priority.HIGH, "fundamentals")


def _medium_tier(p: Performance) -> Recommendation:
    if p.subject is Subject.APTITUDE:
        return Recommendation(
            "Improve Problem Solving",
            "Practice multi-step word problems such as time and work, ratios and number series.",
            Priority.MEDIUM, "problem_solving",
        )
    return Recommendation(
        "Practice Data Structures",
        "Work through stacks, queues and lookups, and trace how each operation behaves.",
        Priority.MEDIUM, "problem_solving",
    )


def _hard_tier(p: Performance) -> Recommendation:
    if p.subject is Subject.APTITUDE:
        return Recommendation(
            "Challenge Yourself",
            "Attempt harder puzzles and averages problems once the basics are solid.",
            Priority.LOW, "challenge",
        )
    return Recommendation(
        "Master Algorithms",
        "Study sorting and searching algorithms and compare their time complexity.",
        Priority.LOW, "challenge",
    )


def _excellence(p: Performance) -> Recommendation:
    if p.subject is Subject.APTITUDE:
        return Recommendation(
            "Maintain Excellence",
            "Great score. Keep a short daily practice routine to stay sharp.",
            Priority.LOW, "excellence",
        )
    return Recommendation(
        "Keep Building",
        "Strong result. Apply what you know in a small project to go further.",
        Priority.LOW, "excellence",
    )


def _slow_down(p: Performance) -> Recommendation:
    return Recommendation(
        "Slow Down",
        "You finished quickly. Take a little more time per question to avoid careless mistakes.",
        Priority.MEDIUM, "pace",
    )


def _hands_on(p: Performance) -> Recommendation:
    return Recommendation(
        "Hands-on Practice",
        "Write code every day on a coding platform or a side project to reinforce concepts.",
        Priority.MEDIUM, "practice",
    )


def _is_rushed(p: Performance) -> bool:
    return p.elapsed_seconds < p.total_questions * p.rushed_seconds_per_question


# Evaluated in order; every rule that matches contributes one item.
RULES = [
    (lambda p: p.easy < EASY_THRESHOLD, _fundamentals),
    (lambda p: p.medium < MEDIUM_THRESHOLD, _medium_tier),
    (lambda p: p.hard < HARD_THRESHOLD, _hard_tier),
    (lambda p: p.overall >= EXCELLENCE_THRESHOLD, _excellence),
    (lambda p: p.subject is Subject.APTITUDE and _is_rushed(p), _slow_down),
    (lambda p: p.subject is Subject.TECHNICAL, _hands_on),
]


def recommend(
    subject: Subject,
    tiers: dict[Difficulty, TierStats],
    overall_percentage: float,
    elapsed_seconds: int,
    total_questions: int,
    *,
    rushed_seconds_per_question: int = DEFAULT_RUSHED_SECONDS_PER_QUESTION,
) -> list[Recommendation]:
    """Return up to four recommendations, highest priority first.

    Ties keep rule order. Tiers missing from ``tiers`` or with no questions
    count as 100% accurate.
    """
    empty = TierStats()
    perf = Performance(
        subject=Subject(subject),
        easy=tiers.get(Difficulty.EASY, empty).accuracy,
        medium=tiers.get(Difficulty.MEDIUM, empty).accuracy,
        hard=tiers.get(Difficulty.HARD, empty).accuracy,
        overall=overall_percentage,
        elapsed_seconds=elapsed_seconds,
        total_questions=total_questions,
        rushed_seconds_per_question=rushed_seconds_per_question,
    )
    fired = [build(perf) for matches, build in RULES if matches(perf)]
    fired.sort(key=lambda r: r.priority.rank)
    return fired[:MAX_RECOMMENDATIONS]


def recommend_for_result(result, questions, **kwargs) -> list[Recommendation]:
    """Convenience wrapper that derives the breakdown from a scored result."""
    return recommend(
        result.subject,
        breakdown(questions, result.answers),
        result.percentage,
        result.elapsed_seconds,
        result.total_questions,
        **kwargs,
    )
