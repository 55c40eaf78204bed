"""Data classes for the assessment domain model."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

UNANSWERED = -1
OPTION_COUNT = 4


class Subject(str, Enum):
    APTITUDE = "aptitude"
    TECHNICAL = "technical"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


@dataclass(frozen=True)
class Question:
    id: str
    prompt: str
    options: tuple
    correct_option_index: int
    subject: Subject
    difficulty: Difficulty

    def __post_init__(self):
        if len(self.options) != OPTION_COUNT:
            raise ValueError(f"Question {self.id} must have {OPTION_COUNT} options, got {len(self.options)}")
        if not 0 <= self.correct_option_index < OPTION_COUNT:
            raise ValueError(f"Question {self.id} has correct option {self.correct_option_index} out of range")
        # Normalize so string tags from a catalog file become enum members.
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "subject", Subject(self.subject))
        object.__setattr__(self, "difficulty", Difficulty(self.difficulty))


@dataclass(frozen=True)
class AnswerRecord:
    question_id: str
    selected_option_index: int
    is_correct: bool

    @property
    def is_answered(self) -> bool:
        return self.selected_option_index != UNANSWERED


@dataclass(frozen=True)
class TestResult:
    __test__ = False

    id: str
    subject: Subject
    total_questions: int
    correct_count: int
    wrong_count: int
    elapsed_seconds: int
    completed_at: str
    answers: tuple = ()
    unanswered_count: int = 0

    @property
    def percentage(self) -> float:
        if self.total_questions == 0:
            return 0.0
        return self.correct_count / self.total_questions * 100

    @property
    def answered_wrong_count(self) -> int:
        """Wrong answers the user actually picked, excluding blanks."""
        return self.wrong_count - self.unanswered_count


@dataclass(frozen=True)
class TierStats:
    total: int = 0
    correct: int = 0

    @property
    def accuracy(self) -> float:
        # An empty tier carries no penalty.
        if self.total == 0:
            return 100.0
        return self.correct / self.total * 100


@dataclass(frozen=True)
class Recommendation:
    title: str
    description: str
    priority: Priority
    category: str


@dataclass
class User:
    id: str
    email: str
    name: str
    course: str = ""
    enrollment_date: Optional[str] = None
    tests_completed: int = 0
    average_score: int = 0


@dataclass(frozen=True)
class TestInfo:
    __test__ = False

    id: str
    title: str
    description: str
    subject: Subject
    duration_minutes: int
    question_count: int
    difficulty: Difficulty = Difficulty.MEDIUM

    @property
    def duration_seconds(self) -> int:
        return self.duration_minutes * 60

