"""In-memory answer collection for a test in progress."""
from skiloovate.models import UNANSWERED


class AnswerCollector:
    """Tracks the option picked for each question until the test is scored."""

    def __init__(self, questions):
        self._questions = {q.id: q for q in questions}
        self._selections: dict[str, int] = {}

    @property
    def total_questions(self) -> int:
        return len(self._questions)

    def select(self, question_id: str, option_index: int) -> None:
        question = self._questions.get(question_id)
        if question is None:
            raise ValueError(f"Unknown question: {question_id}")
        if not 0 <= option_index < len(question.options):
            raise ValueError(f"Option {option_index} out of range for question {question_id}")
        self._selections[question_id] = option_index

    def clear(self, question_id: str) -> None:
        self._selections.pop(question_id, None)

    def selection_for(self, question_id: str) -> int:
        return self._selections.get(question_id, UNANSWERED)

    def is_answered(self, question_id: str) -> bool:
        return question_id in self._selections

    def answered_count(self) -> int:
        return len(self._selections)

    def unanswered_count(self) -> int:
        return self.total_questions - self.answered_count()

    def selections(self) -> dict[str, int]:
        return dict(self._selections)
