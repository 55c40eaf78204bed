"""A single timed attempt at a test, from start to submission."""
import logging
import time

from skiloovate.collector import AnswerCollector
from skiloovate.models import TestInfo, TestResult, User
from skiloovate.scoring import round_half_up, score

logger = logging.getLogger(__name__)


class TestSession:
    """Holds the state of one test attempt.

    The clock is injectable so timeouts can be driven without sleeping.
    Scoring happens exactly once; later ``submit``/``expire`` calls return the
    same result.
    """

    __test__ = False

    def __init__(self, test: TestInfo, questions, user: User | None = None, clock=time.monotonic):
        self.test = test
        self.questions = tuple(questions)
        self.user = user
        self.collector = AnswerCollector(self.questions)
        self.current_index = 0
        self.result: TestResult | None = None
        self.timed_out = False
        self._clock = clock
        self._started_at = clock()

    @property
    def current_question(self):
        return self.questions[self.current_index]

    @property
    def is_submitted(self) -> bool:
        return self.result is not None

    def next(self) -> None:
        if self.current_index < len(self.questions) - 1:
            self.current_index += 1

    def prev(self) -> None:
        if self.current_index > 0:
            self.current_index -= 1

    def goto(self, index: int) -> None:
        if not 0 <= index < len(self.questions):
            raise ValueError(f"Question index {index} out of range")
        self.current_index = index

    def answer(self, option_index: int) -> None:
        if self.is_submitted:
            raise RuntimeError("Test already submitted")
        self.collector.select(self.current_question.id, option_index)

    def elapsed_seconds(self) -> int:
        return max(0, round_half_up(self._clock() - self._started_at))

    def time_left(self) -> int:
        return max(0, self.test.duration_seconds - self.elapsed_seconds())

    def is_expired(self) -> bool:
        return self.time_left() <= 0

    def submit(self) -> TestResult:
        if self.result is None:
            elapsed = min(self.elapsed_seconds(), self.test.duration_seconds)
            self.result = score(
                self.questions, self.collector.selections(), elapsed, subject=self.test.subject,
            )
            logger.info(
                "Submitted %s: %d/%d correct, %d unanswered, %ds",
                self.test.id, self.result.correct_count, self.result.total_questions,
                self.result.unanswered_count, self.result.elapsed_seconds,
            )
        return self.result

    def expire(self) -> TestResult:
        """Force submission when the timer runs out, keeping whatever was answered."""
        if self.result is None:
            self.timed_out = True
            logger.warning("Time's up on %s, submitting %d answered", self.test.id, self.collector.answered_count())
        return self.submit()
