"""PDF export of a scored test result."""
import logging
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from skiloovate.breakdown import breakdown
from skiloovate.models import UNANSWERED, TestResult, User
from skiloovate.recommend import recommend_for_result
from skiloovate.scoring import format_duration, get_score_message, round_half_up

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 20 * mm
LINE_HEIGHT = 6 * mm
WRAP_CHARS = 95


def _wrap(text: str, width: int = WRAP_CHARS) -> list[str]:
    lines, current = [], ""
    for word in text.split():
        if current and len(current) + 1 + len(word) > width:
            lines.append(current)
            current = word
        else:
            current = f"{current} {word}" if current else word
    if current:
        lines.append(current)
    return lines or [""]


class _Writer:
    """Line-oriented cursor over a reportlab canvas that starts new pages as needed."""

    def __init__(self, out_path: str):
        self.canvas = canvas.Canvas(out_path, pagesize=A4)
        self.pages = 1
        self.y = PAGE_HEIGHT - MARGIN

    def line(self, text: str = "", font: str = "Helvetica", size: int = 10, indent: float = 0) -> None:
        if self.y < MARGIN:
            self.canvas.showPage()
            self.pages += 1
            self.y = PAGE_HEIGHT - MARGIN
        self.canvas.setFont(font, size)
        self.canvas.drawString(MARGIN + indent, self.y, text)
        self.y -= LINE_HEIGHT

    def paragraph(self, text: str, **kwargs) -> None:
        for part in _wrap(text):
            self.line(part, **kwargs)

    def heading(self, text: str) -> None:
        self.y -= LINE_HEIGHT / 2
        self.line(text, font="Helvetica-Bold", size=13)

    def save(self) -> None:
        self.canvas.save()


def export_result_pdf(result: TestResult, questions, out_path, user: User | None = None, **recommend_kwargs) -> Path:
    """Write a paginated report for ``result`` and return the output path."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    w = _Writer(str(out_path))

    w.line("Skiloovate Assessment Report", font="Helvetica-Bold", size=18)
    if user is not None:
        w.line(f"Candidate: {user.name} <{user.email}>")
        if user.course:
            w.line(f"Course: {user.course}")
    w.line(f"Test: {result.subject.value.capitalize()} Assessment")
    w.line(f"Completed: {result.completed_at}")

    w.heading("Summary")
    w.line(f"Score: {round_half_up(result.percentage)}%  ({get_score_message(result.percentage)})")
    w.line(f"Correct: {result.correct_count}")
    w.line(f"Wrong: {result.answered_wrong_count}")
    w.line(f"Unanswered: {result.unanswered_count}")
    w.line(f"Total questions: {result.total_questions}")
    w.line(f"Time taken: {format_duration(result.elapsed_seconds)}")

    w.heading("Difficulty Breakdown")
    for tier, stats in breakdown(questions, result.answers).items():
        if stats.total:
            w.line(f"{tier.value.capitalize()}: {stats.correct}/{stats.total} ({round_half_up(stats.accuracy)}%)")
        else:
            w.line(f"{tier.value.capitalize()}: no questions")

    recommendations = recommend_for_result(result, questions, **recommend_kwargs)
    if recommendations:
        w.heading("Recommendations")
        for rec in recommendations:
            w.line(f"[{rec.priority.value.upper()}] {rec.title}", font="Helvetica-Bold")
            w.paragraph(rec.description)

    w.heading("Answer Review")
    answers = {a.question_id: a for a in result.answers}
    for number, q in enumerate(questions, 1):
        answer = answers.get(q.id)
        selected = answer.selected_option_index if answer else UNANSWERED
        status = "Correct" if answer and answer.is_correct else "Incorrect"
        w.paragraph(f"Q{number}. ({q.difficulty.value}) {q.prompt}", font="Helvetica-Bold")
        if selected == UNANSWERED:
            w.line("Your answer: Not answered", indent=4 * mm)
        else:
            w.line(f"Your answer: {chr(65 + selected)}. {q.options[selected]}  [{status}]", indent=4 * mm)
        w.line(
            f"Correct answer: {chr(65 + q.correct_option_index)}. {q.options[q.correct_option_index]}",
            indent=4 * mm,
        )

    w.save()
    logger.info("Exported result %s to %s (%d pages)", result.id, out_path, w.pages)
    return out_path
