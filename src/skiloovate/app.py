"""Interactive CLI application."""
import logging
import time
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from skiloovate.assistant import GREETING, respond
from skiloovate.auth import get_current_user, login, logout, signup
from skiloovate.bank import available_tests, get_test, questions_for_test
from skiloovate.breakdown import breakdown
from skiloovate.config import load_config
from skiloovate.dashboard import get_dashboard_stats
from skiloovate.db import init_db
from skiloovate.models import UNANSWERED, Priority
from skiloovate.recommend import recommend_for_result
from skiloovate.report import export_result_pdf
from skiloovate.scoring import format_duration, get_score_color, get_score_message, round_half_up
from skiloovate.session import TestSession
from skiloovate.store import add_test_result, clear_test_results, get_test_results

console = Console()
logger = logging.getLogger(__name__)

EXIT_WORDS = ("q", "quit", "menu")
OPTION_LETTERS = "abcd"
PRIORITY_STYLE = {Priority.HIGH: "red", Priority.MEDIUM: "yellow", Priority.LOW: "cyan"}


class SessionExitRequested(Exception):
    """Raised when the user leaves a test or chat before finishing."""


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def format_clock(seconds: int) -> str:
    mins, secs = divmod(int(seconds), 60)
    return f"{mins}:{secs:02d}"


def show_welcome():
    console.print(Panel(
        "[bold]Skiloovate[/bold]\n[dim]Aptitude & Technical Assessments[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu(user):
    console.print("\n[bold]Commands:[/bold]")
    if user is None:
        commands = [
            ("signup", "Create an account"),
            ("login", "Log in"),
            ("quit", "Exit"),
        ]
    else:
        commands = [
            ("test", "Take an assessment"),
            ("dashboard", "Scores and recent results"),
            ("profile", "Your account and test history"),
            ("chat", "Ask the learning assistant"),
            ("export", "Save a result as PDF"),
            ("reset", "Clear your test history"),
            ("logout", "Log out"),
            ("quit", "Exit"),
        ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def show_question(session: TestSession) -> None:
    q = session.current_question
    total = len(session.questions)
    left = session.time_left()
    clock_style = "red" if left < 60 else "yellow" if left < 300 else "green"
    console.print(
        f"\n[bold]Question {session.current_index + 1} of {total}[/bold]  "
        f"[dim]{session.collector.answered_count()} answered[/dim]  "
        f"[{clock_style}]{format_clock(left)}[/{clock_style}]  [dim]{q.difficulty.value}[/dim]"
    )
    console.print(f"{q.prompt}\n")
    selected = session.collector.selection_for(q.id)
    for i, option in enumerate(q.options):
        marker = "[green]*[/green]" if i == selected else " "
        console.print(f" {marker} [cyan]{OPTION_LETTERS[i]})[/cyan] {option}")


def run_test_session(session: TestSession):
    """Drive a test until it is submitted or the timer runs out."""
    while True:
        if session.is_expired():
            console.print("[yellow]Time's up! Submitting your test...[/yellow]")
            return session.expire()
        show_question(session)
        choice = session_prompt(
            "\na-d answer, (n)ext, (p)rev, number to jump, (s)ubmit, (q) abandon"
        ).strip().lower()
        if session.is_expired():
            continue
        if len(choice) == 1 and choice in OPTION_LETTERS:
            session.answer(OPTION_LETTERS.index(choice))
            session.next()
        elif choice == "n":
            session.next()
        elif choice == "p":
            session.prev()
        elif choice.isdigit() and 1 <= int(choice) <= len(session.questions):
            session.goto(int(choice) - 1)
        elif choice == "s":
            unanswered = session.collector.unanswered_count()
            if unanswered:
                plural = "s" if unanswered > 1 else ""
                if not Confirm.ask(
                    f"[yellow]You have {unanswered} unanswered question{plural}. Submit anyway?[/yellow]"
                ):
                    continue
            return session.submit()
        else:
            console.print("[red]Unknown input.[/red]")


def show_results(result, questions, cfg: dict) -> None:
    pct = result.percentage
    color = get_score_color(pct)
    console.print(Panel(
        f"[bold]{get_score_message(pct)}[/bold]\n"
        f"{result.subject.value.capitalize()} Assessment Completed\n\n"
        f"Score: [{color}]{round_half_up(pct)}%[/{color}]   "
        f"Correct: [green]{result.correct_count}[/green]   "
        f"Wrong: [red]{result.answered_wrong_count}[/red]   "
        f"Unanswered: [dim]{result.unanswered_count}[/dim]\n"
        f"Time taken: {format_duration(result.elapsed_seconds)}",
        title="Results", border_style=color,
    ))

    table = Table(title="Difficulty Breakdown")
    table.add_column("Tier", style="cyan")
    table.add_column("Correct", justify="right")
    table.add_column("Accuracy", justify="right")
    for tier, stats in breakdown(questions, result.answers).items():
        accuracy = f"{round_half_up(stats.accuracy)}%" if stats.total else "-"
        table.add_row(tier.value, f"{stats.correct}/{stats.total}", accuracy)
    console.print(table)

    recommendations = recommend_for_result(
        result, questions, rushed_seconds_per_question=cfg["rushed_seconds_per_question"],
    )
    if recommendations:
        console.print("\n[bold]Recommendations[/bold]")
        for rec in recommendations:
            style = PRIORITY_STYLE[rec.priority]
            console.print(f"  [{style}]{rec.priority.value.upper():<6}[/{style}] [bold]{rec.title}[/bold] - {rec.description}")

    console.print("\n[bold]Answer Review[/bold]")
    answers = {a.question_id: a for a in result.answers}
    for number, q in enumerate(questions, 1):
        answer = answers.get(q.id)
        correct_text = f"{OPTION_LETTERS[q.correct_option_index]}) {q.options[q.correct_option_index]}"
        if answer is None or answer.selected_option_index == UNANSWERED:
            console.print(f"  [red]x[/red] Q{number}. {q.prompt}\n     [dim]Not answered.[/dim] Answer: [green]{correct_text}[/green]")
        elif answer.is_correct:
            console.print(f"  [green]v[/green] Q{number}. {q.prompt}")
        else:
            picked = answer.selected_option_index
            console.print(
                f"  [red]x[/red] Q{number}. {q.prompt}\n"
                f"     You chose {OPTION_LETTERS[picked]}) {q.options[picked]}. Answer: [green]{correct_text}[/green]"
            )


def cmd_signup(cfg: dict):
    email = Prompt.ask("Email")
    name = Prompt.ask("Full name")
    course = Prompt.ask("Course", default="")
    password = Prompt.ask("Password", password=True)
    user = signup(cfg["db_path"], email, password, name, course)
    if user is None:
        console.print("[red]An account with that email already exists.[/red]")
        return None
    console.print(f"[green]Welcome, {user.name}![/green]")
    return user


def cmd_login(cfg: dict):
    email = Prompt.ask("Email")
    password = Prompt.ask("Password", password=True)
    user = login(cfg["db_path"], email, password)
    if user is None:
        console.print("[red]Invalid email or password.[/red]")
        return None
    console.print(f"[green]Welcome back, {user.name}![/green]")
    return user


def cmd_test(cfg: dict, user):
    tests = available_tests(cfg["catalog"])
    for t in tests:
        console.print(
            f"  [cyan]{t.id:<16}[/cyan] {t.title} "
            f"[dim]({t.question_count} questions, {t.duration_minutes} min)[/dim]"
        )
    test_id = Prompt.ask("Select test", choices=[t.id for t in tests])
    test = get_test(test_id, cfg["catalog"])
    questions = questions_for_test(test, cfg["catalog"])
    session = TestSession(test, questions, user=user)
    try:
        result = run_test_session(session)
    except SessionExitRequested:
        console.print("[dim]Test abandoned. Nothing was saved.[/dim]")
        return None
    add_test_result(cfg["db_path"], user.id, result)
    show_results(result, questions, cfg)
    return result


def cmd_dashboard(cfg: dict, user):
    stats = get_dashboard_stats(cfg["db_path"], user.id)
    console.print(Panel(f"[bold]Welcome back, {user.name}[/bold]", title="Dashboard", border_style="blue"))
    apt = stats["aptitude_average"]
    tech = stats["technical_average"]
    console.print(
        f"\n  Tests: [bold]{stats['tests_completed']}[/bold]  |  "
        f"Average: [bold]{stats['average_score']}%[/bold]  |  "
        f"Aptitude: [bold]{'-' if apt is None else f'{apt}%'}[/bold]  |  "
        f"Technical: [bold]{'-' if tech is None else f'{tech}%'}[/bold]"
    )
    if not stats["recent"]:
        console.print("\n[yellow]No tests taken yet. Try 'test' to get started.[/yellow]")
        return
    table = Table(title="Recent Results")
    table.add_column("Date")
    table.add_column("Test", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Time", justify="right")
    for r in stats["recent"]:
        color = get_score_color(r.percentage)
        table.add_row(
            r.completed_at[:10], r.subject.value, f"[{color}]{round_half_up(r.percentage)}%[/{color}]",
            format_duration(r.elapsed_seconds),
        )
    console.print(table)


def cmd_profile(cfg: dict, user):
    stats = get_dashboard_stats(cfg["db_path"], user.id)
    enrolled = user.enrollment_date[:10] if user.enrollment_date else "-"
    console.print(Panel(
        f"[bold]{user.name}[/bold]\n{user.email}\nCourse: {user.course or '-'}\nEnrolled: {enrolled}\n\n"
        f"Tests completed: {stats['tests_completed']}   Average: {stats['average_score']}%   "
        f"Best: {stats['best_score']}%",
        title="Profile", border_style="blue",
    ))
    results = get_test_results(cfg["db_path"], user.id)
    if results:
        table = Table(title="Test History")
        table.add_column("#", justify="right")
        table.add_column("Date")
        table.add_column("Test", style="cyan")
        table.add_column("Correct", justify="right")
        table.add_column("Score", justify="right")
        for i, r in enumerate(reversed(results), 1):
            table.add_row(str(i), r.completed_at[:16], r.subject.value, f"{r.correct_count}/{r.total_questions}", f"{round_half_up(r.percentage)}%")
        console.print(table)


def cmd_chat(cfg: dict, user):
    console.print(Panel(GREETING, title="AI Learning Assistant", border_style="magenta"))
    console.print("[dim]Type 'q' to leave the chat.[/dim]")
    while True:
        try:
            message = session_prompt("\n[bold]You[/bold]").strip()
        except SessionExitRequested:
            return
        if not message:
            continue
        history = get_test_results(cfg["db_path"], user.id)
        with console.status("Thinking..."):
            time.sleep(cfg["chat_delay_seconds"])
            reply = respond(message, history, user.name)
        console.print(Panel(reply, border_style="magenta"))


def cmd_export(cfg: dict, user):
    results = get_test_results(cfg["db_path"], user.id)
    if not results:
        console.print("[yellow]No results to export yet.[/yellow]")
        return None
    latest_first = list(reversed(results))
    for i, r in enumerate(latest_first, 1):
        console.print(f"  [cyan]{i}[/cyan]) {r.completed_at[:16]} {r.subject.value} {round_half_up(r.percentage)}%")
    pick = Prompt.ask("Result", choices=[str(i) for i in range(1, len(latest_first) + 1)], default="1")
    result = latest_first[int(pick) - 1]
    test = next((t for t in available_tests(cfg["catalog"]) if t.subject == result.subject), None)
    if test is None:
        console.print(f"[red]The question catalog has no {result.subject.value} test to build the report from.[/red]")
        return None
    questions = questions_for_test(test, cfg["catalog"])
    default_name = f"skiloovate-{result.subject.value}-{datetime.now():%Y%m%d-%H%M%S}.pdf"
    out_path = Prompt.ask("Save to", default=str(Path.cwd() / default_name))
    path = export_result_pdf(
        result, questions, out_path, user=user,
        rushed_seconds_per_question=cfg["rushed_seconds_per_question"],
    )
    console.print(f"[green]Report saved to {path}[/green]")
    return path


def cmd_reset(cfg: dict, user):
    if not get_test_results(cfg["db_path"], user.id):
        console.print("[yellow]Your test history is already empty.[/yellow]")
        return False
    if not Confirm.ask("[yellow]Delete all your test results? This cannot be undone.[/yellow]"):
        return False
    clear_test_results(cfg["db_path"], user.id)
    console.print("[dim]Test history cleared.[/dim]")
    return True


def main():
    cfg = load_config()
    setup_logging(cfg["log_level"])
    init_db(cfg["db_path"])
    show_welcome()

    while True:
        user = get_current_user(cfg["db_path"])
        show_menu(user)
        choice = Prompt.ask("\n[bold]>[/bold]", default="test" if user else "login").strip().lower()
        try:
            if choice in ("quit", "exit", "q"):
                console.print("[dim]Good luck with your preparation![/dim]")
                break
            elif user is None:
                if choice == "signup":
                    cmd_signup(cfg)
                elif choice == "login":
                    cmd_login(cfg)
                else:
                    console.print("[red]Please log in or sign up first.[/red]")
            elif choice == "test":
                cmd_test(cfg, user)
            elif choice == "dashboard":
                cmd_dashboard(cfg, user)
            elif choice == "profile":
                cmd_profile(cfg, user)
            elif choice == "chat":
                cmd_chat(cfg, user)
            elif choice == "export":
                cmd_export(cfg, user)
            elif choice == "reset":
                cmd_reset(cfg, user)
            elif choice == "logout":
                logout(cfg["db_path"])
                console.print("[dim]Logged out.[/dim]")
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.debug("Command %s failed", choice, exc_info=True)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
