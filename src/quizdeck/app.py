"""Interactive CLI application."""
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from quizdeck.api import QuestionApi
from quizdeck.config import load_config
from quizdeck.errors import ValidationError
from quizdeck.session import Notice, StudySession
from quizdeck.stats import progress_color, progress_label

console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def show_notice(notice: Notice) -> None:
    color = "red" if notice.level == "error" else "green"
    console.print(f"[{color}]{escape(notice.message)}[/{color}]")


def show_welcome():
    console.print(Panel(
        "[bold]Question Study System[/bold]\n[dim]Spreadsheet format: Topic | Question | Answer[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("topics", "List topics"),
        ("select", "Choose a topic"),
        ("show", "Reveal the answer"),
        ("known", "Mark as known"),
        ("skip", "Skip without revealing"),
        ("next", "Next question"),
        ("prev", "Previous question"),
        ("stats", "Progress for this topic"),
        ("upload", "Upload a spreadsheet"),
        ("clear", "Delete all data"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<10}[/cyan] {desc}")


def show_card(session: StudySession) -> None:
    question = session.current_question
    if question is None:
        if session.selected_topic:
            console.print("[yellow]No questions in this topic.[/yellow]")
        return
    index, total = session.position
    stats = session.stats
    body = f"[bold]{escape(question.question)}[/bold]"
    if session.show_answer:
        body += f"\n\n[green]{escape(question.answer)}[/green]"
    status = "[green]known[/green]" if question.known else "[dim]not known yet[/dim]"
    console.print(Panel(
        body,
        title=f"Question {index} of {total}",
        subtitle=f"Topic: {escape(question.topic)} | views: {question.view_count} | {status}",
        border_style="green" if session.show_answer else "cyan",
    ))
    console.print(f"[dim]Known {stats.known}/{stats.total} ({stats.pct}%)[/dim]")


def cmd_topics(session: StudySession):
    topics = session.load_topics()
    if topics is None:
        return
    if not topics:
        console.print("[yellow]No topics yet. Upload a spreadsheet first.[/yellow]")
        return
    for i, topic in enumerate(topics, 1):
        marker = " ←" if topic == session.selected_topic else ""
        console.print(f"  [cyan]{i}[/cyan]) {escape(topic)}{marker}")


def cmd_select(session: StudySession):
    if not session.topics:
        session.load_topics()
    topics = session.topics
    if not topics:
        console.print("[yellow]No topics available.[/yellow]")
        return
    for i, topic in enumerate(topics, 1):
        console.print(f"  [cyan]{i}[/cyan]) {escape(topic)}")
    choice = Prompt.ask("Select topic", choices=[str(i) for i in range(1, len(topics) + 1)])
    session.select_topic(topics[int(choice) - 1])
    show_card(session)


def cmd_show(session: StudySession):
    if session.current_question is None:
        console.print("[yellow]Select a topic first.[/yellow]")
        return
    session.reveal()
    show_card(session)


def cmd_known(session: StudySession):
    question = session.current_question
    if question is None:
        console.print("[yellow]Select a topic first.[/yellow]")
        return
    if question.known:
        console.print("[dim]Already known.[/dim]")
        return
    session.mark_known()
    show_card(session)


def cmd_move(session: StudySession, step: str):
    if session.current_question is None:
        console.print("[yellow]Select a topic first.[/yellow]")
        return
    if step == "skip" and session.show_answer:
        console.print("[dim]Answer already shown, use 'next'.[/dim]")
        return
    if not session.can_navigate:
        console.print("[dim]Only one question in this topic.[/dim]")
    {"next": session.next, "prev": session.prev, "skip": session.skip}[step]()
    show_card(session)


def cmd_stats(session: StudySession):
    stats = session.stats
    color = progress_color(stats.pct)
    table = Table(title=f"Progress: {escape(session.selected_topic or 'no topic')}")
    table.add_column("Total", justify="right")
    table.add_column("Known", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Status")
    table.add_row(
        str(stats.total), str(stats.known), f"{stats.pct}%",
        f"[{color}]{progress_label(stats.pct)}[/{color}]",
    )
    console.print(table)


def cmd_upload(session: StudySession):
    file_path = Prompt.ask("Spreadsheet path (.xlsx, .xls)").strip()
    if not file_path:
        raise ValidationError("No file selected")
    if not Path(file_path).is_file():
        raise ValidationError(f"File not found: {file_path}")
    session.choose_file(file_path)
    session.upload()


def cmd_clear(session: StudySession):
    session.clear_all(lambda: Confirm.ask("Delete all questions? This cannot be undone", default=False))


COMMANDS = {
    "topics": cmd_topics,
    "select": cmd_select,
    "show": cmd_show,
    "known": cmd_known,
    "next": lambda s: cmd_move(s, "next"),
    "prev": lambda s: cmd_move(s, "prev"),
    "skip": lambda s: cmd_move(s, "skip"),
    "stats": cmd_stats,
    "upload": cmd_upload,
    "clear": cmd_clear,
}


def main():
    config = load_config()
    configure_logging(config.log_level)
    session = StudySession(QuestionApi(config.api_url, timeout=config.timeout))
    session.subscribe(show_notice)

    show_welcome()
    session.load_topics()

    while True:
        show_menu()
        default = "select" if session.current_question is None else "show"
        choice = Prompt.ask("\n[bold]>[/bold]", default=default).strip().lower()
        if choice in ("quit", "exit", "q"):
            console.print("[dim]Bye![/dim]")
            break
        command = COMMANDS.get(choice)
        if command is None:
            console.print("[red]Unknown command. Try again.[/red]")
            continue
        try:
            command(session)
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except ValidationError as e:
            console.print(f"[yellow]{escape(str(e))}[/yellow]")
        except Exception as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")


if __name__ == "__main__":
    main()
