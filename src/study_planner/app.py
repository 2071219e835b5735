"""Interactive CLI application."""
import logging
import math
import random
from datetime import date

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from study_planner.catalog import (
    active_subject, add_chapter, add_subject, new_catalog, remove_chapter,
    remove_subject, select_subject,
)
from study_planner.config import (
    DEFAULT_PRIORITY, MAX_PRIORITY, MIN_PRIORITY, get_default_daily_hours, get_log_level,
)
from study_planner.models import Catalog, Chapter, StudySession, Subject
from study_planner.scheduler import generate_plan
from study_planner.summary import (
    days_until_exam, hours_by_date, plan_end_date, sessions_after_exam, total_hours,
)

console = Console()


def configure_logging(level: str | None = None) -> None:
    level = level or get_log_level()
    if not level:
        return
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def format_hours(hours: float) -> str:
    return f"{round(hours, 2):g}h"


def show_welcome():
    console.print(Panel(
        "[bold]Study Planner[/bold]\n[dim]Exam-driven day-by-day schedule[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("subjects", "List subjects and chapters"),
        ("add-subject", "Add a subject with an exam date"),
        ("add-chapter", "Add a chapter to the active subject"),
        ("select", "Choose the active subject"),
        ("remove-subject", "Delete a subject"),
        ("remove-chapter", "Delete a chapter"),
        ("hours", "Set daily study hours"),
        ("plan", "Generate the study plan"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<16}[/cyan] {desc}")


def parse_exam_date(text: str) -> date | None:
    try:
        return date.fromisoformat(text.strip())
    except ValueError:
        return None


def parse_hours(text: str) -> float | None:
    try:
        return float(text.strip())
    except ValueError:
        return None


def choose_subject(catalog: Catalog, title: str = "Select subject") -> Subject | None:
    if not catalog.subjects:
        console.print("[yellow]No subjects yet. Use 'add-subject' first.[/yellow]")
        return None
    for i, subject in enumerate(catalog.subjects, 1):
        console.print(f"  [cyan]{i}[/cyan]) [{subject.color}]{subject.name}[/{subject.color}]")
    choice = Prompt.ask(title, choices=[str(i) for i in range(1, len(catalog.subjects) + 1)])
    return catalog.subjects[int(choice) - 1]


def choose_chapter(subject: Subject) -> Chapter | None:
    if not subject.chapters:
        console.print(f"[yellow]{subject.name} has no chapters.[/yellow]")
        return None
    for i, chapter in enumerate(subject.chapters, 1):
        console.print(f"  [cyan]{i}[/cyan]) {chapter.name} (P{chapter.priority}, {format_hours(chapter.estimated_hours)})")
    choice = Prompt.ask("Select chapter", choices=[str(i) for i in range(1, len(subject.chapters) + 1)])
    return subject.chapters[int(choice) - 1]


def cmd_subjects(catalog: Catalog, today: date | None = None) -> None:
    if not catalog.subjects:
        console.print("[yellow]No subjects yet.[/yellow]")
        return
    table = Table(title="Subjects")
    table.add_column("Subject")
    table.add_column("Exam")
    table.add_column("Days Left", justify="right")
    table.add_column("Chapter")
    table.add_column("Priority", justify="right")
    table.add_column("Hours", justify="right")
    for subject in catalog.subjects:
        marker = " ←" if subject.id == catalog.active_subject_id else ""
        days = days_until_exam(subject, today)
        name = f"[{subject.color}]{subject.name}[/{subject.color}]{marker}"
        exam = subject.exam_date.isoformat() if subject.exam_date else "-"
        days_left = str(days) if days is not None else "-"
        if not subject.chapters:
            table.add_row(name, exam, days_left, "[dim]none[/dim]", "", "")
            continue
        for i, chapter in enumerate(subject.chapters):
            table.add_row(
                name if i == 0 else "",
                exam if i == 0 else "",
                days_left if i == 0 else "",
                chapter.name,
                str(chapter.priority),
                format_hours(chapter.estimated_hours),
            )
    console.print(table)
    console.print(f"  Total workload: [bold]{format_hours(total_hours(catalog.subjects))}[/bold]")


def cmd_add_subject(catalog: Catalog, rng: random.Random | None = None) -> Catalog:
    name = Prompt.ask("Subject name")
    exam_date = parse_exam_date(Prompt.ask("Exam date (YYYY-MM-DD)"))
    if exam_date is None:
        console.print("[red]Invalid date. Use YYYY-MM-DD.[/red]")
        return catalog
    updated = add_subject(catalog, name, exam_date, rng=rng)
    if updated is catalog:
        console.print("[red]Subject name is required.[/red]")
    else:
        console.print(f"[green]Added {active_subject(updated).name}.[/green]")
    return updated


def cmd_add_chapter(catalog: Catalog, rng: random.Random | None = None) -> Catalog:
    subject = active_subject(catalog)
    if subject is None:
        console.print("[yellow]No active subject. Use 'add-subject' or 'select' first.[/yellow]")
        return catalog
    console.print(f"Adding to [{subject.color}]{subject.name}[/{subject.color}]")
    name = Prompt.ask("Chapter name")
    priority = int(Prompt.ask(
        f"Priority ({MIN_PRIORITY}=low, {MAX_PRIORITY}=urgent)",
        choices=[str(p) for p in range(MIN_PRIORITY, MAX_PRIORITY + 1)],
        default=str(DEFAULT_PRIORITY),
    ))
    hours = parse_hours(Prompt.ask("Estimated hours"))
    if hours is None:
        console.print("[red]Hours must be a number.[/red]")
        return catalog
    updated = add_chapter(catalog, name, priority, hours, rng=rng)
    if updated is catalog:
        console.print("[red]Chapter needs a name and non-negative hours.[/red]")
    else:
        console.print(f"[green]Added {name.strip()} to {subject.name}.[/green]")
    return updated


def cmd_select(catalog: Catalog) -> Catalog:
    subject = choose_subject(catalog)
    if subject is None:
        return catalog
    return select_subject(catalog, subject.id)


def cmd_remove_subject(catalog: Catalog) -> Catalog:
    subject = choose_subject(catalog, "Remove subject")
    if subject is None:
        return catalog
    console.print(f"[green]Removed {subject.name}.[/green]")
    return remove_subject(catalog, subject.id)


def cmd_remove_chapter(catalog: Catalog) -> Catalog:
    subject = choose_subject(catalog)
    if subject is None:
        return catalog
    chapter = choose_chapter(subject)
    if chapter is None:
        return catalog
    console.print(f"[green]Removed {chapter.name} from {subject.name}.[/green]")
    return remove_chapter(catalog, subject.id, chapter.id)


def cmd_hours(daily_hours: float) -> float:
    hours = parse_hours(Prompt.ask("Daily study hours", default=f"{daily_hours:g}"))
    if hours is None or not math.isfinite(hours) or hours <= 0:
        console.print("[red]Daily hours must be a positive number.[/red]")
        return daily_hours
    return hours


def render_plan(plan: list[StudySession], subjects: tuple[Subject, ...]) -> None:
    table = Table(title="Study Plan")
    table.add_column("Date")
    table.add_column("Subject")
    table.add_column("Chapter")
    table.add_column("Hours", justify="right")
    previous = None
    for session in plan:
        table.add_row(
            session.iso_date if session.date != previous else "",
            f"[{session.color}]{session.subject_name}[/{session.color}]",
            session.chapter_name,
            format_hours(session.hours),
        )
        previous = session.date
    console.print(table)
    days = len(hours_by_date(plan))
    console.print(f"  {len(plan)} sessions over {days} day(s), ending {plan_end_date(plan).isoformat()}")
    late = sessions_after_exam(plan, subjects)
    if late:
        names = sorted({s.subject_name for s in late})
        console.print(f"  [yellow]Warning: study runs past the exam for {', '.join(names)}[/yellow]")


def cmd_plan(catalog: Catalog, daily_hours: float, today: date | None = None) -> list[StudySession]:
    plan = generate_plan(catalog.subjects, daily_hours, today=today)
    if not plan:
        console.print("[yellow]Nothing to plan. Add chapters first.[/yellow]")
        return plan
    render_plan(plan, catalog.subjects)
    return plan


def main():
    configure_logging()
    catalog = new_catalog()
    rng = random.Random()
    daily_hours = get_default_daily_hours()

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="subjects").strip().lower()
        try:
            if choice == "subjects":
                cmd_subjects(catalog)
            elif choice == "add-subject":
                catalog = cmd_add_subject(catalog, rng)
            elif choice == "add-chapter":
                catalog = cmd_add_chapter(catalog, rng)
            elif choice == "select":
                catalog = cmd_select(catalog)
            elif choice == "remove-subject":
                catalog = cmd_remove_subject(catalog)
            elif choice == "remove-chapter":
                catalog = cmd_remove_chapter(catalog)
            elif choice == "hours":
                daily_hours = cmd_hours(daily_hours)
                console.print(f"[green]Daily budget: {format_hours(daily_hours)}[/green]")
            elif choice == "plan":
                cmd_plan(catalog, daily_hours)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Good luck on your exams![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
