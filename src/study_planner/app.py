"""Interactive CLI application."""
import logging
from dataclasses import replace
from datetime import date
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from study_planner.dashboard import (
    calc_history_stats, get_plan_summary, get_progress_color, get_progress_label,
    get_subject_breakdown, get_weekly_hours,
)
from study_planner.db import init_db, resolve_db_path
from study_planner.exam import DEFAULT_EXAM_DAILY_HOURS, generate_exam_timetable
from study_planner.importer import load_subjects_file, write_schedule_csv
from study_planner.models import DailyTask, ExamTimetable, Subject
from study_planner.progress import (
    apply_completed_task, get_tasks_for_date, get_week_dates, mark_task_completed,
    update_topic_progress,
)
from study_planner.reschedule import find_missed_tasks, reschedule_after_missed_tasks
from study_planner.review import calculate_review_schedule
from study_planner.scheduler import generate_schedule
from study_planner.store import (
    add_subject, add_topic, get_completed_tasks, get_latest_exam_timetable, get_latest_plan,
    get_setting, load_subjects, record_completed_task, save_exam_timetable, save_plan,
    save_subjects, set_setting,
)

console = Console()
logger = logging.getLogger("study_planner")

DIFFICULTY_COLORS = {"easy": "green", "medium": "yellow", "hard": "red"}


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def show_welcome():
    console.print(Panel(
        "[bold]Study Planner[/bold]\n[dim]Exam-driven daily schedules[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("subjects", "List subjects and progress"),
        ("add", "Add a subject"),
        ("topic", "Add a topic to a subject"),
        ("progress", "Update a topic's progress"),
        ("generate", "Generate a new schedule"),
        ("plan", "View the current schedule"),
        ("today", "Today's tasks"),
        ("week", "This week's tasks"),
        ("complete", "Mark one of today's tasks done"),
        ("missed", "Reschedule missed tasks"),
        ("review", "Spaced-repetition reviews"),
        ("exam", "Build an exam-week timetable"),
        ("timetable", "View the exam-week timetable"),
        ("export", "Export schedule to CSV"),
        ("import", "Import subjects from JSON/YAML"),
        ("history", "Study history"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def prompt_float(label: str, default: float | None = None) -> float:
    while True:
        value = Prompt.ask(label) if default is None else Prompt.ask(label, default=str(default))
        try:
            return float(value)
        except (TypeError, ValueError):
            console.print("[red]Please enter a number.[/red]")


def choose(items: list, label: str) -> int:
    """Ask for a 1-based choice and return the 0-based index."""
    answer = Prompt.ask(label, choices=[str(i) for i in range(1, len(items) + 1)])
    return int(answer) - 1


def choose_subject(subjects: list[Subject]) -> Subject | None:
    if not subjects:
        console.print("[yellow]No subjects yet. Use 'add' first.[/yellow]")
        return None
    for i, s in enumerate(subjects, 1):
        console.print(f"  [cyan]{i}[/cyan]) {s.name} [dim](exam {s.exam_date})[/dim]")
    return subjects[choose(subjects, "Select subject")]


def render_tasks(tasks: list[DailyTask], title: str) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Date")
    table.add_column("Subject", style="cyan")
    table.add_column("Topic")
    table.add_column("Hours", justify="right")
    table.add_column("Difficulty")
    table.add_column("Status")
    for i, t in enumerate(tasks, 1):
        color = DIFFICULTY_COLORS.get(t.difficulty, "white")
        table.add_row(
            str(i), t.date, t.subject_name, t.topic_title, f"{t.estimated_hours:.2f}",
            f"[{color}]{t.difficulty}[/{color}]",
            "[green]Done[/green]" if t.completed else "",
        )
    return table


def cmd_subjects(db_path: str):
    subjects = load_subjects(db_path)
    if not subjects:
        console.print("[yellow]No subjects yet. Use 'add' to create one.[/yellow]")
        return
    table = Table(title="Subjects")
    table.add_column("Subject", style="cyan")
    table.add_column("Exam")
    table.add_column("Hours/day", justify="right")
    table.add_column("Topics", justify="right")
    table.add_column("Progress")
    for s in subjects:
        color = get_progress_color(s.progress)
        table.add_row(
            s.name, str(s.exam_date), f"{s.daily_hours:g}", str(len(s.topics)),
            f"[{color}]{s.progress:.0f}% {get_progress_label(s.progress)}[/{color}]",
        )
    console.print(table)


def cmd_add_subject(db_path: str):
    name = Prompt.ask("Subject name").strip()
    exam_date = Prompt.ask("Exam date (YYYY-MM-DD)").strip()
    try:
        date.fromisoformat(exam_date)
    except ValueError:
        console.print(f"[red]Not a valid date: {exam_date}[/red]")
        return
    daily_hours = prompt_float("Daily study hours", default=float(get_setting(db_path, "default_daily_hours", "2")))
    add_subject(db_path, name, exam_date, daily_hours)
    console.print(f"[green]Added {name}.[/green]")


def cmd_add_topic(db_path: str):
    subject = choose_subject(load_subjects(db_path))
    if subject is None:
        return
    title = Prompt.ask("Topic title").strip()
    hours = prompt_float("Estimated hours")
    difficulty = Prompt.ask("Difficulty", choices=["easy", "medium", "hard"], default="medium")
    links = [l.strip() for l in Prompt.ask("Reference links (comma separated)", default="").split(",") if l.strip()]
    notes = Prompt.ask("Notes", default="")
    add_topic(db_path, subject.id, title, hours, difficulty, youtube_links=links, notes=notes)
    console.print(f"[green]Added topic {title} to {subject.name}.[/green]")


def cmd_progress(db_path: str):
    subject = choose_subject(load_subjects(db_path))
    if subject is None:
        return
    if not subject.topics:
        console.print("[yellow]This subject has no topics.[/yellow]")
        return
    for i, t in enumerate(subject.topics, 1):
        console.print(f"  [cyan]{i}[/cyan]) {t.title} [dim]{t.progress}%[/dim]")
    topic = subject.topics[choose(subject.topics, "Select topic")]
    progress = int(Prompt.ask("Progress %", default=str(topic.progress)))
    updated = update_topic_progress(subject, topic.id, progress)
    save_subjects(db_path, [updated])
    console.print(f"[green]{topic.title} is now {min(100, max(0, progress))}% done.[/green]")


def show_plan_overview(plan) -> None:
    summary = get_plan_summary(plan)
    console.print(Panel(
        f"Tasks: [bold]{summary['tasks']}[/bold]  |  "
        f"Outstanding: [bold]{plan.total_hours:.1f}h[/bold]  |  "
        f"Days until exam: [bold]{plan.days_until_exams}[/bold]  |  "
        f"Avg hours/day: [bold]{plan.average_hours_per_day:.1f}[/bold]  |  "
        f"Done: [bold]{summary['completion_pct']}%[/bold]",
        title="Schedule", border_style="blue",
    ))
    if plan.recommendations:
        console.print("\n[bold]Recommendations:[/bold]")
        for rec in plan.recommendations:
            console.print(f"  [yellow]•[/yellow] {rec}")


def cmd_generate(db_path: str, today: date | None = None):
    subjects = load_subjects(db_path)
    plan = generate_schedule(subjects, today)
    save_plan(db_path, plan)
    show_plan_overview(plan)
    if plan.daily_tasks:
        console.print(render_tasks(plan.daily_tasks, "Study Schedule"))


def _latest_plan(db_path: str):
    latest = get_latest_plan(db_path)
    if latest is None:
        console.print("[yellow]No schedule yet. Use 'generate' first.[/yellow]")
    return latest


def cmd_plan(db_path: str):
    latest = _latest_plan(db_path)
    if latest is None:
        return
    _, plan = latest
    show_plan_overview(plan)
    console.print(render_tasks(plan.daily_tasks, "Study Schedule"))


def cmd_today(db_path: str, today: date | None = None):
    latest = _latest_plan(db_path)
    if latest is None:
        return
    today = today or date.today()
    tasks = get_tasks_for_date(latest[1], today)
    if not tasks:
        console.print("[green]Nothing scheduled for today.[/green]")
        return
    console.print(render_tasks(tasks, f"Tasks for {today.isoformat()}"))


def cmd_week(db_path: str, today: date | None = None):
    latest = _latest_plan(db_path)
    if latest is None:
        return
    offset = int(Prompt.ask("Week offset (0 = this week, -1 = last)", default="0"))
    days = get_week_dates(today, offset)
    plan = latest[1]

    summary = Table(title=f"Week of {days[0].isoformat()}")
    summary.add_column("Day")
    summary.add_column("Tasks", justify="right")
    summary.add_column("Hours", justify="right")
    summary.add_column("Done", justify="right")
    tasks = []
    for day in days:
        day_tasks = get_tasks_for_date(plan, day)
        tasks.extend(day_tasks)
        summary.add_row(
            f"{day.strftime('%a')} {day.isoformat()}", str(len(day_tasks)),
            f"{sum(t.estimated_hours for t in day_tasks):.2f}",
            str(sum(1 for t in day_tasks if t.completed)),
        )
    console.print(summary)
    if tasks:
        console.print(render_tasks(tasks, "Tasks This Week"))
    else:
        console.print("[green]Nothing scheduled this week.[/green]")


def cmd_complete(db_path: str, today: date | None = None):
    latest = _latest_plan(db_path)
    if latest is None:
        return
    plan_id, plan = latest
    pending = [t for t in get_tasks_for_date(plan, today or date.today()) if not t.completed]
    if not pending:
        console.print("[green]All of today's tasks are done![/green]")
        return
    console.print(render_tasks(pending, "Pending Today"))
    task = pending[choose(pending, "Task to complete")]
    plan, record = mark_task_completed(plan, task.id, subject_name=task.subject_name)
    save_plan(db_path, plan, plan_id=plan_id)
    record_completed_task(db_path, record)
    save_subjects(db_path, apply_completed_task(load_subjects(db_path), record.task))
    console.print(f"[green]Task completed![/green] {task.topic_title} ({task.estimated_hours:.2f}h)")


def cmd_missed(db_path: str, today: date | None = None):
    latest = _latest_plan(db_path)
    if latest is None:
        return
    plan_id, plan = latest
    missed = find_missed_tasks(plan, today)
    if not missed:
        console.print("[green]No missed tasks. Keep it up![/green]")
        return
    console.print(render_tasks(missed, "Missed Tasks"))
    plan = reschedule_after_missed_tasks(plan, missed, today)
    save_plan(db_path, plan, plan_id=plan_id)
    missed_hours = sum(t.estimated_hours for t in missed)
    console.print(f"[green]Redistributed {missed_hours:.2f}h from {len(missed)} missed task(s).[/green]")
    for rec in plan.recommendations[:2]:
        console.print(f"  [yellow]•[/yellow] {rec}")


def cmd_review(db_path: str, today: date | None = None):
    # Sized from the full estimate, not the flattened (zero) remainder
    completed = [
        replace(t, subject_id=s.id, subject_name=s.name)
        for s in load_subjects(db_path) for t in s.topics if t.completed
    ]
    if not completed:
        console.print("[yellow]Complete a topic to unlock review sessions.[/yellow]")
        return
    tasks = calculate_review_schedule(completed, today)
    console.print(render_tasks(tasks, "Review Schedule"))


def render_timetable(timetable: ExamTimetable) -> Table:
    table = Table(title=f"Exam Week {timetable.start} to {timetable.end}")
    table.add_column("Date")
    table.add_column("Time")
    table.add_column("Subject", style="cyan")
    table.add_column("Hours", justify="right")
    table.add_column("Topics")
    for day in timetable.days:
        for i, slot in enumerate(day.slots):
            label = f"{day.weekday[:3]} {day.date}" if i == 0 else ""
            table.add_row(
                label, slot.time_slot, slot.subject_name, f"{slot.allocated_hours:.2f}",
                ", ".join(slot.topic_titles) or "[dim]free study[/dim]",
            )
    return table


def _ask_date(label: str, setting: str, db_path: str) -> date | None:
    value = Prompt.ask(label, default=get_setting(db_path, setting, "")).strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        console.print(f"[red]Not a valid date: {value}[/red]")
        return None


def cmd_exam(db_path: str):
    subjects = load_subjects(db_path)
    if not subjects:
        console.print("[yellow]No subjects yet. Use 'add' first.[/yellow]")
        return
    start = _ask_date("Exam week start (YYYY-MM-DD)", "exam_week_start", db_path)
    if start is None:
        return
    end = _ask_date("Exam week end (YYYY-MM-DD)", "exam_week_end", db_path)
    if end is None:
        return
    if end <= start:
        console.print("[red]Exam week end must be after its start.[/red]")
        return
    default_hours = float(get_setting(db_path, "exam_daily_hours", str(DEFAULT_EXAM_DAILY_HOURS)))
    daily_hours = prompt_float("Daily study hours", default=default_hours)

    set_setting(db_path, "exam_week_start", start.isoformat())
    set_setting(db_path, "exam_week_end", end.isoformat())
    set_setting(db_path, "exam_daily_hours", str(daily_hours))

    timetable = generate_exam_timetable(subjects, start, end, daily_hours)
    save_exam_timetable(db_path, timetable)
    console.print(render_timetable(timetable))
    console.print(f"[green]Created a {len(timetable.days)}-day timetable for your exam week.[/green]")


def cmd_timetable(db_path: str):
    timetable = get_latest_exam_timetable(db_path)
    if timetable is None:
        console.print("[yellow]No exam timetable yet. Use 'exam' first.[/yellow]")
        return
    console.print(render_timetable(timetable))


def cmd_export(db_path: str):
    latest = _latest_plan(db_path)
    if latest is None:
        return
    file_path = Prompt.ask("Export to", default="study-schedule.csv")
    result = write_schedule_csv(latest[1], file_path)
    console.print(f"[green]Exported {result['rows']} task(s) to {result['filename']}[/green]")


def cmd_import(db_path: str):
    file_path = Prompt.ask("File path")
    if not Path(file_path).exists():
        console.print(f"[red]File not found: {file_path}[/red]")
        return
    subjects = load_subjects_file(file_path)
    save_subjects(db_path, subjects)
    topics = sum(len(s.topics) for s in subjects)
    console.print(f"[green]Imported {len(subjects)} subject(s) with {topics} topic(s).[/green]")


def cmd_history(db_path: str, today: date | None = None):
    records = get_completed_tasks(db_path)
    if not records:
        console.print("[yellow]No completed tasks yet.[/yellow]")
        return
    stats = calc_history_stats(records, today)
    console.print(f"\n  Completed: [bold]{stats['total_completed']}[/bold]  |  "
                  f"Hours: [bold]{stats['total_hours']}[/bold]  |  "
                  f"Streak: [bold]{stats['streak']} day(s)[/bold]  |  "
                  f"Avg/day: [bold]{stats['avg_hours_per_day']}h[/bold]\n")

    week = Table(title="Last 7 Days")
    week.add_column("Day")
    week.add_column("Hours", justify="right")
    week.add_column("Tasks", justify="right")
    for day in get_weekly_hours(records, today):
        week.add_row(f"{day['weekday']} {day['date']}", f"{day['hours']:g}", str(day["tasks"]))
    console.print(week)

    breakdown = Table(title="By Subject")
    breakdown.add_column("Subject", style="cyan")
    breakdown.add_column("Tasks", justify="right")
    breakdown.add_column("Hours", justify="right")
    for entry in get_subject_breakdown(records):
        breakdown.add_row(entry["name"], str(entry["completed"]), f"{entry['hours']:.2f}")
    console.print(breakdown)


COMMANDS = {
    "subjects": cmd_subjects,
    "add": cmd_add_subject,
    "topic": cmd_add_topic,
    "progress": cmd_progress,
    "generate": cmd_generate,
    "plan": cmd_plan,
    "today": cmd_today,
    "week": cmd_week,
    "complete": cmd_complete,
    "missed": cmd_missed,
    "review": cmd_review,
    "exam": cmd_exam,
    "timetable": cmd_timetable,
    "export": cmd_export,
    "import": cmd_import,
    "history": cmd_history,
}


def main():
    db_path = resolve_db_path()
    init_db(db_path)
    configure_logging(get_setting(db_path, "log_level", "WARNING"))

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="today").strip().lower()
        if choice in ("quit", "exit", "q"):
            console.print("[dim]Good luck on your exams![/dim]")
            break
        command = COMMANDS.get(choice)
        if command is None:
            console.print("[red]Unknown command. Try again.[/red]")
            continue
        try:
            command(db_path)
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.debug("Command %s failed", choice, exc_info=True)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
