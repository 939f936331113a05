"""Typer CLI application for the awareness quiz service."""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from awareness_quiz import __version__
from awareness_quiz.config.settings import get_settings
from awareness_quiz.core.exceptions import BadRequestError
from awareness_quiz.core.logging_config import setup_logging
from awareness_quiz.export.docx_generator import (
    export_quiz_with_separate_answers,
    export_to_docx,
)
from awareness_quiz.grading.scorer import GradedSubmission, grade_submission, parse_submission
from awareness_quiz.models import Quiz

app = typer.Typer(
    name="awareness-quiz",
    help="Security-awareness quiz service: API server and quiz tooling",
    add_completion=False,
)

console = Console()


def load_json(path: Path) -> Any:
    """Read a JSON file, exiting with an error message if it cannot be parsed."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error:[/red] cannot read {path}: {e}", style="bold")
        raise typer.Exit(code=1)


def load_quiz_file(path: Path) -> Quiz:
    """Load and validate a quiz definition file."""
    data = load_json(path)
    try:
        return Quiz.model_validate(data)
    except ValidationError as e:
        console.print(f"[red]Invalid quiz definition:[/red] {path}", style="bold")
        for err in e.errors():
            location = ".".join(str(part) for part in err["loc"])
            console.print(f"  • {location}: {err['msg']}")
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on", min=1, max=65535),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    console.print(
        f"[cyan]Starting {settings.app_name}[/cyan] on http://{host}:{port} "
        f"(storage: {settings.storage_backend})"
    )
    uvicorn.run(
        "awareness_quiz.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=None,
    )


@app.command()
def validate(
    quiz_file: Path = typer.Argument(..., help="Quiz definition (JSON)"),
) -> None:
    """
    Validate a quiz definition file.

    Example:
        awareness-quiz validate phishing.json
    """
    quiz = load_quiz_file(quiz_file)
    display_quiz_summary(quiz)

    if not quiz.questions:
        console.print("\n[yellow]Warning:[/yellow] quiz has no questions and cannot be published")
    else:
        console.print("\n[green]✓[/green] Quiz definition is valid")


@app.command()
def grade(
    quiz_file: Path = typer.Argument(..., help="Quiz definition (JSON)"),
    answers_file: Path = typer.Argument(
        ..., help="Answers: a list, or an object with an 'answers' list"
    ),
) -> None:
    """
    Grade a set of answers against a quiz, offline.

    Example:
        awareness-quiz grade phishing.json answers.json
    """
    quiz = load_quiz_file(quiz_file)
    raw = load_json(answers_file)
    if isinstance(raw, dict):
        raw = raw.get("answers")

    try:
        submitted = parse_submission(raw)
    except BadRequestError as e:
        console.print(f"[red]Error:[/red] {e.message}", style="bold")
        for detail in e.details:
            console.print(f"  • {detail}")
        raise typer.Exit(code=1)

    graded = grade_submission(quiz, submitted, get_settings().manual_grading_policy)
    display_grading(quiz, graded)


@app.command()
def export(
    quiz_file: Path = typer.Argument(..., help="Quiz definition (JSON)"),
    output: str = typer.Option(
        "quiz",
        "--output",
        "-o",
        help="Output file name (without extension)",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Directory for the documents (default: DEFAULT_OUTPUT_DIR)",
    ),
    separate_answers: bool = typer.Option(
        True,
        "--separate-answers/--single-file",
        help="Write the answer key to its own file",
    ),
    include_answers: bool = typer.Option(
        False,
        "--with-answers/--no-answers",
        help="Mark answers in the single-file export",
    ),
) -> None:
    """Export a quiz as a printable DOCX document."""
    quiz = load_quiz_file(quiz_file)
    target_dir = output_dir or get_settings().default_output_dir

    console.print("\n[cyan]Exporting to DOCX...[/cyan]")
    try:
        if separate_answers:
            questions_file, answers_file = export_quiz_with_separate_answers(
                quiz, output, output_dir=target_dir
            )
            console.print("\n[green]✓[/green] Quiz exported successfully!")
            console.print(f"  Questions: {questions_file}")
            console.print(f"  Answers:   {answers_file}")
        else:
            output_file = export_to_docx(
                quiz, f"{output}.docx", include_answers, output_dir=target_dir
            )
            console.print(f"\n[green]✓[/green] Quiz exported to: {output_file}")
    except OSError as e:
        console.print(f"\n[red]Error during export:[/red] {e}", style="bold")
        raise typer.Exit(code=1)


@app.command()
def seed() -> None:
    """Load the sample quizzes into the configured MongoDB store."""
    settings = get_settings()
    if settings.storage_backend != "mongo":
        console.print(
            "[red]Error:[/red] seeding needs STORAGE_BACKEND=mongo; "
            "use SEED_SAMPLE_QUIZZES=true for the in-memory store.",
            style="bold",
        )
        raise typer.Exit(code=1)

    seeded = asyncio.run(_seed_mongo(settings.mongodb_uri, settings.mongodb_database))
    if not seeded:
        console.print("[yellow]Store already has quizzes, nothing seeded.[/yellow]")
        return
    for quiz in seeded:
        console.print(f"[green]✓[/green] {quiz.title} ({quiz.question_count} questions)")


async def _seed_mongo(uri: str, database: str) -> list[Quiz]:
    from awareness_quiz.services import QuizService
    from awareness_quiz.storage.mongo import MongoConnection

    connection = MongoConnection(uri, database)
    try:
        await connection.connect()
        return await QuizService(connection.quizzes).seed_sample_quizzes()
    finally:
        await connection.close()


@app.command()
def info() -> None:
    """Display version and configuration."""
    settings = get_settings()
    info_text = f"""
[bold cyan]Awareness Quiz[/bold cyan]
Version: {__version__}

[bold]Configuration:[/bold]
  • Environment: {settings.environment}
  • Storage: {settings.storage_backend}
  • API prefix: {settings.api_prefix}
  • Manual grading policy: {settings.manual_grading_policy}

[bold]Question kinds:[/bold]
  • multiple-choice - answer is the option index
  • true-false - answer is True or False
  • text - trimmed, case-insensitive match; empty key = manual review
    """
    console.print(Panel(info_text, title="Awareness Quiz Info", border_style="cyan"))


def display_quiz_summary(quiz: Quiz) -> None:
    """Display the main figures of a quiz."""
    table = Table(title="Quiz Summary", show_header=False, border_style="cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Title", quiz.title)
    table.add_row("Category", quiz.category)
    table.add_row("Difficulty", quiz.difficulty.value.capitalize())
    table.add_row("Questions", str(quiz.question_count))
    table.add_row("Total points", str(quiz.total_points))
    table.add_row("Passing score", f"{quiz.passing_score}%")
    table.add_row("Max attempts", str(quiz.max_attempts) if quiz.max_attempts else "Unlimited")

    console.print()
    console.print(table)


def display_grading(quiz: Quiz, graded: GradedSubmission) -> None:
    """Display the per-question breakdown and the results."""
    breakdown = Table(title="Answers", border_style="cyan")
    breakdown.add_column("Question", style="cyan")
    breakdown.add_column("Answer", style="white")
    breakdown.add_column("Result", style="white")
    breakdown.add_column("Points", style="white")

    for answer in graded.answers:
        question = quiz.get_question(answer.question_id)
        if answer.pending_review:
            result = "[yellow]pending review[/yellow]"
        elif answer.is_correct:
            result = "[green]correct[/green]"
        else:
            result = "[red]incorrect[/red]"
        breakdown.add_row(question.prompt, answer.answer, result, str(answer.points_awarded))

    console.print()
    console.print(breakdown)

    results = graded.results
    summary = Table(title="Results", show_header=False, border_style="green")
    summary.add_column("Metric", style="cyan")
    summary.add_column("Value", style="white")
    summary.add_row("Score", f"{results.score}/{results.total_possible}")
    summary.add_row(
        "Percentage",
        f"[green]{results.percentage}%[/green]" if results.passed else f"[red]{results.percentage}%[/red]",
    )
    summary.add_row("Passed", "yes" if results.passed else "no")
    summary.add_row("Correct answers", f"{results.correct_answers}/{results.total_questions}")
    if results.pending_review:
        summary.add_row("Pending review", str(results.pending_review))
    summary.add_row("Time spent", f"{graded.time_spent:g}s")

    console.print()
    console.print(summary)


@app.callback()
def callback() -> None:
    """
    Awareness Quiz - administer security-awareness quizzes and grade attempts.
    """
    settings = get_settings()
    setup_logging(settings.environment, settings.log_level, settings.log_dir)


if __name__ == "__main__":
    app()
