"""CLI commands for the study dashboard.

Commands:
- serve: run the Web API with uvicorn
- show-seed: print the demo dataset
- routes: list the API routes
"""

from __future__ import annotations

import json
from dataclasses import asdict

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from studydash.config.app_config import load_app_config
from studydash.config.logging_setup import configure_logging
from studydash.store.entity_store import EntityStore
from studydash.store.repository import DashboardRepository
from studydash.store.seed import seed_demo_data
from studydash.utils.formatting import format_duration
from studydash.web.api import create_app

app = typer.Typer(
    name="studydash",
    help="Student learning dashboard API.",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main() -> None:
    """Student learning dashboard API."""
    # Quiet until the configured level is known; stdout stays clean for --json
    configure_logging("WARNING")
    configure_logging(load_app_config().logging.level)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the dashboard API."""
    config = load_app_config()

    effective_host = host or config.server.host
    effective_port = port or config.server.port
    console.print(
        f"[green]▶ Study dashboard on http://{effective_host}:{effective_port}[/green]"
    )
    uvicorn.run(
        "studydash.web.api:create_app",
        factory=True,
        host=effective_host,
        port=effective_port,
        reload=reload,
        log_level=config.logging.level.lower(),
    )


@app.command(name="show-seed")
def show_seed(
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables"),
) -> None:
    """Print the demo dataset loaded at startup."""
    if as_json:
        # Keep stdout parseable
        configure_logging("WARNING")

    store = EntityStore()
    user = seed_demo_data(store)
    repo = DashboardRepository(store)

    enrollments = repo.get_user_courses(user.id)
    materials = repo.get_recommended_materials(user.id)
    sessions = repo.get_study_sessions(user.id)

    if as_json:
        payload = {
            "user": user.username,
            "courses": [
                {
                    **asdict(view.course),
                    "progress": view.enrollment.progress,
                    "grade": view.enrollment.grade,
                }
                for view in enrollments
            ],
            "recommended": [view.material.title for view in materials],
            "unread_notifications": repo.get_unread_notification_count(user.id),
        }
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    console.print(f"\n[bold]{user.full_name}[/bold] ({user.username})\n")

    courses_table = Table(title="Courses")
    courses_table.add_column("Code")
    courses_table.add_column("Name")
    courses_table.add_column("Instructor")
    courses_table.add_column("Progress", justify="right")
    courses_table.add_column("Grade")
    for view in enrollments:
        courses_table.add_row(
            view.course.code,
            view.course.name,
            view.course.instructor,
            f"{view.enrollment.progress}%",
            view.enrollment.grade or "-",
        )
    console.print(courses_table)

    sessions_table = Table(title="Study sessions")
    sessions_table.add_column("Course")
    sessions_table.add_column("Topic")
    sessions_table.add_column("Duration", justify="right")
    for view in sessions:
        sessions_table.add_row(
            view.course.name,
            view.session.topic or "-",
            format_duration(view.session.duration),
        )
    console.print(sessions_table)

    materials_table = Table(title="Recommended materials")
    materials_table.add_column("#", justify="right")
    materials_table.add_column("Title")
    materials_table.add_column("Type")
    materials_table.add_column("Progress", justify="right")
    for rank, view in enumerate(materials, start=1):
        materials_table.add_row(
            str(rank),
            view.material.title,
            view.material.type,
            f"{view.material.progress}%",
        )
    console.print(materials_table)

    unread = repo.get_unread_notification_count(user.id)
    console.print(f"\nUnread notifications: [bold]{unread}[/bold]")


@app.command()
def routes() -> None:
    """List the API routes."""
    api = create_app(store=EntityStore())
    table = Table(title="API routes")
    table.add_column("Methods")
    table.add_column("Path")
    # The OpenAPI schema lists routes of included routers and leaves out the docs pages
    for path, operations in api.openapi()["paths"].items():
        methods = sorted(method.upper() for method in operations)
        table.add_row(", ".join(methods), path)
    console.print(table)


if __name__ == "__main__":
    app()
