"""deckforge CLI.

Command-line interface for generating decks, inspecting saved projects and
printing export layouts.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from deckforge import __version__
from deckforge.utils.logging import configure_logging, get_logger

app = typer.Typer(
    name="deckforge",
    help="deckforge: outline-driven slide decks with editable layouts",
    add_completion=False,
)
projects_app = typer.Typer(help="Manage saved projects", add_completion=False)
app.add_typer(projects_app, name="projects")


class Provider(str, Enum):
    """Generation provider."""

    openai = "openai"


ProjectsDirOption = Annotated[
    Path | None,
    typer.Option("--projects-dir", help="Project directory (default: PROJECTS_DIR)"),
]
VerboseOption = Annotated[
    int,
    typer.Option("--verbose", "-v", count=True, help="Increase verbosity (-v, -vv)"),
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]


# =============================================================================
# Commands
# =============================================================================


@app.command()
def version(json_output: JsonOption = False) -> None:
    """Show version information."""
    if json_output:
        typer.echo(json.dumps({"version": __version__}))
    else:
        typer.echo(f"deckforge {__version__}")


@app.command()
def generate(  # noqa: PLR0913
    prompt: Annotated[str, typer.Argument(help="Subject of the presentation")],
    title: Annotated[
        str | None, typer.Option("--title", "-t", help="Deck title (default: prompt)")
    ] = None,
    reference: Annotated[
        list[Path] | None,
        typer.Option(
            "--reference",
            "-r",
            exists=True,
            dir_okay=False,
            readable=True,
            help="Reference text file (repeatable)",
        ),
    ] = None,
    provider: Annotated[
        Provider, typer.Option("--provider", "-p", help="Generation provider")
    ] = Provider.openai,
    model: Annotated[
        str | None, typer.Option("--model", help="Text model (default: OPENAI_MODEL)")
    ] = None,
    bullets: Annotated[
        bool, typer.Option("--bullets/--no-bullets", help="Draft bullets per slide")
    ] = False,
    notes: Annotated[
        bool, typer.Option("--notes/--no-notes", help="Draft speaker notes per slide")
    ] = False,
    save_as: Annotated[
        str | None, typer.Option("--save-as", "-s", help="Save as a named project")
    ] = None,
    projects_dir: ProjectsDirOption = None,
    verbose: VerboseOption = 0,
    json_output: JsonOption = False,
) -> None:
    """Generate a deck outline from a prompt."""
    from deckforge.cli.runners import run_generate  # noqa: PLC0415

    _configure_logging(verbose)
    logger = get_logger(__name__)
    logger.info("Starting generation", provider=provider.value, save_as=save_as)

    try:
        result = run_generate(
            prompt=prompt,
            title=title,
            reference_paths=reference or [],
            provider=provider.value,
            model=model,
            with_bullets=bullets,
            with_notes=notes,
            save_as=save_as,
            projects_dir=projects_dir,
        )
        if json_output:
            typer.echo(
                json.dumps(
                    {
                        "title": result.title,
                        "topics": result.topics,
                        "slides": result.slides,
                        "project_id": result.project_id,
                        "slide_titles": result.slide_titles,
                    },
                    indent=2,
                )
            )
        else:
            typer.echo(f"Deck: {result.title}")
            typer.echo(f"Topics: {result.topics}  Slides: {result.slides}")
            for slide_title in result.slide_titles:
                typer.echo(f"  - {slide_title}")
            if result.project_id is not None:
                typer.echo(f"Saved as project {result.project_id}")
        raise typer.Exit(0)

    except typer.Exit:
        raise
    except Exception as e:
        logger.exception("Generation failed")
        _echo_error(e, json_output)
        raise typer.Exit(1) from None


@app.command()
def layout(
    project_id: Annotated[int, typer.Argument(help="Saved project id")],
    projects_dir: ProjectsDirOption = None,
    verbose: VerboseOption = 0,
    json_output: JsonOption = False,
) -> None:
    """Print the export layout of a saved project."""
    from deckforge.cli.runners import run_layout  # noqa: PLC0415

    _configure_logging(verbose)
    logger = get_logger(__name__)

    try:
        plan = run_layout(project_id, projects_dir=projects_dir)
        if json_output:
            typer.echo(plan.model_dump_json(indent=2))
        else:
            typer.echo(
                f"{plan.title}: {len(plan.pages)} pages "
                f"({plan.frame.width:g} x {plan.frame.height:g} in)"
            )
            for number, page in enumerate(plan.pages, start=1):
                boxes = [box.rect.to_tuple() for box in page.text_boxes]
                media = page.media.rect.to_tuple() if page.media else None
                typer.echo(f"{number:>3} {page.kind:<8} text={boxes} media={media}")
        raise typer.Exit(0)

    except typer.Exit:
        raise
    except Exception as e:
        logger.exception("Layout failed")
        _echo_error(e, json_output)
        raise typer.Exit(1) from None


@projects_app.command("list")
def list_projects(
    projects_dir: ProjectsDirOption = None,
    verbose: VerboseOption = 0,
    json_output: JsonOption = False,
) -> None:
    """List saved projects, newest first."""
    from deckforge.cli.runners import list_projects as list_impl  # noqa: PLC0415

    _configure_logging(verbose)
    summaries = list_impl(projects_dir)
    if json_output:
        typer.echo(
            json.dumps([summary.model_dump(mode="json") for summary in summaries])
        )
        return
    if not summaries:
        typer.echo("No saved projects.")
        return
    for summary in summaries:
        saved = summary.saved_at.strftime("%Y-%m-%d %H:%M")
        typer.echo(f"{summary.id:>4}  {saved}  {summary.name}")


@projects_app.command("show")
def show_project(
    project_id: Annotated[int, typer.Argument(help="Saved project id")],
    projects_dir: ProjectsDirOption = None,
    verbose: VerboseOption = 0,
    json_output: JsonOption = False,
) -> None:
    """Show the outline of a saved project."""
    from deckforge.cli.runners import open_repository  # noqa: PLC0415

    _configure_logging(verbose)
    logger = get_logger(__name__)

    try:
        document = open_repository(projects_dir).load(project_id)
        if json_output:
            typer.echo(document.model_dump_json(indent=2))
        else:
            typer.echo(document.title or "(untitled)")
            for topic in document.topics:
                typer.echo(f"- {topic.title}")
                for slide in topic.slides:
                    typer.echo(f"    - {slide.title}")
        raise typer.Exit(0)

    except typer.Exit:
        raise
    except Exception as e:
        logger.exception("Show failed")
        _echo_error(e, json_output)
        raise typer.Exit(1) from None


@projects_app.command("delete")
def delete_project(
    project_id: Annotated[int, typer.Argument(help="Saved project id")],
    projects_dir: ProjectsDirOption = None,
    verbose: VerboseOption = 0,
    json_output: JsonOption = False,
) -> None:
    """Delete a saved project."""
    from deckforge.cli.runners import open_repository  # noqa: PLC0415

    _configure_logging(verbose)
    logger = get_logger(__name__)

    try:
        open_repository(projects_dir).delete(project_id)
        if json_output:
            typer.echo(json.dumps({"deleted": project_id}))
        else:
            typer.echo(f"Deleted project {project_id}")
        raise typer.Exit(0)

    except typer.Exit:
        raise
    except Exception as e:
        logger.exception("Delete failed")
        _echo_error(e, json_output)
        raise typer.Exit(1) from None


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """deckforge: outline-driven slide decks with editable layouts."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def _configure_logging(verbose: int) -> None:
    """Configure logging based on verbosity level."""
    if verbose == 0:
        level = "WARNING"
    elif verbose == 1:
        level = "INFO"
    else:  # verbose >= 2
        level = "DEBUG"

    configure_logging(level=level)


def _echo_error(error: Exception, json_output: bool) -> None:
    if json_output:
        typer.echo(json.dumps({"error": str(error)}))
    else:
        typer.echo(f"Error: {error}", err=True)


if __name__ == "__main__":  # pragma: no cover
    app()
