"""CLI runners for deck generation and project inspection.

This module provides the execution logic for the CLI commands,
bridging the CLI interface to the editing session.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from deckforge.config import Settings, settings
from deckforge.export.plan import ExportPlan
from deckforge.generation import Reference, create_generation_service
from deckforge.session import EditorSession
from deckforge.storage.repository import JsonProjectRepository, ProjectSummary
from deckforge.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class GenerateResult:
    """Result from a deck generation run."""

    title: str
    topics: int
    slides: int
    project_id: int | None = None
    slide_titles: list[str] = field(default_factory=list)


def open_repository(
    projects_dir: Path | None, config: Settings | None = None
) -> JsonProjectRepository:
    config = config or settings
    return JsonProjectRepository(projects_dir or Path(config.PROJECTS_DIR))


def load_references(paths: list[Path]) -> list[Reference]:
    """Read reference files as UTF-8 text.

    Undecodable bytes are replaced rather than rejected.
    """
    return [
        Reference(
            kind="file",
            name=path.name,
            content=path.read_text(encoding="utf-8", errors="replace"),
        )
        for path in paths
    ]


async def _generate(
    session: EditorSession,
    prompt: str,
    references: list[Reference],
    *,
    title: str | None,
    with_bullets: bool,
    with_notes: bool,
) -> None:
    await session.generate_outline(prompt, references, title=title)
    slide_ids = [slide.id for _, slide in session.store.document.iter_slides()]
    if with_bullets:
        for slide_id in slide_ids:
            await session.draft_bullets(slide_id)
    if with_notes:
        for slide_id in slide_ids:
            await session.generate_notes(slide_id)


def run_generate(  # noqa: PLR0913
    *,
    prompt: str,
    title: str | None = None,
    reference_paths: list[Path] | None = None,
    provider: str = "openai",
    model: str | None = None,
    with_bullets: bool = False,
    with_notes: bool = False,
    save_as: str | None = None,
    projects_dir: Path | None = None,
    config: Settings | None = None,
) -> GenerateResult:
    """Generate a deck from a prompt, optionally saving it as a project."""
    config = config or settings
    references = load_references(reference_paths or [])
    generator = create_generation_service(provider, model=model, config=config)
    repository = open_repository(projects_dir, config) if save_as else None
    session = EditorSession(generator=generator, repository=repository, config=config)

    asyncio.run(
        _generate(
            session,
            prompt,
            references,
            title=title,
            with_bullets=with_bullets,
            with_notes=with_notes,
        )
    )

    project_id = session.save(save_as) if save_as else None
    document = session.store.document
    slide_titles = [slide.title for _, slide in document.iter_slides()]
    logger.info(
        "Deck generated",
        topics=len(document.topics),
        slides=len(slide_titles),
        project_id=project_id,
    )
    return GenerateResult(
        title=document.title,
        topics=len(document.topics),
        slides=len(slide_titles),
        project_id=project_id,
        slide_titles=slide_titles,
    )


def run_layout(
    project_id: int,
    *,
    projects_dir: Path | None = None,
    config: Settings | None = None,
) -> ExportPlan:
    """Load a saved project and lay it out for export.

    Undersized regions are repaired on load, as in the editor.
    """
    config = config or settings
    session = EditorSession(
        repository=open_repository(projects_dir, config), config=config
    )
    session.load(project_id)
    return session.export_plan()


def list_projects(
    projects_dir: Path | None = None, config: Settings | None = None
) -> list[ProjectSummary]:
    return open_repository(projects_dir, config).list()
