"""Editing session: the application state of one deckforge editor.

An ``EditorSession`` is constructed once at start-up and passed explicitly
to whatever handles user input. It owns the DocumentStore and the
GestureController, and wires the external collaborators (generation
service, project repository) to the store.

External calls always complete before the document is touched: a failed
generation or load surfaces as a typed exception and leaves the document
exactly as it was.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from deckforge.config import Settings, settings
from deckforge.document.models import Document, Topic
from deckforge.document.store import DocumentStore
from deckforge.export.plan import ExportPlan, build_export_plan
from deckforge.generation.protocol import GenerationError, GenerationService, Reference
from deckforge.geometry.primitives import Size
from deckforge.geometry.validators import RectValidator
from deckforge.interaction.controller import GestureController
from deckforge.layout.defaults import resolve_layout
from deckforge.layout.projector import Frame, ProjectedLayout, project_layout
from deckforge.storage.repository import ProjectRepository, RepositoryError
from deckforge.utils.logging import (
    clear_project_context,
    get_logger,
    set_correlation_context,
)

logger = get_logger(__name__)


@dataclass
class EditorSession:
    """Application state for one editor.

    Usage:
        session = EditorSession(generator=service, repository=repo)
        await session.generate_outline("Renewable energy", references=[])
        await session.draft_bullets(session.store.selection.slide_id)
        project_id = session.save()
    """

    generator: GenerationService | None = None
    repository: ProjectRepository | None = None
    config: Settings = field(default_factory=lambda: settings)

    store: DocumentStore = field(init=False)
    controller: GestureController = field(init=False)
    project_id: int | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.store = DocumentStore(min_region_size=self.config.MIN_REGION_SIZE)
        self.controller = GestureController(
            store=self.store, min_size=self.config.MIN_REGION_SIZE
        )

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def _require_generator(self) -> GenerationService:
        if self.generator is None:
            raise GenerationError("No generation service configured")
        return self.generator

    async def generate_outline(
        self,
        prompt: str,
        references: list[Reference] | None = None,
        *,
        title: str | None = None,
    ) -> list[Topic]:
        """Replace the document with a freshly generated outline.

        Args:
            prompt: Subject of the presentation.
            references: Optional reference material.
            title: Document title; defaults to ``prompt``.

        Returns:
            The generated topics, now installed in the store.

        Raises:
            GenerationError: If generation fails; the document is unchanged.
        """
        generator = self._require_generator()
        topics = await generator.generate_outline(prompt, references or [])
        self.controller.cancel()
        self.store.set_document(topics, title=title or prompt)
        self.project_id = None
        clear_project_context()
        logger.info("Outline generated", topics=len(topics))
        return topics

    async def draft_bullets(self, slide_id: str) -> list[str] | None:
        """Replace a slide's bullets with generated ones.

        Returns:
            The new bullets, or None if the slide does not exist.
        """
        slide = self.store.find_slide(slide_id)
        if slide is None:
            return None
        bullets = await self._require_generator().generate_bullets(
            slide.title, self.store.title
        )
        self.store.update_slide_content(slide_id, bullets)
        return bullets

    async def generate_image(self, slide_id: str, prompt: str) -> bool:
        """Generate an image and append it to a slide.

        Returns:
            False if the slide does not exist.
        """
        if self.store.find_slide(slide_id) is None:
            return False
        image = await self._require_generator().generate_image(prompt)
        self.store.add_image(slide_id, image)
        return True

    async def generate_notes(self, slide_id: str) -> str | None:
        """Generate speaker notes for a slide.

        Returns:
            The notes, or None if the slide does not exist.
        """
        slide = self.store.find_slide(slide_id)
        if slide is None:
            return None
        notes = await self._require_generator().generate_notes(
            slide.title, list(slide.bullets), self.store.title
        )
        self.store.set_speaker_notes(slide_id, notes)
        return notes

    # -------------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------------

    def _require_repository(self) -> ProjectRepository:
        if self.repository is None:
            raise RepositoryError("No project repository configured")
        return self.repository

    def save(self, name: str | None = None) -> int:
        """Save the document as a new project.

        Args:
            name: Project name; defaults to the document title.

        Returns:
            The new project id.
        """
        project_name = name or self.store.title or "Untitled"
        self.project_id = self._require_repository().save(
            project_name, self.store.document
        )
        set_correlation_context(project_id=str(self.project_id))
        return self.project_id

    def load(self, project_id: int) -> Document:
        """Load a project into the store.

        Region rects below the minimum size are repaired on the way in.

        Raises:
            ProjectNotFoundError: If the id does not exist; the current
                document is unchanged.
        """
        document = self._require_repository().load(project_id)
        document = normalize_layouts(document, min_size=self.config.MIN_REGION_SIZE)
        self.controller.cancel()
        self.store.load_project(document)
        self.project_id = project_id
        set_correlation_context(project_id=str(project_id))
        logger.info("Project loaded", topics=len(document.topics))
        return document

    def new_project(self) -> None:
        """Start over with an empty document."""
        self.controller.cancel()
        self.store.reset()
        self.project_id = None
        clear_project_context()

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def preview_layout(self, slide_id: str, container: Size) -> ProjectedLayout | None:
        """Project a slide's effective layout into a preview canvas."""
        slide = self.store.find_slide(slide_id)
        if slide is None:
            return None
        return project_layout(resolve_layout(slide), Frame.preview(container))

    def export_plan(self) -> ExportPlan:
        """Lay out the document in the configured export frame."""
        return build_export_plan(self.store.document, Frame.export(self.config))


def normalize_layouts(document: Document, *, min_size: float) -> Document:
    """Return ``document`` with undersized region rects clamped to policy."""
    validator = RectValidator()
    for topic in document.topics:
        for index, slide in enumerate(topic.slides):
            update = {}
            for name in ("text_region", "media_region"):
                rect = getattr(slide, name)
                if rect is None or validator.is_valid(rect, min_size=min_size):
                    continue
                update[name] = validator.clamp_rect(rect, min_size=min_size)
            if update:
                logger.warning(
                    "Repaired undersized region",
                    slide_id=slide.id,
                    regions=list(update),
                )
                topic.slides[index] = slide.model_copy(update=update)
    return document
