"""Project repository: named documents persisted as JSON files.

Each saved project is one ``<id>.json`` file under the repository root,
holding the project's name, save time and the serialized Document. Ids are
auto-incremented integers, never reused within a repository directory.

This module keeps filesystem details out of the editing session.
"""

from __future__ import annotations

import json
import os
import re
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, Field, ValidationError

from deckforge.document.models import Document
from deckforge.utils.logging import get_logger

logger = get_logger(__name__)

_PROJECT_FILE_RE = re.compile(r"^(\d+)\.json$")
_COUNTER_FILE = ".last_id"


class RepositoryError(Exception):
    """Base exception for project repository failures."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else None
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.path:
            return f"{self.message} (path: {self.path})"
        return self.message


class ProjectNotFoundError(RepositoryError):
    """Raised when no project exists with the requested id."""

    def __init__(self, project_id: int, path: Path | str | None = None) -> None:
        self.project_id = project_id
        super().__init__(f"Project {project_id} not found", path)


class ProjectSummary(BaseModel, frozen=True):
    """Listing entry for a saved project."""

    id: int
    name: str
    saved_at: datetime


class StoredProject(BaseModel):
    """On-disk record of a saved project."""

    id: int
    name: str
    saved_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    document: Document

    def summary(self) -> ProjectSummary:
        return ProjectSummary(id=self.id, name=self.name, saved_at=self.saved_at)


class ProjectRepository(Protocol):
    """Protocol for project persistence backends."""

    def save(self, name: str, document: Document) -> int:
        """Save a document under ``name`` and return the new project id."""
        ...

    def load(self, project_id: int) -> Document:
        """Load a saved document.

        Raises:
            ProjectNotFoundError: If the id does not exist.
        """
        ...

    def list(self) -> list[ProjectSummary]:
        """List saved projects, newest first."""
        ...

    def delete(self, project_id: int) -> None:
        """Delete a saved project.

        Raises:
            ProjectNotFoundError: If the id does not exist.
        """
        ...


class JsonProjectRepository:
    """Project repository storing one JSON file per project.

    Usage:
        repo = JsonProjectRepository("projects")
        project_id = repo.save("Quarterly review", store.document)
        document = repo.load(project_id)
    """

    def __init__(self, root: Path | str) -> None:
        """Initialize the repository, creating ``root`` if needed.

        Args:
            root: Directory holding the project files.
        """
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _project_path(self, project_id: int) -> Path:
        return self.root / f"{project_id}.json"

    def _next_id(self) -> int:
        counter = self.root / _COUNTER_FILE
        last_id = int(counter.read_text()) if counter.exists() else 0
        existing = [
            int(match.group(1))
            for path in self.root.iterdir()
            if (match := _PROJECT_FILE_RE.match(path.name))
        ]
        next_id = max([last_id, *existing]) + 1
        counter.write_text(str(next_id))
        return next_id

    def _read(self, path: Path) -> StoredProject:
        try:
            return StoredProject.model_validate_json(path.read_text(encoding="utf-8"))
        except (ValidationError, json.JSONDecodeError) as e:
            raise RepositoryError(f"Corrupt project file: {e}", path) from e
        except OSError as e:
            raise RepositoryError(f"Cannot read project file: {e}", path) from e

    def save(self, name: str, document: Document) -> int:
        """Save ``document`` as a new project.

        The file is written to a temporary name first and renamed into place.

        Returns:
            The new project id.
        """
        project = StoredProject(id=self._next_id(), name=name, document=document)
        path = self._project_path(project.id)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            tmp_path.write_text(project.model_dump_json(indent=2), encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            raise RepositoryError(f"Cannot write project file: {e}", path) from e
        logger.info("Project saved", project_id=project.id, path=str(path))
        return project.id

    def load(self, project_id: int) -> Document:
        path = self._project_path(project_id)
        if not path.exists():
            raise ProjectNotFoundError(project_id, path)
        return self._read(path).document

    def list(self) -> list[ProjectSummary]:
        summaries: list[ProjectSummary] = []
        for path in self.root.iterdir():
            if not _PROJECT_FILE_RE.match(path.name):
                continue
            try:
                summaries.append(self._read(path).summary())
            except RepositoryError:
                logger.warning("Skipping unreadable project file", path=str(path))
        return sorted(summaries, key=lambda s: (s.saved_at, s.id), reverse=True)

    def delete(self, project_id: int) -> None:
        path = self._project_path(project_id)
        if not path.exists():
            raise ProjectNotFoundError(project_id, path)
        path.unlink()
        logger.info("Project deleted", project_id=project_id)
