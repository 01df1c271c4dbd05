"""Project persistence for deckforge.

Public API:
    - ProjectRepository: protocol for persistence backends
    - JsonProjectRepository: one JSON file per project
    - ProjectSummary, StoredProject: listing entry and on-disk record
    - RepositoryError, ProjectNotFoundError
"""

from deckforge.storage.repository import (
    JsonProjectRepository,
    ProjectNotFoundError,
    ProjectRepository,
    ProjectSummary,
    RepositoryError,
    StoredProject,
)

__all__ = [
    "JsonProjectRepository",
    "ProjectNotFoundError",
    "ProjectRepository",
    "ProjectSummary",
    "RepositoryError",
    "StoredProject",
]
