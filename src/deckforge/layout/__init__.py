"""Slide layout resolution and coordinate projection.

Public API:
    - RegionKind, SlideLayout: which regions a slide shows and where
    - default_layout, resolve_layout: computed and effective layouts
    - Frame, FrameTarget, ProjectedRect, ProjectedLayout: absolute frames
    - project, project_layout: percentage -> absolute scaling
"""

from deckforge.layout.defaults import (
    FULL_CANVAS,
    SPLIT_MEDIA,
    SPLIT_TEXT,
    RegionKind,
    SlideLayout,
    default_layout,
    resolve_layout,
)
from deckforge.layout.projector import (
    Frame,
    FrameTarget,
    ProjectedLayout,
    ProjectedRect,
    project,
    project_layout,
)

__all__ = [
    "FULL_CANVAS",
    "SPLIT_MEDIA",
    "SPLIT_TEXT",
    "Frame",
    "FrameTarget",
    "ProjectedLayout",
    "ProjectedRect",
    "RegionKind",
    "SlideLayout",
    "default_layout",
    "project",
    "project_layout",
    "resolve_layout",
]
