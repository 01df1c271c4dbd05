"""Export layout for deckforge.

Public API:
    - build_export_plan: lay out a Document in export page units
    - ExportPlan, ExportPage, TextBox, MediaBox, MediaItem: the plan model
"""

from deckforge.export.plan import (
    ExportPage,
    ExportPlan,
    MediaBox,
    MediaItem,
    TextBox,
    build_content_page,
    build_export_plan,
    build_section_page,
    build_title_page,
)

__all__ = [
    "ExportPage",
    "ExportPlan",
    "MediaBox",
    "MediaItem",
    "TextBox",
    "build_content_page",
    "build_export_plan",
    "build_section_page",
    "build_title_page",
]
