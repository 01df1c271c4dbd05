"""Tests for deckforge.cli.runners."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from deckforge.cli.runners import (
    list_projects,
    load_references,
    run_generate,
    run_layout,
)
from deckforge.config import Settings
from deckforge.document.models import Document, Slide, Topic
from deckforge.geometry import Rect
from deckforge.storage import JsonProjectRepository


@pytest.fixture
def generator() -> MagicMock:
    generator = MagicMock()
    generator.generate_outline = AsyncMock(
        side_effect=lambda prompt, references: [
            Topic(title="Basics", slides=[Slide(title="What"), Slide(title="Why")])
        ]
    )
    generator.generate_bullets = AsyncMock(return_value=["one", "two"])
    generator.generate_notes = AsyncMock(return_value="Notes.")
    return generator


class TestLoadReferences:
    def test_reads_files(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_bytes(b"caf\xc3\xa9 \xff")
        (reference,) = load_references([path])
        assert reference.kind == "file"
        assert reference.name == "notes.txt"
        assert reference.content.startswith("café ")


class TestRunGenerate:
    def test_generate_and_save(
        self, generator: MagicMock, tmp_path: Path, test_settings: Settings
    ) -> None:
        with patch(
            "deckforge.cli.runners.create_generation_service", return_value=generator
        ):
            result = run_generate(
                prompt="Wind power",
                with_bullets=True,
                with_notes=True,
                save_as="Draft",
                projects_dir=tmp_path,
                config=test_settings,
            )

        assert result.title == "Wind power"
        assert (result.topics, result.slides) == (1, 2)
        assert result.slide_titles == ["What", "Why"]
        assert generator.generate_bullets.await_count == 2
        assert generator.generate_notes.await_count == 2

        assert result.project_id is not None
        document = JsonProjectRepository(tmp_path).load(result.project_id)
        assert [s.bullets for s in document.topics[0].slides] == [
            ["one", "two"],
            ["one", "two"],
        ]
        assert document.topics[0].slides[0].speaker_notes == "Notes."

    def test_generate_without_save(
        self, generator: MagicMock, tmp_path: Path, test_settings: Settings
    ) -> None:
        with patch(
            "deckforge.cli.runners.create_generation_service", return_value=generator
        ):
            result = run_generate(
                prompt="Wind power",
                title="Wind",
                projects_dir=tmp_path,
                config=test_settings,
            )

        assert result.title == "Wind"
        assert result.project_id is None
        generator.generate_bullets.assert_not_awaited()
        assert list(tmp_path.iterdir()) == []

    def test_generation_failure_saves_nothing(
        self, generator: MagicMock, tmp_path: Path, test_settings: Settings
    ) -> None:
        generator.generate_outline.side_effect = RuntimeError("boom")
        with (
            patch(
                "deckforge.cli.runners.create_generation_service",
                return_value=generator,
            ),
            pytest.raises(RuntimeError, match="boom"),
        ):
            run_generate(
                prompt="Wind power",
                save_as="Draft",
                projects_dir=tmp_path,
                config=test_settings,
            )

        assert JsonProjectRepository(tmp_path).list() == []


class TestRunLayout:
    def test_layout_of_saved_project(
        self, tmp_path: Path, sample_document: Document, test_settings: Settings
    ) -> None:
        project_id = JsonProjectRepository(tmp_path).save("Energy", sample_document)
        plan = run_layout(project_id, projects_dir=tmp_path, config=test_settings)
        assert len(plan.pages) == 7
        assert plan.frame.width == test_settings.EXPORT_PAGE_WIDTH

    def test_layout_repairs_undersized_regions(
        self, tmp_path: Path, test_settings: Settings
    ) -> None:
        tiny = Rect(x=98, y=0, width=2, height=50)
        document = Document(
            title="Tiny",
            topics=[Topic(title="T", slides=[Slide(title="S", text_region=tiny)])],
        )
        project_id = JsonProjectRepository(tmp_path).save("Tiny", document)
        plan = run_layout(project_id, projects_dir=tmp_path, config=test_settings)
        content = plan.pages[-1]
        assert content.kind == "content"
        body = content.text_boxes[-1].rect
        assert body.width == pytest.approx(test_settings.EXPORT_PAGE_WIDTH * 0.10)
        assert body.x == pytest.approx(test_settings.EXPORT_PAGE_WIDTH * 0.90)

    def test_list_projects(self, tmp_path: Path, test_settings: Settings) -> None:
        JsonProjectRepository(tmp_path).save("One", Document())
        summaries = list_projects(tmp_path, test_settings)
        assert [s.name for s in summaries] == ["One"]
