"""Shared pytest fixtures and configuration."""

from collections.abc import Iterator

import pytest

from deckforge.config import Settings
from deckforge.document.models import Document, Slide, Topic
from deckforge.utils.logging import clear_correlation_context, configure_logging


@pytest.fixture(autouse=True)
def reset_logging_context() -> Iterator[None]:
    """Reset correlation context between tests."""
    clear_correlation_context()
    yield
    clear_correlation_context()


@pytest.fixture
def test_settings() -> Settings:
    """Create a Settings instance with test-safe defaults."""
    return Settings(
        OPENAI_API_KEY="test-openai-key",
        OPENAI_RPM=1000,  # High limit for tests
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="console",
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture
def configure_test_logging() -> Iterator[None]:
    """Configure logging for tests with console output."""
    configure_logging(level="DEBUG", log_format="console")
    yield


@pytest.fixture
def sample_document() -> Document:
    """Two topics: t1 with slides s1, s2, s3 and t2 with slide s4."""
    return Document(
        title="Renewable energy",
        topics=[
            Topic(
                id="t1",
                title="Solar",
                slides=[
                    Slide(id="s1", title="A", bullets=["one", "two"]),
                    Slide(id="s2", title="B"),
                    Slide(id="s3", title="C"),
                ],
            ),
            Topic(id="t2", title="Wind", slides=[Slide(id="s4", title="D")]),
        ],
    )
