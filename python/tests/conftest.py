"""
Pytest configuration and fixtures for Trawler tests.
"""

import logging
from unittest.mock import AsyncMock

import pytest

from trawler.documents import DocumentStore
from trawler.languages import LanguageMetaData, LanguageRegistry
from trawler.memory_fs import InMemoryFileSystemProvider


@pytest.fixture
def registry():
    """Registry with a single language owning the ".lang" suffix."""
    return LanguageRegistry([LanguageMetaData("lang", (".lang",))])


@pytest.fixture
def mock_builder():
    """Build trigger that records the documents it receives."""
    builder = AsyncMock()
    builder.build = AsyncMock(return_value=None)
    return builder


@pytest.fixture
def disk_workspace(tmp_path):
    """
    Workspace on disk:

        ws/a.lang
        ws/b.txt
        ws/sub/c.lang
        ws/node_modules/d.lang
    """
    workspace = tmp_path / "ws"
    (workspace / "sub").mkdir(parents=True)
    (workspace / "node_modules").mkdir()
    (workspace / "a.lang").write_text("a")
    (workspace / "b.txt").write_text("b")
    (workspace / "sub" / "c.lang").write_text("c")
    (workspace / "node_modules" / "d.lang").write_text("d")
    return workspace


@pytest.fixture
def memory_fs():
    """Same layout as disk_workspace, rooted at /ws, in memory."""
    return InMemoryFileSystemProvider(
        {
            "/ws/a.lang": "a",
            "/ws/b.txt": "b",
            "/ws/sub/c.lang": "c",
            "/ws/node_modules/d.lang": "d",
        }
    )


@pytest.fixture
def document_store(memory_fs, registry):
    return DocumentStore(memory_fs, registry)


@pytest.fixture(autouse=True)
def reset_trawler_logger():
    """Remove handlers installed by setup_logging() so tests stay isolated."""
    yield
    logger = logging.getLogger("trawler")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
