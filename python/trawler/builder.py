"""
Build trigger interface.

Workspace initialization hands the complete document set to a DocumentBuilder
exactly once. What "build" means (indexing, linking, validation) belongs to
the implementation.
"""

from typing import Protocol, Sequence

from trawler.documents import TextDocument


class DocumentBuilder(Protocol):
    """Indexes, cross-references and validates a set of documents in one pass."""

    async def build(self, documents: Sequence[TextDocument]) -> None:
        ...
