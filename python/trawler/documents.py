"""
Document store.

Maps locations to loaded TextDocuments. get_or_create_document() is
idempotent: asking twice for the same location (in the same or in a later
workspace initialization) returns the very same document object.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from trawler.errors import DocumentAlreadyExistsError
from trawler.file_system import FileSystemProvider
from trawler.languages import LanguageRegistry
from trawler.uri import Location

logger = logging.getLogger("trawler.documents")


@dataclass(eq=False)
class TextDocument:
    """A loaded source file. Compared by identity."""

    uri: Location
    text: str
    language_id: Optional[str] = None
    version: int = 0


class DocumentStore:
    """In-memory store of every document known to the workspace."""

    def __init__(
        self,
        file_system: FileSystemProvider,
        registry: Optional[LanguageRegistry] = None,
    ):
        self.file_system = file_system
        self.registry = registry
        self._documents: dict[Location, TextDocument] = {}

    def get_or_create_document(self, uri: Location) -> TextDocument:
        """
        Return the document for `uri`, loading it from storage if unknown.

        Loading uses the provider's synchronous read; read errors propagate.
        """
        document = self._documents.get(uri)
        if document is not None:
            return document

        text = self.file_system.read_file_sync(uri)
        document = TextDocument(uri=uri, text=text, language_id=self._language_id(uri))
        self._documents[uri] = document
        logger.debug(f"Loaded document {uri} ({len(text)} chars)")
        return document

    def add_document(self, document: TextDocument) -> None:
        """
        Add a document built elsewhere (e.g. synthesized in memory).

        Raises:
            DocumentAlreadyExistsError: If a document with the same URI exists
        """
        if document.uri in self._documents:
            raise DocumentAlreadyExistsError(str(document.uri))
        self._documents[document.uri] = document

    def has_document(self, uri: Location) -> bool:
        return uri in self._documents

    def get_document(self, uri: Location) -> Optional[TextDocument]:
        return self._documents.get(uri)

    def remove_document(self, uri: Location) -> Optional[TextDocument]:
        """Forget a document. Returns the removed document, if there was one."""
        return self._documents.pop(uri, None)

    def all(self) -> list[TextDocument]:
        return list(self._documents.values())

    def __len__(self) -> int:
        return len(self._documents)

    def _language_id(self, uri: Location) -> Optional[str]:
        if self.registry is None:
            return None
        language = self.registry.get_language(uri)
        return language.language_id if language else None
