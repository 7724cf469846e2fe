"""
Language registry.

Each registered language declares the file-name suffixes it owns. Workspace
initialization reads the union of those suffixes once per call to decide
which files to collect.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from trawler.uri import Location

logger = logging.getLogger("trawler.languages")


def _normalize_extension(extension: str) -> str:
    extension = extension.strip()
    if extension and not extension.startswith("."):
        extension = f".{extension}"
    return extension


@dataclass(frozen=True)
class LanguageMetaData:
    """Static description of a language."""

    language_id: str
    file_extensions: tuple[str, ...] = ()

    def __post_init__(self):
        extensions = tuple(
            ext for ext in map(_normalize_extension, self.file_extensions) if ext
        )
        object.__setattr__(self, "file_extensions", extensions)


class LanguageRegistry:
    """All languages known to a language server, in registration order."""

    def __init__(self, languages: Iterable[LanguageMetaData] = ()):
        self._languages: dict[str, LanguageMetaData] = {}
        self._by_extension: dict[str, LanguageMetaData] = {}
        for language in languages:
            self.register(language)

    def register(self, language: LanguageMetaData) -> None:
        """
        Register a language. Re-registering an id replaces the old entry.

        When two languages claim the same suffix, the later registration wins.
        """
        if self._languages.pop(language.language_id, None) is not None:
            logger.warning(f"Language '{language.language_id}' registered twice, replacing")
        for ext in language.file_extensions:
            owner = self._by_extension.get(ext)
            if owner is not None and owner.language_id != language.language_id:
                logger.warning(
                    f"Extension '{ext}' moved from '{owner.language_id}' to '{language.language_id}'"
                )

        # Re-inserted at the end: the latest registration owns shared suffixes
        self._languages[language.language_id] = language
        self._by_extension = {
            ext: meta for meta in self._languages.values() for ext in meta.file_extensions
        }

    @property
    def all(self) -> list[LanguageMetaData]:
        return list(self._languages.values())

    def file_extensions(self) -> frozenset[str]:
        """Union of the suffixes of every registered language."""
        return frozenset(
            ext for language in self._languages.values() for ext in language.file_extensions
        )

    def get_language(self, location: Location) -> Optional[LanguageMetaData]:
        """Language owning the suffix of `location`, if any."""
        return self._by_extension.get(location.suffix)
