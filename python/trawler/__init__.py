"""
Trawler - workspace document discovery for language servers.

Walks the workspace folders reported by an editor, collects every file that a
registered language recognizes, and hands the loaded documents to a build
step in one pass.
"""

__version__ = "0.1.0"

from trawler.documents import DocumentStore, TextDocument
from trawler.file_system import FileSystemNode, LocalFileSystemProvider
from trawler.languages import LanguageMetaData, LanguageRegistry
from trawler.memory_fs import InMemoryFileSystemProvider
from trawler.traversal import traverse
from trawler.uri import Location
from trawler.workspace import (
    WorkspaceFolder,
    WorkspaceHooks,
    WorkspaceManager,
    create_workspace_manager,
)

__all__ = [
    "DocumentStore",
    "FileSystemNode",
    "InMemoryFileSystemProvider",
    "LanguageMetaData",
    "LanguageRegistry",
    "LocalFileSystemProvider",
    "Location",
    "TextDocument",
    "WorkspaceFolder",
    "WorkspaceHooks",
    "WorkspaceManager",
    "create_workspace_manager",
    "traverse",
]
