"""
Workspace initialization.

Finds the source files of every workspace folder, turns them into documents
and hands the complete set to the DocumentBuilder in a single build() call:

1. Build the inclusion filter once from the registered file extensions
2. Resolve each folder's root (overridable, e.g. to a "src" subfolder)
3. Traverse all roots concurrently, flatten in folder order
4. get_or_create_document() for every collected location
5. Let a hook append extra documents (built-in libraries, synthesized files)
6. build() the merged list exactly once

Any I/O error aborts the whole call and build() is never reached.

Specialization happens through WorkspaceHooks, a strategy object holding the
three overridable seams (root folder, additional documents, include node).
"""

import asyncio
import functools
import logging
import os
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Collection, Optional, Sequence

from pathspec import PathSpec

from trawler.builder import DocumentBuilder
from trawler.config import TrawlerConfig
from trawler.documents import DocumentStore, TextDocument
from trawler.file_system import FileSystemNode, FileSystemProvider, LocalFileSystemProvider
from trawler.ignore_defaults import DEFAULT_EXCLUDED_DIRECTORIES, HIDDEN_PREFIX
from trawler.ignore_patterns import compile_patterns, is_excluded
from trawler.languages import LanguageRegistry
from trawler.uri import Location

logger = logging.getLogger("trawler.workspace")


@dataclass(frozen=True)
class WorkspaceFolder:
    """A project root supplied by the host (e.g. from the LSP initialize request)."""

    uri: Location
    name: str = ""

    @classmethod
    def parse(cls, uri: str, name: Optional[str] = None) -> "WorkspaceFolder":
        location = Location.parse(uri)
        return cls(uri=location, name=location.name if name is None else name)

    @classmethod
    def from_path(cls, path, name: Optional[str] = None) -> "WorkspaceFolder":
        location = Location.file(path)
        return cls(uri=location, name=location.name if name is None else name)


DocumentCollector = Callable[[TextDocument], None]
RootFolderResolver = Callable[[WorkspaceFolder], Location]
AdditionalDocumentsLoader = Callable[
    [Sequence[WorkspaceFolder], DocumentCollector], Awaitable[None]
]
NodePredicate = Callable[[FileSystemNode, Collection[str]], bool]


def get_root_folder(workspace_folder: WorkspaceFolder) -> Location:
    """Default root: the workspace folder itself."""
    return workspace_folder.uri


async def load_additional_documents(
    folders: Sequence[WorkspaceFolder], collector: DocumentCollector
) -> None:
    """Default: no additional documents."""
    return None


def include_node(
    node: FileSystemNode,
    file_extensions: Collection[str],
    excluded_directories: Collection[str] = DEFAULT_EXCLUDED_DIRECTORIES,
    exclude_spec: Optional[PathSpec] = None,
) -> bool:
    """
    Decide whether an entry is descended into (directory) or collected (file).

    Hidden entries are always skipped. Directories are pruned when listed in
    `excluded_directories` or matched by `exclude_spec`. Files must carry one
    of `file_extensions` and not be matched by `exclude_spec`.
    """
    if node.name.startswith(HIDDEN_PREFIX):
        return False
    if node.is_directory:
        return node.name not in excluded_directories and not is_excluded(node, exclude_spec)
    if node.is_file:
        extension = os.path.splitext(node.name)[1]
        return extension in file_extensions and not is_excluded(node, exclude_spec)
    return False


@dataclass(frozen=True)
class WorkspaceHooks:
    """The overridable seams of workspace initialization.

    Replace any subset, e.g.:

        hooks = WorkspaceHooks(get_root_folder=lambda f: f.uri / "src")
    """

    get_root_folder: RootFolderResolver = get_root_folder
    load_additional_documents: AdditionalDocumentsLoader = load_additional_documents
    include_node: NodePredicate = include_node

    @classmethod
    def from_config(cls, config: TrawlerConfig, **overrides) -> "WorkspaceHooks":
        """Default hooks whose include_node honors the configured exclusions."""
        predicate = functools.partial(
            include_node,
            excluded_directories=frozenset(config.excluded_directories),
            exclude_spec=compile_patterns(config.exclude_patterns),
        )
        overrides.setdefault("include_node", predicate)
        return cls(**overrides)


@dataclass
class WorkspaceManager:
    """
    Finds and loads the source documents of a workspace.

    Holds only its collaborators; initialize_workspace() keeps no state between
    calls and can be re-run, relying on the DocumentStore to return known
    documents instead of duplicating them.
    """

    registry: LanguageRegistry
    documents: DocumentStore
    builder: DocumentBuilder
    file_system: FileSystemProvider
    hooks: WorkspaceHooks = field(default_factory=WorkspaceHooks)

    async def initialize_workspace(self, folders: Sequence[WorkspaceFolder]) -> None:
        """
        Index the given workspace folders.

        Args:
            folders: Workspace roots, in the order their documents should appear

        Raises:
            OSError: If any directory listing or file read fails. Nothing is built.
        """
        file_extensions = self.registry.file_extensions()
        if not file_extensions:
            logger.warning("No file extensions registered, traversal will collect nothing")

        def node_filter(node: FileSystemNode) -> bool:
            return self.hooks.include_node(node, file_extensions)

        roots = [self.hooks.get_root_folder(folder) for folder in folders]
        logger.info(f"🔍 Initializing workspace: {len(roots)} root(s)")

        try:
            locations = await self._traverse_roots(roots, node_filter)
            documents = [self.documents.get_or_create_document(uri) for uri in locations]
            await self.hooks.load_additional_documents(folders, documents.append)
        except Exception as e:
            logger.error(
                f"❌ Workspace initialization failed for {[str(r) for r in roots]}: {e}",
                exc_info=True,
            )
            raise

        additional = len(documents) - len(locations)
        logger.info(
            f"📄 Building {len(documents)} document(s) "
            f"({len(locations)} discovered, {additional} additional)"
        )
        await self.builder.build(documents)
        logger.info("✅ Workspace initialized")

    async def _traverse_roots(
        self, roots: Sequence[Location], node_filter: Callable[[FileSystemNode], bool]
    ) -> list[Location]:
        # All roots at once; the first failure cancels the rest and propagates as-is
        tasks = [
            asyncio.ensure_future(self.file_system.traverse(root, node_filter))
            for root in roots
        ]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

        for root, found in zip(roots, results):
            logger.debug(f"   {root}: {len(found)} file(s)")
        return [uri for found in results for uri in found]


def create_workspace_manager(
    registry: LanguageRegistry,
    builder: DocumentBuilder,
    config: Optional[TrawlerConfig] = None,
    file_system: Optional[FileSystemProvider] = None,
    **hook_overrides,
) -> WorkspaceManager:
    """
    Wire a WorkspaceManager with the default collaborators.

    Args:
        registry: Registered languages
        builder: Build trigger receiving the document set
        config: Settings (default: read from TRAWLER_* environment variables)
        file_system: Storage (default: local disk using config.encoding)
        **hook_overrides: Replacement WorkspaceHooks seams

    Returns:
        WorkspaceManager sharing one DocumentStore across initializations
    """
    if config is None:
        config = TrawlerConfig.from_env()
    if file_system is None:
        file_system = LocalFileSystemProvider(encoding=config.encoding)
    return WorkspaceManager(
        registry=registry,
        documents=DocumentStore(file_system, registry),
        builder=builder,
        file_system=file_system,
        hooks=WorkspaceHooks.from_config(config, **hook_overrides),
    )
