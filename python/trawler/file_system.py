"""
File-system access for workspace discovery.

Provides:
- FileSystemNode: one immediate child of a directory listing, tagged file/directory
- FileSystemFilter: inclusion predicate applied during traversal
- FileSystemProvider: the interface the rest of Trawler reads storage through
- LocalFileSystemProvider: implementation backed by the local disk

All reads use a single fixed encoding chosen at construction. Nothing is cached:
every call goes back to storage, and every failure is raised unmodified.
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from trawler.traversal import traverse
from trawler.uri import Location

logger = logging.getLogger("trawler.file_system")

DEFAULT_ENCODING = "utf-8"


@dataclass(frozen=True)
class FileSystemNode:
    """An entry of a directory listing.

    Exactly one of is_file / is_directory is True for anything a provider
    returns. `container` is the folder that was listed.
    """

    is_file: bool
    is_directory: bool
    name: str
    container: Location

    @property
    def location(self) -> Location:
        """Resolved location of this entry."""
        return self.container.joinpath(self.name)


# Decides whether a directory is descended into / a file is collected
FileSystemFilter = Callable[[FileSystemNode], bool]


class FileSystemProvider(Protocol):
    """
    Interface for reading workspace storage.

    Expected Behavior:
    ------------------
    - read_file / read_file_sync return the full decoded text of a file
    - list_directory returns immediate children only, each with container=location
    - traverse walks a tree depth-first, applying the filter before descending
    - Missing or unreadable locations raise OSError subclasses; nothing is swallowed
    """

    async def read_file(self, location: Location) -> str:
        ...

    def read_file_sync(self, location: Location) -> str:
        ...

    async def list_directory(self, location: Location) -> list[FileSystemNode]:
        ...

    async def traverse(
        self, root: Location, filter: Optional[FileSystemFilter] = None
    ) -> list[Location]:
        ...


class LocalFileSystemProvider:
    """FileSystemProvider backed by the local disk.

    Blocking calls run in a worker thread (asyncio.to_thread) so a large
    listing never stalls the event loop.
    """

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        self.encoding = encoding

    async def read_file(self, location: Location) -> str:
        return await asyncio.to_thread(self.read_file_sync, location)

    def read_file_sync(self, location: Location) -> str:
        # newline="" keeps "\r\n" intact; undecodable bytes become U+FFFD
        with open(
            location.fs_path, encoding=self.encoding, errors="replace", newline=""
        ) as f:
            return f.read()

    async def list_directory(self, location: Location) -> list[FileSystemNode]:
        return await asyncio.to_thread(self._scan_directory, location)

    def _scan_directory(self, location: Location) -> list[FileSystemNode]:
        nodes = []
        with os.scandir(location.fs_path) as entries:
            for entry in entries:
                # Symlinks are not followed; sockets, devices etc. are neither kind
                is_file = entry.is_file(follow_symlinks=False)
                is_directory = entry.is_dir(follow_symlinks=False)
                if not (is_file or is_directory):
                    logger.debug(f"Skipping special entry: {entry.path}")
                    continue
                nodes.append(
                    FileSystemNode(
                        is_file=is_file,
                        is_directory=is_directory,
                        name=entry.name,
                        container=location,
                    )
                )
        return nodes

    async def traverse(
        self, root: Location, filter: Optional[FileSystemFilter] = None
    ) -> list[Location]:
        return await traverse(self, root, filter)
