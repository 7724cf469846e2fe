"""
In-memory FileSystemProvider.

For hosts without disk access (browser workers, editors holding unsaved
buffers) and for tests that need exact listing order or injected failures.

Directories are implied by the files placed beneath them and can also be
added empty. Listing order is insertion order.
"""

import asyncio
import errno
import os
from typing import Mapping, Optional, Union

from trawler.file_system import FileSystemFilter, FileSystemNode
from trawler.traversal import traverse
from trawler.uri import Location

LocationLike = Union[Location, str]


def _as_location(location: LocationLike) -> Location:
    if isinstance(location, Location):
        return location
    return Location.parse(location)


def _os_error(cls: type, code: int, location: Location) -> OSError:
    return cls(code, os.strerror(code), str(location))


class InMemoryFileSystemProvider:
    """FileSystemProvider over a dict of file contents."""

    def __init__(self, files: Optional[Mapping[LocationLike, str]] = None):
        self._files: dict[Location, str] = {}
        # folder -> {child name: is_directory}, insertion ordered
        self._children: dict[Location, dict[str, bool]] = {}
        self._denied: set[Location] = set()
        for location, text in (files or {}).items():
            self.add_file(location, text)

    def add_file(self, location: LocationLike, text: str) -> Location:
        """
        Add (or overwrite) a file, creating its parent folders.

        Raises:
            FileExistsError: If the location or one of its parents is already
                recorded as the other kind (file vs. folder)
        """
        location = _as_location(location)
        self._link(location, is_directory=False)
        self._files[location] = text
        return location

    def add_directory(self, location: LocationLike) -> Location:
        """Add an (empty) folder, creating its parents. Raises like add_file()."""
        location = _as_location(location)
        self._link(location, is_directory=True)
        self._children.setdefault(location, {})
        return location

    def deny(self, location: LocationLike) -> None:
        """Make every access to `location` fail with PermissionError."""
        self._denied.add(_as_location(location))

    def _link(self, location: Location, is_directory: bool) -> None:
        # Validate the whole chain first so a conflict leaves no partial entries
        chain = []
        child = location
        parent = location.parent
        while parent != child:
            recorded = self._children.get(parent, {}).get(child.name)
            if recorded is not None and recorded != is_directory:
                raise _os_error(FileExistsError, errno.EEXIST, child)
            chain.append((parent, child.name, is_directory))
            is_directory = True
            child, parent = parent, parent.parent

        for parent, name, kind in chain:
            self._children.setdefault(parent, {}).setdefault(name, kind)

    def _check_access(self, location: Location) -> None:
        if location in self._denied:
            raise _os_error(PermissionError, errno.EACCES, location)

    async def read_file(self, location: Location) -> str:
        await asyncio.sleep(0)
        return self.read_file_sync(location)

    def read_file_sync(self, location: Location) -> str:
        self._check_access(location)
        if location in self._files:
            return self._files[location]
        if location in self._children:
            raise _os_error(IsADirectoryError, errno.EISDIR, location)
        raise _os_error(FileNotFoundError, errno.ENOENT, location)

    async def list_directory(self, location: Location) -> list[FileSystemNode]:
        await asyncio.sleep(0)
        self._check_access(location)
        if location in self._files:
            raise _os_error(NotADirectoryError, errno.ENOTDIR, location)
        if location not in self._children:
            raise _os_error(FileNotFoundError, errno.ENOENT, location)
        return [
            FileSystemNode(
                is_file=not is_directory,
                is_directory=is_directory,
                name=name,
                container=location,
            )
            for name, is_directory in self._children[location].items()
        ]

    async def traverse(
        self, root: Location, filter: Optional[FileSystemFilter] = None
    ) -> list[Location]:
        return await traverse(self, root, filter)
