"""
Filtered, recursive directory traversal.

Depth-first, pre-order and sequential: sibling directories are walked one after
another, so the collected order is deterministic for a given storage listing
order. The filter sees the unresolved entry (name, container, kind) before any
path resolution or further I/O, and a rejected directory is pruned together
with everything beneath it.

Symlink cycles are not detected. Providers do not report symlinks as
directories, so a cycle can only appear through a provider that follows them.
"""

import logging
from typing import TYPE_CHECKING, Callable, Optional

from trawler.uri import Location

if TYPE_CHECKING:
    from trawler.file_system import FileSystemFilter, FileSystemProvider

logger = logging.getLogger("trawler.traversal")


async def traverse(
    provider: "FileSystemProvider",
    root: Location,
    filter: Optional["FileSystemFilter"] = None,
) -> list[Location]:
    """
    Collect every file location reachable from `root` that passes `filter`.

    Args:
        provider: Storage to list directories through
        root: Folder the walk starts at
        filter: Inclusion predicate; None walks everything

    Returns:
        File locations in depth-first encounter order (directories never appear)

    Raises:
        OSError: If any directory listing fails. No partial result is returned.
    """
    locations: list[Location] = []
    await _traverse_folder(provider, root, filter, locations.append)
    logger.debug(f"Traversed {root}: {len(locations)} file(s)")
    return locations


async def _traverse_folder(
    provider: "FileSystemProvider",
    folder: Location,
    filter: Optional["FileSystemFilter"],
    collector: Callable[[Location], None],
) -> None:
    for node in await provider.list_directory(folder):
        if filter is not None and not filter(node):
            continue
        if node.is_directory:
            await _traverse_folder(
                provider, node.container.joinpath(node.name), filter, collector
            )
        elif node.is_file:
            collector(node.container.joinpath(node.name))
