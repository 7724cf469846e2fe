"""
User-configured exclusion patterns.

Uses pathspec library for GitIgnore-compliant pattern matching. Patterns are
matched against the entry NAME only (the traversal filter never sees a path
relative to the workspace root), with a trailing "/" for directories so that
"generated/" only prunes folders.
"""

import logging
from typing import Iterable, Optional

from pathspec import PathSpec

from trawler.file_system import FileSystemNode

logger = logging.getLogger("trawler.ignore_patterns")


def compile_patterns(patterns: Iterable[str]) -> Optional[PathSpec]:
    """
    Compile gitwildmatch patterns.

    Args:
        patterns: Pattern lines; blanks and "#" comments are dropped

    Returns:
        PathSpec, or None when no usable pattern is left
    """
    lines = [
        line.strip()
        for line in patterns
        if line.strip() and not line.strip().startswith("#")
    ]
    if not lines:
        return None
    logger.debug(f"Compiled {len(lines)} exclusion pattern(s)")
    return PathSpec.from_lines("gitwildmatch", lines)


def is_excluded(node: FileSystemNode, spec: Optional[PathSpec]) -> bool:
    """True if `spec` matches the entry's name."""
    if spec is None:
        return False
    name = f"{node.name}/" if node.is_directory else node.name
    return spec.match_file(name)
