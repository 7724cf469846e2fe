"""
Tests for filtered traversal: collection, pruning, ordering and failures.
"""

from unittest.mock import MagicMock

import pytest

from trawler.file_system import FileSystemNode, LocalFileSystemProvider
from trawler.memory_fs import InMemoryFileSystemProvider
from trawler.traversal import traverse
from trawler.uri import Location


def loc(path: str) -> Location:
    return Location.parse(path)


@pytest.fixture
def deep_fs():
    return InMemoryFileSystemProvider(
        {
            "/root/z.lang": "",
            "/root/a/one.lang": "",
            "/root/a/b/two.lang": "",
            "/root/a/b/skip.lang": "",
            "/root/c/three.lang": "",
            "/root/c/gen/four.lang": "",
        }
    )


class TestUnfiltered:
    """Traversal without filter returns every file exactly once."""

    @pytest.mark.asyncio
    async def test_collects_all_files(self, deep_fs):
        found = await traverse(deep_fs, loc("/root"))
        assert len(found) == len(set(found)) == 6

    @pytest.mark.asyncio
    async def test_directories_never_collected(self, deep_fs):
        found = await traverse(deep_fs, loc("/root"))
        assert loc("/root/a") not in found
        assert loc("/root/a/b") not in found

    @pytest.mark.asyncio
    async def test_depth_first_pre_order(self, deep_fs):
        """Encounter order within a directory, depth-first across the tree."""
        found = await traverse(deep_fs, loc("/root"))
        assert found == [
            loc("/root/z.lang"),
            loc("/root/a/one.lang"),
            loc("/root/a/b/two.lang"),
            loc("/root/a/b/skip.lang"),
            loc("/root/c/three.lang"),
            loc("/root/c/gen/four.lang"),
        ]

    @pytest.mark.asyncio
    async def test_always_true_filter_equals_no_filter(self, deep_fs):
        assert await traverse(deep_fs, loc("/root"), lambda node: True) == await traverse(
            deep_fs, loc("/root")
        )

    @pytest.mark.asyncio
    async def test_empty_directory(self):
        fs = InMemoryFileSystemProvider()
        fs.add_directory("/empty")
        assert await traverse(fs, loc("/empty")) == []


class TestFiltering:
    """The filter prunes directories and drops files."""

    @pytest.mark.asyncio
    async def test_rejected_directory_is_pruned(self, deep_fs):
        """Nothing beneath a rejected directory is collected."""
        found = await traverse(deep_fs, loc("/root"), lambda node: node.name != "b")
        assert loc("/root/a/one.lang") in found
        assert not any(str(uri).startswith("file:///root/a/b/") for uri in found)

    @pytest.mark.asyncio
    async def test_rejected_directory_is_never_listed(self, deep_fs):
        """Pruning happens before any I/O on the rejected directory."""
        deep_fs.deny("/root/c")
        found = await traverse(deep_fs, loc("/root"), lambda node: node.name != "c")
        assert loc("/root/z.lang") in found

    @pytest.mark.asyncio
    async def test_rejected_file_absent_siblings_present(self, deep_fs):
        found = await traverse(deep_fs, loc("/root"), lambda node: node.name != "skip.lang")
        assert loc("/root/a/b/skip.lang") not in found
        assert loc("/root/a/b/two.lang") in found

    @pytest.mark.asyncio
    async def test_filter_sees_unresolved_entries(self, deep_fs):
        seen = []

        def record(node: FileSystemNode) -> bool:
            seen.append(node)
            return True

        await traverse(deep_fs, loc("/root"), record)

        assert len(seen) == 10  # 6 files + 4 directories
        z = next(node for node in seen if node.name == "z.lang")
        assert z.container == loc("/root")
        assert z.is_file

    @pytest.mark.asyncio
    async def test_entries_of_other_kinds_contribute_nothing(self):
        """A provider reporting a node that is neither kind: it is not collected."""
        provider = MagicMock()

        async def list_directory(location):
            return [
                FileSystemNode(is_file=False, is_directory=False, name="socket", container=location),
                FileSystemNode(is_file=True, is_directory=False, name="a.lang", container=location),
            ]

        provider.list_directory = list_directory
        assert await traverse(provider, loc("/root")) == [loc("/root/a.lang")]


class TestFailures:
    """A failing listing aborts the whole traversal."""

    @pytest.mark.asyncio
    async def test_subfolder_failure_propagates(self, deep_fs):
        deep_fs.deny("/root/a/b")
        with pytest.raises(PermissionError):
            await traverse(deep_fs, loc("/root"))

    @pytest.mark.asyncio
    async def test_missing_root_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await traverse(LocalFileSystemProvider(), Location.file(tmp_path / "missing"))


class TestOnDisk:
    """Traversal against the local file system."""

    @pytest.mark.asyncio
    async def test_disk_prune(self, disk_workspace):
        found = await traverse(
            LocalFileSystemProvider(),
            Location.file(disk_workspace),
            lambda node: node.name != "node_modules",
        )
        assert set(found) == {
            Location.file(disk_workspace / "a.lang"),
            Location.file(disk_workspace / "b.txt"),
            Location.file(disk_workspace / "sub" / "c.lang"),
        }
