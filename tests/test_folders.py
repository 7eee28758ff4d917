import tempfile
import unittest
from pathlib import Path

from data_source.errors import IoError, NotFoundError, NotFoundInDirectoriesError
from data_source.folders import find_in_folders
from data_source.resolver import FolderList, SourceResolver


class FindInFoldersTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        self.dirs = []
        for name in ("d1", "d2", "d3"):
            directory = root / name
            directory.mkdir()
            self.dirs.append(str(directory))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_returns_copy_from_only_directory_that_has_it(self) -> None:
        (Path(self.dirs[1]) / "config.yaml").write_bytes(b"from d2")
        (Path(self.dirs[0]) / "other.yaml").write_bytes(b"unrelated")

        content, provenance = find_in_folders("config.yaml", self.dirs)

        self.assertEqual(content, b"from d2")
        self.assertEqual(provenance, self.dirs[1])

    def test_first_directory_in_order_wins(self) -> None:
        (Path(self.dirs[2]) / "config.yaml").write_bytes(b"from d3")
        (Path(self.dirs[0]) / "config.yaml").write_bytes(b"from d1")

        content, provenance = find_in_folders("config.yaml", self.dirs)

        self.assertEqual(content, b"from d1")
        self.assertEqual(provenance, self.dirs[0])

    def test_nested_relative_name(self) -> None:
        nested = Path(self.dirs[2]) / "sub"
        nested.mkdir()
        (nested / "rules.txt").write_bytes(b"nested")

        content, provenance = find_in_folders("sub/rules.txt", self.dirs)

        self.assertEqual(content, b"nested")
        self.assertEqual(provenance, self.dirs[2])

    def test_miss_reports_every_searched_directory(self) -> None:
        with self.assertRaises(NotFoundInDirectoriesError) as ctx:
            find_in_folders("missing.txt", self.dirs)

        self.assertEqual(ctx.exception.directories, self.dirs)
        self.assertEqual(ctx.exception.file_name, "missing.txt")
        self.assertIsInstance(ctx.exception, NotFoundError)

    def test_empty_directory_list_is_a_miss(self) -> None:
        with self.assertRaises(NotFoundInDirectoriesError) as ctx:
            find_in_folders("missing.txt", [])
        self.assertEqual(ctx.exception.directories, [])

    def test_existing_but_unreadable_match_is_io_error(self) -> None:
        # A directory passes the existence check but cannot be read as a file.
        (Path(self.dirs[0]) / "config.yaml").mkdir()

        with self.assertRaises(IoError):
            find_in_folders("config.yaml", self.dirs)


class FolderListResolverTests(unittest.IsolatedAsyncioTestCase):
    async def test_async_lookup_matches_sync_lookup(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            first = Path(tmp) / "a"
            second = Path(tmp) / "b"
            first.mkdir()
            second.mkdir()
            (second / "x.bin").write_bytes(b"\x00\x01")
            resolver = SourceResolver.folders([str(first), str(second)])

            self.assertEqual(resolver.get_file_content("x.bin"), (b"\x00\x01", str(second)))
            self.assertEqual(await resolver.get_file_content_async("x.bin"), (b"\x00\x01", str(second)))

    async def test_appended_directory_is_searched_last(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            extra = Path(tmp) / "extra"
            extra.mkdir()
            (extra / "late.txt").write_bytes(b"late")
            resolver = SourceResolver.folders([])
            backend = resolver.backend
            assert isinstance(backend, FolderList)
            backend.append(str(extra))

            content, provenance = await resolver.get_file_content_async("late.txt")

            self.assertEqual(content, b"late")
            self.assertEqual(provenance, str(extra))


if __name__ == "__main__":
    unittest.main()
