"""Tests for source parsing and catalog-relative paths."""

import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PaperShelf.core.models import FileSource, OtherSource, UrlSource
from PaperShelf.core.sources import export_source, import_source, parse_source


class TestParseSource(unittest.TestCase):
    def test_kinds(self) -> None:
        cases = {
            "papers/a.pdf": FileSource("papers/a.pdf"),
            "file:///srv/a.pdf": FileSource("/srv/a.pdf"),
            "https://go.dev/doc/effective_go": UrlSource("https://go.dev/doc/effective_go"),
            "ftp://mirror.org/a.ps": UrlSource("ftp://mirror.org/a.ps"),
            "doi:10.1145/1234": OtherSource("doi:10.1145/1234"),
            "ISBN:978-0-262-51087-5": OtherSource("ISBN:978-0-262-51087-5"),
        }
        for text, expected in cases.items():
            with self.subTest(text=text):
                self.assertEqual(parse_source(text), expected)

    def test_str_is_raw_value(self) -> None:
        self.assertEqual(str(UrlSource("https://x.org")), "https://x.org")
        self.assertEqual(str(FileSource("a.pdf")), "a.pdf")


class TestCatalogRelativePaths(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.base = Path(self._tmpdir.name).resolve() / "library"
        self.base.mkdir()

    def tearDown(self) -> None:
        self._tmpdir.cleanup()

    def test_file_inside_catalog_is_relative(self) -> None:
        source = import_source(self.base, str(self.base / "papers" / "a.pdf"))
        self.assertEqual(source, FileSource("papers/a.pdf"))

    def test_file_outside_catalog_is_absolute(self) -> None:
        outside = self.base.parent / "elsewhere" / "b.pdf"
        source = import_source(self.base, str(outside))
        self.assertEqual(source, FileSource(str(outside)))

    def test_non_file_sources_untouched(self) -> None:
        self.assertEqual(import_source(self.base, "doi:10.1/2"), OtherSource("doi:10.1/2"))
        self.assertEqual(import_source(self.base, "https://x.org/a"), UrlSource("https://x.org/a"))

    def test_export_resolves_relative_files(self) -> None:
        self.assertEqual(
            export_source(self.base, FileSource("papers/a.pdf")),
            str(self.base / "papers" / "a.pdf"),
        )
        self.assertEqual(export_source(self.base, FileSource("/srv/b.pdf")), "/srv/b.pdf")
        self.assertEqual(export_source(self.base, UrlSource("https://x.org")), "https://x.org")


if __name__ == "__main__":
    unittest.main()
