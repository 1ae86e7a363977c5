"""Tests for the query mini-language."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PaperShelf.core.errors import QueryParseError
from PaperShelf.core.query import (
    Author,
    FreeText,
    Id,
    Lang,
    SourceText,
    Tag,
    Title,
    format_query,
    parse_query,
    parse_query_token,
)


class TestParseQueryToken(unittest.TestCase):
    def test_bare_token_is_free_text(self) -> None:
        self.assertEqual(parse_query_token("ocaml"), FreeText("ocaml"))

    def test_prefix_aliases(self) -> None:
        cases = {
            "id:3": Id(3),
            "title:go": Title("go"),
            "ti:go": Title("go"),
            "author:pike": Author("pike"),
            "a:pike": Author("pike"),
            "au:pike": Author("pike"),
            "source:pdf": SourceText("pdf"),
            "s:pdf": SourceText("pdf"),
            "src:pdf": SourceText("pdf"),
            "tag:lang": Tag("lang"),
            "ta:lang": Tag("lang"),
            "lang:fr": Lang("fr"),
        }
        for token, expected in cases.items():
            with self.subTest(token=token):
                self.assertEqual(parse_query_token(token), expected)

    def test_prefix_is_case_insensitive(self) -> None:
        self.assertEqual(parse_query_token("Title:Go"), Title("Go"))

    def test_value_keeps_later_colons(self) -> None:
        self.assertEqual(parse_query_token("source:http://go.dev"), SourceText("http://go.dev"))

    def test_non_integer_id(self) -> None:
        with self.assertRaises(QueryParseError) as ctx:
            parse_query_token("id:abc")
        self.assertIn("abc", str(ctx.exception))
        self.assertEqual(ctx.exception.token, "id:abc")

    def test_unknown_prefix_names_prefix(self) -> None:
        with self.assertRaisesRegex(QueryParseError, "Unknown prefix year"):
            parse_query_token("year:2014")

    def test_leading_colon_is_free_text(self) -> None:
        self.assertEqual(parse_query_token(":weird"), FreeText(":weird"))


class TestParseQuery(unittest.TestCase):
    def test_preserves_order(self) -> None:
        query = parse_query(["go", "au:pike", "id:1"])
        self.assertEqual(query, (FreeText("go"), Author("pike"), Id(1)))

    def test_format_round_trips_canonical_tokens(self) -> None:
        tokens = ["go", "title:effective", "author:pike", "source:x.pdf", "tag:lang", "lang:en", "id:4"]
        self.assertEqual(format_query(parse_query(tokens)), " ".join(tokens))


if __name__ == "__main__":
    unittest.main()
