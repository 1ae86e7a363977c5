"""Tests for command implementations with stubbed prompts and launcher."""

import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PaperShelf.cli.commands import (
    AddCommand,
    OpenCommand,
    RemoveCommand,
    RemoveSourcesCommand,
    SearchCommand,
    SetTitleCommand,
    ShowCommand,
    split_list,
)
from PaperShelf.core.errors import InvalidSourceError, NotFoundError
from PaperShelf.core.models import DocumentHints, FileSource, OtherSource, UrlSource
from PaperShelf.core.query import FreeText
from PaperShelf.core.store import DocumentStore
from PaperShelf.services import create_search_service


class _RecordingWriter:
    def __init__(self) -> None:
        self.calls = []

    def write_documents(self, documents, *, short=False) -> None:
        self.calls.append(([doc.id for doc in documents], short))


class _ScriptedPrompter:
    def __init__(self, answers) -> None:
        self.answers = list(answers)
        self.asked = []

    def __call__(self, label: str, default: str) -> str:
        self.asked.append((label, default))
        answer = self.answers.pop(0)
        return default if answer is None else answer


def _no_hints(source, base_dir) -> DocumentHints:
    return DocumentHints()


class TestAddCommand(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.base = Path(self._tmpdir.name).resolve()
        (self.base / "a.pdf").write_bytes(b"")
        self.store = DocumentStore.create()
        self.writer = _RecordingWriter()

    def tearDown(self) -> None:
        self._tmpdir.cleanup()

    def test_prompts_prefilled_with_hints(self) -> None:
        prompter = _ScriptedPrompter([None, None, "ml, survey"])
        hints = DocumentHints(title="Deep Learning", authors=("Goodfellow", "Bengio"), tags=())
        AddCommand(
            store=self.store,
            base_dir=self.base,
            output_writer=self.writer,
            sources=[str(self.base / "a.pdf")],
            prompter=prompter,
            hint_provider=lambda source, base_dir: hints,
        ).execute()

        doc = self.store.get(0)
        self.assertEqual(doc.name, "Deep Learning")
        self.assertEqual(doc.authors, ("Goodfellow", "Bengio"))
        self.assertEqual(doc.tags, ("ml", "survey"))
        self.assertEqual(doc.source, (FileSource("a.pdf"),))
        self.assertEqual(prompter.asked[0], ("Title", "Deep Learning"))
        self.assertEqual(prompter.asked[1][1], "Goodfellow, Bengio")
        self.assertEqual(self.writer.calls, [([0], False)])

    def test_options_skip_prompts(self) -> None:
        prompter = _ScriptedPrompter([])
        AddCommand(
            store=self.store,
            base_dir=self.base,
            output_writer=self.writer,
            sources=["https://x.org/a", "doi:10.1/b"],
            prompter=prompter,
            title="Given",
            authors=["Ann"],
            tags=[],
            lang="en",
            hint_provider=_no_hints,
        ).execute()
        self.assertEqual(self.store.get(0).source, (UrlSource("https://x.org/a"),))
        self.assertEqual(self.store.get(1).source, (OtherSource("doi:10.1/b"),))
        self.assertEqual(self.store.get(1).name, "Given")
        self.assertEqual(len(self.store), 2)
        self.assertEqual(self.store.get(1).lang, "en")
        self.assertEqual(prompter.asked, [])

    def test_existing_source_is_skipped(self) -> None:
        self.store.add(name="Existing", sources=[UrlSource("https://x.org/a")])
        AddCommand(
            store=self.store,
            base_dir=self.base,
            output_writer=self.writer,
            sources=["https://x.org/a"],
            prompter=_ScriptedPrompter([]),
            title="Dup",
            authors=[],
            tags=[],
            hint_provider=_no_hints,
        ).execute()
        self.assertEqual(len(self.store), 1)

    def test_missing_file_rejected(self) -> None:
        command = AddCommand(
            store=self.store,
            base_dir=self.base,
            output_writer=self.writer,
            sources=[str(self.base / "nope.pdf")],
            prompter=_ScriptedPrompter([]),
            title="x",
            hint_provider=_no_hints,
        )
        with self.assertRaises(InvalidSourceError):
            command.execute()
        self.assertEqual(len(self.store), 0)


class TestEditingCommands(unittest.TestCase):
    def setUp(self) -> None:
        self.store = DocumentStore.create()
        self.store.add(name="Zero", sources=[UrlSource("https://a.org"), UrlSource("https://b.org")])
        self.store.add(name="One")

    def test_remove_unknown_id_removes_nothing(self) -> None:
        with self.assertRaises(NotFoundError):
            RemoveCommand(store=self.store, ids=[0, 7]).execute()
        self.assertEqual(len(self.store), 2)

    def test_remove(self) -> None:
        RemoveCommand(store=self.store, ids=[0]).execute()
        self.assertNotIn(0, self.store)

    def test_remove_sources_by_index(self) -> None:
        RemoveSourcesCommand(store=self.store, doc_id=0, indices=[0, 5]).execute()
        self.assertEqual(self.store.get(0).source, (UrlSource("https://b.org"),))

    def test_set_title_prompts_with_current_name(self) -> None:
        prompter = _ScriptedPrompter(["  Renamed  "])
        SetTitleCommand(store=self.store, doc_id=1, title=None, prompter=prompter).execute()
        self.assertEqual(prompter.asked, [("New title", "One")])
        self.assertEqual(self.store.get(1).name, "Renamed")

    def test_show_all_sorted_and_skips_unknown(self) -> None:
        writer = _RecordingWriter()
        ShowCommand(store=self.store, output_writer=writer).execute()
        ShowCommand(store=self.store, output_writer=writer, ids=[1, 9]).execute()
        self.assertEqual(writer.calls, [([0, 1], False), ([1], False)])

    def test_search_short(self) -> None:
        writer = _RecordingWriter()
        SearchCommand(
            search_service=create_search_service(self.store),
            output_writer=writer,
            query=(FreeText("one"),),
            exact_only=False,
            max_results=None,
            short=True,
        ).execute()
        self.assertEqual(writer.calls, [([1], True)])


class TestOpenCommand(unittest.TestCase):
    def setUp(self) -> None:
        self.store = DocumentStore.create()
        self.store.add(name="Doc", sources=[FileSource("papers/a.pdf"), UrlSource("https://x.org")])
        self.launched = []

    def _open(self, indices) -> None:
        OpenCommand(
            store=self.store,
            base_dir=Path("/lib"),
            reader="reader",
            doc_id=0,
            indices=indices,
            launcher=self.launched.append,
        ).execute()

    def test_default_first_source(self) -> None:
        self._open((0,))
        self.assertEqual(self.launched, [["reader", "/lib/papers/a.pdf"]])

    def test_bad_index_skipped(self) -> None:
        self._open((3, 1))
        self.assertEqual(self.launched, [["reader", "https://x.org"]])

    def test_unknown_document(self) -> None:
        with self.assertRaises(NotFoundError):
            OpenCommand(store=self.store, base_dir=Path("/lib"), reader="r", doc_id=4).execute()


class TestSplitList(unittest.TestCase):
    def test_split(self) -> None:
        self.assertEqual(split_list(" a, b ,,c "), ["a", "b", "c"])
        self.assertEqual(split_list(""), [])


if __name__ == "__main__":
    unittest.main()
