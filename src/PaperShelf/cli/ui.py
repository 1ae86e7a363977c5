"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands to the
runner.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import click
from dotenv import load_dotenv

from PaperShelf.cli.commands import (
    AddCommand,
    AddSourcesCommand,
    AddTagsCommand,
    ExportCommand,
    OpenCommand,
    RemoveCommand,
    RemoveSourcesCommand,
    RemoveTagsCommand,
    SearchCommand,
    SetLangCommand,
    SetTitleCommand,
    ShowCommand,
    split_list,
)
from PaperShelf.cli.runner import CommandRunner
from PaperShelf.config import AppConfig, load_config
from PaperShelf.core.errors import QueryParseError
from PaperShelf.core.query import parse_query
from PaperShelf.services import create_search_service


def _prompt(label: str, default: str) -> str:
    return click.prompt(label, default=default, show_default=bool(default))


def _split_option(value: str | None) -> list[str] | None:
    return None if value is None else split_list(value)


def _runner(ctx: click.Context) -> CommandRunner:
    return CommandRunner(ctx.obj)


@click.group(help="PaperShelf: catalog your papers and find them again.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    default=None,
    help="YAML file merged over the packaged defaults.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.
    """
    load_dotenv()
    ctx.obj = load_config(config_path)


@cli.command("init")
@click.argument(
    "directory",
    type=click.Path(path_type=Path, file_okay=False, exists=True),
    default=Path("."),
)
@click.pass_context
def init_cmd(ctx: click.Context, directory: Path) -> None:
    """Create an empty catalog in DIRECTORY (default: current directory)."""
    _runner(ctx).run_init(directory)


@cli.command("search")
@click.argument("tokens", nargs=-1)
@click.option("--exact/--fuzzy", "exact", default=None, help="Only whole-value matches.")
@click.option("--short", is_flag=True, help="Print matching ids only.")
@click.option("-n", "--max-results", type=click.IntRange(min=1), default=None, help="Cap the result list.")
@click.pass_context
def search_cmd(
    ctx: click.Context,
    tokens: Sequence[str],
    exact: bool | None,
    short: bool,
    max_results: int | None,
) -> None:
    """Search the catalog.

    Each TOKEN is free text or PREFIX:VALUE with PREFIX one of id, title/ti,
    author/a/au, source/s/src, tag/ta, lang. All tokens must match.
    """
    cfg: AppConfig = ctx.obj
    try:
        query = parse_query(tokens)
    except QueryParseError as e:
        raise click.UsageError(str(e)) from e

    _runner(ctx).run(
        ctx.command.name,
        lambda session: SearchCommand(
            search_service=create_search_service(session.store),
            output_writer=session.output_writer,
            query=query,
            exact_only=cfg.search.exact if exact is None else exact,
            max_results=max_results if max_results is not None else cfg.search.limit,
            short=short,
        ),
    )


@cli.command("add")
@click.argument("sources", nargs=-1, required=True)
@click.option("--title", default=None, help="Title (prompted when omitted).")
@click.option("--authors", default=None, help="Comma separated authors.")
@click.option("--tags", default=None, help="Comma separated tags.")
@click.option("--lang", default="", help="Language code.")
@click.pass_context
def add_cmd(
    ctx: click.Context,
    sources: Sequence[str],
    title: str | None,
    authors: str | None,
    tags: str | None,
    lang: str,
) -> None:
    """Add one document per SOURCE (file path, URL or doi:/isbn: reference)."""
    _runner(ctx).run(
        ctx.command.name,
        lambda session: AddCommand(
            store=session.store,
            base_dir=session.base_dir,
            output_writer=session.output_writer,
            sources=sources,
            prompter=_prompt,
            title=title,
            authors=_split_option(authors),
            tags=_split_option(tags),
            lang=lang,
        ),
        persist=True,
    )


@cli.command("remove")
@click.argument("ids", nargs=-1, type=int, required=True)
@click.pass_context
def remove_cmd(ctx: click.Context, ids: Sequence[int]) -> None:
    """Remove documents by id."""
    _runner(ctx).run(
        ctx.command.name,
        lambda session: RemoveCommand(store=session.store, ids=ids),
        persist=True,
    )


@cli.command("show")
@click.argument("ids", nargs=-1, type=int)
@click.pass_context
def show_cmd(ctx: click.Context, ids: Sequence[int]) -> None:
    """Show documents by id, or the whole catalog."""
    _runner(ctx).run(
        ctx.command.name,
        lambda session: ShowCommand(store=session.store, output_writer=session.output_writer, ids=ids),
    )


@cli.group("source")
def source_group() -> None:
    """Manage the sources of a document."""


@source_group.command("add")
@click.argument("doc_id", type=int)
@click.argument("sources", nargs=-1, required=True)
@click.pass_context
def source_add_cmd(ctx: click.Context, doc_id: int, sources: Sequence[str]) -> None:
    """Append SOURCES to document DOC_ID."""
    _runner(ctx).run(
        "source",
        lambda session: AddSourcesCommand(
            store=session.store, base_dir=session.base_dir, doc_id=doc_id, sources=sources
        ),
        persist=True,
    )


@source_group.command("remove")
@click.argument("doc_id", type=int)
@click.argument("indices", nargs=-1, type=int, required=True)
@click.pass_context
def source_remove_cmd(ctx: click.Context, doc_id: int, indices: Sequence[int]) -> None:
    """Remove sources of DOC_ID by their #index."""
    _runner(ctx).run(
        "source",
        lambda session: RemoveSourcesCommand(store=session.store, doc_id=doc_id, indices=indices),
        persist=True,
    )


@cli.group("tag")
def tag_group() -> None:
    """Manage the tags of a document."""


@tag_group.command("add")
@click.argument("doc_id", type=int)
@click.argument("tags", nargs=-1, required=True)
@click.pass_context
def tag_add_cmd(ctx: click.Context, doc_id: int, tags: Sequence[str]) -> None:
    """Append TAGS to document DOC_ID."""
    _runner(ctx).run(
        "tag",
        lambda session: AddTagsCommand(store=session.store, doc_id=doc_id, tags=tags),
        persist=True,
    )


@tag_group.command("remove")
@click.argument("doc_id", type=int)
@click.argument("tags", nargs=-1, required=True)
@click.pass_context
def tag_remove_cmd(ctx: click.Context, doc_id: int, tags: Sequence[str]) -> None:
    """Remove TAGS from document DOC_ID."""
    _runner(ctx).run(
        "tag",
        lambda session: RemoveTagsCommand(store=session.store, doc_id=doc_id, tags=tags),
        persist=True,
    )


@cli.command("title")
@click.argument("doc_id", type=int)
@click.argument("new_title", required=False)
@click.pass_context
def title_cmd(ctx: click.Context, doc_id: int, new_title: str | None) -> None:
    """Rename document DOC_ID (prompted when NEW_TITLE is omitted)."""
    _runner(ctx).run(
        ctx.command.name,
        lambda session: SetTitleCommand(
            store=session.store, doc_id=doc_id, title=new_title, prompter=_prompt
        ),
        persist=True,
    )


@cli.command("lang")
@click.argument("doc_id", type=int)
@click.argument("lang")
@click.pass_context
def lang_cmd(ctx: click.Context, doc_id: int, lang: str) -> None:
    """Set the language of document DOC_ID."""
    _runner(ctx).run(
        ctx.command.name,
        lambda session: SetLangCommand(store=session.store, doc_id=doc_id, lang=lang),
        persist=True,
    )


@cli.command("export")
@click.argument("zip_path", type=click.Path(path_type=Path, dir_okay=False))
@click.argument("ids", nargs=-1, type=int)
@click.pass_context
def export_cmd(ctx: click.Context, zip_path: Path, ids: Sequence[int]) -> None:
    """Export the catalog (or the documents IDS) and local files to ZIP_PATH."""
    cfg: AppConfig = ctx.obj
    target = zip_path.resolve()
    _runner(ctx).run(
        ctx.command.name,
        lambda session: ExportCommand(
            store=session.store,
            base_dir=session.base_dir,
            zip_path=target,
            file_name=cfg.catalog.file_name,
            ids=ids,
        ),
    )


@cli.command("open")
@click.argument("doc_id", type=int)
@click.argument("indices", nargs=-1, type=int)
@click.pass_context
def open_cmd(ctx: click.Context, doc_id: int, indices: Sequence[int]) -> None:
    """Open sources of DOC_ID (default: source #0) with the external reader."""
    cfg: AppConfig = ctx.obj
    _runner(ctx).run(
        ctx.command.name,
        lambda session: OpenCommand(
            store=session.store,
            base_dir=session.base_dir,
            reader=cfg.display.external_reader,
            doc_id=doc_id,
            indices=indices or (0,),
        ),
    )
