"""CLI for fold-editor (show, search, normalize, replay keys)."""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from fold_editor.config import EditorConfig, config_from_host, load_config
from fold_editor.core.keymap import LEADER
from fold_editor.core.search.searcher import search_nodes
from fold_editor.core.state.reducer import projection_of
from fold_editor.core.tree.flatten import Projection, project
from fold_editor.core.tree.fold import fold_all
from fold_editor.core.tree.navigation import node_path
from fold_editor.core.tree.parser import parse, serialize
from fold_editor.logging_config import configure_logging
from fold_editor.models.node import FlattenedLine
from fold_editor.models.state import EditorState
from fold_editor.scheduler import LoopScheduler
from fold_editor.session import EditorSession

app = typer.Typer(help="Fold editor: browse indented outlines from the terminal.")

# Spellings accepted for keys that are awkward to pass as arguments.
_KEY_ALIASES = {"<leader>": LEADER, "<space>": LEADER, "space": LEADER, "<esc>": "Escape"}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _read_text(path: Path) -> str:
    """Read an outline file, exiting with an error if it is missing."""
    if not path.is_file():
        logger.error("File not found: {}", path)
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


def _resolve_config(
    config_file: Path | None, indent_size: int | None, no_expand_tab: bool
) -> EditorConfig:
    config = load_config(config_file)
    overrides: dict[str, object] = {}
    if indent_size is not None:
        overrides["indentSize"] = indent_size
    if no_expand_tab:
        overrides["expandTab"] = False
    if not overrides:
        return config
    return config_from_host(overrides, config)


def _format_line(line: FlattenedLine, *, marker: str = "") -> str:
    node = line.node
    if node.children:
        fold = "▸ " if node.folded else "▾ "
    else:
        fold = "  "
    return f"{marker}{'  ' * line.depth}{fold}{node.text}"


def _echo_projection(projection: Projection, state: EditorState | None = None) -> None:
    cursor_ids = {c.node_id for c in state.cursors} if state else set()
    bookmark_ids = {b.node_id for b in state.bookmarks} if state else set()
    for line in projection.lines:
        if state is None:
            typer.echo(_format_line(line))
            continue
        marker = ">" if line.node.id in cursor_ids else " "
        marker += "#" if line.node.id in bookmark_ids else " "
        typer.echo(_format_line(line, marker=marker + " "))


ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Config file (TOML)"),
]
IndentOption = Annotated[
    int | None,
    typer.Option("--indent-size", "-i", help="Spaces per indentation level"),
]
NoExpandTabOption = Annotated[
    bool,
    typer.Option("--no-expand-tab", help="Do not expand tabs before measuring indentation"),
]


@app.command()
def show(
    file: Path = typer.Argument(..., help="Outline file"),
    folded: bool = typer.Option(False, "--fold-all", "-F", help="Fold every node"),
    filter_text: str = typer.Option("", "--filter", "-f", help="Only show lines containing text"),
    config_file: ConfigOption = None,
    indent_size: IndentOption = None,
    no_expand_tab: NoExpandTabOption = False,
) -> None:
    """Print the visible lines of an outline."""
    config = _resolve_config(config_file, indent_size, no_expand_tab)
    forest = parse(_read_text(file), config.indent_size, config.expand_tab)
    if folded:
        forest = fold_all(forest)
    _echo_projection(project(forest, filter_text))


@app.command()
def search(
    file: Path = typer.Argument(..., help="Outline file"),
    query: str = typer.Argument(..., help="Substring to search for (case-insensitive)"),
    config_file: ConfigOption = None,
    indent_size: IndentOption = None,
    no_expand_tab: NoExpandTabOption = False,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Search an outline, folded parts included."""
    config = _resolve_config(config_file, indent_size, no_expand_tab)
    forest = parse(_read_text(file), config.indent_size, config.expand_tab)
    hits = search_nodes(forest, query)

    # Report hits in document order.
    results = [
        [node.text for node in node_path(forest, line.node.id)]
        for line in project(forest).lines
        if line.node.id in hits
    ]

    if output_json:
        data = {
            "results": [{"text": path[-1], "path": path} for path in results],
            "total": len(results),
        }
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(f"Found {len(results)} results:\n")
    for path in results:
        typer.echo(f"  {path[-1]}")
        if len(path) > 1:
            typer.echo(f"    in: {' › '.join(path[:-1])}")


@app.command()
def normalize(
    file: Path = typer.Argument(..., help="Outline file"),
    config_file: ConfigOption = None,
    indent_size: IndentOption = None,
    no_expand_tab: NoExpandTabOption = False,
) -> None:
    """Reindent an outline with a consistent indent unit."""
    config = _resolve_config(config_file, indent_size, no_expand_tab)
    forest = parse(_read_text(file), config.indent_size, config.expand_tab)
    typer.echo(serialize(forest, config.indent_size), nl=False)


@app.command()
def keys(
    file: Path = typer.Argument(..., help="Outline file"),
    tokens: list[str] = typer.Argument(..., help="Key tokens, e.g. j j '<leader>' c a"),
    config_file: ConfigOption = None,
    indent_size: IndentOption = None,
    no_expand_tab: NoExpandTabOption = False,
) -> None:
    """Replay key tokens against an outline and print the result."""
    config = _resolve_config(config_file, indent_size, no_expand_tab)
    loop = asyncio.new_event_loop()
    try:
        session = EditorSession(scheduler=LoopScheduler(loop), config=config)
        session.load_text(_read_text(file))
        for token in tokens:
            fired = session.handle_key(_KEY_ALIASES.get(token, token))
            if fired:
                logger.debug("{!r} -> {}", token, fired)
    finally:
        loop.close()

    _echo_projection(projection_of(session.state), session.state)
    if session.state.key_buffer:
        typer.echo(f"\npending: {' '.join(session.state.key_buffer)!r}")
