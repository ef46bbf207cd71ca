"""Command-line interface for xaml-forge."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from xaml_forge.errors import CompileError, ParseError
from xaml_forge.helpers import collect_markup_files, compile_file, generated_module_path
from xaml_forge.markup.builder import parse_markup
from xaml_forge.markup.nodes import ControlNode
from xaml_forge.serialize import format_value, to_markup

console = Console()
error_console = Console(stderr=True)

ERROR_LABELS = {
    "MarkupSyntaxError": "syntax",
    "UnterminatedTagError": "syntax",
    "MismatchedTagError": "syntax",
    "TruncatedInputError": "syntax",
    "UnknownElementError": "element",
    "UnknownAttributeError": "attribute",
    "ContentModelError": "content",
    "GrammarError": "value",
}


def _collect(path: Path, recursive: bool) -> list[Path]:
    try:
        files = collect_markup_files(path, recursive)
    except ValueError as exc:
        error_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)
    if path.is_dir() and not files:
        error_console.print(f"[yellow]Warning:[/yellow] No markup files found in {escape(str(path))}")
        sys.exit(0)
    return files


def _parse_file(path: Path) -> ControlNode:
    try:
        return parse_markup(path.read_text(encoding="utf-8"))
    except ParseError as exc:
        error_console.print(f"[red]Error:[/red] {escape(str(path))}: {escape(str(exc))}")
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Compile declarative UI markup to construction code or control trees."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
    )


@main.command()
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format.",
)
@click.option("--recursive", "-r", is_flag=True, help="Check all markup files in directory.")
@click.option("--quiet", "-q", is_flag=True, help="Only output errors, no success messages.")
def check(path: Path, output: str, recursive: bool, quiet: bool) -> None:
    """Validate markup files without generating code.

    PATH can be a single file or a directory (with --recursive).
    """
    results: list[tuple[Path, ControlNode | None, ParseError | None]] = []
    for file_path in _collect(path, recursive):
        try:
            tree = parse_markup(file_path.read_text(encoding="utf-8"))
        except ParseError as exc:
            results.append((file_path, None, exc))
        else:
            results.append((file_path, tree, None))

    if output == "json":
        _output_json(results)
    else:
        _output_text(results, quiet)

    sys.exit(0 if all(error is None for _, _, error in results) else 1)


def _output_text(results: list[tuple[Path, ControlNode | None, ParseError | None]], quiet: bool) -> None:
    """Output check results as formatted text."""
    for file_path, tree, error in results:
        if error is None:
            if not quiet and tree is not None:
                console.print(
                    f"[green]✓[/green] {escape(str(file_path))} - Valid ({tree.node_count} controls)"
                )
            continue

        console.print(f"[red]✗[/red] {escape(str(file_path))} - Invalid")
        table = Table(show_header=True, header_style="bold")
        table.add_column("Type", style="dim", width=10)
        table.add_column("Location", width=12)
        table.add_column("Description")
        location = str(error.position) if error.position is not None else ""
        table.add_row(
            ERROR_LABELS.get(type(error).__name__, "error"),
            location,
            escape(error.message),
        )
        console.print(table)
        console.print()

    total = len(results)
    valid = sum(1 for _, _, error in results if error is None)
    if total > 1:
        console.print(f"\n[bold]Summary:[/bold] {valid}/{total} files valid", end="")
        if valid < total:
            console.print(f", [red]{total - valid} invalid[/red]")
        else:
            console.print()


def _output_json(results: list[tuple[Path, ControlNode | None, ParseError | None]]) -> None:
    """Output check results as JSON."""
    output = []
    for file_path, tree, error in results:
        entry: dict[str, object] = {
            "file": str(file_path),
            "valid": error is None,
            "controls": tree.node_count if tree is not None else 0,
        }
        if error is not None:
            entry["error"] = {
                "type": ERROR_LABELS.get(type(error).__name__, "error"),
                "class": type(error).__name__,
                "message": error.message,
                "line": error.position.line if error.position else None,
                "column": error.position.column if error.position else None,
            }
        output.append(entry)

    console.print_json(json.dumps(output, indent=2))


@main.command(name="compile")
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--out-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for generated modules (defaults to next to each markup file).",
)
@click.option("--function-name", default="build", show_default=True, help="Name of the generated function.")
@click.option("--recursive", "-r", is_flag=True, help="Compile all markup files in directory.")
@click.option("--quiet", "-q", is_flag=True, help="Only output errors, no success messages.")
def compile_command(
    path: Path,
    out_dir: Path | None,
    function_name: str,
    recursive: bool,
    quiet: bool,
) -> None:
    """Generate Python construction modules from markup files."""
    failed = 0
    for file_path in _collect(path, recursive):
        destination = generated_module_path(file_path, out_dir)
        try:
            written = compile_file(file_path, destination, function_name=function_name)
        except CompileError as exc:
            failed += 1
            error_console.print(exc.diagnostic, markup=False, highlight=False)
            continue
        if not quiet:
            console.print(f"[green]✓[/green] {escape(str(file_path))} -> {escape(str(written))}")

    sys.exit(1 if failed else 0)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def tree(path: Path) -> None:
    """Print the validated control tree of a markup file."""
    root = _parse_file(path)
    console.print(_rich_tree(root))


def _node_label(node: ControlNode) -> str:
    label = f"[bold]{node.name}[/bold]"
    if node.properties:
        props = " ".join(
            f'{escape(name)}=[cyan]"{escape(format_value(value))}"[/cyan]'
            for name, value in node.properties.items()
        )
        label = f"{label} {props}"
    return label


def _rich_tree(root: ControlNode) -> Tree:
    tree_view = Tree(_node_label(root))
    pending = [(root, tree_view)]
    while pending:
        node, branch = pending.pop()
        for child in node.children:
            pending.append((child, branch.add(_node_label(child))))
    return tree_view


@main.command(name="format")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def format_command(path: Path) -> None:
    """Print a markup file in canonical form."""
    root = _parse_file(path)
    click.echo(to_markup(root), nl=False)


if __name__ == "__main__":
    main()
