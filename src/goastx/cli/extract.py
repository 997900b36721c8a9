import sys
from typing import Annotated

import typer
from pydantic import TypeAdapter
from rich.console import Console
from rich.markup import escape

from goastx.cli.render import render_file
from goastx.core.errors import ExtractionError
from goastx.core.extract import Selection, extract_directory, extract_file, extract_source
from goastx.models import File

console = Console()

_PACKAGES_ADAPTER = TypeAdapter(dict[str, list[File]])

ImportsOption = Annotated[bool, typer.Option("--imports/--no-imports", help="Extract import declarations.")]
RecordsOption = Annotated[bool, typer.Option("--records/--no-records", help="Extract struct type definitions.")]
JsonOption = Annotated[bool, typer.Option("--json", help="Print the extracted model as JSON.")]


def _selection(imports: bool, records: bool) -> Selection:
    selection = Selection(0)
    if imports:
        selection |= Selection.IMPORTS
    if records:
        selection |= Selection.RECORDS
    return selection


def _fail(exc: Exception) -> typer.Exit:
    console.print(f"[red]{escape(str(exc))}[/red]", soft_wrap=True)
    return typer.Exit(1)


def file(
    path: Annotated[str, typer.Argument(help="Path to a Go source file.")],
    imports: ImportsOption = True,
    records: RecordsOption = True,
    json: JsonOption = False,
) -> None:
    """Extract imports and struct types from a Go file."""
    try:
        parsed = extract_file(path, _selection(imports, records))
    except (ExtractionError, OSError) as exc:
        raise _fail(exc) from exc
    if json:
        console.print_json(parsed.model_dump_json())
    else:
        render_file(console, parsed)


def directory(
    path: Annotated[str, typer.Argument(help="Directory containing Go source files.")],
    imports: ImportsOption = True,
    records: RecordsOption = True,
    json: JsonOption = False,
) -> None:
    """Extract every Go file of a directory, grouped by package."""
    try:
        packages = extract_directory(path, _selection(imports, records))
    except (ExtractionError, OSError) as exc:
        raise _fail(exc) from exc
    if json:
        console.print_json(_PACKAGES_ADAPTER.dump_json(packages).decode("utf-8"))
        return
    for package_name, files in packages.items():
        console.print(f"[green]package {package_name}[/green]: {len(files)} file(s)")
        for parsed in files:
            render_file(console, parsed)


def source(
    code: Annotated[str, typer.Argument(help="Go source code, or '-' to read it from stdin.")],
    imports: ImportsOption = True,
    records: RecordsOption = True,
    json: JsonOption = False,
) -> None:
    """Extract imports and struct types from a source string."""
    text = sys.stdin.read() if code == "-" else code
    try:
        parsed = extract_source(text, _selection(imports, records))
    except ExtractionError as exc:
        raise _fail(exc) from exc
    if json:
        console.print_json(parsed.model_dump_json())
    else:
        render_file(console, parsed)
