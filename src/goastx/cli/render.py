from rich.console import Console
from rich.markup import escape
from rich.table import Table

from goastx.models import File, Record


def render_file(console: Console, parsed: File) -> None:
    console.print(f"[bold]{escape(parsed.path)}[/bold] (package [cyan]{parsed.package_name}[/cyan])")
    if parsed.imports is not None:
        _render_imports(console, parsed)
    if parsed.records is not None:
        for record in parsed.records:
            _render_record(console, record)
        console.print(f"({len(parsed.records)} records)")


def _render_imports(console: Console, parsed: File) -> None:
    assert parsed.imports is not None
    table = Table(title="imports", show_lines=False)
    for header in ("alias", "path", "doc", "comment"):
        table.add_column(header)
    for imp in parsed.imports:
        row = (imp.alias or "", imp.path_literal, "\n".join(imp.doc_comments), "\n".join(imp.trailing_comments))
        table.add_row(*(escape(cell) for cell in row))
    console.print(table)


def _render_record(console: Console, record: Record) -> None:
    caption = escape("\n".join(record.comments)) or None
    table = Table(title=f"type {escape(record.name)} struct", caption=caption)
    for header in ("field", "type", "tag", "comment"):
        table.add_column(header)
    _add_field_rows(table, record, depth=0)
    console.print(table)


def _add_field_rows(table: Table, record: Record, depth: int) -> None:
    # Fields of inline struct types are listed under their field, indented.
    indent = "  " * depth
    for field in record.fields:
        comments = "\n".join([*field.doc_comments, *field.trailing_comments])
        row = (indent + (field.name or "(embedded)"), field.type_rendering, field.raw_tag or "", comments)
        table.add_row(*(escape(cell) for cell in row))
        if field.embedded_record is not None:
            _add_field_rows(table, field.embedded_record, depth + 1)
