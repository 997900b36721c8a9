import asyncio
import contextlib
from typing import Annotated

import typer
from rich.console import Console

from goastx.cli.extract import ImportsOption, RecordsOption, _selection
from goastx.cli.render import render_file
from goastx.models import File
from goastx.watcher.watchfiles_adapter import GoSourceWatcher

console = Console()


def watch(
    path: Annotated[str, typer.Argument(help="Directory to watch for Go file changes.")],
    imports: ImportsOption = True,
    records: RecordsOption = True,
) -> None:
    """Re-extract Go files in a directory whenever they change."""

    async def _print(files: list[File]) -> None:
        for parsed in files:
            render_file(console, parsed)

    async def _run() -> None:
        watcher = GoSourceWatcher(path, _print, _selection(imports, records))
        await watcher.start()
        console.print(f"[green]Watching[/green] {path} (Ctrl+C to stop)")
        try:
            await watcher.wait()
        finally:
            await watcher.stop()

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(_run())
