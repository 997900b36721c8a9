from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any

from watchfiles import Change, awatch

from goastx.core.errors import ExtractionError
from goastx.core.extract import Selection, extract_file
from goastx.models import File

logger = logging.getLogger(__name__)


def _is_go_file(path: Path) -> bool:
    return path.suffix == ".go"


class GoSourceWatcher:
    """Watch a directory and re-extract Go files as they are added or modified.

    Each batch of changes is extracted and handed to ``on_extracted``. Deleted
    files are skipped; a file that fails to parse is logged and skipped so one
    half-saved file does not stop the watch.
    """

    def __init__(
        self,
        directory: str | Path,
        on_extracted: Callable[[list[File]], Coroutine[Any, Any, None]],
        selection: Selection = Selection.ALL,
    ) -> None:
        self._directory = Path(directory)
        self._on_extracted = on_extracted
        self._selection = selection
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._watch())
        logger.info("Watcher started for %s", self._directory)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Watcher stopped for %s", self._directory)

    async def wait(self) -> None:
        if self._task is not None:
            await self._task

    async def _watch(self) -> None:
        async for changes in awatch(self._directory):
            paths = sorted({Path(p) for change, p in changes if change != Change.deleted and _is_go_file(Path(p))})
            if not paths:
                continue
            logger.info("Detected changes in %d Go file(s)", len(paths))
            files = self._extract(paths)
            if not files:
                continue
            try:
                await self._on_extracted(files)
            except Exception:
                logger.exception("Error in watcher callback")

    def _extract(self, paths: list[Path]) -> list[File]:
        files: list[File] = []
        for path in paths:
            try:
                files.append(extract_file(path, self._selection))
            except (ExtractionError, OSError) as exc:
                logger.warning("Skipping %s: %s", path, exc)
        return files
