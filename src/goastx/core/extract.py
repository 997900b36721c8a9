import logging
import os
from collections.abc import Callable
from enum import IntFlag
from pathlib import Path

from goastx.core.comments import CommentIndex
from goastx.core.errors import PathResolutionError
from goastx.core.imports import extract_imports
from goastx.core.records import extract_records
from goastx.core.syntax import SOURCE_PATH, SyntaxUnit, parse_source
from goastx.models import File

logger = logging.getLogger(__name__)


class Selection(IntFlag):
    """Which declarations to extract; unselected parts of a File stay None."""

    IMPORTS = 1
    RECORDS = 2
    ALL = IMPORTS | RECORDS


def extract_source(text: str | bytes, selection: Selection = Selection.ALL) -> File:
    """Extract from in-memory source. The result carries ``path="source"`` and no absolute path."""
    unit = parse_source(text)
    return _assemble(unit, SOURCE_PATH, "", selection)


def extract_file(path: str | Path, selection: Selection = Selection.ALL) -> File:
    file_path = Path(path)
    try:
        source = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    unit = parse_source(source, path=str(path))
    return _assemble(unit, str(path), _absolute_path(file_path), selection)


def extract_directory(
    path: str | Path,
    selection: Selection = Selection.ALL,
    file_filter: Callable[[Path], bool] | None = None,
) -> dict[str, list[File]]:
    """Extract every ``.go`` file directly inside ``path``, grouped by package name.

    Files are visited in name order and the first failure aborts the whole run.
    """
    directory = Path(path)
    if not directory.exists():
        raise FileNotFoundError(f"Directory not found: {path}")
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {path}")

    packages: dict[str, list[File]] = {}
    go_files = sorted(entry for entry in directory.iterdir() if entry.suffix == ".go" and entry.is_file())
    for go_file in go_files:
        if file_filter is not None and not file_filter(go_file):
            continue
        parsed = extract_file(go_file, selection)
        packages.setdefault(parsed.package_name, []).append(parsed)

    logger.info("Extracted %d package(s) from %s", len(packages), directory)
    return packages


def _absolute_path(path: Path) -> str:
    try:
        return os.path.abspath(path)
    except OSError as exc:
        raise PathResolutionError(f"Cannot resolve absolute path of {path}: {exc}") from exc


def _assemble(unit: SyntaxUnit, path: str, absolute_path: str, selection: Selection) -> File:
    imports = extract_imports(unit) if selection & Selection.IMPORTS else None
    records = extract_records(unit, CommentIndex(unit)) if selection & Selection.RECORDS else None
    logger.debug(
        "Assembled %s (package %s): %s import(s), %s record(s)",
        path,
        unit.package_name,
        "-" if imports is None else len(imports),
        "-" if records is None else len(records),
    )
    return File(
        package_name=unit.package_name,
        path=path,
        absolute_path=absolute_path,
        imports=imports,
        records=records,
    )
