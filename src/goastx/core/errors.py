class ExtractionError(Exception):
    """Base class for failures while extracting a Go source unit."""


class ParseError(ExtractionError):
    """Malformed Go source, reported at the first syntax error found."""

    def __init__(self, message: str, path: str = "source", line: int | None = None, column: int | None = None) -> None:
        self.message = message
        self.path = path
        self.line = line
        self.column = column
        location = path if line is None else f"{path}:{line}:{column}"
        super().__init__(f"{location}: {message}")


class PathResolutionError(ExtractionError):
    pass
