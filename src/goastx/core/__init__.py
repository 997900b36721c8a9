from goastx.core.errors import ExtractionError, ParseError, PathResolutionError
from goastx.core.extract import Selection, extract_directory, extract_file, extract_source
from goastx.models import File, Import, Record, RecordField, TagSet

__all__ = [
    "ExtractionError",
    "File",
    "Import",
    "ParseError",
    "PathResolutionError",
    "Record",
    "RecordField",
    "Selection",
    "TagSet",
    "extract_directory",
    "extract_file",
    "extract_source",
]
