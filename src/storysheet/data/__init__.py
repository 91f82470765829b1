"""Data layer utilities for loading exported sheet tabs."""

from .csv_parser import format_rows, parse_rows
from .errors import DataError, DataLoadError, SchemaError
from .metadata_schema import map_metadata_rows
from .paths import get_repo_root, get_sheets_path
from .story_schema import map_story_rows

__all__ = [
    "DataError",
    "DataLoadError",
    "SchemaError",
    "format_rows",
    "get_repo_root",
    "get_sheets_path",
    "map_metadata_rows",
    "map_story_rows",
    "parse_rows",
]
