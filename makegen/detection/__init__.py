"""Package layout detection."""

from .index import is_index_name, list_directory, locate_index
from .shape import EXECUTABLE_DIRS, LIBRARY_DIR, ShapeDetector, derive_executable_name

__all__ = [
    "EXECUTABLE_DIRS",
    "LIBRARY_DIR",
    "ShapeDetector",
    "derive_executable_name",
    "is_index_name",
    "list_directory",
    "locate_index",
]
