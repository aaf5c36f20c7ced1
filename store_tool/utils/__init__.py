# store_tool/utils/__init__.py
"""Utility functions for store-tool"""

from .async_utils import run_async, sync_to_async
from .file_utils import (
    atomic_write,
    find_files_by_extension,
    read_bytes,
    relative_posix_path,
)

__all__ = [
    # Async utilities
    "run_async",
    "sync_to_async",

    # File utilities
    "atomic_write",
    "find_files_by_extension",
    "read_bytes",
    "relative_posix_path",
]
