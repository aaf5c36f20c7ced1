"""File operation utilities"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Union

import aiofiles
import aiofiles.os


async def read_bytes(file_path: Path) -> bytes:
    """
    Read a whole file without blocking the event loop

    Args:
        file_path: Path to file

    Returns:
        File content
    """
    async with aiofiles.open(file_path, 'rb') as f:
        return await f.read()


async def atomic_write(file_path: Path, content: Union[str, bytes], encoding: str = 'utf-8') -> None:
    """
    Write file atomically

    The content goes to a temporary sibling first and replaces the target
    only once fully flushed, so an interrupted write leaves the original
    file untouched.

    Args:
        file_path: Target file path
        content: Content to write
        encoding: Encoding used when ``content`` is text
    """
    file_path = Path(file_path)
    if isinstance(content, str):
        content = content.encode(encoding)

    temp_fd, temp_path = tempfile.mkstemp(
        dir=file_path.parent,
        prefix=f".{file_path.name}.",
        suffix=".tmp"
    )
    os.close(temp_fd)

    replaced = False
    try:
        if file_path.exists():
            shutil.copymode(file_path, temp_path)

        async with aiofiles.open(temp_path, 'wb') as f:
            await f.write(content)
            await f.flush()

        # Atomic rename
        await aiofiles.os.replace(temp_path, file_path)
        replaced = True

    finally:
        # Clean up temp file on error or cancellation
        if not replaced and os.path.exists(temp_path):
            os.unlink(temp_path)


def find_files_by_extension(directory: Path, extension: str) -> List[Path]:
    """
    List top-level files whose suffix matches exactly

    Args:
        directory: Search directory
        extension: Extension with or without the leading dot

    Returns:
        Sorted list of matching files
    """
    extension = extension if extension.startswith('.') else f'.{extension}'

    return sorted(
        path for path in Path(directory).iterdir()
        if path.is_file() and path.suffix == extension
    )


def relative_posix_path(path: Path, start: Path) -> str:
    """
    Express ``path`` relative to ``start`` with forward slashes

    Args:
        path: Target path
        start: Base directory

    Returns:
        Relative path string
    """
    return Path(os.path.relpath(path, start)).as_posix()
