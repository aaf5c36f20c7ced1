"""pubspec.yaml scanning and editing

The pubspec is treated as plain lines on purpose. A key counts as present
when it appears on a line with no ``#`` before it, which is the exact rule
used both to detect an existing ``msix_config`` block and to read back the
store application id.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from ..api.exceptions import ManifestError
from ..constants import (
    MSIX_APP_ID_KEY,
    MSIX_CONFIG_KEY,
    MSIX_DEFAULT_VERSION,
)
from ..models import AppIdentity
from ..utils.file_utils import atomic_write, read_bytes

logger = logging.getLogger(__name__)


def detect_newline(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def split_lines(text: str) -> List[str]:
    """Split on newlines keeping a trailing empty entry, like ``str.split``"""
    return text.replace("\r\n", "\n").split("\n")


def key_position(line: str, key: str) -> int:
    """
    Locate an uncommented key on a line

    Args:
        line: Line to scan
        key: Key to look for (case-insensitive)

    Returns:
        Index of the key, or -1 when absent or behind a comment marker
    """
    if not line.strip():
        return -1

    index = line.lower().find(key.lower())
    if index == -1:
        return -1

    comment_start = line.find("#")
    if comment_start != -1 and comment_start < index:
        return -1
    return index


def find_uncommented_key(lines: Iterable[str], key: str) -> Optional[int]:
    """Return the number of the first line holding ``key`` uncommented"""
    for number, line in enumerate(lines):
        if key_position(line, key) != -1:
            return number
    return None


def has_msix_config(text: str) -> bool:
    """Check whether the pubspec already carries an msix_config block"""
    return find_uncommented_key(split_lines(text), MSIX_CONFIG_KEY) is not None


def build_msix_config_block(app: AppIdentity,
                            publisher_display_name: Optional[str],
                            logo_path: Optional[str] = None) -> List[str]:
    """
    Build the msix_config lines for a store application

    Args:
        app: Store application identity
        publisher_display_name: Publisher name shown in the store
        logo_path: Logo path relative to the project root, if any

    Returns:
        Block lines without line terminators
    """
    lines = [
        f"{MSIX_CONFIG_KEY}:",
        f"  display_name: {app.primary_name or ''}",
        f"  publisher_display_name: {publisher_display_name or ''}",
        f"  publisher: {app.publisher_name or ''}",
        f"  identity_name: {app.package_identity_name or ''}",
        f"  msix_version: {MSIX_DEFAULT_VERSION}",
    ]
    if logo_path:
        lines.append(f"  logo_path: {logo_path}")
    lines.append(f"  {MSIX_APP_ID_KEY}: {app.id or ''}")
    return [line.rstrip() for line in lines]


def append_msix_config(text: str, block: List[str]) -> str:
    """
    Append an msix_config block separated by one blank line

    The file's own newline style is used for the appended lines.
    """
    newline = detect_newline(text)
    lines = split_lines(text)

    appended = ""
    if text and lines[-1].strip():
        # terminate the last line
        appended += newline
    appended += newline
    appended += "".join(f"{line}{newline}" for line in block)
    return text + appended


def read_app_id(text: str) -> Optional[str]:
    """
    Read the store application id from pubspec text

    The value is the text after the last colon, ignoring a trailing
    comment. When the key occurs more than once the last occurrence wins.

    Returns:
        The application id, or None if the key is absent

    Raises:
        ManifestError: If the key is present with an empty value
    """
    app_id = None
    for line in split_lines(text):
        index = key_position(line, MSIX_APP_ID_KEY)
        if index == -1:
            continue

        comment_start = line.find("#")
        value_part = line[:comment_start] if comment_start > index else line
        value = value_part.split(":")[-1].strip()

        if not value:
            raise ManifestError(f"Failed to find the '{MSIX_APP_ID_KEY}' value in the pubspec.yaml file.")
        app_id = value

    return app_id


async def load_pubspec(path: Path) -> str:
    """Read pubspec text"""
    try:
        raw = await read_bytes(path)
    except OSError as e:
        raise ManifestError(f"Cannot read '{path}': {e}", str(path)) from e

    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ManifestError(f"Cannot decode '{path}' as UTF-8: {e}", str(path)) from e


async def save_pubspec(path: Path, text: str) -> None:
    """Replace pubspec content atomically"""
    await atomic_write(path, text)
    logger.debug(f"Saved {path}")
