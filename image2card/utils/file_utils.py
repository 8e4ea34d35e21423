"""File system utilities."""

import re
from pathlib import Path

_INVALID_CHARS = '<>:"/\\|?*'


def ensure_directory(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists

    Returns:
        The directory path
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def safe_filename(filename: str, fallback: str = "unnamed") -> str:
    """Make a filename safe for the file system.

    Media file names come from remote services (community audio) and from
    Japanese words, so only path separators, reserved characters and
    control characters are replaced; kana and kanji are kept.

    Args:
        filename: Original filename
        fallback: Name used when nothing usable remains

    Returns:
        Safe filename
    """
    safe_name = filename
    for char in _INVALID_CHARS:
        safe_name = safe_name.replace(char, "_")

    safe_name = re.sub(r"[\x00-\x1f\x7f]", "", safe_name)

    # Truncate to 255 bytes (filesystem limit) without splitting a character
    if len(safe_name.encode("utf-8")) > 255:
        ext = Path(safe_name).suffix
        name = Path(safe_name).stem
        while len((name + ext).encode("utf-8")) > 255:
            name = name[:-1]
        safe_name = name + ext

    if not safe_name.strip(" ._"):
        safe_name = fallback

    return safe_name
