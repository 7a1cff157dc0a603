"""Utility functions for Bloggo.

This module contains the small path and date helpers shared by the content
pipeline and the build.

Key functions:
    walk_files: Recursively iterate over the files below a directory.
    is_hidden: Check if any component of a relative path is hidden.
    is_markdown: Check if a path is a Markdown file.
    extract_date_from_name: Extract a date from a YYYY-MM-DD prefix.
    parse_iso_datetime: Parse an ISO-8601 string into an aware datetime.
    remove_dir: Remove a directory tree.
"""

from __future__ import annotations

import errno
import os
import shutil
from collections.abc import Iterator
from datetime import datetime, timezone
from pathlib import Path

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _raise(error: OSError) -> None:
    raise error


def walk_files(root: Path) -> Iterator[Path]:
    """Iterate over every file below a directory, recursing as directories are found.

    Directories are visited in sorted order and files are yielded in sorted
    order within each directory, so the traversal does not depend on the
    filesystem.

    Args:
        root: Directory to walk.

    Yields:
        Paths of regular files.

    Raises:
        OSError: If root or one of its subdirectories cannot be read.
    """
    if not root.is_dir():
        raise NotADirectoryError(errno.ENOTDIR, "Not a directory", str(root))
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            yield Path(dirpath) / name


def is_hidden(rel: Path) -> bool:
    """Check if any component of a relative path starts with a dot.

    Args:
        rel: Path relative to the directory being walked.

    Returns:
        True if the file or one of its parent directories is hidden.
    """
    return any(part.startswith(".") for part in rel.parts)


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    Args:
        path: Path to check.

    Returns:
        True if the file has .md extension (case-insensitive).
    """
    return path.suffix.lower() == ".md"


def extract_date_from_name(name: str) -> datetime | None:
    """Extract a date from the first ten characters of a name.

    Args:
        name: A file name or relative path such as "2024-01-15-hello.html".

    Returns:
        Midnight UTC on that date, or None if the prefix is not YYYY-MM-DD.

    Examples:
        >>> extract_date_from_name("2024-01-15-hello-world.html")
        datetime.datetime(2024, 1, 15, 0, 0, tzinfo=datetime.timezone.utc)

        >>> extract_date_from_name("hello-world.html") is None
        True
    """
    prefix = name[:10]
    if len(prefix) != 10 or prefix[4] != "-" or prefix[7] != "-":
        return None
    try:
        parsed = datetime.strptime(prefix, "%Y-%m-%d")
    except ValueError:
        return None
    return parsed.replace(tzinfo=timezone.utc)


def parse_iso_datetime(text: str) -> datetime | None:
    """Parse an ISO-8601 date or datetime string.

    Values without an offset are taken as UTC, and date-only values as
    midnight UTC.

    Args:
        text: String such as "2024-01-15T09:30:00+02:00" or "2024-01-15".

    Returns:
        An aware datetime, or None if text is not ISO-8601.
    """
    try:
        parsed = datetime.fromisoformat(text.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def remove_dir(path: Path) -> bool:
    """Remove a directory and everything below it.

    Args:
        path: Directory to remove.

    Returns:
        True if the directory existed and was removed, False if it was absent.
    """
    if not path.exists():
        return False
    shutil.rmtree(path)
    return True
