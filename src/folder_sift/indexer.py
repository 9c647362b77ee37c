"""
Directory enumeration for the sieve and the source folder.

This module is responsible for:
- Listing the immediate subfolders of the destination sieve
- Listing source items, optionally one level deeper (deep mode)
- Returning results in sorted order, independent of listing order
- Logging permission errors on subfolders without aborting the scan
"""

import logging
import os
from pathlib import Path
from typing import List, Union

from .types import Item, ItemKind

logger = logging.getLogger(__name__)


def _check_root(root: Path, what: str) -> None:
    if not root.exists():
        raise FileNotFoundError(f"{what} folder does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"{what} path is not a directory: {root}")


def _list_entries(folder: Union[str, Path]) -> List[os.DirEntry]:
    with os.scandir(folder) as it:
        return list(it)


def _to_item(entry: os.DirEntry) -> Item:
    try:
        kind = ItemKind.DIRECTORY if entry.is_dir() else ItemKind.FILE
    except OSError:
        kind = ItemKind.FILE
    return Item(name=entry.name, path=entry.path, kind=kind)


def scan_sieve_folders(destination: Union[str, Path]) -> List[str]:
    """
    List the immediate subfolders of a destination sieve.

    Args:
        destination: The destination sieve folder

    Returns:
        Sorted list of subfolder paths

    Raises:
        FileNotFoundError: If the destination doesn't exist
        NotADirectoryError: If the destination is not a directory
    """
    root = Path(destination)
    _check_root(root, "Destination")

    folders = sorted(
        entry.path for entry in _list_entries(root)
        if entry.is_dir()
    )
    logger.info(f"Found {len(folders)} sieve folders in {root}")
    return folders


def scan_items(source: Union[str, Path], deep: bool = False) -> List[Item]:
    """
    List the items to sift from a source folder.

    In deep mode the children of each immediate subfolder of the source
    are listed instead, and entries directly under the source are skipped.

    Args:
        source: The source folder
        deep: List one level deeper

    Returns:
        List of Item sorted by path

    Raises:
        FileNotFoundError: If the source doesn't exist
        NotADirectoryError: If the source is not a directory
    """
    root = Path(source)
    _check_root(root, "Source")

    items: List[Item] = []
    for entry in _list_entries(root):
        if not deep:
            items.append(_to_item(entry))
            continue

        if not entry.is_dir():
            continue

        try:
            items.extend(_to_item(sub) for sub in _list_entries(entry.path))
        except PermissionError as e:
            logger.warning(f"Permission denied, skipping: {entry.path} ({e})")
        except OSError as e:
            logger.warning(f"Cannot list folder, skipping: {entry.path} ({e})")

    items.sort(key=lambda item: item.path)
    logger.info(
        f"Found {len(items)} items in {root}" + (" (deep)" if deep else "")
    )
    return items
