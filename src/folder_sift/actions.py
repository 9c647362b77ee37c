"""
Filesystem actions for placing sifted items in sieve folders.

This module is responsible for:
- Moving an item (file or folder) into a sieve folder
- Hardlinking an item: files are hardlinked, folders are recreated and
  their files hardlinked
- Copying an item the same way, with file metadata preserved
- Refusing to overwrite an existing destination
- Catching and describing errors (permissions, cross-device, etc.)

No function in this module raises for ordinary OS failures; every call
returns an ActionResult describing the outcome.
"""

import errno
import logging
import os
import shutil
from pathlib import Path
from typing import Callable, List, Tuple, Union

from .types import ActionResult, ActionStatus

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _format_os_error(e: OSError) -> str:
    """Describe an OSError, naming the common sift failures."""
    if e.errno == errno.EXDEV:
        return f"Source and destination are on different filesystems: {e}"
    if e.errno == errno.EEXIST:
        return f"Destination already exists: {e}"
    if isinstance(e, PermissionError):
        return f"Permission denied: {e}"
    if e.errno == errno.ENAMETOOLONG:
        return f"Path too long: {e}"
    return f"OSError: {e}"


def _precheck(src: Path, dest: Path) -> Union[ActionResult, None]:
    if not os.path.lexists(src):
        logger.info(f"Source missing (already moved?): {src}")
        return ActionResult(
            ActionStatus.SKIPPED_MISSING,
            "Source no longer exists (may have been moved already)"
        )
    if os.path.lexists(dest):
        logger.debug(f"Destination already exists: {dest}")
        return ActionResult(
            ActionStatus.SKIPPED_EXISTS,
            "Destination already exists"
        )
    return None


def move_item(src: PathLike, dest: PathLike) -> ActionResult:
    """
    Move a file or folder to its destination path.

    Args:
        src: Source item path
        dest: Destination path (inside a sieve folder)

    Returns:
        ActionResult with status and details
    """
    src = Path(src)
    dest = Path(dest)

    skipped = _precheck(src, dest)
    if skipped is not None:
        return skipped

    try:
        shutil.move(str(src), str(dest))
    except shutil.Error as e:
        return ActionResult(ActionStatus.ERROR, f"Move failed: {e}")
    except OSError as e:
        return ActionResult(ActionStatus.ERROR, _format_os_error(e))

    return ActionResult(ActionStatus.SUCCESS, "Moved successfully")


def _hardlink_file(src: str, dest: str) -> None:
    os.link(src, dest)


def _copy_file(src: str, dest: str) -> None:
    shutil.copy2(src, dest, follow_symlinks=False)


def _cleanup_empty_dir(path: Path) -> None:
    """Remove a folder created for an action that then failed."""
    try:
        path.rmdir()
        logger.debug(f"Removed unfinished folder {path}")
    except OSError as e:
        logger.warning(f"Could not remove unfinished folder {path}: {e}")


def _place_tree(
    src: Path,
    dest: Path,
    place_file: Callable[[str, str], None],
    verb: str,
    done: str
) -> ActionResult:
    """
    Place a file or folder tree at dest, one file at a time.

    Folders are recreated and every file in them is handed to place_file.
    The tree is walked depth-first with an explicit worklist, so deep trees
    do not grow the call stack. Only a failure on the top-level entry fails
    the whole action; failures further down are counted.
    """
    skipped = _precheck(src, dest)
    if skipped is not None:
        return skipped

    worklist: List[Tuple[Path, Path]] = [(src, dest)]
    failures = 0
    placed = 0
    created_top = False

    while worklist:
        src_entry, dest_entry = worklist.pop()
        is_top = src_entry is src

        try:
            if src_entry.is_dir() and not src_entry.is_symlink():
                dest_entry.mkdir()
                created_top = created_top or is_top
                shutil.copystat(src_entry, dest_entry)
                children = sorted(os.listdir(src_entry), reverse=True)
                worklist.extend(
                    (src_entry / child, dest_entry / child) for child in children
                )
            else:
                place_file(str(src_entry), str(dest_entry))
                placed += 1
        except OSError as e:
            if is_top:
                if created_top:
                    _cleanup_empty_dir(dest_entry)
                return ActionResult(ActionStatus.ERROR, _format_os_error(e))
            failures += 1
            logger.debug(f"Could not {verb} {src_entry}: {_format_os_error(e)}")

    if failures:
        return ActionResult(
            ActionStatus.PARTIAL,
            f"{done} {placed} file(s), {failures} entries failed"
        )
    return ActionResult(ActionStatus.SUCCESS, f"{done} successfully")


def link_item(src: PathLike, dest: PathLike) -> ActionResult:
    """
    Hardlink a file, or recreate a folder and hardlink its files.

    Args:
        src: Source item path
        dest: Destination path (inside a sieve folder)

    Returns:
        ActionResult with status and details
    """
    return _place_tree(Path(src), Path(dest), _hardlink_file, "link", "Linked")


def copy_item(src: PathLike, dest: PathLike) -> ActionResult:
    """
    Copy a file, or a folder with all of its contents.

    Args:
        src: Source item path
        dest: Destination path (inside a sieve folder)

    Returns:
        ActionResult with status and details
    """
    return _place_tree(Path(src), Path(dest), _copy_file, "copy", "Copied")
