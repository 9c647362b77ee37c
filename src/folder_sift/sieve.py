"""
Sieve builder: compiles sieve folder names into a ranked pattern table.

Word groups from every sieve folder are scored and sorted so that the most
complex groups are tried first. "science fiction" therefore matches before
"science" does. Ties are broken by folder index and then by the group's
words, which makes the order total and repeatable between runs.

Folders are referenced by index into the table's folder list, never by
copies of their paths.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .indexer import scan_sieve_folders
from .parser import parse
from .types import DestinationFolder, ScoredPattern

logger = logging.getLogger(__name__)


class PatternTable:
    """
    Read-only table of scored word groups in matching order.

    Attributes:
        folders: Sieve folders, addressed by index
        patterns: Scored patterns, most complex first

    Patterns are kept in descending (score, folder index, words) order, so
    when scores tie, the later folder in sorted order is tried first.
    """

    def __init__(
        self,
        folders: Sequence[DestinationFolder],
        patterns: Sequence[ScoredPattern]
    ):
        self._folders: Tuple[DestinationFolder, ...] = tuple(folders)
        self._patterns: Tuple[ScoredPattern, ...] = tuple(
            sorted(patterns, key=lambda p: p.sort_key, reverse=True)
        )

    @property
    def folders(self) -> Tuple[DestinationFolder, ...]:
        return self._folders

    @property
    def patterns(self) -> Tuple[ScoredPattern, ...]:
        return self._patterns

    def folder(self, index: int) -> DestinationFolder:
        return self._folders[index]

    def __iter__(self) -> Iterator[ScoredPattern]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return (
            f"PatternTable({len(self._folders)} folders, "
            f"{len(self._patterns)} patterns)"
        )


def build_table(
    names: Sequence[str],
    paths: Optional[Sequence[str]] = None
) -> PatternTable:
    """
    Build a pattern table from sieve folder names.

    Folder i of ``names`` gets index i. The caller is responsible for the
    order of ``names``; build_sieve() sorts them before calling this.

    Args:
        names: Sieve folder basenames
        paths: Optional full paths, parallel to names

    Returns:
        The compiled PatternTable
    """
    if paths is not None and len(paths) != len(names):
        raise ValueError(
            f"Got {len(names)} names but {len(paths)} paths"
        )

    folders: List[DestinationFolder] = []
    patterns: List[ScoredPattern] = []

    for index, name in enumerate(names):
        path = paths[index] if paths is not None else ""
        folders.append(DestinationFolder(index=index, name=name, path=path))

        groups = parse(name)
        if not groups:
            logger.debug(f"Sieve folder has no word groups: {name!r}")

        for group in groups:
            patterns.append(
                ScoredPattern(score=group.score, folder_index=index, group=group)
            )

    table = PatternTable(folders, patterns)
    logger.info(
        f"Compiled {len(table)} word groups from {len(folders)} sieve folders"
    )
    return table


def build_sieve(destination: Union[str, Path]) -> PatternTable:
    """
    Build a pattern table from the subfolders of a destination sieve.

    Subfolders are sorted by path first so the table does not depend on
    the order the filesystem lists them in.

    Args:
        destination: The destination sieve folder

    Returns:
        The compiled PatternTable with folder paths filled in

    Raises:
        FileNotFoundError: If the destination doesn't exist
        NotADirectoryError: If the destination is not a directory
    """
    paths = scan_sieve_folders(destination)
    names = [Path(path).name for path in paths]
    return build_table(names, paths)
