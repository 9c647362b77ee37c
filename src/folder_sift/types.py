"""
Type definitions and data classes for the folder sifter.

This module defines:
- Word / PatternGroup: parsed word groups from a sieve folder name
- DestinationFolder: a sieve subfolder addressed by its index
- ScoredPattern: a word group ranked by complexity
- Item / ItemKind: a source entry waiting to be sifted
- SiftMode / SiftConfig: the immutable run configuration
- ActionStatus / ActionResult: outcome of a single filesystem action
- SiftResult: outcome of sifting one item into one folder (or none)
- ReportStatus / ReportEntry: rows of the run report
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class Word:
    """
    A single lower-case word of a word group.

    Attributes:
        text: The word without any leading '!'
        negated: True if the word must NOT occur in the item name
    """
    text: str
    negated: bool = False

    @property
    def token(self) -> str:
        """The word as written in the folder name (with '!' if negated)."""
        return "!" + self.text if self.negated else self.text


@dataclass(frozen=True, slots=True)
class PatternGroup:
    """A word group: all plain words required, all negated words forbidden."""
    words: Tuple[Word, ...]
    text: str

    @property
    def tokens(self) -> Tuple[str, ...]:
        return tuple(word.token for word in self.words)

    @property
    def score(self) -> int:
        """Complexity: length of the group text minus its number of words."""
        return len(self.text) - len(self.words)


@dataclass(frozen=True, slots=True)
class DestinationFolder:
    """
    A subfolder of the destination sieve.

    Attributes:
        index: Position in the sorted list of sieve folders
        name: The folder's basename, which encodes its word groups
        path: Full path to the folder (empty when built from bare names)
    """
    index: int
    name: str
    path: str = ""


@dataclass(frozen=True, slots=True)
class ScoredPattern:
    """A word group ranked by score and tied to its folder by index."""
    score: int
    folder_index: int
    group: PatternGroup

    @property
    def sort_key(self) -> Tuple[int, int, Tuple[str, ...]]:
        return (self.score, self.folder_index, self.group.tokens)


class ItemKind(Enum):
    """Kind of source entry."""
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class Item:
    """A source entry considered for sifting."""
    name: str
    path: str
    kind: ItemKind = ItemKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind is ItemKind.DIRECTORY


class SiftMode(Enum):
    """What to do with an item that matches a sieve folder."""
    TEST = "test"    # Only report items matching nothing
    MOVE = "move"    # Move to the first matching folder
    LINK = "link"    # Hardlink into every matching folder
    COPY = "copy"    # Copy into every matching folder


@dataclass(frozen=True)
class SiftConfig:
    """
    Run configuration, built once from the command line.

    Attributes:
        mode: The active sift mode (only one at a time)
        deep: Sift the children of the source's subfolders instead
        verbose: Report every action taken
        quiet: Suppress per-item warnings (unless verbose)
    """
    mode: SiftMode = SiftMode.TEST
    deep: bool = False
    verbose: bool = False
    quiet: bool = False

    @property
    def show_warnings(self) -> bool:
        return self.verbose or not self.quiet


class ActionStatus(Enum):
    """Status of a filesystem action or sift outcome."""
    SUCCESS = "success"                  # Action completed
    PARTIAL = "partial"                  # Directory done, some entries failed
    SKIPPED_MISSING = "skipped_missing"  # Source no longer exists
    SKIPPED_EXISTS = "skipped_exists"    # Destination already exists
    ERROR = "error"                      # Failed due to error
    MATCHED = "matched"                  # Test mode, item matched a folder
    NO_MATCH = "no_match"                # Item matched no folder


@dataclass
class ActionResult:
    """Result of a single move/link/copy call."""
    status: ActionStatus
    message: str


@dataclass
class SiftResult:
    """Outcome of sifting one item into one destination folder."""
    item: Item
    folder_index: Optional[int]
    dest_path: Optional[str]
    status: ActionStatus
    message: str


class ReportStatus(Enum):
    """Status values for the run report (human-readable)."""
    MOVED = "MOVED"
    LINKED = "LINKED"
    COPIED = "COPIED"
    PARTIAL = "PARTIAL"
    MATCHED = "MATCHED"
    NO_MATCH = "NO_MATCH"
    SKIPPED_MISSING = "SKIPPED_MISSING"
    SKIPPED_EXISTS = "SKIPPED_EXISTS"
    ERROR = "ERROR"

    @classmethod
    def from_result(cls, status: ActionStatus, mode: SiftMode):
        """Convert an ActionStatus to a ReportStatus for the given mode."""
        if status == ActionStatus.SUCCESS:
            return {
                SiftMode.MOVE: cls.MOVED,
                SiftMode.LINK: cls.LINKED,
                SiftMode.COPY: cls.COPIED,
            }.get(mode, cls.MATCHED)

        mapping = {
            ActionStatus.PARTIAL: cls.PARTIAL,
            ActionStatus.MATCHED: cls.MATCHED,
            ActionStatus.NO_MATCH: cls.NO_MATCH,
            ActionStatus.SKIPPED_MISSING: cls.SKIPPED_MISSING,
            ActionStatus.SKIPPED_EXISTS: cls.SKIPPED_EXISTS,
            ActionStatus.ERROR: cls.ERROR,
        }
        return mapping.get(status, cls.ERROR)


@dataclass
class ReportEntry:
    """Entry for the run report."""
    timestamp: str
    item: str
    status: str
    source_path: str
    dest_path: str
    message: str
