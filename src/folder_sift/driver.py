"""
Sift driver: runs source items through the sieve.

This module is responsible for:
- Processing items one at a time in sorted order
- Moving an item to the first matching sieve folder (move mode)
- Linking or copying an item into every matching sieve folder (link/copy)
- Reporting items that match nothing (test mode)
- Logging actions and per-item warnings according to the run config
- Keeping statistics for the run summary

A moved item can only be in one place, so move mode stops at the first
match, while link and copy modes place the item in every matching folder.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Union

from .actions import copy_item, link_item, move_item
from .indexer import scan_items
from .matcher import match, match_all
from .sieve import PatternTable
from .types import (
    ActionResult,
    ActionStatus,
    Item,
    SiftConfig,
    SiftMode,
    SiftResult,
)

logger = logging.getLogger(__name__)

_ACTIONS: Dict[SiftMode, Callable[[str, str], ActionResult]] = {
    SiftMode.MOVE: move_item,
    SiftMode.LINK: link_item,
    SiftMode.COPY: copy_item,
}


class Sifter:
    """
    Sifts items into the folders of a compiled sieve.

    The pattern table is only read, never changed, so one table can serve
    any number of runs.
    """

    def __init__(self, table: PatternTable, config: SiftConfig = SiftConfig()):
        """
        Initialize the sifter.

        Args:
            table: The compiled pattern table
            config: Run configuration

        Raises:
            ValueError: If the mode acts on the filesystem but the table was
                        built without folder paths
        """
        if config.mode != SiftMode.TEST and any(
            not folder.path for folder in table.folders
        ):
            raise ValueError(
                f"{config.mode.value} mode needs a sieve built with folder paths"
            )

        self.table = table
        self.config = config
        self._stats: Dict[ActionStatus, int] = {status: 0 for status in ActionStatus}

    def _dest_path(self, folder_index: int, item: Item) -> str:
        return os.path.join(self.table.folder(folder_index).path, item.name)

    def _record(self, result: SiftResult) -> SiftResult:
        self._stats[result.status] += 1
        return result

    def _warn(self, message: str) -> None:
        if self.config.show_warnings:
            logger.warning(message)
        else:
            logger.debug(message)

    def _test_item(self, item: Item) -> SiftResult:
        index = match(item.name, self.table)
        if index is None:
            logger.info(f"No match: {item.path}")
            return self._record(SiftResult(
                item, None, None, ActionStatus.NO_MATCH, "Matched no sieve folder"
            ))

        dest = self._dest_path(index, item)
        logger.info(f"match\t{item.path} -> {self.table.folder(index).name}")
        return self._record(SiftResult(
            item, index, dest, ActionStatus.MATCHED,
            f"Matches {self.table.folder(index).name}"
        ))

    def _place_item(self, item: Item, index: int) -> SiftResult:
        dest = self._dest_path(index, item)
        verb = self.config.mode.value

        logger.info(f"{verb}\t{item.path} -> {dest}")
        result = _ACTIONS[self.config.mode](item.path, dest)

        if result.status != ActionStatus.SUCCESS:
            self._warn(f"Warning! {result.message}: {dest}")

        return self._record(SiftResult(
            item, index, dest, result.status, result.message
        ))

    def sift_item(self, item: Item) -> List[SiftResult]:
        """
        Sift a single item.

        Args:
            item: The source item

        Returns:
            One SiftResult per destination acted on, or a single NO_MATCH
            (or MATCHED, in test mode) result
        """
        if self.config.mode == SiftMode.TEST:
            return [self._test_item(item)]

        if self.config.mode == SiftMode.MOVE:
            index = match(item.name, self.table)
            indices = [] if index is None else [index]
        else:
            indices = match_all(item.name, self.table)

        if not indices:
            logger.debug(f"No match: {item.path}")
            return [self._record(SiftResult(
                item, None, None, ActionStatus.NO_MATCH, "Matched no sieve folder"
            ))]

        return [self._place_item(item, index) for index in indices]

    def run(self, items: Iterable[Item]) -> List[SiftResult]:
        """
        Sift items in sorted path order.

        Args:
            items: Source items to sift

        Returns:
            List of SiftResult objects describing each outcome
        """
        ordered = sorted(items, key=lambda item: item.path)
        logger.info(
            f"Sifting {len(ordered)} items ({self.config.mode.value} mode)..."
        )

        results: List[SiftResult] = []
        for item in ordered:
            results.extend(self.sift_item(item))

        logger.info(f"Completed sifting {len(ordered)} items")
        return results

    def sift(self, source: Union[str, Path]) -> List[SiftResult]:
        """
        Enumerate a source folder and sift its items.

        Args:
            source: The source folder (its subfolders' children in deep mode)

        Returns:
            List of SiftResult objects describing each outcome
        """
        return self.run(scan_items(source, deep=self.config.deep))

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about sift outcomes.

        Returns:
            Dictionary mapping status names to counts
        """
        return {status.value: count for status, count in self._stats.items()}

    def get_summary(self) -> str:
        """
        Get a human-readable summary of the run.

        Returns:
            Formatted summary string
        """
        stats = self.get_stats()
        total = sum(stats.values())
        mode = self.config.mode

        lines = [f"Sift Summary ({mode.value} mode, {total} outcomes):"]

        if mode == SiftMode.TEST:
            lines.append(f"  Matched: {stats['matched']}")
        else:
            label = {
                SiftMode.MOVE: "Moved",
                SiftMode.LINK: "Linked",
                SiftMode.COPY: "Copied",
            }[mode]
            lines.append(f"  {label}: {stats['success'] + stats['partial']}")
            if stats["partial"]:
                lines.append(f"    (with failed entries: {stats['partial']})")

        lines.append(f"  No match: {stats['no_match']}")

        skipped_count = stats["skipped_missing"] + stats["skipped_exists"]
        if skipped_count:
            lines.append(f"  Skipped: {skipped_count}")
            if stats["skipped_missing"]:
                lines.append(f"    (source missing: {stats['skipped_missing']})")
            if stats["skipped_exists"]:
                lines.append(f"    (already exists: {stats['skipped_exists']})")

        if stats["error"]:
            lines.append(f"  Errors: {stats['error']}")

        return "\n".join(lines)

    def reset_stats(self) -> None:
        """Reset statistics for a new run."""
        self._stats = {status: 0 for status in ActionStatus}
