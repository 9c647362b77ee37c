"""
Matching of item names against a compiled pattern table.

The table is scanned linearly in its stored order (most complex group
first) and the first satisfied group wins.
"""

import logging
from typing import List, Optional

from .parser import fold_case
from .sieve import PatternTable
from .types import PatternGroup

logger = logging.getLogger(__name__)


def group_matches(group: PatternGroup, name: str) -> bool:
    """
    Check whether a word group is satisfied by an already case-folded name.

    Every plain word must be a substring of the name and no negated word
    may be. A group of only negated words therefore matches every name
    that avoids all of them.
    """
    for word in group.words:
        if (word.text in name) == word.negated:
            return False
    return True


def match(item_name: str, table: PatternTable) -> Optional[int]:
    """
    Find the sieve folder an item belongs to.

    Args:
        item_name: The item's basename
        table: The compiled pattern table

    Returns:
        Index of the folder owning the first satisfied group, or None
    """
    name = fold_case(item_name)
    for pattern in table:
        if group_matches(pattern.group, name):
            logger.debug(
                f"{item_name!r} matched {pattern.group.text!r} "
                f"(score {pattern.score})"
            )
            return pattern.folder_index
    return None


def match_all(item_name: str, table: PatternTable) -> List[int]:
    """
    Find every sieve folder an item belongs to.

    Args:
        item_name: The item's basename
        table: The compiled pattern table

    Returns:
        Folder indices in table order, each listed once
    """
    name = fold_case(item_name)
    indices: List[int] = []
    for pattern in table:
        if pattern.folder_index in indices:
            continue
        if group_matches(pattern.group, name):
            indices.append(pattern.folder_index)
    return indices
