"""
Word-group parser for sieve folder names.

A sieve folder name such as ``Science Fiction (sci-fi, space opera)`` encodes
one word group per segment delimited by '(', ')' or ','. Words inside a group
are delimited by spaces. A word prefixed with '!' must not occur in a matching
item name.

This module is responsible for:
- Case folding (ASCII letters only)
- Splitting a name into word groups, dropping empty segments
- Splitting a group into words and flagging negated words
- Scoring groups by complexity
"""

import logging
import re
import string
from typing import List, Tuple

from .types import PatternGroup, Word

logger = logging.getLogger(__name__)

GROUP_DELIMITERS = "(),"
NEGATION_PREFIX = "!"

_GROUP_SPLIT = re.compile("[" + re.escape(GROUP_DELIMITERS) + "]+")
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def fold_case(text: str) -> str:
    """Lower-case ASCII letters only; other characters are left alone."""
    return text.translate(_ASCII_LOWER)


def split_words(group_text: str) -> List[str]:
    """Split a group on spaces, collapsing runs of spaces."""
    return [word for word in group_text.split(" ") if word]


def score_group(group_text: str) -> int:
    """
    Score a word group by complexity.

    Fewer, longer words are harder to match than the same letters split
    into several shorter words, so the score is the trimmed group length
    minus the number of words.

    Examples:
        >>> score_group("science fiction")
        13
        >>> score_group("science")
        6
    """
    group_text = group_text.strip()
    return len(group_text) - len(split_words(group_text))


def parse_word(token: str) -> Word:
    if token.startswith(NEGATION_PREFIX):
        return Word(text=token[len(NEGATION_PREFIX):], negated=True)
    return Word(text=token)


def parse(raw_name: str) -> Tuple[PatternGroup, ...]:
    """
    Parse a sieve folder name into its word groups.

    Args:
        raw_name: The folder basename

    Returns:
        Tuple of PatternGroup in the order they appear in the name.
        Segments that are empty after trimming produce no group.
    """
    name = fold_case(raw_name.strip())
    groups: List[PatternGroup] = []

    for segment in _GROUP_SPLIT.split(name):
        segment = segment.strip()
        if not segment:
            continue

        words = tuple(parse_word(token) for token in split_words(segment))
        groups.append(PatternGroup(words=words, text=segment))

    logger.debug(f"Parsed {raw_name!r} into {len(groups)} word group(s)")
    return tuple(groups)
