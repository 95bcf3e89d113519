"""
Bulk input parsing for word pairs.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from pinyin_match.models import WordPair

# Tried in order; the first one that yields two non-empty sides wins
SEPARATORS = ['\t', ' – ', ' - ', ', ', ': ']

_LINE_BREAK = re.compile(r'\r?\n')


@dataclass
class BulkParseResult:
    """Pairs parsed from a block of text plus counts for user feedback."""
    pairs: List[WordPair] = field(default_factory=list)
    added: int = 0
    skipped: int = 0


def parse_line(line: str) -> Optional[WordPair]:
    """
    Parse a single line into a word pair.

    The left side of the first matching separator is the pinyin, the rest
    of the line (with that one separator removed) is the English.

    Args:
        line: One line of user input

    Returns:
        WordPair, or None if the line is blank or has no usable separator

    Examples:
        >>> parse_line("nǐ hǎo\\tHello")
        WordPair(pinyin='nǐ hǎo', english='Hello')

        >>> parse_line("xièxie - thank you")
        WordPair(pinyin='xièxie', english='thank you')

        >>> parse_line("no separator here") is None
        True
    """
    trimmed = line.strip()
    if not trimmed:
        return None

    for separator in SEPARATORS:
        idx = trimmed.find(separator)
        if idx == -1:
            continue
        pinyin = trimmed[:idx].strip()
        english = trimmed[idx:].replace(separator, '', 1).strip()
        if pinyin and english:
            return WordPair(pinyin=pinyin, english=english)

    return None


def parse_bulk(text: str) -> BulkParseResult:
    """
    Parse multi-line text into word pairs.

    Blank lines are ignored; non-blank lines that cannot be parsed are
    counted as skipped.

    Args:
        text: Free-form text, one pair per line

    Returns:
        BulkParseResult with the parsed pairs and added/skipped counts
    """
    result = BulkParseResult()

    for line in _LINE_BREAK.split(text or ''):
        pair = parse_line(line)
        if pair:
            result.pairs.append(pair)
            result.added += 1
        elif line.strip():
            result.skipped += 1

    return result
