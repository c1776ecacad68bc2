"""
Range Locator

Character spans for flagged tokens, always measured on the raw line.

locate() returns the first textual occurrence of a token, which is not
necessarily the occurrence that was parsed: in 'Potion 2 1 2 0' a bad
flag '2' is reported at the minimum field. This is kept on purpose.
"""

from typing import Tuple


def locate(line: str, token: str) -> Tuple[int, int]:
    """Span (start, end) of the first occurrence of token in line.

    Falls back to column 0 when the token does not occur.
    """
    start = line.find(token)
    if start < 0:
        start = 0
    return start, start + len(token)


def line_end(line: str) -> int:
    """Column just past the last non-whitespace character."""
    return len(line.rstrip())
