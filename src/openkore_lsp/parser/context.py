"""
Block Context Resolver

Finds the block enclosing a given line of a config document by scanning
every line before it. There is no stack: a brace line inside a block
replaces the current block instead of nesting, so callers only ever see
one active block. The document outline keeps its own stack (see
openkore_lsp.symbols), which means the two disagree on nested input.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union


@dataclass(frozen=True)
class BlockContext:
    """Enclosing block of one (document, line) pair."""
    block_name: Optional[str] = None
    start_line: int = -1

    @property
    def in_block(self) -> bool:
        return self.block_name is not None


def split_lines(text: str) -> List[str]:
    """Split document text into raw lines.

    Only '\\n' separates lines; a trailing '\\r' stays on the raw line.
    """
    return text.split("\n")


def resolve_block_context(lines: Union[str, Sequence[str]], target_line: int) -> BlockContext:
    """
    Scan lines 0..target_line-1 and return the block open at target_line.

    A line containing '{' opens a block named by its first token. A line
    containing '}' closes the current block only when it comes after the
    block's header line, so a one-line 'key {}' does not close itself.
    """
    if isinstance(lines, str):
        lines = split_lines(lines)

    block_name: Optional[str] = None
    start_line = -1

    for index in range(min(target_line, len(lines))):
        line = lines[index]
        if "{" in line:
            tokens = line.split()
            block_name = tokens[0] if tokens else ""
            start_line = index
        if "}" in line and index > start_line:
            block_name = None

    if block_name is None:
        return BlockContext()
    return BlockContext(block_name, start_line)


def resolve_block(lines: Union[str, Sequence[str]], target_line: int) -> Optional[str]:
    """Name of the block enclosing target_line, or None at top level."""
    return resolve_block_context(lines, target_line).block_name
