"""
openkore_lsp.parser - Line-Oriented Config Scanning

Line splitting, block context resolution, source ranges, and the
config-to-mapping parser for OpenKore config files.
"""

from openkore_lsp.parser.context import (
    BlockContext,
    split_lines,
    resolve_block_context,
    resolve_block,
)
from openkore_lsp.parser.ranges import locate, line_end
from openkore_lsp.parser.config_parser import parse_config

__all__ = [
    # Context
    "BlockContext",
    "split_lines",
    "resolve_block_context",
    "resolve_block",
    # Ranges
    "locate",
    "line_end",
    # Parser
    "parse_config",
]
