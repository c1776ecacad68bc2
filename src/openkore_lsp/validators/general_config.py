"""
General Config Validator

Checks config.txt style documents against the grammar registry:

    attackAuto 2            top-level key, must be a registry key
    useSelf_skill Heal {    opens a block; the name itself is not checked
        lvl 10              block key, must be listed for that block
        hp < 50%
    }

Comment and blank lines are skipped. Inline comments are not stripped.
Blocks do not nest: a second header replaces the open block.
"""

import re
from typing import List, Optional

from openkore_lsp.grammar.registry import GrammarRegistry
from openkore_lsp.parser.context import split_lines
from openkore_lsp.parser.ranges import line_end, locate
from openkore_lsp.validators.base import LineValidator
from openkore_lsp.validators.diagnostics import ConfigDiagnostic

LEVEL_MIN = 1
LEVEL_MAX = 10

# Leading integer, read the way a lenient parseInt would
_INT_PREFIX = re.compile(r"^[+-]?\d+", re.ASCII)

# 28, 10%
_PLAIN_AMOUNT = re.compile(r"^\d+%?$", re.ASCII)
# < 10%, >=50, != 3
_COMPARISON = re.compile(r"^[<>=!]{1,2}\s*\d+%?$", re.ASCII)


def parse_level(value: str) -> Optional[int]:
    match = _INT_PREFIX.match(value)
    return int(match.group()) if match else None


def is_amount_expression(first: str, rest: str) -> bool:
    """True for a plain number or percentage, or a comparison expression."""
    return bool(_PLAIN_AMOUNT.match(first) or _COMPARISON.match(rest))


class GeneralConfigValidator(LineValidator):
    """Checks config.txt keys and the lvl/hp/sp values."""

    name = "general_config"

    def __init__(self, registry: GrammarRegistry):
        self.registry = registry

    def validate(self, text: str) -> List[ConfigDiagnostic]:
        diagnostics: List[ConfigDiagnostic] = []
        block_name: Optional[str] = None

        for index, raw in enumerate(split_lines(text)):
            line = raw.strip()

            if not line or line.startswith("#"):
                continue

            if line.endswith("{"):
                block_name = line.split()[0]
                continue

            if line == "}":
                block_name = None
                continue

            diagnostics.extend(self.check_entry(index, raw, block_name))

        return diagnostics

    def check_entry(self, index: int, raw: str, block_name: Optional[str]) -> List[ConfigDiagnostic]:
        diagnostics = []
        parts = raw.split()
        key = parts[0]

        if self.registry.lookup(key, block_name) is None:
            # Spans the key length from column 0, whatever the indentation
            diagnostics.append(ConfigDiagnostic(index, 0, len(key), f"Unknown configuration key: {key}"))

        if key == "lvl" and len(parts) > 1:
            value = parts[1]
            level = parse_level(value)
            if level is None or not LEVEL_MIN <= level <= LEVEL_MAX:
                diagnostics.append(self.at_token(
                    index, raw, value,
                    f"Level must be between {LEVEL_MIN} and {LEVEL_MAX}, got: {value}",
                ))

        if key in ("hp", "sp") and len(parts) > 1:
            rest = " ".join(parts[1:])
            if not is_amount_expression(parts[1], rest):
                start, _ = locate(raw, parts[1])
                diagnostics.append(ConfigDiagnostic(
                    index, start, line_end(raw),
                    f'{key} must be a number, percentage, or comparison expression '
                    f'(e.g., "< 10%", ">= 50"), got: {rest}',
                ))

        return diagnostics
