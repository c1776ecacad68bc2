"""
Items Control Validator

items_control.txt syntax:

    (item name or ID) (minimum) (auto-store) (auto-sell) [put in cart] [get from cart]

    Red Potion 10 1 1
    Jellopy    0  0 1 1

Inline '#' comments are allowed. The item name may contain spaces.
"""

from dataclasses import dataclass
from typing import List, Optional

from openkore_lsp.validators.base import ControlRecordValidator
from openkore_lsp.validators.diagnostics import ConfigDiagnostic

FLAGS = ("0", "1")


@dataclass(frozen=True)
class ItemControlEntry:
    """One items_control.txt record."""
    item_name_or_id: str
    minimum: int
    auto_store: int
    auto_sell: int
    put_in_cart: Optional[int] = None
    get_from_cart: Optional[int] = None


class ItemsControlValidator(ControlRecordValidator):
    """Checks items_control.txt records."""

    name = "items_control"
    MAX_FIELDS = 5
    FIELD_NAMES = "minimum, auto-store, auto-sell"

    def check_fields(self, index: int, raw: str, fields: List[str]) -> List[ConfigDiagnostic]:
        diagnostics = []
        minimum = fields[0]
        if not self.NUMERIC.match(minimum):
            diagnostics.append(self.at_token(
                index, raw, minimum, f"Minimum must be a number >= 0, got: {minimum}"))

        for flag in fields[1:]:
            if flag not in FLAGS:
                diagnostics.append(self.at_token(
                    index, raw, flag, f"Flag must be 0 or 1, got: {flag}"))

        return diagnostics


def parse_item_control(raw: str) -> Optional[ItemControlEntry]:
    """Read one record line. Returns None for comments, blanks and invalid records."""
    validator = ItemsControlValidator()
    tokens = validator.tokenize(raw)
    if tokens is None or validator.check_line(0, raw):
        return None

    name, fields = validator.split_record(tokens)
    flags = [int(f) for f in fields[1:]] + [None, None]
    return ItemControlEntry(
        item_name_or_id=" ".join(name),
        minimum=int(fields[0]),
        auto_store=flags[0],
        auto_sell=flags[1],
        put_in_cart=flags[2],
        get_from_cart=flags[3],
    )
