"""
Monster Control Validator

mon_control.txt syntax:

    (monster) (attack) (teleport) (search) [skillcancel] [lv] [joblv] [hp] [sp] [weight]

attack:   -1 ignore, 0 unless attacked, 1 always, 2 aggressive, 3 provoke
teleport: <0 critical distance, 1 on screen, 2 when attacked,
          3 disconnect 30s, >=4 disconnect for N seconds
weight:   aggression weight, may be a decimal

Inline '#' comments are allowed. Monster names may contain spaces.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Union

from openkore_lsp.validators.base import ControlRecordValidator
from openkore_lsp.validators.diagnostics import ConfigDiagnostic

ATTACK = re.compile(r"^-?[0-3]$", re.ASCII)
TELEPORT = re.compile(r"^-?\d+$", re.ASCII)
NUMBER = re.compile(r"^-?\d+(\.\d+)?$", re.ASCII)
FLAGS = ("0", "1")

THRESHOLD_FIELDS = ("lv", "joblv", "hp", "sp", "weight")

Number = Union[int, float]


@dataclass(frozen=True)
class MonsterControlEntry:
    """One mon_control.txt record."""
    monster_name: str
    attack: int
    teleport: int
    search: int
    skillcancel: Optional[int] = None
    lv: Optional[Number] = None
    joblv: Optional[Number] = None
    hp: Optional[Number] = None
    sp: Optional[Number] = None
    weight: Optional[Number] = None


class MonsterControlValidator(ControlRecordValidator):
    """Checks mon_control.txt records."""

    name = "monster_control"
    NUMERIC = NUMBER
    MAX_FIELDS = 6
    FIELD_NAMES = "attack, teleport, search"

    def check_fields(self, index: int, raw: str, fields: List[str]) -> List[ConfigDiagnostic]:
        diagnostics = []
        attack, teleport, search = fields[:3]

        if not ATTACK.match(attack):
            diagnostics.append(self.at_token(
                index, raw, attack, f"Attack must be -1, 0, 1, 2, or 3, got: {attack}"))

        if not TELEPORT.match(teleport):
            diagnostics.append(self.at_token(
                index, raw, teleport, f"Teleport must be a number, got: {teleport}"))

        if search not in FLAGS:
            diagnostics.append(self.at_token(
                index, raw, search, f"Search must be 0 or 1, got: {search}"))

        optional_start = 3
        if len(fields) > 3:
            skillcancel = fields[3]
            if skillcancel not in FLAGS:
                diagnostics.append(self.at_token(
                    index, raw, skillcancel, f"Skillcancel must be 0 or 1, got: {skillcancel}"))
            optional_start = 4

        for value in fields[optional_start:]:
            if not NUMBER.match(value):
                diagnostics.append(self.at_token(
                    index, raw, value, f"Optional field must be a number, got: {value}"))

        return diagnostics


def _number(value: str) -> Number:
    return float(value) if "." in value else int(value)


def parse_monster_control(raw: str) -> Optional[MonsterControlEntry]:
    """Read one record line. Returns None for comments, blanks and invalid records."""
    validator = MonsterControlValidator()
    tokens = validator.tokenize(raw)
    if tokens is None or validator.check_line(0, raw):
        return None

    name, fields = validator.split_record(tokens)
    skillcancel = int(fields[3]) if len(fields) > 3 else None
    thresholds = dict(zip(THRESHOLD_FIELDS, (_number(v) for v in fields[4:])))
    return MonsterControlEntry(
        monster_name=" ".join(name),
        attack=int(fields[0]),
        teleport=int(fields[1]),
        search=int(fields[2]),
        skillcancel=skillcancel,
        **thresholds,
    )
