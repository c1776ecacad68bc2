"""
Tests for the mon_control.txt validator.
"""

import pytest
from openkore_lsp.validators import MonsterControlEntry, MonsterControlValidator, parse_monster_control

from conftest import messages, spans


@pytest.fixture
def validator():
    return MonsterControlValidator()


class TestFieldCount:

    def test_six_fields(self, validator):
        """'Poring 0 1 1 1 1 99' fills the six-field cap and is valid."""
        tokens = "Poring 0 1 1 1 1 99".split()
        assert validator.count_fields(tokens) == 6
        assert validator.validate("Poring 0 1 1 1 1 99") == []

    def test_cap_leaves_extra_numbers_in_name(self, validator):
        name, fields = validator.split_record("Poring 1 0 1 1 1 50 2.5".split())
        assert name == ["Poring", "1"]
        assert fields == ["0", "1", "1", "1", "50", "2.5"]

    def test_signed_and_decimal_tokens_count(self, validator):
        assert validator.count_fields("Hydra -1 -3 0 0 1.5".split()) == 5

    def test_too_few_fields(self, validator):
        """'Poring -5 1' has only two trailing numbers."""
        diagnostics = validator.validate("Poring -5 1")
        assert messages(diagnostics) == [
            "Expected at least 3 numeric fields at end of line "
            "(attack, teleport, search), got 2"
        ]
        assert spans(diagnostics) == [(0, 0, 11)]

    def test_numeric_monster_id(self, validator):
        """A numeric ID stays the name even when it looks like a field."""
        name, fields = validator.split_record("1002 1 0 0".split())
        assert name == ["1002"]
        assert fields == ["1", "0", "0"]


class TestFieldValues:

    @pytest.mark.parametrize("attack", ["-1", "0", "1", "2", "3"])
    def test_attack_values(self, validator, attack):
        assert validator.validate(f"Poring {attack} 0 0") == []

    def test_bad_attack(self, validator):
        diagnostics = validator.validate("Hydra 4 0 0")
        assert messages(diagnostics) == ["Attack must be -1, 0, 1, 2, or 3, got: 4"]
        assert spans(diagnostics) == [(0, 6, 7)]

    def test_decimal_teleport(self, validator):
        assert messages(validator.validate("Hydra 1 1.5 0")) == [
            "Teleport must be a number, got: 1.5"
        ]

    def test_negative_teleport(self, validator):
        """Negative teleport values are critical distances."""
        assert validator.validate("Hydra 1 -3 0") == []

    def test_bad_search(self, validator):
        assert messages(validator.validate("Hydra 1 0 2")) == ["Search must be 0 or 1, got: 2"]

    def test_bad_skillcancel(self, validator):
        assert messages(validator.validate("Hydra 1 0 0 5")) == ["Skillcancel must be 0 or 1, got: 5"]

    def test_optional_thresholds(self, validator):
        assert validator.validate("Hydra 1 0 0 1 50") == []
        assert validator.validate("Hydra 1 0 0 1 50 -2.5") == []

    def test_all_errors_on_one_line(self, validator):
        diagnostics = validator.validate("Mandragora 9 0.5 7 8")
        assert messages(diagnostics) == [
            "Attack must be -1, 0, 1, 2, or 3, got: 9",
            "Teleport must be a number, got: 0.5",
            "Search must be 0 or 1, got: 7",
            "Skillcancel must be 0 or 1, got: 8",
        ]


class TestComments:

    def test_inline_comment(self, validator):
        assert validator.validate("Poring 0 1 1 # passive") == []

    def test_comment_lines(self, validator):
        assert validator.validate("# Poring 9 9 9\n\n") == []


class TestFixture:

    def test_monsters_fixture(self, validator, monsters_text):
        diagnostics = validator.validate(monsters_text)
        assert [d.line for d in diagnostics] == [4, 5, 6, 6]
        assert messages(diagnostics)[1:] == [
            "Attack must be -1, 0, 1, 2, or 3, got: 4",
            "Search must be 0 or 1, got: 2",
            "Skillcancel must be 0 or 1, got: 3",
        ]

    def test_idempotent(self, validator, monsters_text):
        assert validator.validate(monsters_text) == validator.validate(monsters_text)


class TestParseEntry:

    def test_required_fields(self):
        assert parse_monster_control("Thief Bug Egg -1 0 0") == MonsterControlEntry(
            monster_name="Thief Bug Egg", attack=-1, teleport=0, search=0,
        )

    def test_thresholds(self):
        entry = parse_monster_control("Poring 0 1 1 1 1 99")
        assert entry.skillcancel == 1
        assert entry.lv == 1
        assert entry.joblv == 99
        assert entry.hp is None

    def test_decimal_threshold(self):
        entry = parse_monster_control("Poring 0 1 1 0 2.5")
        assert entry.lv == 2.5

    @pytest.mark.parametrize("line", ["", "# x", "Poring -5 1", "Hydra 4 0 0"])
    def test_no_entry(self, line):
        assert parse_monster_control(line) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
