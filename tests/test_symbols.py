"""
Tests for the document outline.
"""

import pytest
from lsprotocol import types as lsp

from openkore_lsp.symbols import DEFAULT_SECTION, SymbolKind, document_symbols, extract_symbols


def outline(text):
    return [(s.name, s.kind, s.container_name) for s in extract_symbols(text)]


class TestSections:

    def test_default_section(self):
        assert outline("attackAuto 2") == [("attackAuto", SymbolKind.PROPERTY, DEFAULT_SECTION)]

    def test_comment_sets_section(self):
        text = "# Attack settings\nattackAuto 2\n"
        assert outline(text) == [("attackAuto", SymbolKind.PROPERTY, "Attack settings")]

    def test_comment_with_equals_ignored(self):
        text = "# Attack\n# mode = 2 is aggressive\nattackAuto 2\n"
        assert outline(text)[0][2] == "Attack"

    def test_bare_hash_ignored(self):
        text = "# Attack\n#\nattackAuto 2\n"
        assert outline(text)[0][2] == "Attack"


class TestBlocks:

    def test_block_and_keys(self):
        text = (
            "# Skills\n"
            "useSelf_skill Heal {\n"
            "    lvl 10\n"
            "}\n"
            "attackAuto 2\n"
        )
        assert outline(text) == [
            ("useSelf_skill", SymbolKind.BLOCK, "Skills"),
            ("lvl", SymbolKind.PROPERTY, "useSelf_skill"),
            ("attackAuto", SymbolKind.PROPERTY, "Skills"),
        ]

    def test_nested_blocks_use_a_stack(self):
        """Unlike the block context resolver, the outline nests."""
        text = "outer {\n  inner {\n    a 1\n  }\n  b 2\n}\nc 3\n"
        assert outline(text) == [
            ("outer", SymbolKind.BLOCK, DEFAULT_SECTION),
            ("inner", SymbolKind.BLOCK, DEFAULT_SECTION),
            ("a", SymbolKind.PROPERTY, "inner"),
            ("b", SymbolKind.PROPERTY, "outer"),
            ("c", SymbolKind.PROPERTY, DEFAULT_SECTION),
        ]

    def test_one_line_block(self):
        text = "doCommand {}\nattackAuto 2\n"
        assert outline(text)[1] == ("attackAuto", SymbolKind.PROPERTY, DEFAULT_SECTION)

    def test_lines_not_starting_with_identifier(self):
        text = "@macro 1\n123 foo\nattackAuto 2\n"
        assert [name for name, _, _ in outline(text)] == ["attackAuto"]


class TestRanges:

    def test_key_range_on_raw_line(self):
        symbols = extract_symbols("foo {\n\tlvl 10\n}\n")
        lvl = symbols[1]
        assert (lvl.line, lvl.column, lvl.end_column) == (1, 1, 4)

    def test_lsp_conversion(self):
        info = document_symbols("file:///control/config.txt", "useSelf_skill {\n  lvl 1\n}\n")
        assert info[0].kind == lsp.SymbolKind.Object
        assert info[1].kind == lsp.SymbolKind.Property
        assert info[1].container_name == "useSelf_skill"
        assert info[1].location.uri == "file:///control/config.txt"
        assert info[1].location.range == lsp.Range(
            start=lsp.Position(line=1, character=2),
            end=lsp.Position(line=1, character=5),
        )

    def test_fixture(self, config_text):
        names = [s.name for s in extract_symbols(config_text)]
        assert names[:3] == ["master", "server", "username"]
        assert "attackSkillSlot" in names


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
