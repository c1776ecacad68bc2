"""
Tests for the block context resolver.
"""

import pytest
from openkore_lsp.parser import resolve_block, resolve_block_context, split_lines


DOCUMENT = """\
attackAuto 2
useSelf_skill Heal {
    lvl 10
    hp < 50%
}
lockMap prt_fild08
"""


class TestResolveBlock:
    """Block lookup by prefix scan."""

    def test_top_level_line(self):
        """Lines before any block have no context."""
        assert resolve_block(DOCUMENT, 0) is None
        assert resolve_block(DOCUMENT, 1) is None

    def test_inside_block(self):
        """Lines after a header belong to the block."""
        assert resolve_block(DOCUMENT, 2) == "useSelf_skill"
        assert resolve_block(DOCUMENT, 3) == "useSelf_skill"

    def test_closing_line_still_inside(self):
        """The scan stops before the target line, so '}' itself is inside."""
        assert resolve_block(DOCUMENT, 4) == "useSelf_skill"

    def test_after_block(self):
        assert resolve_block(DOCUMENT, 5) is None

    def test_accepts_line_list(self):
        assert resolve_block(split_lines(DOCUMENT), 2) == "useSelf_skill"

    def test_target_past_end(self):
        """Target lines beyond the document scan the whole document."""
        assert resolve_block("foo {\n", 50) == "foo"

    def test_start_line_recorded(self):
        context = resolve_block_context(DOCUMENT, 3)
        assert context.in_block
        assert context.start_line == 1


class TestOneLineBlocks:
    """A '}' on the header line does not close the block it opens."""

    def test_empty_one_line_block(self):
        lines = ["doCommand {}", "hp 10"]
        assert resolve_block(lines, 1) == "doCommand"

    def test_closed_on_later_line(self):
        lines = ["doCommand {}", "}", "hp 10"]
        assert resolve_block(lines, 2) is None


class TestNoNesting:
    """The resolver has no stack: inner headers replace the outer block."""

    def test_inner_header_replaces_outer(self):
        lines = ["outer {", "inner {", "key 1", "}", "key 2", "}"]
        assert resolve_block(lines, 2) == "inner"

    def test_inner_close_clears_everything(self):
        """After the inner '}' the outer block is forgotten."""
        lines = ["outer {", "inner {", "key 1", "}", "key 2", "}"]
        assert resolve_block(lines, 4) is None


class TestSplitLines:

    def test_keeps_carriage_returns(self):
        assert split_lines("a\r\nb") == ["a\r", "b"]

    def test_trailing_newline(self):
        assert split_lines("a\n") == ["a", ""]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
