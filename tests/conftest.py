"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from openkore_lsp.config import ServerConfig
from openkore_lsp.grammar import GrammarRegistry, get_default_grammar
from openkore_lsp.session import Session


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def fixtures_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def config_text(fixtures_dir):
    return (fixtures_dir / "config.txt").read_text(encoding="utf-8")


@pytest.fixture
def items_text(fixtures_dir):
    return (fixtures_dir / "items_control.txt").read_text(encoding="utf-8")


@pytest.fixture
def monsters_text(fixtures_dir):
    return (fixtures_dir / "mon_control.txt").read_text(encoding="utf-8")


# =============================================================================
# GRAMMAR FIXTURES
# =============================================================================

SMALL_GRAMMAR_KEYS = {
    "attackAuto": "2",
    "lockMap": "",
    "hp": "",
    "lvl": "",
    "useSelf_skill": {
        "lvl": "",
        "hp": "",
        "sp": "",
        "timeout": "0",
    },
    "buyAuto": {
        "npc": "",
        "minAmount": "2",
    },
}

SMALL_GRAMMAR_DESCRIPTIONS = {
    "attackAuto": "Attack mode.",
    "useSelf_skill": "Use a skill on yourself.",
    "lvl": "Skill level to use.",
}


@pytest.fixture
def registry():
    """Small in-memory grammar with two blocks."""
    return GrammarRegistry.from_table(SMALL_GRAMMAR_KEYS, SMALL_GRAMMAR_DESCRIPTIONS)


@pytest.fixture
def bundled_registry():
    """The grammar shipped with the package."""
    return get_default_grammar()


@pytest.fixture
def session(registry):
    return Session(registry, ServerConfig(load_file=False))


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def messages(diagnostics) -> list:
    """Messages of a diagnostic list, in order."""
    return [d.message for d in diagnostics]


def spans(diagnostics) -> list:
    """(line, column, end_column) of a diagnostic list, in order."""
    return [(d.line, d.column, d.end_column) for d in diagnostics]
