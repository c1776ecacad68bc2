"""
openkore_lsp.grammar - Config Grammar Registry

Typed read-only view over the table of recognized config keys,
per-block keys, default values and descriptions.
"""

from openkore_lsp.grammar.registry import (
    NodeKind,
    GrammarNode,
    GrammarRegistry,
)
from openkore_lsp.grammar.loader import (
    GrammarError,
    DEFAULT_GRAMMAR_FILE,
    load_grammar,
    get_default_grammar,
)

__all__ = [
    "NodeKind",
    "GrammarNode",
    "GrammarRegistry",
    "GrammarError",
    "DEFAULT_GRAMMAR_FILE",
    "load_grammar",
    "get_default_grammar",
]
