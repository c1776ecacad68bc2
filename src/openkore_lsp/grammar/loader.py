"""
Grammar Loader

Loads and caches the config grammar table from YAML.

The file holds two mappings:

    keys:
      attackAuto: "2"
      useSelf_skill:        # a mapping marks a block
        lvl: ""
        hp: ""
    descriptions:
      attackAuto: "..."
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from openkore_lsp.grammar.registry import GrammarRegistry

logger = logging.getLogger(__name__)

# Bundled grammar table
DEFAULT_GRAMMAR_FILE = Path(__file__).parent / "config_grammar.yaml"

# Cached default registry
_default_cache: Optional[GrammarRegistry] = None


class GrammarError(ValueError):
    """Grammar data file has the wrong shape."""


def _check_table(data: Any, path: Path) -> tuple[dict, dict]:
    if not isinstance(data, dict):
        raise GrammarError(f"Grammar must be a YAML mapping, got {type(data).__name__}: {path}")

    keys = data.get("keys")
    if not isinstance(keys, dict):
        raise GrammarError(f"Grammar 'keys' must be a mapping: {path}")

    for name, value in keys.items():
        if isinstance(value, dict):
            for child, default in value.items():
                if isinstance(default, (dict, list)):
                    raise GrammarError(
                        f"Block '{name}' key '{child}' must have a scalar default: {path}"
                    )
        elif isinstance(value, list):
            raise GrammarError(f"Key '{name}' must be a scalar or a mapping: {path}")

    descriptions = data.get("descriptions") or {}
    if not isinstance(descriptions, dict):
        raise GrammarError(f"Grammar 'descriptions' must be a mapping: {path}")

    return keys, descriptions


def load_grammar(grammar_path: Path | str | None = None) -> GrammarRegistry:
    """
    Load a grammar registry from YAML.

    Args:
        grammar_path: Optional path to a grammar file. Defaults to the bundled table.

    Returns:
        GrammarRegistry whose source_uri points at the loaded file.

    Raises:
        FileNotFoundError: If the grammar file doesn't exist.
        yaml.YAMLError: If the grammar file is invalid YAML.
        GrammarError: If the YAML does not have the expected shape.
    """
    path = Path(grammar_path) if grammar_path else DEFAULT_GRAMMAR_FILE

    if not path.exists():
        raise FileNotFoundError(f"Grammar file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    keys, descriptions = _check_table(data, path)
    registry = GrammarRegistry.from_table(keys, descriptions, source_uri=path.resolve().as_uri())
    logger.debug("Loaded grammar %s: %r", path, registry)
    return registry


def get_default_grammar() -> GrammarRegistry:
    """Get the bundled grammar, loading it on first use."""
    global _default_cache

    if _default_cache is None:
        _default_cache = load_grammar()

    return _default_cache
