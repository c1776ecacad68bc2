"""
Completion, hover and go-to-definition for config.txt documents.

All three find the enclosing block with the block context resolver and
then look keys up in that block's scope, or at top level outside blocks.
"""

import logging
import re
from typing import Any, List, Optional, Sequence, Tuple

from lsprotocol import types as lsp

from openkore_lsp.grammar.registry import GrammarNode, GrammarRegistry
from openkore_lsp.parser.context import resolve_block

logger = logging.getLogger(__name__)

_WORD = re.compile(r"\w+", re.ASCII)

# Definition target when the grammar was not loaded from a file
_CONFIG_FILE = re.compile(r"config\.txt$")
GRAMMAR_FILE_NAME = "config_grammar.yaml"


# ============================================================================
# WORDS
# ============================================================================

def word_at(line: str, character: int) -> Optional[Tuple[str, int]]:
    """
    Word under the cursor as (word, start column).

    Each word is placed at its first occurrence in the line, and the end
    column counts as inside the word.
    """
    for word in _WORD.findall(line):
        start = line.find(word)
        if start <= character <= start + len(word):
            return word, start
    return None


def _line(lines: Sequence[str], index: int) -> str:
    if 0 <= index < len(lines):
        return lines[index]
    return ""


# ============================================================================
# DETAIL TEXT
# ============================================================================

def _property_text(registry: GrammarRegistry, key: str, default: str) -> Tuple[str, str]:
    detail = f"(property) {key}: {default}"
    description = registry.describe(key)
    if description:
        return detail, f"{description}\n\nDefault: {default}"
    return detail, f"Default: {default}"


def describe_node(registry: GrammarRegistry, key: str, node: GrammarNode) -> Tuple[str, str]:
    """(detail, documentation) for a resolved registry entry."""
    if node.is_block:
        return f"(block) {key}", registry.describe(key) or "Configuration block"
    return _property_text(registry, key, node.default)


# ============================================================================
# COMPLETION
# ============================================================================

def complete(registry: GrammarRegistry, lines: Sequence[str],
             position: lsp.Position) -> List[lsp.CompletionItem]:
    """Keys valid at the cursor line."""
    block_name = resolve_block(lines, position.line)

    if block_name is not None:
        keys = registry.block_keys(block_name)
        if keys is not None:
            return [
                lsp.CompletionItem(
                    label=key,
                    kind=lsp.CompletionItemKind.Property,
                    data={"key": key, "insideBlock": block_name},
                )
                for key in keys
            ]

    # Outside a block, or inside an unknown one
    items = []
    for key, node in registry.items():
        items.append(lsp.CompletionItem(
            label=key,
            kind=lsp.CompletionItemKind.Module if node.is_block else lsp.CompletionItemKind.Property,
            data=key,
        ))
    return items


def _payload(data: Any) -> Tuple[Optional[str], Optional[str]]:
    """Completion payload as (key, block). Accepts a bare key or a {key, insideBlock} mapping."""
    if isinstance(data, str):
        return data, None
    if isinstance(data, dict):
        key = data.get("key")
        block = data.get("insideBlock")
        return (key if isinstance(key, str) else None), (block if isinstance(block, str) else None)
    return None, None


def resolve_completion(registry: GrammarRegistry, item: lsp.CompletionItem) -> lsp.CompletionItem:
    """Fill in detail and documentation for a selected completion item."""
    key, block_name = _payload(item.data)
    if key is None:
        return item

    node = registry.lookup(key, block_name)
    if node is None:
        return item

    item.detail, item.documentation = describe_node(registry, key, node)
    return item


# ============================================================================
# HOVER
# ============================================================================

def hover(registry: GrammarRegistry, lines: Sequence[str],
          position: lsp.Position) -> Optional[lsp.Hover]:
    found = word_at(_line(lines, position.line), position.character)
    if found is None:
        return None
    word, _ = found

    block_name = resolve_block(lines, position.line)
    node = registry.lookup(word, block_name)
    logger.debug("hover %r in block %r: %s", word, block_name, "found" if node else "unknown")
    if node is None:
        return None

    detail, documentation = describe_node(registry, word, node)
    return lsp.Hover(contents=lsp.MarkupContent(
        kind=lsp.MarkupKind.Markdown,
        value="\n".join(["```plaintext", detail, "```", "---", documentation]),
    ))


# ============================================================================
# DEFINITION
# ============================================================================

def grammar_target_uri(registry: GrammarRegistry, document_uri: str) -> str:
    if registry.source_uri:
        return registry.source_uri
    return _CONFIG_FILE.sub(GRAMMAR_FILE_NAME, document_uri)


def definition(registry: GrammarRegistry, uri: str, lines: Sequence[str],
               position: lsp.Position) -> Optional[List[lsp.LocationLink]]:
    """
    Link a known key to the grammar source.

    The target is always line 0, column 0 of the grammar file: it confirms
    the key exists rather than pointing at the line that defines it.
    """
    found = word_at(_line(lines, position.line), position.character)
    if found is None:
        return None
    word, start = found

    block_name = resolve_block(lines, position.line)
    if registry.lookup(word, block_name) is None:
        return None

    target = lsp.Range(
        start=lsp.Position(line=0, character=0),
        end=lsp.Position(line=0, character=0),
    )
    return [lsp.LocationLink(
        target_uri=grammar_target_uri(registry, uri),
        target_range=target,
        target_selection_range=target,
        origin_selection_range=lsp.Range(
            start=lsp.Position(line=position.line, character=start),
            end=lsp.Position(line=position.line, character=start + len(word)),
        ),
    )]
