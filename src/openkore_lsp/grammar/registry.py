"""
Grammar Registry

Read-only view over the external key table. Every top-level entry is either
a leaf (a default value string) or a block (a mapping from child key to the
child's default value). Descriptions live in one flat table keyed by bare
key name and are shared by every scope.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class NodeKind(Enum):
    """Kinds of grammar registry entries."""
    LEAF = "leaf"       # key with a default value
    BLOCK = "block"     # key that opens a { ... } block


@dataclass(frozen=True)
class GrammarNode:
    """A single registry entry, tagged by kind."""
    kind: NodeKind
    default: str = ""
    children: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def leaf(cls, default: Any) -> "GrammarNode":
        return cls(NodeKind.LEAF, default=_as_default(default))

    @classmethod
    def block(cls, children: Mapping[str, Any]) -> "GrammarNode":
        return cls(
            NodeKind.BLOCK,
            children={str(k): _as_default(v) for k, v in children.items()},
        )

    @property
    def is_block(self) -> bool:
        return self.kind is NodeKind.BLOCK

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF


def _as_default(value: Any) -> str:
    """Normalize a raw table value to the default-value string."""
    if value is None:
        return ""
    return str(value)


class GrammarRegistry:
    """
    Scoped key lookups over the config grammar.

    A key is valid in a scope purely by being present there; the stored
    default value is never type checked.

    Usage:
        registry = GrammarRegistry.from_table(keys, descriptions)
        registry.lookup_top_level("attackAuto")
        registry.lookup_in_block("useSelf_skill", "lvl")
    """

    def __init__(self, nodes: Dict[str, GrammarNode],
                 descriptions: Optional[Dict[str, str]] = None,
                 source_uri: Optional[str] = None):
        self._nodes = dict(nodes)
        self._descriptions = dict(descriptions or {})
        self.source_uri = source_uri

    @classmethod
    def from_table(cls, keys: Mapping[str, Any],
                   descriptions: Optional[Mapping[str, Any]] = None,
                   source_uri: Optional[str] = None) -> "GrammarRegistry":
        """Build a registry from a raw nested key table."""
        nodes = {}
        for key, value in keys.items():
            if isinstance(value, Mapping):
                nodes[str(key)] = GrammarNode.block(value)
            else:
                nodes[str(key)] = GrammarNode.leaf(value)
        descs = {str(k): str(v) for k, v in (descriptions or {}).items() if v is not None}
        return cls(nodes, descs, source_uri)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def lookup_top_level(self, key: str) -> Optional[GrammarNode]:
        return self._nodes.get(key)

    def lookup_in_block(self, block_name: str, key: str) -> Optional[GrammarNode]:
        """Look up a key inside a block. Unknown blocks contain nothing."""
        node = self._nodes.get(block_name)
        if node is None or not node.is_block:
            return None
        if key not in node.children:
            return None
        return GrammarNode.leaf(node.children[key])

    def lookup(self, key: str, block_name: Optional[str] = None) -> Optional[GrammarNode]:
        """Resolve a key in the scope given by the enclosing block, if any."""
        if block_name:
            return self.lookup_in_block(block_name, key)
        return self.lookup_top_level(key)

    def describe(self, key: str) -> Optional[str]:
        return self._descriptions.get(key) or None

    def is_block(self, name: str) -> bool:
        node = self._nodes.get(name)
        return node is not None and node.is_block

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def top_level_keys(self) -> List[str]:
        return list(self._nodes)

    def block_keys(self, block_name: str) -> Optional[List[str]]:
        """Child keys of a block, or None when the name is not a block."""
        node = self._nodes.get(block_name)
        if node is None or not node.is_block:
            return None
        return list(node.children)

    def items(self):
        return self._nodes.items()

    def __contains__(self, key: str) -> bool:
        return key in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self):
        blocks = sum(1 for n in self._nodes.values() if n.is_block)
        return f"GrammarRegistry(keys={len(self._nodes)}, blocks={blocks})"
