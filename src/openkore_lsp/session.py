"""
Editor session state.

A Session owns the open documents (URI -> latest full-text snapshot) and
the grammar they are checked against. Every handler receives the session
it works on; nothing is kept at module level.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import yaml

from openkore_lsp.config import ServerConfig
from openkore_lsp.grammar.loader import GrammarError, get_default_grammar, load_grammar
from openkore_lsp.grammar.registry import GrammarRegistry
from openkore_lsp.parser.context import split_lines
from openkore_lsp.validators import ConfigDiagnostic, FileType, classify, validate_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """Immutable snapshot of one open document."""
    uri: str
    text: str
    version: Optional[int] = None
    lines: List[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "lines", split_lines(self.text))


class Session:
    """Open documents plus the grammar registry, for one editor connection."""

    def __init__(self, registry: GrammarRegistry, config: Optional[ServerConfig] = None):
        self.registry = registry
        self.config = config or ServerConfig(load_file=False)
        self._documents: Dict[str, Document] = {}

    # ------------------------------------------------------------------
    # Document sync (full text only)
    # ------------------------------------------------------------------

    def open(self, uri: str, text: str, version: Optional[int] = None) -> Document:
        document = Document(uri, text, version)
        self._documents[uri] = document
        logger.info("Opened %s (%s)", uri, self.file_type(uri).value)
        return document

    def update(self, uri: str, text: str, version: Optional[int] = None) -> Document:
        """Replace the snapshot for uri with new full text."""
        document = Document(uri, text, version)
        self._documents[uri] = document
        return document

    def close(self, uri: str) -> None:
        if self._documents.pop(uri, None) is not None:
            logger.info("Closed %s", uri)

    def get(self, uri: str) -> Optional[Document]:
        return self._documents.get(uri)

    def __contains__(self, uri: str) -> bool:
        return uri in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def file_type(self, uri: str) -> FileType:
        return classify(
            uri,
            items_suffix=self.config.items_control_suffix,
            monster_suffix=self.config.monster_control_suffix,
        )

    def diagnostics(self, uri: str) -> List[ConfigDiagnostic]:
        """Full diagnostic list for an open document; empty when not open."""
        document = self._documents.get(uri)
        if document is None:
            return []
        return validate_document(uri, document.text, self.registry, self.file_type(uri))


def create_session(config: Optional[ServerConfig] = None) -> Session:
    """
    Build a session from configuration.

    A configured grammar that cannot be loaded is reported and the
    bundled grammar is used instead.
    """
    config = config or ServerConfig()
    registry = None

    if config.grammar_path is not None:
        try:
            registry = load_grammar(config.grammar_path)
        except (OSError, yaml.YAMLError, GrammarError) as e:
            logger.warning("Falling back to bundled grammar: %s", e)

    if registry is None:
        registry = get_default_grammar()

    return Session(registry, config)
