"""
Document outline for config files.

Sections come from comment lines ('# Attack settings'); a comment holding
'=' is not a section header. Blocks are tracked with a real stack, so the
outline nests where the block context resolver does not.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List

from lsprotocol import types as lsp

from openkore_lsp.parser.context import split_lines
from openkore_lsp.parser.ranges import locate

DEFAULT_SECTION = "Global Settings"

_KEY = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*")


class SymbolKind(Enum):
    BLOCK = "block"
    PROPERTY = "property"


_LSP_KIND = {
    SymbolKind.BLOCK: lsp.SymbolKind.Object,
    SymbolKind.PROPERTY: lsp.SymbolKind.Property,
}


@dataclass(frozen=True)
class Symbol:
    name: str
    kind: SymbolKind
    line: int
    column: int
    end_column: int
    container_name: str

    def to_lsp(self, uri: str) -> lsp.SymbolInformation:
        return lsp.SymbolInformation(
            name=self.name,
            kind=_LSP_KIND[self.kind],
            location=lsp.Location(
                uri=uri,
                range=lsp.Range(
                    start=lsp.Position(line=self.line, character=self.column),
                    end=lsp.Position(line=self.line, character=self.end_column),
                ),
            ),
            container_name=self.container_name,
            deprecated=False,
        )


def extract_symbols(text: str) -> List[Symbol]:
    """Walk the document top to bottom and collect block and key symbols."""
    symbols: List[Symbol] = []
    section = DEFAULT_SECTION
    stack: List[str] = []

    for index, raw in enumerate(split_lines(text)):
        line = raw.strip()
        if not line:
            continue

        if line.startswith("#"):
            label = line[1:].strip()
            if label and "=" not in label:
                section = label
            continue

        match = _KEY.match(line)
        start, end = locate(raw, match.group()) if match else (0, 0)

        if "{" in line:
            name = match.group() if match else line.split()[0]
            if match:
                symbols.append(Symbol(name, SymbolKind.BLOCK, index, start, end, section))
            stack.append(name)
            # one-line block: key { ... }
            if "}" in line[line.index("{"):]:
                stack.pop()
            continue

        if match:
            container = stack[-1] if stack else section
            symbols.append(Symbol(match.group(), SymbolKind.PROPERTY, index, start, end, container))

        if "}" in line and stack:
            stack.pop()

    return symbols


def document_symbols(uri: str, text: str) -> List[lsp.SymbolInformation]:
    return [symbol.to_lsp(uri) for symbol in extract_symbols(text)]
