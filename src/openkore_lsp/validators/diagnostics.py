"""
Diagnostic model shared by the config validators.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from lsprotocol import types as lsp

DIAGNOSTIC_SOURCE = "openkore-lsp"


class Severity(Enum):
    """Diagnostic severity levels."""
    ERROR = "error"
    WARNING = "warning"     # every check in this package reports at this level
    INFO = "info"
    HINT = "hint"


_LSP_SEVERITY = {
    Severity.ERROR: lsp.DiagnosticSeverity.Error,
    Severity.WARNING: lsp.DiagnosticSeverity.Warning,
    Severity.INFO: lsp.DiagnosticSeverity.Information,
    Severity.HINT: lsp.DiagnosticSeverity.Hint,
}


@dataclass(frozen=True)
class ConfigDiagnostic:
    """A finding on one line, columns measured on the raw line."""
    line: int
    column: int
    end_column: int
    message: str
    severity: Severity = Severity.WARNING
    source: str = DIAGNOSTIC_SOURCE

    def __str__(self):
        return f"{self.line + 1}:{self.column + 1}: {self.severity.value}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "column": self.column,
            "end_column": self.end_column,
            "severity": self.severity.value,
            "message": self.message,
            "source": self.source,
        }

    def to_lsp(self) -> lsp.Diagnostic:
        return lsp.Diagnostic(
            range=lsp.Range(
                start=lsp.Position(line=self.line, character=self.column),
                end=lsp.Position(line=self.line, character=self.end_column),
            ),
            message=self.message,
            severity=_LSP_SEVERITY[self.severity],
            source=self.source,
        )
