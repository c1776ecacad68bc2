"""
Validator base classes.

Validators are pure functions of the document text: validating the same
text twice gives the same list. Malformed input never raises; each
problem becomes a warning and checking continues with the next line.
"""

import re
from typing import List, Optional, Sequence, Tuple

from openkore_lsp.parser.context import split_lines
from openkore_lsp.parser.ranges import line_end, locate
from openkore_lsp.validators.diagnostics import ConfigDiagnostic


class LineValidator:
    """Base class for validators that check one line at a time."""

    name: str = "base"

    def validate(self, text: str) -> List[ConfigDiagnostic]:
        """Validate a whole document and return every diagnostic found."""
        diagnostics: List[ConfigDiagnostic] = []
        for index, raw in enumerate(split_lines(text)):
            diagnostics.extend(self.check_line(index, raw))
        return diagnostics

    def check_line(self, index: int, raw: str) -> List[ConfigDiagnostic]:
        raise NotImplementedError

    # Helpers for subclasses

    @staticmethod
    def at_token(index: int, raw: str, token: str, message: str) -> ConfigDiagnostic:
        """Diagnostic on the first occurrence of token in the raw line."""
        start, end = locate(raw, token)
        return ConfigDiagnostic(index, start, end, message)

    @staticmethod
    def whole_line(index: int, raw: str, message: str) -> ConfigDiagnostic:
        return ConfigDiagnostic(index, 0, line_end(raw), message)


class ControlRecordValidator(LineValidator):
    """
    Base for the space-delimited control dialects.

    A record is a name (possibly several tokens) followed by numeric
    fields. The field count is found by scanning tokens backwards while
    they look numeric, up to MAX_FIELDS, and always leaving at least one
    token for the name. A name that itself looks numeric is therefore
    ambiguous with a field; that is a property of the dialect.
    """

    NUMERIC: re.Pattern = re.compile(r"^\d+$", re.ASCII)
    MAX_FIELDS: int = 5
    MIN_FIELDS: int = 3
    FIELD_NAMES: str = ""

    @staticmethod
    def strip_comment(raw: str) -> str:
        return raw.split("#", 1)[0]

    @classmethod
    def tokenize(cls, raw: str) -> Optional[List[str]]:
        """Tokens of a record line, or None for comment and blank lines."""
        line = raw.strip()
        if not line or line.startswith("#"):
            return None
        tokens = cls.strip_comment(raw).split()
        return tokens or None

    @classmethod
    def count_fields(cls, tokens: Sequence[str]) -> int:
        count = 0
        for token in reversed(tokens):
            if not cls.NUMERIC.match(token):
                break
            count += 1
            if count == cls.MAX_FIELDS:
                break
        return min(count, len(tokens) - 1)

    @classmethod
    def split_record(cls, tokens: Sequence[str]) -> Tuple[List[str], List[str]]:
        """Split tokens into (name tokens, trailing fields)."""
        count = cls.count_fields(tokens)
        if count == 0:
            return list(tokens), []
        return list(tokens[:-count]), list(tokens[-count:])

    def check_line(self, index: int, raw: str) -> List[ConfigDiagnostic]:
        tokens = self.tokenize(raw)
        if tokens is None:
            return []

        _, fields = self.split_record(tokens)
        if len(fields) < self.MIN_FIELDS:
            return [self.whole_line(
                index, raw,
                f"Expected at least {self.MIN_FIELDS} numeric fields at end of line "
                f"({self.FIELD_NAMES}), got {len(fields)}",
            )]

        return self.check_fields(index, raw, fields)

    def check_fields(self, index: int, raw: str, fields: List[str]) -> List[ConfigDiagnostic]:
        raise NotImplementedError
