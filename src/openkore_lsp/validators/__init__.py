"""
openkore_lsp.validators - Config Diagnostics

One validator per dialect, picked by file name:

- items_control.txt -> ItemsControlValidator
- mon_control.txt   -> MonsterControlValidator
- anything else     -> GeneralConfigValidator
"""

import logging
from enum import Enum
from typing import List, Optional

from openkore_lsp.grammar.registry import GrammarRegistry
from openkore_lsp.validators.base import LineValidator, ControlRecordValidator
from openkore_lsp.validators.diagnostics import (
    DIAGNOSTIC_SOURCE,
    ConfigDiagnostic,
    Severity,
)
from openkore_lsp.validators.general_config import GeneralConfigValidator
from openkore_lsp.validators.items_control import (
    ItemControlEntry,
    ItemsControlValidator,
    parse_item_control,
)
from openkore_lsp.validators.monster_control import (
    MonsterControlEntry,
    MonsterControlValidator,
    parse_monster_control,
)

logger = logging.getLogger(__name__)

ITEMS_CONTROL_SUFFIX = "items_control.txt"
MONSTER_CONTROL_SUFFIX = "mon_control.txt"


class FileType(Enum):
    """Config dialects, by file name."""
    GENERAL = "general"
    ITEMS_CONTROL = "items_control"
    MONSTER_CONTROL = "monster_control"


def classify(uri: str,
             items_suffix: str = ITEMS_CONTROL_SUFFIX,
             monster_suffix: str = MONSTER_CONTROL_SUFFIX) -> FileType:
    """Pick the dialect for a document from its file name suffix."""
    if uri.endswith(items_suffix):
        return FileType.ITEMS_CONTROL
    if uri.endswith(monster_suffix):
        return FileType.MONSTER_CONTROL
    return FileType.GENERAL


def get_validator(file_type: FileType, registry: Optional[GrammarRegistry] = None) -> LineValidator:
    if file_type is FileType.ITEMS_CONTROL:
        return ItemsControlValidator()
    if file_type is FileType.MONSTER_CONTROL:
        return MonsterControlValidator()
    if registry is None:
        from openkore_lsp.grammar.loader import get_default_grammar
        registry = get_default_grammar()
    return GeneralConfigValidator(registry)


def validate_document(uri: str, text: str,
                      registry: Optional[GrammarRegistry] = None,
                      file_type: Optional[FileType] = None) -> List[ConfigDiagnostic]:
    """
    Validate a full document snapshot.

    The result replaces any earlier list for the same document.
    """
    file_type = file_type or classify(uri)
    validator = get_validator(file_type, registry)
    diagnostics = validator.validate(text)
    logger.debug("Validated %s as %s: %d diagnostics", uri, file_type.value, len(diagnostics))
    return diagnostics


__all__ = [
    "DIAGNOSTIC_SOURCE",
    "ConfigDiagnostic",
    "Severity",
    "LineValidator",
    "ControlRecordValidator",
    "GeneralConfigValidator",
    "ItemsControlValidator",
    "MonsterControlValidator",
    "ItemControlEntry",
    "MonsterControlEntry",
    "parse_item_control",
    "parse_monster_control",
    "FileType",
    "ITEMS_CONTROL_SUFFIX",
    "MONSTER_CONTROL_SUFFIX",
    "classify",
    "get_validator",
    "validate_document",
]
