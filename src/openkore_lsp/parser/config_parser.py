"""
Config Parser

Reads a config.txt document into a plain mapping:

    attackAuto 2                 ->  {"attackAuto": "2",
    useSelf_skill {                   "useSelf_skill_1": {"lvl": "10"},
        lvl 10                        "useSelf_skill_2": "Heal"}
    }
    useSelf_skill Heal {
        lvl 5
    }

Blocks are numbered per name in document order. A header with a label
between the name and '{' stores the label, and that block's body lines
are dropped.
"""

from collections import defaultdict
from typing import Any, Dict, Optional, Union

from openkore_lsp.parser.context import split_lines


def parse_config(text: str) -> Dict[str, Any]:
    """Parse config text into {key: value} with numbered block entries."""
    config: Dict[str, Union[str, Dict[str, str]]] = {}
    block_counter: Dict[str, int] = defaultdict(int)
    block_key: Optional[str] = None

    for raw in split_lines(text):
        line = raw.strip()

        if not line or line.startswith("#"):
            continue

        if line.endswith("{"):
            parts = line[:-1].split()
            name = parts[0] if parts else ""
            block_counter[name] += 1
            block_key = f"{name}_{block_counter[name]}"
            config[block_key] = " ".join(parts[1:]) if len(parts) > 1 else {}
            continue

        if line == "}":
            block_key = None
            continue

        parts = line.split()
        key = parts[0]
        value = " ".join(parts[1:])

        if block_key is not None:
            body = config[block_key]
            if isinstance(body, dict):
                body[key] = value
        else:
            config[key] = value

    return config
