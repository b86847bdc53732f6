"""
Formatters convert ADIF enumeration values to human readable values and back, e.g. the
DXCC entity code "291" to "UNITED STATES OF AMERICA".

Each formatter is built from a plain text table with one mapping per line:

    # comment
    291 "UNITED STATES OF AMERICA"

Lookups are case insensitive in both directions. A value that isn't in the table comes
back unchanged, so new or unassigned enumeration values don't break anything.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from adif_tools.adif.errors import AdifError
from adif_tools.constants import CONT_TABLE, DXCC_TABLE

logger = logging.getLogger(__name__)

TABLE_LINE_RE = re.compile(
    r'^(?P<key>\S+)\s+(?:"(?P<quoted>[^"]*)"|(?P<bare>[^\s"]+))$'
)


@dataclass(frozen=True)
class Formatter:
    # ADIF value -> human readable value, keys lower-cased
    from_map: Mapping[str, str] = field(default_factory=dict)
    # human readable value -> ADIF value, keys lower-cased
    to_map: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_pairs(cls, pairs: list[tuple[str, str]]) -> "Formatter":
        from_map = {}
        to_map = {}
        for key, label in pairs:
            from_map[key.lower()] = label
            to_map[label.lower()] = key
        return cls(MappingProxyType(from_map), MappingProxyType(to_map))

    def from_value(self, value: str) -> str:
        return self.from_map.get(value.lower(), value)

    def to_value(self, value: str) -> str:
        return self.to_map.get(value.lower(), value)


class FormatterRegistry:
    """
    Read-only mapping of ADIF field name to the Formatter for that field
    """

    def __init__(self, formatters: Optional[Mapping[str, Formatter]] = None) -> None:
        self._formatters = MappingProxyType(
            {k.lower(): v for k, v in (formatters or {}).items()}
        )

    def __contains__(self, field_name: str) -> bool:
        return field_name.lower() in self._formatters

    def __len__(self) -> int:
        return len(self._formatters)

    def get(self, field_name: str) -> Optional[Formatter]:
        return self._formatters.get(field_name.lower())

    def format_from(self, field_name: str, value: str) -> str:
        """
        Convert an ADIF value of the field to its human readable form
        """
        formatter = self.get(field_name)
        if formatter is None:
            return value
        return formatter.from_value(value)

    def format_to(self, field_name: str, value: str) -> str:
        """
        Convert a human readable value of the field back to its ADIF form
        """
        formatter = self.get(field_name)
        if formatter is None:
            return value
        return formatter.to_value(value)


def load_table(path: Path) -> list[tuple[str, str]]:
    """
    Parse an enumeration table file into (ADIF value, human readable value) pairs
    """
    pairs = []
    with path.open(encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            match = TABLE_LINE_RE.match(line)
            if not match:
                raise AdifError(f"{path}:{lineno}: unable to parse line: {line}")

            label = match.group("quoted")
            if label is None:
                label = match.group("bare")
            pairs.append((match.group("key"), label))

    logger.debug(f"Loaded {len(pairs)} entries from {path}")
    return pairs


def load_registry(table_paths: Mapping[str, Path]) -> FormatterRegistry:
    """
    Build a registry with one formatter per field, each loaded from its table file
    """
    return FormatterRegistry(
        {
            field_name: Formatter.from_pairs(load_table(path))
            for field_name, path in table_paths.items()
        }
    )


@lru_cache(maxsize=None)
def default_registry() -> FormatterRegistry:
    """
    The registry for the tables shipped with adif_tools. Loaded on first use.
    """
    return load_registry(
        {"dxcc": DXCC_TABLE, "my_dxcc": DXCC_TABLE, "cont": CONT_TABLE}
    )
