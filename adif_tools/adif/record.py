import logging
import re
from copy import copy
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Optional

from adif_tools.adif.errors import MalformedRecord, UnknownRecordKind
from adif_tools.adif.formatters import FormatterRegistry, default_registry
from adif_tools.adif.util import make_field, parse_date, parse_time

logger = logging.getLogger(__name__)

LENGTH_RE = re.compile(r"[0-9]+")

# Characters which delimit tags, so they can't be part of a field name
INVALID_NAME_CHARS = set("<>:")


class RecordKind(Enum):
    HEADER = "eoh"
    QSO = "eor"

    @property
    def end_tag(self) -> str:
        return self.value.upper()

    @classmethod
    def parse(cls, name: str) -> "RecordKind":
        """
        Accepts "header"/"qso" as well as the boundary tag names "eoh"/"eor", in any
        case
        """
        if not isinstance(name, str):
            raise UnknownRecordKind(f"Unknown record kind: {name!r}")
        name = name.strip().lower()
        if name in ("header", "eoh"):
            return cls.HEADER
        if name in ("qso", "eor"):
            return cls.QSO
        raise UnknownRecordKind(f"Unknown record kind: {name!r}")


def check_field_name(name: str) -> str:
    """
    Return the canonical (lower-case) form of a field name, raising MalformedRecord if
    it can't be written out as a tag
    """
    if not name or INVALID_NAME_CHARS & set(name) or name != name.strip():
        raise MalformedRecord(f"Invalid field name: {name!r}")
    return name.lower()


@dataclass(frozen=True)
class FieldRef:
    """
    A field name as given to get_field()/set_field(), like "dxcc" or "dxcc.raw"
    """

    name: str
    raw: bool = False

    @classmethod
    def parse(cls, field_name: str) -> "FieldRef":
        name, _, modifier = field_name.partition(".")
        return cls(name.lower(), modifier.lower() == "raw")


@dataclass
class AdifRecord:
    kind: RecordKind = RecordKind.QSO

    # Raw fields, as a dict. Keys are always lower case.
    fields: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.kind, RecordKind):
            self.kind = RecordKind.parse(self.kind)
        self.fields = {check_field_name(k): v for k, v in self.fields.items()}

    def __str__(self) -> str:
        lines = [make_field(k, v) for k, v in self.fields.items()]
        lines.append(f"<{self.kind.end_tag}>")
        return "\n".join(lines) + "\n"

    def __getitem__(self, key: str) -> str:
        return self.fields[key.lower()]

    def __setitem__(self, key: str, value: str) -> None:
        self.fields[check_field_name(key)] = value

    def __contains__(self, key: str) -> bool:
        return key.lower() in self.fields

    @property
    def is_header(self) -> bool:
        return self.kind == RecordKind.HEADER

    @property
    def is_qso(self) -> bool:
        return self.kind == RecordKind.QSO

    def copy(self) -> "AdifRecord":
        new = copy(self)
        new.fields = self.fields.copy()
        return new

    def get_field(
        self,
        field_name: str,
        default: str = "",
        registry: Optional[FormatterRegistry] = None,
    ) -> str:
        """
        Get a field's value, converted to its human readable form by the registry's
        formatter for that field, if there is one. Add ".raw" to the field name to get
        the value exactly as it appears in the ADIF data.

        The default is returned as-is when the record doesn't have the field.
        """
        ref = FieldRef.parse(field_name)
        if ref.name not in self.fields:
            return default

        value = self.fields[ref.name]
        if ref.raw:
            return value
        if registry is None:
            registry = default_registry()
        return registry.format_from(ref.name, value)

    def set_field(
        self,
        field_name: str,
        value: str,
        registry: Optional[FormatterRegistry] = None,
    ) -> "AdifRecord":
        """
        Set a field, converting a human readable value to its ADIF form first. Add
        ".raw" to the field name to store the value untouched.
        """
        ref = FieldRef.parse(field_name)
        if not ref.raw:
            if registry is None:
                registry = default_registry()
            value = registry.format_to(ref.name, value)

        self[ref.name] = value
        return self

    def _maybe_parse_date(self, field_name: str) -> Optional[date]:
        f = self.fields.get(field_name)
        if f:
            return parse_date(f)
        else:
            return None

    def _maybe_parse_time(self, field_name: str) -> Optional[time]:
        f = self.fields.get(field_name)
        if f:
            return parse_time(f)
        else:
            return None

    # Accessor methods which parse fields into Python-native types, e.g. dates and times
    @property
    def qso_date(self) -> Optional[date]:
        return self._maybe_parse_date("qso_date")

    @property
    def time_on(self) -> Optional[time]:
        return self._maybe_parse_time("time_on")

    @property
    def time_off(self) -> Optional[time]:
        return self._maybe_parse_time("time_off")

    @property
    def datetime(self) -> Optional[datetime]:
        """
        Returns a datetime based on the qso_date and the time_on. Returns None if either
        of those are None.
        """
        d = self.qso_date
        t = self.time_on
        if d is None or t is None:
            return None

        return datetime.combine(d, t)


@dataclass
class AdifSpecifier:
    """
    Specifier for a ADIF field, like <name:4>jawn

    <field_name:length>
    <field_name:length:type>
    <eoh> and <eor> have no length

    A tag with a length is always a field, even one named eor or eoh
    """

    field_name: str
    length: Optional[int] = None
    type_: str = ""

    @property
    def kind(self) -> Optional[RecordKind]:
        """
        The kind of record this specifier ends, or None for a regular field
        """
        if self.length is not None:
            return None
        if self.field_name == RecordKind.HEADER.value:
            return RecordKind.HEADER
        if self.field_name == RecordKind.QSO.value:
            return RecordKind.QSO
        return None

    @classmethod
    def parse(cls, spec: str) -> "AdifSpecifier":
        """
        Parse a specifier from the text of a tag, with or without the angle brackets
        """
        spec = spec.strip().strip("<>").strip().lower()
        parts = spec.split(":")

        if len(parts) == 1:
            if spec in (RecordKind.HEADER.value, RecordKind.QSO.value):
                return AdifSpecifier(spec)
            raise MalformedRecord(f"Missing field length: <{spec}>")

        name = parts[0].strip()
        if not name:
            raise MalformedRecord(f"Missing field name: <{spec}>")
        check_field_name(name)

        length = parts[1].strip()
        if not LENGTH_RE.fullmatch(length):
            raise MalformedRecord(f"Invalid field length: <{spec}>")

        type_ = parts[2].strip() if len(parts) > 2 else ""
        return AdifSpecifier(name, int(length), type_)
