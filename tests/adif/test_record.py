from datetime import date, datetime, time

import pytest

from adif_tools.adif.errors import MalformedRecord, UnknownRecordKind
from adif_tools.adif.formatters import FormatterRegistry
from adif_tools.adif.record import AdifRecord, AdifSpecifier, FieldRef, RecordKind


@pytest.fixture
def record() -> AdifRecord:
    return AdifRecord(
        RecordKind.QSO,
        {
            "call": "W1AW",
            "dxcc": "291",
            "cont": "NA",
            "qso_date": "20220401",
            "time_on": "1814",
        },
    )


@pytest.mark.parametrize(
    "spec,expected",
    [
        ("<call:4>", AdifSpecifier(field_name="call", length=4)),
        ("<QSO_DATE:8>", AdifSpecifier(field_name="qso_date", length=8)),
        (
            "<some_number:11:N>",
            AdifSpecifier(field_name="some_number", length=11, type_="n"),
        ),
        ("comment:0", AdifSpecifier(field_name="comment", length=0)),
        (" eor ", AdifSpecifier(field_name="eor")),
        ("<EOR:3>", AdifSpecifier(field_name="eor", length=3)),
        ("<EOH>", AdifSpecifier(field_name="eoh")),
    ],
)
def test_specifier_parse(spec: str, expected: AdifSpecifier) -> None:
    """
    Test parsing a specifier
    """
    assert AdifSpecifier.parse(spec) == expected


@pytest.mark.parametrize(
    "spec",
    ["call:x", "call:-1", "call:", ":4", "call", "", "a<b:1"],
)
def test_specifier_parse_malformed(spec: str) -> None:
    with pytest.raises(MalformedRecord):
        AdifSpecifier.parse(spec)


def test_specifier_kind() -> None:
    assert AdifSpecifier.parse("eoh").kind == RecordKind.HEADER
    assert AdifSpecifier.parse("EOR").kind == RecordKind.QSO
    assert AdifSpecifier.parse("call:4").kind is None
    # Fields can be named like the end tags, it's the length which sets them apart
    assert AdifSpecifier.parse("eor:3").kind is None
    assert AdifSpecifier.parse("EOH:0").kind is None


@pytest.mark.parametrize(
    "given,expected",
    [
        ("header", RecordKind.HEADER),
        ("EOH", RecordKind.HEADER),
        ("qso", RecordKind.QSO),
        ("Eor", RecordKind.QSO),
    ],
)
def test_record_kind_parse(given: str, expected: RecordKind) -> None:
    assert RecordKind.parse(given) == expected


@pytest.mark.parametrize("given", ["", "record", "qsos", None])
def test_unknown_record_kind(given: str) -> None:
    with pytest.raises(UnknownRecordKind):
        RecordKind.parse(given)
    with pytest.raises(UnknownRecordKind):
        AdifRecord(given)


def test_record_construction() -> None:
    r = AdifRecord("header", {"PROGRAMID": "WSJT-X"})
    assert r.kind == RecordKind.HEADER
    assert r.is_header
    assert not r.is_qso
    assert r.fields == {"programid": "WSJT-X"}

    empty = AdifRecord()
    assert empty.is_qso
    assert empty.fields == {}


@pytest.mark.parametrize("name", ["", "a:b", "a>b", "a<b", " call"])
def test_invalid_field_names(name: str) -> None:
    with pytest.raises(MalformedRecord):
        AdifRecord(fields={name: "x"})
    with pytest.raises(MalformedRecord):
        AdifRecord()[name] = "x"


def test_field_ref() -> None:
    assert FieldRef.parse("DXCC") == FieldRef("dxcc", False)
    assert FieldRef.parse("dxcc.raw") == FieldRef("dxcc", True)
    assert FieldRef.parse("DXCC.RAW") == FieldRef("dxcc", True)
    assert FieldRef.parse("dxcc.other") == FieldRef("dxcc", False)


def test_get_field_case_insensitive(record: AdifRecord) -> None:
    assert record.get_field("CALL") == record.get_field("call") == "W1AW"
    assert record["Call"] == "W1AW"
    assert "CALL" in record
    assert "gridsquare" not in record


def test_get_field_default(record: AdifRecord) -> None:
    assert record.get_field("nosuch") == ""
    assert record.get_field("nosuch", "X") == "X"
    # The default isn't run through a formatter
    assert record.get_field("my_dxcc", "291") == "291"


def test_get_field_formatted(record: AdifRecord) -> None:
    assert record.get_field("dxcc") == "UNITED STATES OF AMERICA"
    assert record.get_field("dxcc.raw") == "291"
    assert record.get_field("DXCC.RAW") == "291"
    assert record.get_field("cont") == "NORTH AMERICA"
    assert record.get_field("cont.raw") == "NA"

    # Fields without a formatter come back as they are, with or without .raw
    assert record.get_field("call.raw") == record.get_field("call") == "W1AW"


def test_get_field_registry(record: AdifRecord) -> None:
    empty = FormatterRegistry()
    assert record.get_field("dxcc", registry=empty) == "291"


def test_set_field(record: AdifRecord) -> None:
    assert record.set_field("DXCC", "Canada") is record
    assert record.fields["dxcc"] == "1"
    assert record.get_field("dxcc") == "CANADA"

    record.set_field("dxcc.raw", "Canada")
    assert record.fields["dxcc"] == "Canada"

    # Unknown values are stored as given
    record.set_field("dxcc", "99999")
    assert record.fields["dxcc"] == "99999"

    record.set_field("Gridsquare", "FN31")
    assert record["gridsquare"] == "FN31"


def test_record_str() -> None:
    r = AdifRecord(RecordKind.QSO, {"call": "K1ABC", "dxcc": "291", "comment": ""})
    assert str(r) == "<CALL:5>K1ABC\n<DXCC:3>291\n<COMMENT:0>\n<EOR>\n"

    h = AdifRecord(RecordKind.HEADER, {"adif_ver": "3.1.4"})
    assert str(h) == "<ADIF_VER:5>3.1.4\n<EOH>\n"


def test_record_copy(record: AdifRecord) -> None:
    new = record.copy()
    assert new == record
    new["call"] = "K1ABC"
    assert record["call"] == "W1AW"
    assert new != record


def test_record_equality_ignores_order() -> None:
    r1 = AdifRecord(fields={"call": "W1AW", "band": "20m"})
    r2 = AdifRecord(fields={"band": "20m", "call": "W1AW"})
    assert r1 == r2
    assert r1 != AdifRecord(RecordKind.HEADER, dict(r1.fields))


def test_record_dates(record: AdifRecord) -> None:
    assert record.qso_date == date(2022, 4, 1)
    assert record.time_on == time(18, 14)
    assert record.time_off is None
    assert record.datetime == datetime(2022, 4, 1, 18, 14)

    assert AdifRecord().datetime is None
