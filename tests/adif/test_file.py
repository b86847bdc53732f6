from io import StringIO
from pathlib import Path
from typing import TextIO

import pytest

import adif_tools.adif.file as adif_file
from adif_tools.adif.errors import MalformedRecord
from adif_tools.adif.file import foreach_record, iter_records, open_adif
from adif_tools.adif.record import AdifRecord, RecordKind
from adif_tools.adif.stream import AdifReader

DATA_DIR = Path(Path(__file__).parent, "data")
TEST_FILE = Path(DATA_DIR, "test.adi")
MALFORMED_FILE = Path(DATA_DIR, "malformed.adi")


@pytest.fixture
def opened_readers(monkeypatch: pytest.MonkeyPatch) -> list[AdifReader]:
    """
    Keep track of the readers the iteration helpers create, to check their files get
    closed
    """
    readers = []

    class TrackingReader(AdifReader):
        def __init__(self, f: TextIO) -> None:
            super().__init__(f)
            readers.append(self)

    monkeypatch.setattr(adif_file, "AdifReader", TrackingReader)
    return readers


def test_load_file() -> None:
    """
    Basic test to see if we can load a test file
    """
    records = list(iter_records(TEST_FILE))
    assert len(records) == 4

    header = records[0]
    assert header.kind == RecordKind.HEADER
    assert header["adif_ver"] == "3.1.1"
    assert header["programid"] == "WSJT-X"

    assert [r.get_field("call") for r in records[1:]] == ["NU6V", "VE7XY", "EA8ZZ"]
    assert records[1].get_field("dxcc") == "UNITED STATES OF AMERICA"
    assert records[3].get_field("dxcc") == "CANARY IS."
    assert records[3].get_field("comment") == "Canary <Is.>"


def test_iter_records_str_path() -> None:
    assert len(list(iter_records(str(TEST_FILE)))) == 4


def test_iter_records_closes_file(opened_readers: list[AdifReader]) -> None:
    records = iter_records(TEST_FILE)
    next(records)
    assert not opened_readers[0].f.closed
    records.close()
    assert opened_readers[0].f.closed


def test_open_adif_stream_left_open() -> None:
    f = StringIO("<CALL:4>W1AW<EOR>")
    with open_adif(f) as reader:
        assert [r["call"] for r in reader] == ["W1AW"]
    assert not f.closed


def test_foreach_record_order(tmp_path: Path) -> None:
    other = Path(tmp_path, "other.adi")
    other.write_text("<CALL:5>K1ABC<EOR>")

    calls = []
    count = foreach_record(
        [TEST_FILE, other, StringIO("<CALL:4>W1AW<EOR>")],
        lambda r: calls.append(r.get_field("call", "-")),
    )
    assert count == 6
    assert calls == ["-", "NU6V", "VE7XY", "EA8ZZ", "K1ABC", "W1AW"]


def test_foreach_record_callback_error(opened_readers: list[AdifReader]) -> None:
    def callback(record: AdifRecord) -> None:
        if record.is_qso:
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        foreach_record([TEST_FILE], callback)
    assert opened_readers[0].f.closed


def test_foreach_record_malformed(opened_readers: list[AdifReader]) -> None:
    with pytest.raises(MalformedRecord):
        foreach_record([MALFORMED_FILE], lambda r: None)
    assert opened_readers[0].f.closed


def test_foreach_record_on_error() -> None:
    records: list[AdifRecord] = []
    errors = []

    count = foreach_record(
        [MALFORMED_FILE],
        records.append,
        on_error=lambda source, e: errors.append((source, e)),
    )

    # The second QSO is malformed and the last one is cut off
    assert count == 3
    assert [r.get_field("call") for r in records if r.is_qso] == ["K1AB", "K3EF"]
    assert len(errors) == 1
    assert errors[0][0] == MALFORMED_FILE
    assert isinstance(errors[0][1], MalformedRecord)


def test_foreach_record_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        foreach_record([Path(tmp_path, "missing.adi")], lambda r: None)
