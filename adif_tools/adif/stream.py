"""
Streaming ADIF reader and writer

Reference: https://www.adif.org/adif
Description of the file format: http://www.adif.org/314/ADIF_314.htm#ADI_File_Format
"""

import logging
from datetime import datetime, timezone
from typing import Iterator, Optional, TextIO

from adif_tools.adif.errors import MalformedRecord, TruncatedInput
from adif_tools.adif.record import AdifRecord, AdifSpecifier, RecordKind
from adif_tools.adif.util import read_exact, read_until
from adif_tools.constants import DEFAULT_ADIF_VERSION, DEFAULT_PROGRAM_ID
from adif_tools.version import VERSION

logger = logging.getLogger(__name__)


class AdifReader:
    """
    Reads records one at a time from a text stream. Anything outside of tags, like the
    free-form text at the start of a file, is skipped.

    read_next() returns None once the stream is exhausted. A record cut off by the end
    of the stream is dropped.

    When a tag can't be parsed, MalformedRecord is raised and the rest of that record is
    skipped, so reading can carry on with the record after it.
    """

    def __init__(self, f: TextIO) -> None:
        self.f = f
        self.records_read = 0
        self._skipping = False

    def __iter__(self) -> Iterator[AdifRecord]:
        return self

    def __next__(self) -> AdifRecord:
        record = self.read_next()
        if record is None:
            raise StopIteration
        return record

    def read_next(self) -> Optional[AdifRecord]:
        """
        Read the next full record from the stream, blocking until it's available
        """
        try:
            while True:
                record = self._read_record()
                if not self._skipping:
                    break
                logger.debug(f"Skipped the rest of a malformed {record.kind.name}")
                self._skipping = False
        except TruncatedInput as e:
            logger.debug(f"Discarding partial record at end of stream: {e}")
            return None

        self.records_read += 1
        return record

    def _read_record(self) -> AdifRecord:
        fields: dict[str, str] = {}

        while True:
            read_until(self.f, "<")
            tag = read_until(self.f, ">")

            try:
                spec = AdifSpecifier.parse(tag)
            except MalformedRecord:
                if self._skipping:
                    continue
                self._skipping = True
                raise

            if spec.kind is not None:
                return AdifRecord(spec.kind, fields)

            # Later values for the same field win
            fields[spec.field_name] = read_exact(self.f, spec.length)


def write_record(f: TextIO, record: AdifRecord) -> None:
    """
    Write a record to the stream, one field per line, followed by its end tag and a
    blank line
    """
    f.write(str(record) + "\n")


def make_header(
    program_id: str = DEFAULT_PROGRAM_ID,
    program_version: str = VERSION,
    adif_ver: str = DEFAULT_ADIF_VERSION,
    created: Optional[datetime] = None,
) -> AdifRecord:
    """
    Build a header record describing this program as the one which wrote the file
    """
    if created is None:
        created = datetime.now(timezone.utc)

    header = AdifRecord(RecordKind.HEADER)
    header["adif_ver"] = adif_ver
    header["created_timestamp"] = created.strftime("%Y%m%d %H%M%S")
    header["programid"] = program_id
    header["programversion"] = program_version
    return header
