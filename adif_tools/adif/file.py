import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, TextIO, Union

from adif_tools.adif.errors import MalformedRecord
from adif_tools.adif.record import AdifRecord
from adif_tools.adif.stream import AdifReader
from adif_tools.constants import DEFAULT_ENCODING

logger = logging.getLogger(__name__)

Source = Union[str, Path, TextIO]
ErrorHandler = Callable[[Source, MalformedRecord], None]


@contextmanager
def open_adif(source: Source, encoding: str = DEFAULT_ENCODING) -> Iterator[AdifReader]:
    """
    Get a reader for a file path or an already open stream. A file opened here is
    closed on the way out, while a stream which was passed in is left open for its owner
    to close.
    """
    if isinstance(source, (str, Path)):
        # newline="" so \r\n inside field values is counted as two characters
        with Path(source).open(encoding=encoding, newline="") as f:
            yield AdifReader(f)
    else:
        yield AdifReader(source)


def iter_records(
    source: Source, encoding: str = DEFAULT_ENCODING
) -> Iterator[AdifRecord]:
    """
    Yield every record in a file, in order. Use this over reading everything into a list
    when working with a large ADIF file, since this reads the file incrementally.
    """
    with open_adif(source, encoding) as reader:
        yield from reader


def foreach_record(
    sources: Iterable[Source],
    callback: Callable[[AdifRecord], None],
    on_error: Optional[ErrorHandler] = None,
    encoding: str = DEFAULT_ENCODING,
) -> int:
    """
    Call `callback` with each record of each source, one source after the other.

    Malformed records are handed to `on_error` when given, and reading carries on with
    the next record. Without it, the MalformedRecord propagates. Errors raised by the
    callback, and I/O errors, always propagate.

    Returns:
        The number of records passed to the callback
    """
    count = 0
    for source in sources:
        logger.info(f"Reading records from {source}")
        with open_adif(source, encoding) as reader:
            while True:
                try:
                    record = reader.read_next()
                except MalformedRecord as e:
                    if on_error is None:
                        raise
                    on_error(source, e)
                    continue

                if record is None:
                    break
                callback(record)
                count += 1

    return count
