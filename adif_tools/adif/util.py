"""
ADIF utility functions
"""

import logging
from datetime import date, datetime, time
from typing import TextIO

from adif_tools.adif.errors import TruncatedInput

logger = logging.getLogger(__name__)


def read_until(f: TextIO, char: str) -> str:
    """
    Returns the text from the current position in the file up to, but excluding, the
    given char. The char itself is consumed. If we hit the end of the file before
    finding our character, TruncatedInput is raised.
    """
    buf = []

    while True:
        cur = f.read(1)
        if cur == "":
            raise TruncatedInput(f"Hit end of file before finding '{char}'")
        if cur == char:
            break
        buf.append(cur)

    return "".join(buf)


def read_exact(f: TextIO, length: int) -> str:
    """
    Read exactly `length` characters. Raises TruncatedInput if the file ends first.
    """
    buf = f.read(length)
    # Pipes and sockets can hand back short reads before EOF
    while len(buf) < length:
        more = f.read(length - len(buf))
        if more == "":
            raise TruncatedInput(
                f"Expected {length} characters but only {len(buf)} were left"
            )
        buf += more

    return buf


def parse_date(date_str: str) -> date:
    """
    Parse an ADIF date - YYYYMMDD
    """
    return datetime.strptime(date_str, "%Y%m%d").date()


def parse_time(time_str: str) -> time:
    """
    Parse an ADIF time - HHMM or HHMMSS
    """
    if len(time_str) == 4:
        return datetime.strptime(time_str, "%H%M").time()
    else:
        return datetime.strptime(time_str, "%H%M%S").time()


def make_field(name: str, value: str) -> str:
    """
    Return an ADIF field/value, like "<ADIF_VER:5>value"
    """
    return f"<{name.upper()}:{len(value)}>{value}"
