"""
Convert ADIF QSO records to Cabrillo QSO lines

Example Cabrillo QSO lines (from https://wwrof.org/cabrillo/cabrillo-qso-data/):

                             --------info sent------- -------info rcvd--------
QSO:  freq mo date       time call          rst exch   call          rst exch   t
QSO: ***** ** yyyy-mm-dd nnnn ************* nnn ****** ************* nnn ****** n
QSO:  3799 PH 1999-03-06 0711 HC8N           59 700    W1AW           59 CT     0
"""

import logging
from typing import Optional, Sequence

from adif_tools.adif.formatters import FormatterRegistry
from adif_tools.adif.record import AdifRecord
from adif_tools.enums import CabrilloMode

logger = logging.getLogger(__name__)

START_OF_LOG = "START-OF-LOG: 3.0"
END_OF_LOG = "END-OF-LOG:"

CALL_WIDTH = 14
EXCHANGE_WIDTH = 10

# ADIF modes and the Cabrillo mode they're reported as. Most of the digital ones are a
# best guess.
ADIF_MODES = {
    "AM": CabrilloMode.PHONE,
    "ARDOP": CabrilloMode.DIGITAL,
    "ATV": CabrilloMode.DIGITAL,
    "CHIP": CabrilloMode.DIGITAL,
    "CLO": CabrilloMode.DIGITAL,
    "CONTESTI": CabrilloMode.OTHER,
    "CW": CabrilloMode.CW,
    "DIGITALVOICE": CabrilloMode.PHONE,
    "DOMINO": CabrilloMode.DIGITAL,
    "DYNAMIC": CabrilloMode.DIGITAL,
    "FAX": CabrilloMode.DIGITAL,
    "FM": CabrilloMode.PHONE,
    "FSK441": CabrilloMode.DIGITAL,
    "FT8": CabrilloMode.DIGITAL,
    "HELL": CabrilloMode.DIGITAL,
    "ISCAT": CabrilloMode.DIGITAL,
    "JT4": CabrilloMode.DIGITAL,
    "JT6M": CabrilloMode.DIGITAL,
    "JT9": CabrilloMode.DIGITAL,
    "JT44": CabrilloMode.DIGITAL,
    "JT65": CabrilloMode.DIGITAL,
    "MFSK": CabrilloMode.DIGITAL,
    "MSK144": CabrilloMode.DIGITAL,
    "MT63": CabrilloMode.DIGITAL,
    "OLIVIA": CabrilloMode.DIGITAL,
    "OPERA": CabrilloMode.DIGITAL,
    "PAC": CabrilloMode.DIGITAL,
    "PAX": CabrilloMode.DIGITAL,
    "PKT": CabrilloMode.DIGITAL,
    "PSK": CabrilloMode.DIGITAL,
    "PSK2K": CabrilloMode.DIGITAL,
    "Q15": CabrilloMode.DIGITAL,
    "QRA64": CabrilloMode.DIGITAL,
    "ROS": CabrilloMode.DIGITAL,
    "RTTY": CabrilloMode.RTTY,
    "RTTYM": CabrilloMode.RTTY,
    "SSB": CabrilloMode.PHONE,
    "SSTV": CabrilloMode.DIGITAL,
    "T10": CabrilloMode.DIGITAL,
    "THOR": CabrilloMode.DIGITAL,
    "THRB": CabrilloMode.DIGITAL,
    "TOR": CabrilloMode.DIGITAL,
    "V4": CabrilloMode.DIGITAL,
    "VOI": CabrilloMode.DIGITAL,
    "WINMOR": CabrilloMode.DIGITAL,
    "WSPR": CabrilloMode.DIGITAL,
}


class CabrilloError(ValueError):
    """
    A QSO record which can't be turned into a Cabrillo line
    """


def adif_to_cabrillo_mode(mode: str) -> CabrilloMode:
    try:
        return ADIF_MODES[mode.strip().upper()]
    except KeyError:
        raise CabrilloError(f"No Cabrillo mode for ADIF mode {mode!r}")


def exchange(
    record: AdifRecord,
    field_names: Sequence[str],
    registry: Optional[FormatterRegistry] = None,
) -> str:
    """
    Join the values of the given fields, each followed by a space. Missing and empty
    fields are left out.
    """
    buf = ""
    for name in field_names:
        value = record.get_field(name, registry=registry)
        if value != "":
            buf += value + " "
    return buf


def qso_line(
    record: AdifRecord,
    tx_fields: Sequence[str],
    rx_fields: Sequence[str],
    registry: Optional[FormatterRegistry] = None,
) -> str:
    """
    Build the Cabrillo QSO line for an ADIF QSO record.

    Args:
        tx_fields: ADIF fields making up the sent exchange, in order
        rx_fields: ADIF fields making up the received exchange, in order

    Raises:
        CabrilloError: if the frequency, mode, date or time are missing or invalid
    """
    freq = record.get_field("freq", registry=registry)
    try:
        # ADIF frequencies are in MHz, Cabrillo wants kHz
        freq_khz = round(float(freq) * 1000)
    except (ValueError, OverflowError):
        raise CabrilloError(f"Invalid frequency {freq!r}")

    mode = adif_to_cabrillo_mode(record.get_field("mode", registry=registry))

    try:
        when = record.datetime
    except ValueError as e:
        raise CabrilloError(f"Invalid QSO date/time: {e}")
    if when is None:
        raise CabrilloError("Missing qso_date or time_on")

    operator = record.get_field("operator", registry=registry)
    if not operator:
        operator = record.get_field("station_callsign", registry=registry)
    call = record.get_field("call", registry=registry)

    line = "QSO: "
    line += f"{freq_khz:5d} "
    line += f"{mode.value} "
    line += when.strftime("%Y-%m-%d %H%M") + " "
    line += operator.ljust(CALL_WIDTH) + " "
    line += exchange(record, tx_fields, registry).ljust(EXCHANGE_WIDTH)
    line += call.ljust(CALL_WIDTH) + " "
    line += exchange(record, rx_fields, registry).ljust(EXCHANGE_WIDTH)
    return line
