"""
Amateur radio bands, by frequency
"""

from dataclasses import dataclass
from typing import Union

from adif_tools.constants import UNKNOWN


@dataclass
class Band:
    name: str
    # Band edges in MHz, inclusive
    low_mhz: float
    high_mhz: float

    def __contains__(self, freq_mhz: float) -> bool:
        return self.low_mhz <= freq_mhz <= self.high_mhz


# Band edges from the ARRL band plan. 60m is channelized, so it never matches.
BANDS = [
    Band("70cm", 420, 450),
    Band("2m", 144, 148),
    Band("6m", 50, 54),
    Band("10m", 28, 29.7),
    Band("12m", 24.89, 24.99),
    Band("15m", 21, 21.45),
    Band("17m", 18.068, 18.168),
    Band("20m", 14, 14.35),
    Band("30m", 10.1, 10.15),
    Band("40m", 7, 7.3),
    Band("80m", 3.5, 4),
    Band("160m", 1.8, 2),
]

# Column order of the bands in reports
BAND_ORDER = (
    "70cm",
    "2m",
    "6m",
    "10m",
    "12m",
    "15m",
    "17m",
    "20m",
    "30m",
    "40m",
    "60m",
    "80m",
    "160m",
)


def freq_to_band(freq_mhz: Union[str, float]) -> str:
    """
    Return the band (70cm, 10m, 17m, etc) a frequency in MHz falls in, or UNKNOWN if it
    isn't in any band or isn't a number
    """
    try:
        freq = float(freq_mhz)
    except ValueError:
        return UNKNOWN

    for band in BANDS:
        if freq in band:
            return band.name
    return UNKNOWN
