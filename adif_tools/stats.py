"""
QSO statistics, mostly to help with scoring contests and club submissions.

Each aggregator takes one record (or line) at a time with add(), then writes a text
report with render().
"""

import logging
import re
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Optional, TextIO

from adif_tools.adif.formatters import FormatterRegistry
from adif_tools.adif.record import AdifRecord
from adif_tools.bands import BAND_ORDER, freq_to_band
from adif_tools.constants import UNKNOWN
from adif_tools.enums import CabrilloMode

logger = logging.getLogger(__name__)

# Width of the band columns
BAND_WIDTH = 6
# Width of the first column, showing continents
CONTINENT_WIDTH = 45
# Countries are indented under their continent
COUNTRY_INDENT = 4

CABRILLO_QSO_RE = re.compile(r"QSO:\s+([0-9]+)\s+([A-Z]+)")
PREFIX_RE = re.compile(r"\d?[A-Z]+\d+")


def band_sort_key(band: str) -> tuple[int, str]:
    """
    Sort bands in report column order, with anything unexpected at the end
    """
    if band in BAND_ORDER:
        return (BAND_ORDER.index(band), band)
    return (len(BAND_ORDER), band)


def callsign_prefix(call: str) -> str:
    """
    Return the WPX style prefix of a callsign, e.g. W1 for W1AW or VE3 for VE3ABC. A
    prefix without any digits gets a 0 appended, like the WPX rules say. A portable
    call area like W1AW/4 replaces the number of the prefix, giving W4.
    """
    parts = [p for p in call.strip().upper().split("/") if p]
    area = next((p for p in parts if p.isdigit()), None)
    parts = [p for p in parts if not p.isdigit()]
    if not parts:
        return UNKNOWN

    # For calls like KH6/W1AW or W1AW/P, the shortest part with a prefix wins
    candidates = []
    for part in parts:
        match = PREFIX_RE.match(part)
        if match:
            candidates.append((len(part), match.group(0)))
    if candidates:
        prefix = min(candidates)[1]
    else:
        prefix = parts[0][:2] + "0"

    if area is not None:
        prefix = prefix.rstrip("0123456789") + area
    return prefix


def band_header() -> str:
    buf = " " * CONTINENT_WIDTH
    for band in BAND_ORDER:
        buf += f"{band:>{BAND_WIDTH}} "
    return buf


def band_counts(label: str, width: int, counts: dict[str, int]) -> str:
    buf = f"{label:<{width}}"
    for band in BAND_ORDER:
        buf += f"{counts.get(band, 0):{BAND_WIDTH}d} "
    return buf


def render_band_modes(stats: dict[str, Counter], f: TextIO) -> int:
    """
    Write one line per band listing the QSO count of each mode. Returns the total
    number of QSOs.
    """
    total = 0
    for band in sorted(stats, key=band_sort_key):
        line = f"{band}: "
        for mode in sorted(stats[band]):
            count = stats[band][mode]
            total += count
            line += f"{mode} = {count} "
        f.write(line + "\n")
    return total


@dataclass
class ContinentStats:
    """
    QSO counts per band, for each continent and each country within it. Uses the CONT,
    DXCC and FREQ fields. QSOs missing CONT or DXCC are counted as UNKNOWN.
    """

    registry: Optional[FormatterRegistry] = None

    # continent -> band -> count
    summary: dict[str, Counter] = field(default_factory=lambda: defaultdict(Counter))
    # continent -> country -> band -> count
    countries: dict[str, dict[str, Counter]] = field(
        default_factory=lambda: defaultdict(lambda: defaultdict(Counter))
    )

    def add(self, record: AdifRecord) -> None:
        continent = record.get_field("cont", UNKNOWN, self.registry)
        country = record.get_field("dxcc", UNKNOWN, self.registry)
        band = freq_to_band(record.get_field("freq", registry=self.registry))

        self.countries[continent][country][band] += 1
        self.summary[continent][band] += 1

    def render(self, f: TextIO) -> None:
        """
        Write the report. For example:

                                                70cm     2m ...    10m    12m ...
        NORTH AMERICA                              0      0 ...     25      0 ...

            UNITED STATES OF AMERICA               0      0 ...     25      0 ...

                                                70cm     2m ...    10m    12m ...
        Totals                                     0      0 ...     25      0 ...
        """
        header = band_header()
        totals: Counter = Counter()

        for continent, summary in self.summary.items():
            f.write(header + "\n")
            f.write(band_counts(continent, CONTINENT_WIDTH, summary) + "\n")
            f.write("\n")

            for country, counts in self.countries[continent].items():
                line = " " * COUNTRY_INDENT
                line += band_counts(country, CONTINENT_WIDTH - COUNTRY_INDENT, counts)
                f.write(line + "\n")
                for band in BAND_ORDER:
                    totals[band] += counts.get(band, 0)
            f.write("\n")

        f.write(header + "\n")
        f.write(band_counts("Totals", CONTINENT_WIDTH, totals) + "\n")


@dataclass
class BandModeStats:
    """
    QSO counts per band and ADIF mode
    """

    registry: Optional[FormatterRegistry] = None
    # band -> mode -> count
    stats: dict[str, Counter] = field(default_factory=lambda: defaultdict(Counter))

    def add(self, record: AdifRecord) -> None:
        band = freq_to_band(record.get_field("freq", registry=self.registry))
        mode = record.get_field("mode", UNKNOWN, self.registry).upper()
        self.stats[band][mode] += 1

    def render(self, f: TextIO) -> None:
        total = render_band_modes(self.stats, f)
        f.write(f"Total QSOs = {total}\n")


@dataclass
class PrefixStats:
    """
    QSO counts per callsign prefix of the worked station
    """

    registry: Optional[FormatterRegistry] = None
    counts: Counter = field(default_factory=Counter)

    def add(self, record: AdifRecord) -> None:
        call = record.get_field("call", registry=self.registry)
        self.counts[callsign_prefix(call)] += 1

    def render(self, f: TextIO) -> None:
        # Most worked first
        for prefix, count in sorted(self.counts.items(), key=lambda i: (-i[1], i[0])):
            f.write(f"{prefix:<10}{count:{BAND_WIDTH}d}\n")
        f.write(f"Prefixes = {len(self.counts)}, QSOs = {sum(self.counts.values())}\n")


@dataclass
class CabrilloLineStats:
    """
    QSO counts per band and mode, from the QSO: lines of Cabrillo files
    """

    # band -> mode label -> count
    stats: dict[str, Counter] = field(default_factory=lambda: defaultdict(Counter))
    total: int = 0
    non_qso: int = 0
    matched: int = 0
    malformed: int = 0

    def add(self, line: str) -> None:
        line = line.strip()
        if line == "":
            return

        self.total += 1
        if not line.startswith("QSO:"):
            self.non_qso += 1
            logger.debug(f"skipping {line}")
            return

        match = CABRILLO_QSO_RE.match(line)
        if not match:
            self.malformed += 1
            logger.error(f"malformed {line}")
            return

        # Cabrillo frequencies are in kHz
        freq = int(match.group(1)) / 1000
        band = freq_to_band(freq)
        mode = CabrilloMode.from_code(match.group(2)).label
        self.stats[band][mode] += 1
        self.matched += 1
        logger.debug(f"matched {line} freq={freq} band={band} mode={mode}")

    def render(self, f: TextIO) -> None:
        render_band_modes(self.stats, f)
        f.write(
            f"Processed {self.total} Records, Non-QSO = {self.non_qso}, "
            f"Good QSOs = {self.matched}, Malformed QSOs = {self.malformed}\n"
        )
