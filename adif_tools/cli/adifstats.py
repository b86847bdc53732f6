"""
Print QSO statistics for each ADIF file, to help with scoring amateur radio contests.

Reports:
  continent - QSOs per band for each continent, and each country within it
  mode      - QSOs per band and mode
  prefix    - QSOs per callsign prefix
"""

import logging
from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from typing import Union

from adif_tools.adif.file import foreach_record
from adif_tools.adif.formatters import default_registry
from adif_tools.adif.record import AdifRecord
from adif_tools.cli.common import (
    ToolRun,
    add_common_args,
    input_files,
    log_malformed,
    open_output,
    run,
    setup_logging,
)
from adif_tools.stats import BandModeStats, ContinentStats, PrefixStats

logger = logging.getLogger(__name__)

Stats = Union[ContinentStats, BandModeStats, PrefixStats]

REPORTS = {
    "continent": ContinentStats,
    "mode": BandModeStats,
    "prefix": PrefixStats,
}


def main() -> None:
    args = parse_args()
    setup_logging(args.v)
    run(print_stats, args)


def parse_args() -> Namespace:
    parser = ArgumentParser(
        description=__doc__, formatter_class=RawDescriptionHelpFormatter
    )
    add_common_args(parser)
    parser.add_argument(
        "--report",
        choices=sorted(REPORTS),
        default="continent",
        help="Which report to print, default: %(default)s",
    )
    return parser.parse_args()


def print_stats(args: Namespace) -> int:
    registry = default_registry()
    tool = ToolRun()

    with open_output(args.output, args.encoding) as out:
        # Each file gets its own report
        for path in input_files(args):
            stats: Stats = REPORTS[args.report](registry)

            def add_qso(record: AdifRecord) -> None:
                if record.is_qso:
                    stats.add(record)

            try:
                count = foreach_record([path], add_qso, log_malformed, args.encoding)
            except OSError as e:
                tool.file_failed(path, e)
                continue

            logger.info(f"Read {count} records from {path}")
            stats.render(out)

    return tool.exit_code


if __name__ == "__main__":
    main()
