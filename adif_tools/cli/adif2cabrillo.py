"""
Convert ADIF files to Cabrillo QSO lines.

Only QSO records are converted. Records which can't be converted, e.g. because of an
unknown mode, are reported and skipped.
"""

import logging
from argparse import ArgumentParser, Namespace

from adif_tools.adif.file import foreach_record
from adif_tools.adif.formatters import default_registry
from adif_tools.adif.record import AdifRecord
from adif_tools.cabrillo import END_OF_LOG, START_OF_LOG, CabrilloError, qso_line
from adif_tools.cli.common import (
    ToolRun,
    add_common_args,
    input_files,
    log_malformed,
    open_output,
    run,
    setup_logging,
)
from adif_tools.constants import DEFAULT_RX_EXCHANGE, DEFAULT_TX_EXCHANGE

logger = logging.getLogger(__name__)


def main() -> None:
    args = parse_args()
    setup_logging(args.v)
    run(convert, args)


def parse_args() -> Namespace:
    parser = ArgumentParser(description=__doc__)
    add_common_args(parser)
    parser.add_argument(
        "--txexch",
        default=DEFAULT_TX_EXCHANGE,
        help=(
            "Space separated ADIF fields, in order, making up the sent exchange, "
            f"default: {DEFAULT_TX_EXCHANGE}"
        ),
    )
    parser.add_argument(
        "--rxexch",
        default=DEFAULT_RX_EXCHANGE,
        help=(
            "Space separated ADIF fields, in order, making up the received exchange, "
            f"default: {DEFAULT_RX_EXCHANGE}"
        ),
    )
    parser.add_argument(
        "--envelope",
        action="store_true",
        help="Wrap the QSO lines in START-OF-LOG/END-OF-LOG lines",
    )
    return parser.parse_args()


def convert(args: Namespace) -> int:
    tx_fields = args.txexch.lower().split()
    rx_fields = args.rxexch.lower().split()
    registry = default_registry()
    tool = ToolRun()

    with open_output(args.output, args.encoding) as out:
        if args.envelope:
            out.write(START_OF_LOG + "\n")

        def write_qso(record: AdifRecord) -> None:
            # Only QSO records are converted, skip everything else
            if not record.is_qso:
                return
            try:
                line = qso_line(record, tx_fields, rx_fields, registry)
            except CabrilloError as e:
                logger.error(f"Skipping QSO with {record.get_field('call')}: {e}")
                return
            out.write(line + "\n")

        for path in input_files(args):
            try:
                foreach_record([path], write_qso, log_malformed, args.encoding)
            except OSError as e:
                tool.file_failed(path, e)

        if args.envelope:
            out.write(END_OF_LOG + "\n")

    return tool.exit_code


if __name__ == "__main__":
    main()
