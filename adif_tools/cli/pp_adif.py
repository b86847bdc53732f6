"""
Pretty-print ADIF files, one field per line and a blank line between records.
"""

import logging
from argparse import ArgumentParser, Namespace

from adif_tools.adif.file import foreach_record
from adif_tools.adif.record import AdifRecord
from adif_tools.adif.stream import make_header, write_record
from adif_tools.cli.common import (
    ToolRun,
    add_common_args,
    input_files,
    log_malformed,
    open_output,
    run,
    setup_logging,
)

logger = logging.getLogger(__name__)


def main() -> None:
    args = parse_args()
    setup_logging(args.v)
    run(pretty_print, args)


def parse_args() -> Namespace:
    parser = ArgumentParser(description=__doc__)
    add_common_args(parser)
    parser.add_argument(
        "--new-header",
        action="store_true",
        help="Write a single new header in place of the headers of the input files",
    )
    return parser.parse_args()


def pretty_print(args: Namespace) -> int:
    tool = ToolRun()

    with open_output(args.output, args.encoding) as out:
        if args.new_header:
            write_record(out, make_header())

        def write(record: AdifRecord) -> None:
            if args.new_header and record.is_header:
                return
            write_record(out, record)

        for path in input_files(args):
            try:
                foreach_record([path], write, log_malformed, args.encoding)
            except OSError as e:
                tool.file_failed(path, e)

    return tool.exit_code


if __name__ == "__main__":
    main()
