"""
Print QSO counts by band and mode from one or more Cabrillo files, e.g. for a club's
Field Day submission.
"""

import logging
from argparse import ArgumentParser, Namespace

from adif_tools.cli.common import (
    ToolRun,
    add_common_args,
    input_files,
    open_output,
    run,
    setup_logging,
)
from adif_tools.stats import CabrilloLineStats

logger = logging.getLogger(__name__)


def main() -> None:
    args = parse_args()
    setup_logging(args.v)
    run(print_stats, args)


def parse_args() -> Namespace:
    parser = ArgumentParser(description=__doc__)
    add_common_args(parser)
    return parser.parse_args()


def print_stats(args: Namespace) -> int:
    stats = CabrilloLineStats()
    tool = ToolRun()

    for path in input_files(args):
        logger.info(f"processing {path}")
        try:
            with path.open(encoding=args.encoding) as f:
                for line in f:
                    stats.add(line)
        except OSError as e:
            tool.file_failed(path, e)

    with open_output(args.output, args.encoding) as out:
        stats.render(out)

    return tool.exit_code


if __name__ == "__main__":
    main()
