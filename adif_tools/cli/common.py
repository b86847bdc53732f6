import logging
import sys
from argparse import ArgumentParser, Namespace
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional, TextIO

from colorama import Fore, Style
from tqdm import tqdm

from adif_tools.adif.errors import MalformedRecord
from adif_tools.constants import DEFAULT_ENCODING

logger = logging.getLogger(__name__)


def add_common_args(parser: ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        help="Verbose mode, repeat for debug output",
        action="count",
        default=0,
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Name of the output file, default: stdout",
        type=Path,
    )
    parser.add_argument(
        "--encoding",
        help=f"Encoding of the input and output files, default: {DEFAULT_ENCODING}",
        default=DEFAULT_ENCODING,
    )
    parser.add_argument(
        "--progress",
        help="Show a progress bar while reading the input files",
        action="store_true",
    )
    parser.add_argument("files", nargs="+", type=Path, metavar="FILE")


def setup_logging(verbosity: int) -> None:
    """
    Log warnings and up by default, info with -v and debug with -vv
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def print_error(msg: str) -> None:
    print(f"{Fore.RED}{msg}{Style.RESET_ALL}", file=sys.stderr)


@contextmanager
def open_output(path: Optional[Path], encoding: str) -> Iterator[TextIO]:
    """
    Open the output file, or hand back stdout when there isn't one
    """
    if path is None or path == Path("-"):
        yield sys.stdout
        return

    with path.expanduser().open("w", encoding=encoding, newline="") as f:
        yield f


def input_files(args: Namespace) -> Iterator[Path]:
    """
    Iterate over the input files in the order given, with a progress bar if asked for
    """
    yield from tqdm(args.files, unit="file", disable=not args.progress)


def log_malformed(source: object, error: MalformedRecord) -> None:
    logger.error(f"{source}: skipping malformed record: {error}")


class ToolRun:
    """
    Tracks whether any input file failed, so the tool can keep going through the rest
    of its files and still exit non-zero at the end
    """

    def __init__(self) -> None:
        self.failed: list[Path] = []

    def file_failed(self, path: Path, error: Exception) -> None:
        self.failed.append(path)
        logger.debug(f"Unable to process {path}", exc_info=error)
        print_error(f"Unable to process {path}: {error}")

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0


def run(main_func: Callable[[Namespace], int], args: Namespace) -> None:
    """
    Run a tool's main function, turning errors into a message and a non-zero exit
    status. With -vv the full traceback is shown instead.
    """
    try:
        code = main_func(args)
    except Exception as e:
        if args.v >= 2:
            raise
        print_error(str(e))
        sys.exit(1)
    sys.exit(code)
