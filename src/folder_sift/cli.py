"""
Command-line interface for the folder sifter.

Usage: sift [OPTIONS] source destination
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .driver import Sifter
from .indexer import scan_items
from .report import write_report
from .sieve import build_sieve
from .types import ActionStatus, SiftConfig, SiftMode

logger = logging.getLogger(__name__)

DESCRIPTION = "sift - a file sifter"

EPILOG = """\
sift moves or links items (files or folders) in a source folder to matching
subfolders of a destination "sieve" folder. A sieve subfolder matches if its
name contains a word group whose words are all found in the item name. With
--move the item is moved to the first matching folder.

Word groups are separated by ',', '(' or ')'. Prefix a word with '!' to
require that it does NOT occur in the item name. Word order, spaces and case
(a-z/A-Z) are ignored when matching.

Example sieve subfolder names:

  /sieve/Science Fiction (sci-fi, space opera)/
  /sieve/Science/
  /sieve/E-books, (epub, pdf, cbr, cbz, djvu, mobi, azw3)/

Word groups are tried in order of decreasing complexity, measured as the
length of the group minus its number of words. Fewer, longer words are
harder to match than the same letters split into shorter words.

Source and destination must be on the same filesystem for --move and --link.

With --deep a previous sieve can be used as the new source folder, to refine
the sifting in several chained steps.
"""

EXIT_OK = 0
EXIT_ERROR = 1


class SiftArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on argument errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_ERROR, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = SiftArgumentParser(
        prog="sift",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("source", type=Path, help="Folder holding the items to sift")
    parser.add_argument("destination", type=Path, help="The sieve folder")

    # Mode flags share one dest, so the last one given wins
    parser.add_argument(
        "-m", "--move", dest="mode", action="store_const", const=SiftMode.MOVE,
        help="Move items (files and/or folders)",
    )
    parser.add_argument(
        "-l", "--link", dest="mode", action="store_const", const=SiftMode.LINK,
        help="Make folders in destination, hardlink files from source",
    )
    parser.add_argument(
        "-c", "--copy", dest="mode", action="store_const", const=SiftMode.COPY,
        help="Make folders in destination, copy files from source",
    )
    parser.add_argument(
        "-t", "--test", dest="mode", action="store_const", const=SiftMode.TEST,
        help="Report items failing to match anything (default)",
    )
    parser.set_defaults(mode=SiftMode.TEST)

    parser.add_argument(
        "-d", "--deep", action="store_true",
        help="Sift deeper, using the source folder's sub-subfolders",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true",
        help="Don't show warnings about items that could not be placed",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Output info about moved/linked/copied items",
    )
    parser.add_argument(
        "--report", type=Path, metavar="PATH",
        help="Write a report of every outcome (.xlsx for Excel, otherwise CSV)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    return parser


def setup_logging(config: SiftConfig) -> None:
    """Configure the root logger for the run."""
    if config.verbose:
        level = logging.INFO
    elif config.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


def config_from_args(args: argparse.Namespace) -> SiftConfig:
    return SiftConfig(
        mode=args.mode,
        deep=args.deep,
        verbose=args.verbose,
        quiet=args.quiet,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the sifter from the command line.

    Args:
        argv: Arguments (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = config_from_args(args)
    setup_logging(config)

    for label, path in (("source", args.source), ("destination", args.destination)):
        if not path.is_dir():
            parser.error(f"{label} must exist and be a directory: {path}")

    try:
        table = build_sieve(args.destination)
        items = scan_items(args.source, deep=config.deep)
    except OSError as e:
        parser.error(f"cannot read source or destination: {e}")

    sifter = Sifter(table, config)
    results = sifter.run(items)

    if config.mode == SiftMode.TEST:
        for result in results:
            if result.status == ActionStatus.NO_MATCH:
                print(f"No match: {result.item.path}")

    print(sifter.get_summary())

    if args.report:
        try:
            write_report(
                args.report, results, config,
                source=args.source, destination=args.destination,
            )
        except OSError as e:
            logger.error(f"Could not write report {args.report}: {e}")
            return EXIT_ERROR

    return EXIT_OK
