"""
.. module:: cli
   :platform: Unix, Windows
   :synopsis: Command line entry point: scan a directory tree and write the commit reports

"""

import argparse
import os
import sys

from gitstat.config import Config
from gitstat.exceptions import LocatorError, ReportWriteError
from gitstat.locator import find_git_repos
from gitstat.logging import add_file_handler, add_stream_handler, get_logger, set_log_level
from gitstat.project import process_in_batches
from gitstat.report import aggregate
from gitstat.writer import write_report

__author__ = "willmcginnis"

logger = get_logger("cli")


def positive_int(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def _build_parser():
    p = argparse.ArgumentParser(
        prog="gitstat",
        description="Count commits per day across every branch of every git repository below a directory.",
    )
    p.add_argument("--dir", default=Config.DEFAULT_BASE_DIR, help="Base directory to scan for git repositories.")
    p.add_argument(
        "--batch",
        type=positive_int,
        default=Config.DEFAULT_BATCH_SIZE,
        help="Number of repositories to process concurrently.",
    )
    p.add_argument("--output-dir", default=None, help="Directory for the CSV reports (default: the base directory).")
    p.add_argument(
        "--log-level",
        default=Config.DEFAULT_LOG_LEVEL,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level.",
    )
    p.add_argument("--log-file", default=None, help="Also write log messages to this file.")
    return p


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    args = _build_parser().parse_args(argv)

    set_log_level(args.log_level)
    add_stream_handler(level=args.log_level, format_string=Config.LOG_FORMAT, stream=sys.stderr)
    if args.log_file:
        try:
            add_file_handler(args.log_file, level=args.log_level, format_string=Config.LOG_FORMAT)
        except OSError as e:
            logger.error(f"Error opening log file '{args.log_file}': {e}")
            return 1

    try:
        repo_paths = find_git_repos(args.dir)
    except LocatorError as e:
        logger.error(f"Error finding git repositories: {e}")
        return 1

    logger.info(f"Found {len(repo_paths)} git repositories.")
    histograms = process_in_batches(repo_paths, batch_size=args.batch)
    report = aggregate(histograms)

    try:
        output_dir = os.path.abspath(args.output_dir or args.dir)
    except (OSError, ValueError) as e:
        logger.error(f"Error resolving output directory: {e}")
        return 1

    try:
        write_report(report, output_dir)
    except ReportWriteError as e:
        logger.error(f"Error writing commit reports: {e}")
        return 1

    logger.info(f"Scan completed successfully. CSV files generated in '{output_dir}'.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
