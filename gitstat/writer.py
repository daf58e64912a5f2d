"""
.. module:: writer
   :platform: Unix, Windows
   :synopsis: Writes commit reports to timestamped CSV files

"""

import os
from datetime import datetime

from gitstat.config import Config
from gitstat.exceptions import ReportWriteError
from gitstat.logging import get_logger

__author__ = "willmcginnis"

logger = get_logger("writer")


def report_filenames(timestamp):
    """Returns the CSV file name of each report view for a run timestamp.

    Args:
        timestamp (str): Run timestamp, ``YYYYmmddHHMMSS``

    Returns:
        dict: view name -> file name
    """
    return {
        "detail": f"{Config.DETAIL_FILE_PREFIX}_{timestamp}.csv",
        "daily": f"{Config.DAILY_FILE_PREFIX}_{timestamp}.csv",
        "yearly": f"{Config.YEARLY_FILE_PREFIX}_{timestamp}.csv",
    }


def write_report(report, output_dir, timestamp=None):
    """Writes the three views of a report as CSV files into ``output_dir``.

    All files of one call share the same timestamp in their names, so runs never
    overwrite each other and the files of one run can be matched up.

    Args:
        report (CommitReport): Report to write
        output_dir (str): Existing directory to write into
        timestamp (Optional[str]): Timestamp used in the file names. Defaults to now.

    Returns:
        dict: view name -> path of the written file

    Raises:
        ReportWriteError: If a file cannot be created or written
    """
    if timestamp is None:
        timestamp = datetime.now().strftime(Config.TIMESTAMP_FORMAT)

    filenames = report_filenames(timestamp)
    views = report.views()

    written = {}
    for view, filename in filenames.items():
        path = os.path.join(output_dir, filename)
        try:
            views[view].to_csv(path, index=False)
        except OSError as e:
            raise ReportWriteError(f"Failed to write {filename}: {e}") from e
        logger.info(f"Wrote {len(views[view])} rows to '{path}'.")
        written[view] = path

    return written
