"""
.. module:: report
   :platform: Unix, Windows
   :synopsis: Merges branch histograms into the detail, daily and yearly commit reports

.. moduleauthor:: Will McGinnis <will@pedalwrencher.com>


"""

import pandas as pd
from pandas import DataFrame

from gitstat.config import Config
from gitstat.logging import get_logger

__author__ = "willmcginnis"

logger = get_logger("report")

DETAIL_COLUMNS = ["Date", "Repository", "Branch", "CommitCount"]
DAILY_COLUMNS = ["Date", "CommitCount"]
YEARLY_COLUMNS = ["Year", "CommitCount"]


class CommitReport:
    """The three commit count views built from one set of branch histograms.

    Attributes:
        detail (pandas.DataFrame): One row per branch and date with columns
            Date, Repository, Branch, CommitCount; sorted by repository, branch and date
        daily (pandas.DataFrame): Commits per date over all repositories and branches,
            columns Date, CommitCount; dates ascending and unique
        yearly (pandas.DataFrame): Commits per calendar year, columns Year, CommitCount;
            years ascending and unique
    """

    def __init__(self, detail, daily, yearly):
        self.detail = detail
        self.daily = daily
        self.yearly = yearly

    def views(self):
        """Returns the reports keyed by view name (``detail``, ``daily``, ``yearly``)."""
        return {"detail": self.detail, "daily": self.daily, "yearly": self.yearly}

    def total_commits(self):
        return int(self.detail["CommitCount"].sum())

    def __repr__(self):
        return (
            f"CommitReport(detail={len(self.detail)} rows, daily={len(self.daily)} rows, "
            f"yearly={len(self.yearly)} rows)"
        )


def _detail(histograms):
    ds = [
        [date, h.repository, h.branch, int(count)]
        for h in histograms
        for date, count in h.commits_by_date.items()
        if count > 0
    ]
    if not ds:
        return DataFrame(columns=DETAIL_COLUMNS)

    df = DataFrame(ds, columns=DETAIL_COLUMNS)
    df = df.sort_values(by=["Repository", "Branch", "Date", "CommitCount"], kind="mergesort")
    return df.reset_index(drop=True)


def _daily(detail):
    if detail.empty:
        return DataFrame(columns=DAILY_COLUMNS)

    df = detail.groupby("Date", as_index=False, sort=True)["CommitCount"].sum()
    return df.reset_index(drop=True)


def _yearly(detail):
    if detail.empty:
        return DataFrame(columns=YEARLY_COLUMNS)

    dates = pd.to_datetime(detail["Date"], format=Config.DATE_FORMAT, errors="coerce")
    bad = dates.isna()
    for _, row in detail[bad].iterrows():
        logger.warning(
            f"Could not parse date '{row['Date']}' for repo '{row['Repository']}' branch '{row['Branch']}', "
            f"leaving {row['CommitCount']} commits out of the yearly summary."
        )

    df = DataFrame({"Year": dates[~bad].dt.year.astype(int), "CommitCount": detail.loc[~bad, "CommitCount"]})
    if df.empty:
        return DataFrame(columns=YEARLY_COLUMNS)

    df = df.groupby("Year", as_index=False, sort=True)["CommitCount"].sum()
    return df.reset_index(drop=True)


def aggregate(histograms):
    """Builds the detail, daily and yearly reports from branch histograms.

    The input order does not matter: every view is sorted before it is returned, so
    the same histograms always produce the same reports. Commit counts are conserved
    across the views; the only exception is a malformed date, which is logged and
    left out of the yearly view while still counting in the other two.

    Args:
        histograms (Iterable[BranchHistogram]): Histograms collected from all repositories

    Returns:
        CommitReport: The three report views
    """
    histograms = list(histograms)
    logger.info(f"Aggregating {len(histograms)} branch histograms.")

    detail = _detail(histograms)
    daily = _daily(detail)
    yearly = _yearly(detail)

    logger.info(
        f"Aggregated {len(detail)} detail rows, {len(daily)} days and {len(yearly)} years "
        f"covering {int(detail['CommitCount'].sum())} commits."
    )
    return CommitReport(detail=detail, daily=daily, yearly=yearly)
