"""
.. module:: project
   :platform: Unix, Windows
   :synopsis: Runs the branch extraction over many repositories in bounded concurrent batches

.. moduleauthor:: Will McGinnis <will@pedalwrencher.com>


"""

import os

import pandas as pd
from joblib import Parallel, delayed

from gitstat.config import Config
from gitstat.exceptions import GitStatError
from gitstat.locator import find_git_repos
from gitstat.logging import get_logger
from gitstat.models import RepositoryPath
from gitstat.report import aggregate
from gitstat.repository import Repository

__author__ = "willmcginnis"

logger = get_logger("project")


# Function for joblib.
def _histograms_func(repo_path):
    try:
        with Repository(repo_path.path) as repo:
            return repo.branch_histograms()
    except GitStatError as e:
        logger.error(f"Error processing repository '{repo_path.path}': {e}")
    except Exception as e:
        logger.error(f"Unexpected error processing repository '{repo_path.path}': {e}", exc_info=True)
    return []


def batched(items, size):
    """Splits a list into consecutive chunks of at most ``size`` items.

    Args:
        items (list): Items to split
        size (int): Maximum chunk length, must be positive

    Returns:
        List[list]: The chunks, in order
    """
    if size < 1:
        raise ValueError(f"batch size must be a positive integer, got {size}")
    items = list(items)
    return [items[i : i + size] for i in range(0, len(items), size)]


def process_in_batches(repo_paths, batch_size=Config.DEFAULT_BATCH_SIZE):
    """Collects the branch histograms of many repositories.

    Repositories are processed in consecutive batches of ``batch_size``. All
    repositories of a batch run concurrently on a thread pool, and the next batch only
    starts once every task of the current one has returned, so at most ``batch_size``
    repositories are open at any time.

    Each task returns its own list of histograms and the results are merged here
    after the batch has been joined; tasks share no mutable state. A repository that
    fails to open or to list its references is logged and contributes nothing.

    Args:
        repo_paths (List[RepositoryPath]): Repositories to process
        batch_size (int, optional): Maximum number of concurrent repositories. Defaults to 5.

    Returns:
        List[BranchHistogram]: Histograms from every repository, in no particular order

    Raises:
        ValueError: If ``batch_size`` is not a positive integer
    """
    if not isinstance(batch_size, int) or isinstance(batch_size, bool) or batch_size < 1:
        raise ValueError(f"batch size must be a positive integer, got {batch_size!r}")

    repo_paths = [p if isinstance(p, RepositoryPath) else RepositoryPath.from_path(p) for p in repo_paths]
    batches = batched(repo_paths, batch_size)
    logger.info(f"Processing {len(repo_paths)} repositories in {len(batches)} batches of up to {batch_size}.")

    results = []
    if not batches:
        return results

    with Parallel(n_jobs=batch_size, backend="threading", verbose=0) as parallel:
        for i, batch in enumerate(batches, start=1):
            logger.debug(f"Starting batch {i}/{len(batches)} with {len(batch)} repositories.")
            for histograms in parallel(delayed(_histograms_func)(repo_path) for repo_path in batch):
                results.extend(histograms)
            logger.debug(f"Finished batch {i}/{len(batches)}.")

    logger.info(f"Collected {len(results)} branch histograms from {len(repo_paths)} repositories.")
    return results


class ProjectDirectory:
    """A collection of git repositories found below one directory.

    Args:
        working_dir (Optional[str]): Directory to scan. Uses the current working directory if None.
        batch_size (int, optional): Number of repositories processed concurrently. Defaults to 5.
        ignore_repos (Optional[List[str]]): Display names of repositories to leave out

    Attributes:
        working_dir (str): Absolute path of the scanned directory
        repo_paths (List[RepositoryPath]): Discovered repositories

    Raises:
        LocatorError: If ``working_dir`` cannot be walked

    Examples:
        >>> project = ProjectDirectory(working_dir='/path/to/repos', batch_size=8)
        >>> report = project.commit_report()
        >>> report.daily.head()
    """

    def __init__(self, working_dir=None, batch_size=Config.DEFAULT_BATCH_SIZE, ignore_repos=None):
        logger.info(f"Initializing ProjectDirectory with working_dir={working_dir}, ignore_repos={ignore_repos}")
        if working_dir is None:
            working_dir = os.getcwd()
        self.working_dir = os.path.abspath(str(working_dir))
        self.batch_size = batch_size

        self.repo_paths = find_git_repos(self.working_dir)
        if ignore_repos is not None:
            self.repo_paths = [r for r in self.repo_paths if r.name not in ignore_repos]

        logger.info(f"Initialized ProjectDirectory with {len(self.repo_paths)} repositories.")

    def repo_name(self):
        """Returns a DataFrame containing the names of all repositories in the project.

        Returns:
            pandas.DataFrame: A DataFrame with columns:
                - repository (str): Display name of each repository
                - path (str): Absolute path of the repository directory
        """
        ds = [[x.name, x.path] for x in self.repo_paths]
        return pd.DataFrame(ds, columns=["repository", "path"])

    def branch_histograms(self):
        """Returns the branch histograms of every repository in the project.

        :return: List[BranchHistogram]
        """
        return process_in_batches(self.repo_paths, batch_size=self.batch_size)

    def commit_report(self):
        """Builds the detail, daily and yearly commit reports for the project.

        :return: CommitReport
        """
        return aggregate(self.branch_histograms())

    def __repr__(self):
        return f"ProjectDirectory({self.working_dir!r}, batch_size={self.batch_size})"
