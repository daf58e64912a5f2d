"""
.. module:: repository
   :platform: Unix, Windows
   :synopsis: Reads per-branch commit dates out of a single git repository

.. moduleauthor:: Will McGinnis <will@pedalwrencher.com>


"""

import os
from collections import Counter

import git
from git import BadName, BadObject, GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from gitstat.config import Config
from gitstat.exceptions import BranchTraversalError, ReferenceEnumerationError, RepositoryOpenError
from gitstat.logging import get_logger
from gitstat.models import BranchHistogram, repo_display_name

__author__ = "willmcginnis"

logger = get_logger("repository")


class Repository:
    """A single git repository opened for reading commit history.

    Wraps a GitPython ``Repo`` and exposes the per-branch commit histograms the
    reports are built from. Every instance owns its own ``Repo``, so instances can be
    used from different threads as long as each one stays on its thread.

    Args:
        working_dir (str): Path to the repository, either a ``.git`` directory, a bare
            repository or a working copy containing ``.git``.

    Attributes:
        git_dir (str): Path the repository was opened from
        repo (git.Repo): GitPython Repo instance

    Raises:
        RepositoryOpenError: If the path does not exist or is not a valid repository

    Examples:
        >>> with Repository('/path/to/repo/.git') as repo:
        ...     histograms = repo.branch_histograms()
    """

    def __init__(self, working_dir):
        self.git_dir = os.path.abspath(str(working_dir))

        try:
            self.repo = Repo(self.git_dir)
        except (InvalidGitRepositoryError, NoSuchPathError, GitCommandError, ValueError, OSError) as e:
            raise RepositoryOpenError(self.git_dir, f"Failed to open repository ({e.__class__.__name__})") from e

        logger.debug(f"Repository [{self.repo_name}] opened at directory: {self.git_dir}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        """Releases the git helper processes held by the underlying Repo."""
        self.repo.close()

    @property
    def repo_name(self):
        return repo_display_name(self.git_dir)

    def references(self):
        """Returns every reference in the repository (branches, tags, remotes, ...).

        Returns:
            List[git.Reference]: All references found under ``refs/``

        Raises:
            ReferenceEnumerationError: If the references cannot be read
        """
        try:
            return list(self.repo.references)
        except (GitCommandError, ValueError, OSError) as e:
            raise ReferenceEnumerationError(self.git_dir, f"Failed to list references ({e})") from e

    @staticmethod
    def is_local_branch(ref):
        """Checks whether a reference is a local branch.

        A local branch lives under ``refs/heads/`` and points directly at a commit.
        Tags, remote-tracking branches and symbolic references (a ref whose content is
        ``ref: refs/heads/other``) are not local branches.

        Args:
            ref (git.Reference): Reference to classify

        Returns:
            bool: True for a local branch
        """
        # RemoteReference subclasses Head, so the type test alone would admit refs/remotes/
        if not isinstance(ref, git.Head) or isinstance(ref, git.RemoteReference):
            return False
        # is_detached is True when the ref stores a commit hash rather than another ref's name
        return ref.is_detached

    def local_branches(self):
        """Returns the local branch references of the repository.

        Returns:
            List[git.Head]: Local branches, see :meth:`is_local_branch`

        Raises:
            ReferenceEnumerationError: If the references cannot be read
        """
        branches = []
        for ref in self.references():
            try:
                if self.is_local_branch(ref):
                    branches.append(ref)
            except (ValueError, OSError) as e:
                logger.warning(f"Skipping unreadable reference '{ref.path}' in repo '{self.repo_name}': {e}")
        return branches

    def commits_by_date(self, branch):
        """Counts the commits reachable from a branch tip per author date.

        Dates are the author's own calendar day (the timestamp in the author's
        timezone, not converted to UTC) formatted as ``YYYY-MM-DD``.

        If the history walk breaks off part way through, the counts gathered up to
        that point are returned and a warning is logged.

        Args:
            branch (git.Head): Branch to walk

        Returns:
            dict: ``YYYY-MM-DD`` -> number of commits

        Raises:
            BranchTraversalError: If the branch tip cannot be resolved or the walk cannot start
        """
        try:
            tip = branch.commit
            commits = self.repo.iter_commits(tip.hexsha)
        except (BadName, BadObject, GitCommandError, ValueError, OSError) as e:
            raise BranchTraversalError(branch.name, f"Could not get commit history ({e})") from e

        counts = Counter()
        try:
            for commit in commits:
                counts[commit.authored_datetime.strftime(Config.DATE_FORMAT)] += 1
        except Exception as e:
            logger.warning(
                f"Commit iteration interrupted for branch '{branch.name}' in repo '{self.repo_name}' "
                f"after {sum(counts.values())} commits: {e!r}"
            )

        return dict(counts)

    def branch_histograms(self):
        """Returns a commit histogram for every local branch that has commits.

        A branch whose history cannot be read is logged and skipped; the remaining
        branches are still returned.

        Returns:
            List[BranchHistogram]: One entry per local branch with at least one commit

        Raises:
            ReferenceEnumerationError: If the references cannot be read
        """
        logger.info(f"Collecting branch histograms for repo '{self.repo_name}'.")

        histograms = []
        for branch in self.local_branches():
            try:
                counts = self.commits_by_date(branch)
            except BranchTraversalError as e:
                logger.warning(f"Skipping branch '{branch.name}' in repo '{self.repo_name}': {e}")
                continue

            if counts:
                histograms.append(BranchHistogram(repository=self.repo_name, branch=branch.name, commits_by_date=counts))
            else:
                logger.debug(f"Branch '{branch.name}' in repo '{self.repo_name}' has no commits.")

        logger.info(f"Collected {len(histograms)} branch histograms for repo '{self.repo_name}'.")
        return histograms

    def __str__(self):
        return f"git repository: {self.repo_name} at: {self.git_dir}"

    def __repr__(self):
        return f"Repository({self.git_dir!r})"
