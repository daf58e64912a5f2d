"""
.. module:: locator
   :platform: Unix, Windows
   :synopsis: Finds git repository directories below a base directory

"""

import os

from gitstat.config import Config
from gitstat.exceptions import LocatorError
from gitstat.logging import get_logger
from gitstat.models import RepositoryPath

__author__ = "willmcginnis"

logger = get_logger("locator")


def is_repo_dir(path):
    """Checks whether a directory looks like a git repository root.

    The directory has to end with ``.git`` and contain both a ``config`` and a ``HEAD``
    entry, which matches the ``.git`` folder of a working copy as well as a bare
    ``name.git`` repository.

    Args:
        path (str): Directory to check

    Returns:
        bool: True if the directory is a repository root
    """
    if not path.endswith(Config.REPO_DIR_SUFFIX):
        return False
    return all(os.path.exists(os.path.join(path, marker)) for marker in Config.REPO_MARKER_FILES)


def _log_walk_error(error):
    logger.warning(f"Skipping unreadable entry '{error.filename}': {error}")


def find_git_repos(base_dir):
    """Walks ``base_dir`` and returns every git repository root below it.

    Entries that cannot be read (permissions, dangling links) are logged and skipped.
    Child directories are visited in sorted order, so the result is stable for a
    given tree.

    Args:
        base_dir (str): Directory to scan

    Returns:
        List[RepositoryPath]: Discovered repositories in walk order

    Raises:
        LocatorError: If ``base_dir`` does not exist or cannot be listed
    """
    try:
        base_dir = os.path.abspath(str(base_dir))
    except OSError as e:
        raise LocatorError(f"Cannot resolve base directory '{base_dir}': {e}") from e
    logger.info(f"Scanning '{base_dir}' for git repositories.")

    if not os.path.isdir(base_dir):
        raise LocatorError(f"Base directory does not exist or is not a directory: {base_dir}")
    try:
        with os.scandir(base_dir):
            pass
    except OSError as e:
        raise LocatorError(f"Cannot read base directory '{base_dir}': {e}") from e

    repos = []
    for dirpath, dirnames, _ in os.walk(base_dir, onerror=_log_walk_error):
        dirnames.sort()
        if is_repo_dir(dirpath):
            logger.debug(f"Found git repository at '{dirpath}'")
            repos.append(RepositoryPath.from_path(dirpath))

    logger.info(f"Found {len(repos)} git repositories under '{base_dir}'.")
    return repos
