"""
.. module:: models
   :platform: Unix, Windows
   :synopsis: Value objects passed between the locator, the extractor and the aggregator

"""

import os
from dataclasses import dataclass, field

from gitstat.config import Config

__author__ = "willmcginnis"


def repo_display_name(path):
    """Returns the name a repository is reported under.

    For ``/src/project/.git`` that is ``project``; any other path (for example a bare
    ``/srv/project.git``) is reported under its own base name.

    Args:
        path (str): Path to the repository directory

    Returns:
        str: Display name, or 'unknown_repo' if the path has no usable name
    """
    path = os.path.normpath(str(path))
    name = os.path.basename(path)
    if name == Config.REPO_DIR_SUFFIX:
        name = os.path.basename(os.path.dirname(path))
    if name.strip() == "":
        return "unknown_repo"
    return name


@dataclass(frozen=True)
class RepositoryPath:
    """A discovered repository root and the name it is reported under."""

    path: str
    name: str

    @classmethod
    def from_path(cls, path):
        path = os.path.abspath(str(path))
        return cls(path=path, name=repo_display_name(path))

    def __str__(self):
        return self.path


@dataclass(frozen=True)
class BranchHistogram:
    """Commit counts per author date for one branch of one repository.

    Attributes:
        repository (str): Display name of the repository
        branch (str): Short branch name, e.g. ``main``
        commits_by_date (dict): ``YYYY-MM-DD`` -> number of commits authored that day
    """

    repository: str
    branch: str
    commits_by_date: dict = field(default_factory=dict)

    @property
    def total(self):
        return sum(self.commits_by_date.values())
