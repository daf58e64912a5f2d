from importlib.metadata import PackageNotFoundError, version

from gitstat.locator import find_git_repos
from gitstat.models import BranchHistogram, RepositoryPath
from gitstat.project import ProjectDirectory, process_in_batches
from gitstat.report import CommitReport, aggregate
from gitstat.repository import Repository
from gitstat.writer import write_report

try:
    __version__ = version("git-commit-stats")
except PackageNotFoundError:
    __version__ = "0.0.0"

__author__ = "willmcginnis"

__all__ = [
    "BranchHistogram",
    "CommitReport",
    "ProjectDirectory",
    "Repository",
    "RepositoryPath",
    "aggregate",
    "find_git_repos",
    "process_in_batches",
    "write_report",
]
