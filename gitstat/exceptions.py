"""
.. module:: exceptions
   :platform: Unix, Windows
   :synopsis: Errors raised while scanning repositories and writing reports

"""

__author__ = "willmcginnis"


class GitStatError(Exception):
    """Base exception for gitstat errors."""

    pass


class LocatorError(GitStatError):
    """Raised when the base directory cannot be walked at all."""

    pass


class RepositoryError(GitStatError):
    """Base exception for failures that skip a whole repository."""

    def __init__(self, path, message):
        self.path = path
        super().__init__(f"{message}: {path}")


class RepositoryOpenError(RepositoryError):
    """Raised when a path cannot be opened as a git repository."""

    pass


class ReferenceEnumerationError(RepositoryError):
    """Raised when the references of a repository cannot be listed."""

    pass


class BranchTraversalError(GitStatError):
    """Raised when a branch tip cannot be resolved or its history cannot be walked."""

    def __init__(self, branch, message):
        self.branch = branch
        super().__init__(f"{message}: {branch}")


class ReportWriteError(GitStatError):
    """Raised when a report file cannot be created or written."""

    pass
