"""
.. module:: config
   :platform: Unix, Windows
   :synopsis: Default settings shared by the scanner, the report writer and the command line

"""

__author__ = "willmcginnis"


class Config:
    """Scan and report settings."""

    # Directory scanned when none is given
    DEFAULT_BASE_DIR: str = "."
    # Number of repositories processed concurrently
    DEFAULT_BATCH_SIZE: int = 5

    # A directory is a repository root when it ends with this suffix and holds both marker files
    REPO_DIR_SUFFIX: str = ".git"
    REPO_MARKER_FILES: tuple[str, ...] = ("config", "HEAD")

    DATE_FORMAT: str = "%Y-%m-%d"
    TIMESTAMP_FORMAT: str = "%Y%m%d%H%M%S"

    DETAIL_FILE_PREFIX: str = "commit_info"
    DAILY_FILE_PREFIX: str = "commit_summary"
    YEARLY_FILE_PREFIX: str = "yearly_summary"

    DEFAULT_LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
