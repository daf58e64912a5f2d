"""
Shared pytest fixtures for gitstat tests.
"""

from datetime import datetime

import git
import pytest

__author__ = "willmcginnis"


def git_date(iso_date):
    """Converts an ISO 8601 timestamp with offset into git's internal ``<epoch> <+hhmm>`` format."""
    dt = datetime.fromisoformat(iso_date)
    offset = dt.utcoffset()
    minutes = int(offset.total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    minutes = abs(minutes)
    return f"{int(dt.timestamp())} {sign}{minutes // 60:02d}{minutes % 60:02d}"


def make_repo(path, commits, branch="main"):
    """Creates a git repository with commits at fixed author dates.

    Args:
        path: Directory for the working copy (created if missing)
        commits: List of ISO 8601 author timestamps, one commit each, oldest first
        branch: Name of the branch the commits are made on

    Returns:
        git.Repo: The new repository
    """
    path.mkdir(parents=True, exist_ok=True)
    repo = git.Repo.init(path)

    # Configure git user
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Name the unborn branch before the first commit
    repo.git.symbolic_ref("HEAD", f"refs/heads/{branch}")

    for i, when in enumerate(commits):
        (path / "history.txt").write_text(f"commit {i}\n")
        repo.index.add(["history.txt"])
        repo.index.commit(f"commit {i}", author_date=git_date(when), commit_date=git_date(when))

    return repo


@pytest.fixture
def repo_factory(tmp_path):
    """Returns a function that builds repositories below ``tmp_path / 'repos'``."""
    root = tmp_path / "repos"
    root.mkdir()
    created = []

    def factory(name, commits, branch="main"):
        repo = make_repo(root / name, commits, branch=branch)
        created.append(repo)
        return repo

    factory.root = root
    yield factory

    for repo in created:
        repo.close()


@pytest.fixture
def scenario_repos(repo_factory):
    """Two repositories: A has 2 commits on 2024-01-01 and 1 on 2024-01-02, B has 1 on 2024-01-01."""
    repo_factory(
        "repo_a",
        ["2024-01-01T09:00:00+00:00", "2024-01-01T17:30:00+00:00", "2024-01-02T10:00:00+00:00"],
    )
    repo_factory("repo_b", ["2024-01-01T12:00:00+00:00"])
    return repo_factory.root


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
