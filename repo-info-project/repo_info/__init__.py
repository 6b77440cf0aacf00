"""
Read branch, commit and tag metadata straight from a repository's metadata
directory, without running git.

Usage:
    from repo_info import resolve

    info = resolve()                      # search upward from the current directory
    info = resolve('path/to/checkout', strict=True)
    print(info.branch, info.abbreviated_sha, info.last_tag, info.commits_since_last_tag)
"""

from repo_info.info import RepoInfo, describe, resolve
from repo_info.utils.config import Options, load_options
from repo_info.utils.errors import (
    DecodeUnavailableError,
    MalformedRefError,
    RepoInfoError,
    RepoNotFoundError,
)
from repo_info.utils.repository import GitLocation, find_repo

__version__ = "0.1.0"
__all__ = [
    "resolve",
    "describe",
    "RepoInfo",
    "Options",
    "load_options",
    "GitLocation",
    "find_repo",
    "RepoInfoError",
    "RepoNotFoundError",
    "DecodeUnavailableError",
    "MalformedRefError",
]
