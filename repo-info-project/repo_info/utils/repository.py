# What it does: Finds the repository metadata directory for a working path, following linked-worktree and submodule indirection
# How it does: `find_metadata_entry` walks up the directory tree looking for the metadata entry (`.git` by default). A directory is a plain repository. A file is a `gitdir:` pointer, and an optional `commondir` file inside the pointed directory leads to the shared metadata directory
# What data structure it uses: Uses recursion (linear recursion up the parent chain) to find the entry. The result is a small immutable record of three paths

import logging
import os
from dataclasses import dataclass

from .config import DEFAULT_METADATA_DIR
from .errors import MalformedRefError

logger = logging.getLogger(__name__)

GITDIR_PREFIX = 'gitdir:'


@dataclass(frozen=True)
class GitLocation:
    worktree_git_dir: str # Holds HEAD
    common_git_dir: str # Holds objects, refs and packed-refs
    root: str # Working directory that contains the metadata entry


def find_metadata_entry(path, metadata_dir_name=DEFAULT_METADATA_DIR): # Recursively searches upward for the metadata entry and returns its path, or None
    entry = os.path.join(path, metadata_dir_name)
    if os.path.exists(entry):
        return entry
    parent_path = os.path.dirname(path)
    if parent_path == path:
        return None
    return find_metadata_entry(parent_path, metadata_dir_name)


def read_single_line(path): # Returns the first line of a small text file without its line ending
    with open(path, 'r', encoding='utf-8') as f:
        return f.readline().rstrip('\r\n')


def parse_gitdir_pointer(line, base_dir): # Parses `gitdir: <path>` and resolves a relative path against base_dir
    if not line.startswith(GITDIR_PREFIX):
        raise MalformedRefError(f"Expected '{GITDIR_PREFIX} <path>', got {line!r}")
    target = line[len(GITDIR_PREFIX):].strip()
    if not target:
        raise MalformedRefError("Empty gitdir pointer")
    return os.path.normpath(os.path.join(base_dir, target))


def resolve_common_dir(worktree_git_dir): # Follows `commondir` when present (linked worktrees), otherwise the worktree dir is also the common dir
    commondir_path = os.path.join(worktree_git_dir, 'commondir')
    if not os.path.isfile(commondir_path):
        return worktree_git_dir
    target = read_single_line(commondir_path).strip()
    if not target:
        raise MalformedRefError(f"Empty commondir file in {worktree_git_dir}")
    return os.path.normpath(os.path.join(worktree_git_dir, target))


def find_repo(start_path=None, metadata_dir_name=DEFAULT_METADATA_DIR): # Locates the metadata directories for start_path (default: cwd), or None when there are none up to the filesystem root
    # A pointer file that cannot be parsed raises MalformedRefError
    start = os.path.abspath(start_path or os.getcwd())
    entry = find_metadata_entry(start, metadata_dir_name)
    if entry is None:
        logger.debug("No %s entry above %s", metadata_dir_name, start)
        return None

    root = os.path.dirname(entry)
    if os.path.isdir(entry):
        return GitLocation(worktree_git_dir=entry, common_git_dir=entry, root=root)

    worktree_git_dir = parse_gitdir_pointer(read_single_line(entry), root)
    common_git_dir = resolve_common_dir(worktree_git_dir)
    logger.debug("Followed %s to %s (common dir %s)", entry, worktree_git_dir, common_git_dir)
    return GitLocation(worktree_git_dir=worktree_git_dir, common_git_dir=common_git_dir, root=root)
