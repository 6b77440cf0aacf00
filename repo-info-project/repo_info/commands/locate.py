# The command: repo-info locate [<path>]
# What it does: Prints the working tree root and the two metadata directories for <path>
# How it does: Runs only the repository search, following `gitdir:` pointer files and `commondir` for worktrees and submodules

import sys

from repo_info.utils import repository


def run(args):
    location = repository.find_repo(args.path, args.options.metadata_dir_name)
    if location is None:
        print("fatal: not a git repository", file=sys.stderr)
        sys.exit(1)

    print(f"root: {location.root}")
    print(f"worktree git dir: {location.worktree_git_dir}")
    print(f"common git dir: {location.common_git_dir}")
