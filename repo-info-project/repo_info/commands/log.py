# The command: repo-info log [<path>] [-n <count>]
# What it does: Displays the history of HEAD that is stored as loose objects, nearest commits first
# How it does: Walks the parent links breadth-first from HEAD, printing each commit with its distance from HEAD. Commits that live only in a pack file are listed without details and their parents are not followed
# What data structure it uses: Graph Traversal (BFS) on the Directed Acyclic Graph formed by the commits

import sys

from repo_info.utils import ancestry, refs, repository


def run(args):
    options = args.options
    location = repository.find_repo(args.path, options.metadata_dir_name)
    if location is None:
        print("fatal: not a git repository", file=sys.stderr)
        sys.exit(1)

    branch, head = refs.resolve_head(location, strict=options.strict)
    if head is None:
        print(f"fatal: your current branch '{branch or 'HEAD'}' does not have any commits yet", file=sys.stderr)
        sys.exit(1)

    walk = ancestry.walk_ancestry(location.common_git_dir, head, strict=options.strict)
    for shown, (sha, distance, commit) in enumerate(walk):
        if args.max_count is not None and shown >= args.max_count:
            break

        print(f"commit {sha} ({distance} from HEAD)")
        if commit is None:
            print("(not available as a loose object)")
            print()
            continue
        print(f"Author: {commit.author}")
        print(f"Date:   {commit.author_date.isoformat() if commit.author_date else ''}")
        print()
        subject = commit.message.splitlines()[0] if commit.message else ''
        print(f"    {subject}")
        print()
