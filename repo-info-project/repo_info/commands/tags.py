# The command: repo-info tags [<path>]
# What it does: Lists every tag with the commit it finally names
# How it does: Merges packed and loose tag refs, peeling annotated tags through loose tag objects
# What data structure it uses: List of TagRef records sorted by name

import sys

from repo_info.utils import repository, tags


def run(args):
    location = repository.find_repo(args.path, args.options.metadata_dir_name)
    if location is None:
        print("fatal: not a git repository", file=sys.stderr)
        sys.exit(1)

    for tag in tags.list_tags(location.common_git_dir, strict=args.options.strict):
        marker = " (annotated)" if tag.annotated else ""
        print(f"{tag.target_sha} {tag.name}{marker}")
