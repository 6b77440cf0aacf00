# The command: repo-info describe [<path>]
# What it does: Names HEAD relative to the nearest tag, like `git describe --tags --always`
# How it does: Resolves the repository and formats `<tag>`, `<tag>-<n>-g<abbrev>` or just `<abbrev>` when no tag is reachable

import sys

from repo_info.info import describe, resolve


def run(args):
    info = resolve(args.path, args.options)
    description = describe(info)
    if description is None:
        print("fatal: cannot describe a repository without commits", file=sys.stderr)
        sys.exit(1)
    print(description)
