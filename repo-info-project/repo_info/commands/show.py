# The command: repo-info show [<path>] [--json]
# What it does: Prints every field of the resolved RepoInfo for the repository containing <path>
# How it does: Calls `resolve` with the options built from the command line and prints the fields one per line, or the whole record as JSON
# What data structure it uses: A flat record (RepoInfo) rendered as a dictionary

import json
import sys

from repo_info.info import resolve


def run(args):
    info = resolve(args.path, args.options)
    if info.root is None:
        print("fatal: not a git repository", file=sys.stderr)
        sys.exit(1)

    data = info.to_dict()
    if args.json:
        print(json.dumps(data, indent=2, allow_nan=False))
        return

    width = max(len(key) for key in data)
    for key, value in data.items():
        if isinstance(value, list):
            value = " ".join(value)
        print(f"{key:<{width}}  {'' if value is None else value}")
