import argparse
import logging
import sys

from repo_info.commands import describe, locate, log, show, tags
from repo_info.utils.config import load_options
from repo_info.utils.errors import RepoInfoError


def add_repo_arguments(parser): # Options shared by every command
    parser.add_argument("path", nargs="?", help="Path inside the repository (defaults to the current directory).")
    parser.add_argument("--config", help="INI file with a [repo-info] section.")
    parser.add_argument("--strict", action="store_true", default=None, help="Fail on unreadable metadata instead of leaving fields empty.")
    parser.add_argument("--metadata-dir", dest="metadata_dir_name", help="Name of the metadata directory (default: .git).")


# The main entry point for the repo-info command
def main(argv=None):
    # The main parser
    parser = argparse.ArgumentParser(description="repo-info: read branch, commit and tag metadata without git.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    # Command: show
    show_parser = subparsers.add_parser("show", help="Show every resolved field.")
    add_repo_arguments(show_parser)
    show_parser.add_argument("--json", action="store_true", help="Print the result as JSON.")
    show_parser.set_defaults(func=show.run)

    # Command: locate
    locate_parser = subparsers.add_parser("locate", help="Show the root and metadata directories.")
    add_repo_arguments(locate_parser)
    locate_parser.set_defaults(func=locate.run)

    # Command: describe
    describe_parser = subparsers.add_parser("describe", help="Describe HEAD relative to the nearest tag.")
    add_repo_arguments(describe_parser)
    describe_parser.set_defaults(func=describe.run)

    # Command: tags
    tags_parser = subparsers.add_parser("tags", help="List tags and the commits they name.")
    add_repo_arguments(tags_parser)
    tags_parser.set_defaults(func=tags.run)

    # Command: log
    log_parser = subparsers.add_parser("log", help="Show the loose history of HEAD, nearest first.")
    add_repo_arguments(log_parser)
    log_parser.add_argument("-n", "--max-count", type=int, default=None, help="Limit the number of commits shown.")
    log_parser.set_defaults(func=log.run)

    # Parse the arguments
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    try:
        args.options = load_options(args.config, strict=args.strict, metadata_dir_name=args.metadata_dir_name)
        args.func(args)
    except (RepoInfoError, OSError, ValueError) as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
