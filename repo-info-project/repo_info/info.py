# What it does: Assembles the public RepoInfo result for a working path
# How it does: Runs each stage (locate, HEAD, tags, HEAD commit, ancestry) behind its own guard. Outside strict mode a failing stage only blanks the fields it owns; in strict mode the first failure reaches the caller
# What data structure it uses: A flat record of fields, filled in stage by stage

import logging
import math
from dataclasses import asdict, dataclass, field

from .utils import ancestry, objects, refs, repository
from .utils.config import Options
from .utils.errors import RepoInfoError, RepoNotFoundError
from .utils.tags import TagIndex

logger = logging.getLogger(__name__)

ABBREVIATED_LENGTH = 10


@dataclass
class RepoInfo:
    branch: str = None
    sha: str = None
    abbreviated_sha: str = None
    tag: str = None
    committer: str = None
    committer_date: object = None
    author: str = None
    author_date: object = None
    commit_message: str = None
    parents: list = field(default_factory=list)
    root: str = None
    common_git_dir: str = None
    worktree_git_dir: str = None
    last_tag: str = None
    commits_since_last_tag: float = math.inf

    def to_dict(self): # Plain JSON-safe dict: dates as ISO-8601 strings, an unreachable tag distance as None
        data = asdict(self)
        for key in ('committer_date', 'author_date'):
            if data[key] is not None:
                data[key] = data[key].isoformat()
        if data['commits_since_last_tag'] == math.inf:
            data['commits_since_last_tag'] = None
        return data


def _guarded(options, stage, default, func, *args, **kwargs):
    try:
        return func(*args, **kwargs)
    except (RepoInfoError, OSError, ValueError) as e:
        if options.strict:
            raise
        logger.debug("Could not resolve %s: %s", stage, e)
        return default


def resolve(start_path=None, options=None, **overrides): # Resolves branch, commit and tag metadata for start_path (default: cwd, or the metadata dir itself)
    # Keyword overrides (`strict`, `metadata_dir_name`) replace fields of options
    options = (options or Options()).merged(**overrides)
    info = RepoInfo()

    location = _guarded(options, 'repository location', None,
                        repository.find_repo, start_path, options.metadata_dir_name)
    if location is None:
        if options.strict:
            raise RepoNotFoundError(f"No {options.metadata_dir_name} found from {start_path or 'the current directory'}")
        return info

    info.root = location.root
    info.worktree_git_dir = location.worktree_git_dir
    info.common_git_dir = location.common_git_dir

    info.branch, info.sha = _guarded(options, 'HEAD', (None, None), refs.resolve_head, location, strict=options.strict)
    if info.sha is None:
        return info
    info.abbreviated_sha = info.sha[:ABBREVIATED_LENGTH]

    common_dir = location.common_git_dir
    tag_index = _guarded(options, 'tags', TagIndex([]), TagIndex.build, common_dir, strict=options.strict)
    info.tag = tag_index.name_for(info.sha)

    commit = _guarded(options, 'HEAD commit', None, objects.read_commit, common_dir, info.sha, strict=options.strict)
    if commit is not None:
        info.author = commit.author
        info.author_date = commit.author_date
        info.committer = commit.committer
        info.committer_date = commit.committer_date
        info.commit_message = commit.message
        info.parents = list(commit.parents)

    info.last_tag, info.commits_since_last_tag = _guarded(
        options, 'nearest tag', (None, math.inf),
        ancestry.find_nearest_tag, common_dir, info.sha, tag_index=tag_index, strict=options.strict)
    return info


def describe(info): # Formats RepoInfo like `git describe --tags --always`
    if info.sha is None:
        return None
    if info.last_tag is None:
        return info.abbreviated_sha
    if info.commits_since_last_tag == 0:
        return info.last_tag
    return f"{info.last_tag}-{info.commits_since_last_tag}-g{info.abbreviated_sha}"
