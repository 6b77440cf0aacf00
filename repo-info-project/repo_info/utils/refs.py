# What it does: Resolves HEAD and named refs to commit hashes
# How it does: HEAD is either a symbolic ref (`ref: refs/heads/<name>`) or a raw hash. Named refs are looked up through two stores with the same `lookup` interface, loose ref files first and then the packed-refs index, so a loose ref overrides a packed one of the same name
# What data structure it uses: Pointers (HEAD and ref files are pointers into the commit graph). The packed-refs index is kept as an ordered list of entries

import logging
import os
from dataclasses import dataclass

from . import objects
from .errors import MalformedRefError
from .repository import read_single_line

logger = logging.getLogger(__name__)

SYMREF_PREFIX = 'ref:'
HEADS_PREFIX = 'refs/heads/'
TAGS_PREFIX = 'refs/tags/'


@dataclass(frozen=True)
class PackedRef:
    sha: str
    name: str
    peeled: str = None # Commit named by an annotated tag, from a `^<sha>` line


def parse_head(text): # Returns (refname, None) for a symbolic HEAD or (None, sha) for a detached one
    content = text.strip()
    if content.startswith(SYMREF_PREFIX):
        refname = content[len(SYMREF_PREFIX):].strip()
        if not refname:
            raise MalformedRefError("HEAD names an empty ref")
        return refname, None
    if '/' in content:
        return content, None
    if objects.is_sha(content):
        return None, content
    raise MalformedRefError(f"HEAD is neither a ref nor a hash: {content!r}")


def parse_ref_line(text): # Parses the contents of a loose ref file into a hash
    sha = text.strip()
    if not objects.is_sha(sha):
        raise MalformedRefError(f"Ref does not hold a hash: {sha!r}")
    return sha


def parse_packed_refs(lines): # Parses packed-refs lines into PackedRef entries, in file order
    # `#` lines are comments, a `^<sha>` line peels the entry right above it, anything else malformed is skipped
    entries = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith('^'):
            peeled = line[1:].strip()
            if entries and objects.is_sha(peeled):
                last = entries[-1]
                entries[-1] = PackedRef(sha=last.sha, name=last.name, peeled=peeled)
            continue
        sha, _, name = line.partition(' ')
        if not objects.is_sha(sha) or not name.strip():
            logger.debug("Skipping malformed packed-refs line: %r", line)
            continue
        entries.append(PackedRef(sha=sha, name=name.strip()))
    return entries


class LooseRefs:
    # Ref files stored one per ref under the common metadata directory

    def __init__(self, common_dir):
        self.common_dir = common_dir

    def path_for(self, refname):
        return os.path.join(self.common_dir, *refname.split('/'))

    def lookup(self, refname):
        path = self.path_for(refname)
        if not os.path.isfile(path):
            return None
        return parse_ref_line(read_single_line(path))

    def names(self, prefix): # Lists every ref name under prefix (e.g. 'refs/tags/'), walking nested directories
        base = self.path_for(prefix.rstrip('/'))
        if not os.path.isdir(base):
            return []
        found = []
        for dirpath, _, filenames in os.walk(base):
            rel_dir = os.path.relpath(dirpath, base)
            for filename in filenames:
                parts = [] if rel_dir == os.curdir else rel_dir.split(os.sep)
                found.append(prefix + '/'.join(parts + [filename]))
        return sorted(found)


class PackedRefs:
    # The packed-refs index, parsed once per instance

    def __init__(self, entries):
        self.entries = entries
        self.by_name = {entry.name: entry for entry in entries}

    @classmethod
    def read(cls, common_dir):
        return cls(parse_packed_refs(objects.read_packed_refs(common_dir)))

    def lookup(self, refname):
        entry = self.by_name.get(refname)
        return entry.sha if entry else None

    def names(self, prefix):
        return sorted(name for name in self.by_name if name.startswith(prefix))


def ref_stores(common_dir): # Backing stores in lookup order
    return [LooseRefs(common_dir), PackedRefs.read(common_dir)]


def resolve_ref(common_dir, refname): # Resolves a full ref name to a hash, or None if no store has it
    for store in ref_stores(common_dir):
        sha = store.lookup(refname)
        if sha:
            return sha
    return None


def branch_name(refname): # Strips refs/heads/ so slashes inside the branch name survive
    if refname.startswith(HEADS_PREFIX):
        return refname[len(HEADS_PREFIX):]
    return refname


def resolve_head(location, strict=False): # Returns (branch, sha) for the HEAD of a GitLocation; an unreadable branch ref only loses the sha
    head_path = os.path.join(location.worktree_git_dir, 'HEAD')
    if not os.path.isfile(head_path):
        logger.debug("No HEAD in %s", location.worktree_git_dir)
        return None, None
    with open(head_path, 'r', encoding='utf-8') as f:
        refname, sha = parse_head(f.read())
    if refname is None:
        return None, sha

    try:
        sha = resolve_ref(location.common_git_dir, refname)
    except MalformedRefError as e:
        if strict:
            raise
        logger.debug("Cannot read %s: %s", refname, e)
        return branch_name(refname), None
    if sha is None:
        logger.debug("%s does not point at any commit yet", refname)
    return branch_name(refname), sha
