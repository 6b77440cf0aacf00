# What it does: Finds which tags name a given commit
# How it does: Collects tag refs from the packed-refs index and from loose files under `refs/tags/` (loose wins on a name clash), peels annotated tags down to the commit they point at, and indexes the tag names by target commit. When several tags name one commit the lexicographically smallest name is reported
# What data structure it uses: Hash Table / Dictionary (commit hash -> sorted list of tag names)

import logging
from dataclasses import dataclass

from . import objects
from .errors import RepoInfoError
from .refs import TAGS_PREFIX, LooseRefs, PackedRefs

logger = logging.getLogger(__name__)

MAX_PEEL_DEPTH = 10


@dataclass(frozen=True)
class TagRef:
    name: str
    target_sha: str
    annotated: bool = False


def peel(common_dir, sha, strict=False): # Follows loose tag objects until a non-tag object; returns (target, annotated)
    annotated = False
    for _ in range(MAX_PEEL_DEPTH):
        obj = objects.read_object(common_dir, sha, strict=strict)
        if obj is None or obj[0] != 'tag':
            break
        tag = objects.parse_tag(obj[1])
        sha, annotated = tag.object, True
    return sha, annotated


def list_tags(common_dir, strict=False): # Every tag as a TagRef sorted by name; an unreadable tag is skipped unless strict
    resolved = {}

    for entry in PackedRefs.read(common_dir).entries:
        if not entry.name.startswith(TAGS_PREFIX):
            continue
        name = entry.name[len(TAGS_PREFIX):]
        try:
            if entry.peeled:
                resolved[name] = TagRef(name, entry.peeled, annotated=True)
            else:
                target, annotated = peel(common_dir, entry.sha, strict=strict)
                resolved[name] = TagRef(name, target, annotated)
        except (RepoInfoError, OSError) as e:
            if strict:
                raise
            logger.debug("Skipping packed tag %s: %s", name, e)

    loose = LooseRefs(common_dir)
    for refname in loose.names(TAGS_PREFIX):
        name = refname[len(TAGS_PREFIX):]
        try:
            target, annotated = peel(common_dir, loose.lookup(refname), strict=strict)
        except (RepoInfoError, OSError) as e:
            if strict:
                raise
            logger.debug("Skipping loose tag %s: %s", name, e)
            continue
        resolved[name] = TagRef(name, target, annotated)

    return [resolved[name] for name in sorted(resolved)]


class TagIndex:
    # Tag names grouped by the commit they resolve to

    def __init__(self, tags):
        self.by_target = {}
        for tag in tags:
            self.by_target.setdefault(tag.target_sha, []).append(tag.name)
        for names in self.by_target.values():
            names.sort()

    @classmethod
    def build(cls, common_dir, strict=False):
        return cls(list_tags(common_dir, strict=strict))

    def names_for(self, sha):
        return list(self.by_target.get(sha, []))

    def name_for(self, sha): # Smallest tag name pointing at sha, or None
        names = self.by_target.get(sha)
        return names[0] if names else None

    def __len__(self):
        return sum(len(names) for names in self.by_target.values())


def tag_naming(common_dir, target_sha, strict=False): # Name of the tag that points at target_sha, or None
    return TagIndex.build(common_dir, strict=strict).name_for(target_sha)
