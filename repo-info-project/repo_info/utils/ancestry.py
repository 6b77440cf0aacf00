# What it does: Walks the commit history backward from a commit to find the nearest tagged ancestor
# How it does: Breadth-first search over parent links, so the first tagged commit reached is also the closest one, even across merges. Commits are decoded on demand. A commit that is not stored loose (for example one that lives only in a pack file) adds no parents, which is where the walk stops
# What data structure it uses: Graph Traversal (BFS with a queue) on the Directed Acyclic Graph formed by commits, with a set of visited hashes so shared ancestors are processed once

import logging
import math
from collections import deque

from . import objects
from .errors import RepoInfoError
from .tags import TagIndex

logger = logging.getLogger(__name__)


def walk_ancestry(common_dir, start_sha, strict=False): # Yields (sha, distance, commit) in BFS order; commit is None when it is not readable as a loose object
    visited = {start_sha}
    queue = deque([(start_sha, 0)])

    while queue:
        current_hash, distance = queue.popleft()
        try:
            commit = objects.read_commit(common_dir, current_hash, strict=strict)
        except (RepoInfoError, OSError) as e:
            if strict:
                raise
            logger.debug("Cannot decode commit %s, not following its parents: %s", current_hash, e)
            commit = None

        yield current_hash, distance, commit

        if commit is None:
            continue
        for parent in commit.parents:
            if parent not in visited:
                visited.add(parent)
                queue.append((parent, distance + 1))


def find_nearest_tag(common_dir, start_sha, tag_index=None, strict=False): # Returns (tag name, distance), or (None, inf) if no tag is reachable
    if tag_index is None:
        tag_index = TagIndex.build(common_dir, strict=strict)
    if not len(tag_index):
        return None, math.inf

    for sha, distance, _ in walk_ancestry(common_dir, start_sha, strict=strict):
        name = tag_index.name_for(sha)
        if name:
            return name, distance
    return None, math.inf
