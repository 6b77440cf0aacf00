# What it does: Reads the object database and the packed-refs index, and decodes commit and tag objects
# How it does: Loose objects are zlib streams stored under `objects/<first 2 hex>/<remaining hex>`. `read_object` inflates one and splits off the `<type> <size>\0` header. Commit and tag bodies are parsed into small records. Objects that exist only inside a pack file are reported as absent
# What data structure it uses: Hash Table / Dictionary (the object database is a content-addressed store keyed by hash). Commits form a Directed Acyclic Graph through their parent hashes

import logging
import os
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from .errors import DecodeUnavailableError

try:
    import zlib
except ImportError: # Some embedded interpreters are built without zlib; loose objects are then unreadable
    zlib = None

logger = logging.getLogger(__name__)

SHA_RE = re.compile(r'^(?:[0-9a-f]{40}|[0-9a-f]{64})$')


def is_sha(value):
    return bool(value) and SHA_RE.match(value) is not None


@dataclass(frozen=True)
class Commit:
    sha: str
    tree: str = None
    parents: list = field(default_factory=list)
    author: str = None
    author_date: datetime = None
    committer: str = None
    committer_date: datetime = None
    message: str = None


@dataclass(frozen=True)
class TagObject:
    object: str = None
    type: str = None
    tag: str = None
    tagger: str = None
    message: str = None


def object_path(common_dir, sha):
    return os.path.join(common_dir, 'objects', sha[:2], sha[2:])


def read_object(common_dir, sha, strict=False): # Reads a loose object by its hash and returns (type, body), or None if it is not stored loose
    if not is_sha(sha):
        return None
    path = object_path(common_dir, sha)
    if not os.path.isfile(path):
        return None
    if zlib is None:
        if strict:
            raise DecodeUnavailableError(f"Cannot inflate object {sha}: zlib is not available")
        logger.debug("zlib is not available, treating object %s as absent", sha)
        return None

    with open(path, 'rb') as f:
        compressed_data = f.read()

    try:
        data = zlib.decompress(compressed_data)
    except zlib.error as e:
        raise DecodeUnavailableError(f"Cannot inflate object {sha}: {e}") from e

    null_byte_index = data.find(b'\0')
    if null_byte_index < 0:
        raise DecodeUnavailableError(f"Object {sha} has no header terminator")
    try:
        obj_type, size = data[:null_byte_index].decode('ascii').split(' ')
        size = int(size)
    except ValueError as e:
        raise DecodeUnavailableError(f"Object {sha} has a malformed header") from e

    content = data[null_byte_index + 1:]
    if size != len(content):
        raise DecodeUnavailableError(f"Object {sha} declares {size} bytes but holds {len(content)}")
    return obj_type, content


def read_packed_refs(common_dir): # Returns the lines of the packed-refs file, or an empty list if there is none
    path = os.path.join(common_dir, 'packed-refs')
    if not os.path.isfile(path):
        return []
    with open(path, 'r', encoding='utf-8') as f:
        return f.read().splitlines()


def split_headers(body): # Splits an object body into (header lines, message), folding continuation lines into their header
    text = body.decode('utf-8', errors='replace')
    head, _, message = text.partition('\n\n')
    headers = []
    for line in head.split('\n'):
        if line.startswith(' ') and headers:
            headers[-1] = (headers[-1][0], headers[-1][1] + '\n' + line[1:])
            continue
        key, _, value = line.partition(' ')
        if key:
            headers.append((key, value))
    return headers, message.strip()


def parse_signature(value): # Parses `<name> <email> <epoch> <+HHMM>` into (identity, UTC datetime)
    # The offset only says where the commit was made, the instant is the epoch itself
    parts = value.rsplit(' ', 2)
    if len(parts) != 3:
        raise DecodeUnavailableError(f"Malformed signature line: {value!r}")
    identity, epoch, offset = parts
    if not re.match(r'^[+-]\d{4}$', offset):
        raise DecodeUnavailableError(f"Malformed timezone offset: {offset!r}")
    try:
        instant = datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=int(epoch))
    except (ValueError, OverflowError) as e:
        raise DecodeUnavailableError(f"Malformed timestamp: {epoch!r}") from e
    return identity, instant


def parse_commit(sha, body): # Parses a commit body into a Commit
    headers, message = split_headers(body)
    values = {'parents': []}
    for key, value in headers:
        if key == 'tree':
            values['tree'] = value
        elif key == 'parent':
            values['parents'].append(value.strip())
        elif key == 'author':
            values['author'], values['author_date'] = parse_signature(value)
        elif key == 'committer':
            values['committer'], values['committer_date'] = parse_signature(value)
    if 'tree' not in values:
        raise DecodeUnavailableError(f"Commit {sha} has no tree header")
    return Commit(sha=sha, message=message, **values)


def parse_tag(body): # Parses an annotated tag body into a TagObject
    headers, message = split_headers(body)
    values = {key: value for key, value in headers if key in ('object', 'type', 'tag', 'tagger')}
    if 'object' not in values:
        raise DecodeUnavailableError("Tag object has no object header")
    return TagObject(message=message, **values)


def read_commit(common_dir, sha, strict=False): # Reads and decodes a commit, or returns None when it is not stored loose
    obj = read_object(common_dir, sha, strict=strict)
    if obj is None:
        logger.debug("Commit %s is not available as a loose object", sha)
        return None
    obj_type, content = obj
    if obj_type != 'commit':
        raise DecodeUnavailableError(f"Object {sha} is a {obj_type}, not a commit")
    return parse_commit(sha, content)
