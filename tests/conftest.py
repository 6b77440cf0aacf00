# Shared pytest fixtures for repo-info tests

import hashlib
import os
import shutil
import sys
import tempfile
import zlib

import pytest

# Add repo-info-project to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'repo-info-project'))

AUTHOR = 'Robert Jackson <robert.w.jackson@me.com>'
AUTHOR_EPOCH = 1429099806 # 2015-04-15T12:10:06Z
HEAD_SHA = '5359aabd3872d9ffd160712e9615c5592dfe6745'
TREE_SHA = '4b825dc642cb6eb9a060e54bf8d69288fbee4904'


class RepoBuilder:
    # Writes metadata directories the way git lays them out on disk

    def __init__(self, root, metadata_dir_name='.git'):
        self.root = root
        self.git_dir = os.path.join(root, metadata_dir_name)

    def init(self, branch='master'):
        os.makedirs(os.path.join(self.git_dir, 'objects'), exist_ok=True)
        os.makedirs(os.path.join(self.git_dir, 'refs', 'heads'), exist_ok=True)
        os.makedirs(os.path.join(self.git_dir, 'refs', 'tags'), exist_ok=True)
        self.set_head(f'ref: refs/heads/{branch}\n')
        return self

    def path(self, *parts):
        return os.path.join(self.git_dir, *parts)

    def set_head(self, content):
        with open(self.path('HEAD'), 'w') as f:
            f.write(content)

    def write_ref(self, refname, sha):
        ref_path = self.path(*refname.split('/'))
        os.makedirs(os.path.dirname(ref_path), exist_ok=True)
        with open(ref_path, 'w') as f:
            f.write(f'{sha}\n')

    def write_packed_refs(self, *lines):
        with open(self.path('packed-refs'), 'w') as f:
            f.write('# pack-refs with: peeled fully-peeled sorted \n')
            for line in lines:
                f.write(f'{line}\n')

    def write_raw_object(self, sha, data): # Stores bytes at the object path for sha, as-is
        object_dir = self.path('objects', sha[:2])
        os.makedirs(object_dir, exist_ok=True)
        with open(os.path.join(object_dir, sha[2:]), 'wb') as f:
            f.write(data)

    def write_object(self, obj_type, content, sha=None): # Stores a loose object; the real hash is used unless sha is given
        data = f'{obj_type} {len(content)}\0'.encode() + content
        sha = sha or hashlib.sha1(data).hexdigest()
        self.write_raw_object(sha, zlib.compress(data))
        return sha

    def commit(self, message, parents=(), sha=None, author=AUTHOR, epoch=AUTHOR_EPOCH, offset='-0400'):
        lines = [f'tree {TREE_SHA}']
        lines += [f'parent {parent}' for parent in parents]
        lines.append(f'author {author} {epoch} {offset}')
        lines.append(f'committer {author} {epoch} {offset}')
        content = '\n'.join(lines) + f'\n\n{message}\n'
        return self.write_object('commit', content.encode(), sha=sha)

    def annotated_tag(self, name, target, sha=None, target_type='commit'):
        content = (
            f'object {target}\n'
            f'type {target_type}\n'
            f'tag {name}\n'
            f'tagger {AUTHOR} {AUTHOR_EPOCH} -0400\n'
            f'\n'
            f'Release {name}\n'
        )
        return self.write_object('tag', content.encode(), sha=sha)

    def chain(self, count, parents=(), prefix='commit'): # Writes count linear commits; returns their hashes oldest first
        shas = []
        for i in range(count):
            sha = self.commit(f'{prefix} {i}', parents=parents)
            shas.append(sha)
            parents = (sha,)
        return shas


@pytest.fixture
def temp_dir():
    # Creates a temporary directory that is cleaned up after the test
    # Also saves/restores cwd to prevent issues when tests change directories
    original_dir = os.getcwd()
    tmp = os.path.realpath(tempfile.mkdtemp())
    yield tmp
    os.chdir(original_dir)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def make_repo(temp_dir):
    # Factory for initialized repositories under temp_dir
    def factory(name='repo', metadata_dir_name='.git', branch='master'):
        root = os.path.join(temp_dir, name)
        os.makedirs(root, exist_ok=True)
        return RepoBuilder(root, metadata_dir_name).init(branch)
    return factory


@pytest.fixture
def nested_repo(make_repo):
    # A repository with a branch ref but no objects, plus nested subdirectories
    repo = make_repo('nested-repo')
    repo.write_ref('refs/heads/master', HEAD_SHA)
    os.makedirs(os.path.join(repo.root, 'foo', 'bar'))
    return repo


@pytest.fixture
def linked_worktree(make_repo):
    # A main repository and a linked worktree checked out in <main>/linked
    main = make_repo('linked-worktree')
    main.write_ref('refs/heads/master', HEAD_SHA)

    worktree_git_dir = main.path('worktrees', 'linked')
    os.makedirs(worktree_git_dir)
    linked_root = os.path.join(main.root, 'linked')
    os.makedirs(linked_root)
    with open(os.path.join(worktree_git_dir, 'HEAD'), 'w') as f:
        f.write('409372f3bd07c11bfacee3963f48571d675268d7\n')
    with open(os.path.join(worktree_git_dir, 'commondir'), 'w') as f:
        f.write('../..\n')
    with open(os.path.join(worktree_git_dir, 'gitdir'), 'w') as f:
        f.write(os.path.join(linked_root, '.git') + '\n')
    with open(os.path.join(linked_root, '.git'), 'w') as f:
        f.write('gitdir: ../.git/worktrees/linked\n')
    return main, linked_root


@pytest.fixture
def submodule(make_repo):
    # A superproject whose submodule metadata lives in .git/modules/my-submodule
    parent = make_repo('submodule')
    parent.write_ref('refs/heads/master', HEAD_SHA)

    module = RepoBuilder(parent.path('modules'), 'my-submodule').init()
    module.set_head('409372f3bd07c11bfacee3963f48571d675268d7\n')

    module_root = os.path.join(parent.root, 'my-submodule')
    os.makedirs(module_root)
    with open(os.path.join(module_root, '.git'), 'w') as f:
        f.write('gitdir: ../.git/modules/my-submodule\n')
    return parent, module_root
