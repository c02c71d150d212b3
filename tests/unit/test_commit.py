"""CommitBuilder tests."""

import hashlib

import pytest
from shale.core.commit import AUTHOR, COMMITTER, build_commit
from shale.core.errors import NotFound, WrongObjectKind
from shale.core.objects import Blob, Commit
from shale.core.tree import TreeBuilder
from tests.conftest import HELLO_WORLD_HASH


@pytest.fixture
def tree_hash(repo):
    (repo.work_tree / 'root_file.txt').write_bytes(b'root file content\n')
    return TreeBuilder(repo, write=True).build().hash


def test_build_commit_payload(repo, tree_hash):
    commit = build_commit(repo, tree_hash, 'test message')
    
    expected = (
        f'tree {tree_hash}\n'
        f'author {AUTHOR}\n'
        f'committer {COMMITTER}\n'
        '\n'
        'test message\n'
    ).encode()
    assert commit.serialize() == expected
    assert commit.hash == hashlib.sha1(b'commit %d\0' % len(expected) + expected).hexdigest()


def test_build_commit_deterministic(repo, tree_hash):
    first = build_commit(repo, tree_hash, 'test message')
    second = build_commit(repo, tree_hash, 'test message')
    assert first.hash == second.hash
    assert build_commit(repo, tree_hash, 'other message').hash != first.hash


def test_build_commit_does_not_write(repo, tree_hash):
    commit = build_commit(repo, tree_hash, 'test message')
    assert not repo.object_exists(commit.hash)


def test_build_commit_with_parent(repo, tree_hash):
    parent_hash = repo.write_object(build_commit(repo, tree_hash, 'first'))
    
    commit = build_commit(repo, tree_hash, 'second', parent_hash)
    
    assert commit.parents == [parent_hash]
    lines = commit.serialize().decode().split('\n')
    assert lines[0] == f'tree {tree_hash}'
    assert lines[1] == f'parent {parent_hash}'
    
    stored = repo.read_object(repo.write_object(commit))
    assert isinstance(stored, Commit)
    assert stored.parents == [parent_hash]
    assert stored.message == 'second\n'


def test_build_commit_missing_tree(repo):
    with pytest.raises(NotFound):
        build_commit(repo, 'f' * 40, 'test message')


def test_build_commit_on_blob(repo):
    repo.write_object(Blob(b'Hello World\n'))
    with pytest.raises(WrongObjectKind) as excinfo:
        build_commit(repo, HELLO_WORLD_HASH, 'test message')
    assert excinfo.value.actual == 'blob'


def test_build_commit_parent_must_be_commit(repo, tree_hash):
    with pytest.raises(WrongObjectKind):
        build_commit(repo, tree_hash, 'msg', parent_hash=tree_hash)


def test_build_commit_missing_parent(repo, tree_hash):
    with pytest.raises(NotFound):
        build_commit(repo, tree_hash, 'msg', parent_hash='e' * 40)
