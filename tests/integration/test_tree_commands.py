"""Integration tests for write-tree, ls-tree and commit-tree."""

import pytest
from click.testing import CliRunner
from shale.cli.main import cli
from shale.core.commit import build_commit
from shale.core.objects import Blob
from shale.core.tree import TreeBuilder
from tests.conftest import EMPTY_TREE_HASH, HELLO_WORLD_HASH


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def in_repo(repo, working_files, monkeypatch):
    monkeypatch.chdir(repo.work_tree)
    return repo


def write_tree(runner):
    result = runner.invoke(cli, ['write-tree'])
    assert result.exit_code == 0
    return result.output.strip()


class TestWriteTree:
    """Tests for shale write-tree."""
    
    def test_prints_root_tree_hash(self, runner, in_repo):
        tree_hash = write_tree(runner)
        assert tree_hash == TreeBuilder(in_repo).build().hash
    
    def test_persists_all_objects(self, runner, in_repo):
        tree_hash = write_tree(runner)
        
        pending = [tree_hash]
        seen = 0
        while pending:
            obj = in_repo.read_object(pending.pop())
            seen += 1
            if obj.type == 'tree':
                pending.extend(entry.hash for entry in obj.entries)
        assert seen == 4
    
    def test_from_subdirectory_uses_root(self, runner, in_repo, monkeypatch):
        expected = write_tree(runner)
        monkeypatch.chdir(in_repo.work_tree / 'subdir')
        assert write_tree(runner) == expected
    
    def test_empty_repository(self, runner, repo, monkeypatch):
        monkeypatch.chdir(repo.work_tree)
        assert write_tree(runner) == EMPTY_TREE_HASH
    
    def test_outside_repository(self, runner, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        result = runner.invoke(cli, ['write-tree'])
        assert result.exit_code != 0
    
    def test_verbose_logs_writes(self, runner, in_repo):
        result = runner.invoke(cli, ['--verbose', 'write-tree'])
        assert result.exit_code == 0
        assert 'Wrote tree' in result.output


class TestLsTree:
    """Tests for shale ls-tree."""
    
    def test_name_only(self, runner, in_repo):
        tree_hash = write_tree(runner)
        result = runner.invoke(cli, ['ls-tree', '--name-only', tree_hash])
        assert result.exit_code == 0
        assert result.output == 'root_file.txt\nsubdir\n'
    
    def test_full_listing(self, runner, in_repo):
        tree_hash = write_tree(runner)
        tree = in_repo.read_object(tree_hash)
        
        result = runner.invoke(cli, ['ls-tree', tree_hash[:8]])
        
        assert result.exit_code == 0
        assert result.output == (
            f'100644 blob {tree.entries[0].hash}\troot_file.txt\n'
            f'040000 tree {tree.entries[1].hash}\tsubdir\n'
        )
    
    def test_rejects_blob(self, runner, in_repo):
        in_repo.write_object(Blob(b'Hello World\n'))
        result = runner.invoke(cli, ['ls-tree', '--name-only', HELLO_WORLD_HASH])
        assert result.exit_code != 0
        assert 'not a tree' in result.output
    
    def test_missing_tree(self, runner, in_repo):
        result = runner.invoke(cli, ['ls-tree', '--name-only', 'a' * 40])
        assert result.exit_code != 0


class TestCommitTree:
    """Tests for shale commit-tree."""
    
    def test_commit(self, runner, in_repo):
        tree_hash = write_tree(runner)
        
        result = runner.invoke(cli, ['commit-tree', tree_hash, '-m', 'test message'])
        
        assert result.exit_code == 0
        commit_hash = result.output.strip()
        assert commit_hash == build_commit(in_repo, tree_hash, 'test message').hash
        assert in_repo.read_object(commit_hash).tree == tree_hash
    
    def test_commit_with_parent(self, runner, in_repo):
        tree_hash = write_tree(runner)
        first = runner.invoke(cli, ['commit-tree', tree_hash, '-m', 'first']).output.strip()
        
        result = runner.invoke(cli, ['commit-tree', tree_hash[:7], '-p', first[:7], '-m', 'second'])
        
        assert result.exit_code == 0
        commit = in_repo.read_object(result.output.strip())
        assert commit.parents == [first]
        assert commit.message == 'second\n'
    
    def test_requires_message(self, runner, in_repo):
        tree_hash = write_tree(runner)
        result = runner.invoke(cli, ['commit-tree', tree_hash])
        assert result.exit_code != 0
    
    def test_unknown_tree(self, runner, in_repo):
        result = runner.invoke(cli, ['commit-tree', 'b' * 40, '-m', 'msg'])
        assert result.exit_code != 0
        assert 'not found' in result.output
    
    def test_blob_is_not_a_tree(self, runner, in_repo):
        in_repo.write_object(Blob(b'Hello World\n'))
        result = runner.invoke(cli, ['commit-tree', HELLO_WORLD_HASH, '-m', 'msg'])
        assert result.exit_code != 0
        assert 'not a tree' in result.output
