"""Shared pytest fixtures for Shale tests."""

import os
import pytest
import tempfile
import shutil
from pathlib import Path
from loguru import logger
from shale.core.config import Config
from shale.core.repository import Repository
from shale.core.objects import Blob, Tree


HELLO_WORLD_HASH = '557db03de997c86a4a028e1ebd3a1ceb225be238'
EMPTY_TREE_HASH = '4b825dc642cb6eb9a060e54bf8d69288fbee4904'


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path_factory, monkeypatch):
    """Keep the user's global config and SHALE_* variables out of tests."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.shaleconfig')
    for key in list(os.environ):
        if key.startswith('SHALE_'):
            monkeypatch.delenv(key)
    yield
    # The CLI installs sinks on streams that only live for one invocation.
    logger.remove()
    logger.disable('shale')


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(str(temp_dir))
    repo.init()
    return repo


@pytest.fixture
def sample_blob():
    """Create a sample blob object."""
    return Blob(b"Hello World\n")


@pytest.fixture
def sample_tree(repo, sample_blob):
    """Create a sample tree with one stored blob."""
    blob_hash = repo.write_object(sample_blob)
    tree = Tree()
    tree.add_entry('100644', 'blob', blob_hash, 'test.txt')
    return tree


@pytest.fixture
def working_files(repo):
    """Create sample file structure in repository."""
    file1 = repo.work_tree / "root_file.txt"
    (repo.work_tree / "subdir").mkdir()
    file2 = repo.work_tree / "subdir" / "subdir_file.txt"
    
    file1.write_bytes(b"root file content\n")
    file2.write_bytes(b"subdir file content\n")
    
    return {
        'root_file': file1,
        'subdir_file': file2,
    }
