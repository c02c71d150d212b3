"""Compose commit objects."""

from typing import Optional

from loguru import logger

from .codec import ObjectKind
from .errors import WrongObjectKind
from .objects import Commit

# Identity is not managed; every commit carries the same placeholders.
AUTHOR = 'Shale <shale@localhost> 0 +0000'
COMMITTER = 'Shale <shale@localhost> 0 +0000'


def build_commit(repo, tree_hash: str, message: str, parent_hash: Optional[str] = None) -> Commit:
    """
    Build a commit pointing at a stored tree.
    
    The tree (and the parent, when given) must already be in the object
    store; the commit itself is not written.
    
    Args:
        repo: Repository holding the tree
        tree_hash: Hash of a stored tree object
        message: Commit message; a trailing newline is added if missing
        parent_hash: Hash of the parent commit, if any
        
    Raises:
        NotFound: tree or parent is not stored
        CorruptObject: tree or parent cannot be decoded
        WrongObjectKind: tree_hash is not a tree or parent_hash not a commit
    """
    tree = repo.read_object(tree_hash)
    if tree.kind is not ObjectKind.TREE:
        raise WrongObjectKind(tree_hash, 'tree', tree.type)
    
    parents = []
    if parent_hash is not None:
        parent = repo.read_object(parent_hash)
        if parent.kind is not ObjectKind.COMMIT:
            raise WrongObjectKind(parent_hash, 'commit', parent.type)
        parents.append(parent_hash)
    
    commit = Commit.create(
        tree_hash=tree_hash,
        parent_hashes=parents,
        author=AUTHOR,
        committer=COMMITTER,
        message=message,
    )
    logger.debug(f"Built commit {commit.hash} for tree {tree_hash}")
    return commit
