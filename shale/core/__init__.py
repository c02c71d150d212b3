"""Core functionality for Shale.

This module contains the object model and its storage:
- Hashing (hash)
- Framing and compression (codec)
- Shale objects (Blob, Tree, Commit)
- Loose object storage (store)
- Tree and commit builders
- Repository and configuration management
"""

from shale.core.codec import ObjectKind, encode, decode
from shale.core.objects import ShaleObject, Blob, Tree, TreeEntry, Commit
from shale.core.repository import Repository
from shale.core.store import ObjectStore
from shale.core.tree import TreeBuilder
from shale.core.commit import build_commit
from shale.core.hash import hash_object
from shale.core.config import Config

__all__ = [
    'ObjectKind',
    'encode',
    'decode',
    'ShaleObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
    'Repository',
    'ObjectStore',
    'TreeBuilder',
    'build_commit',
    'Config',
    'hash_object',
]
