"""Shale - a content-addressable object store for filesystem snapshots."""

from loguru import logger

__version__ = '0.1.0'

# Library code logs through loguru but stays quiet unless an application
# (such as the shale CLI) enables it.
logger.disable('shale')

from shale.core.repository import Repository
from shale.core.objects import ShaleObject, Blob, Tree, Commit

__all__ = [
    'Repository',
    'ShaleObject',
    'Blob',
    'Tree',
    'Commit',
]
