"""Build tree objects from directories on disk."""

import os
import stat
from pathlib import Path
from typing import List, NamedTuple, Optional, Union

from loguru import logger

from .errors import IOFailure, NotADirectory, UnsupportedEntryType
from .objects import EXECUTABLE_MODE, FILE_MODE, TREE_MODE, Blob, ShaleObject, Tree


class _Child(NamedTuple):
    key: bytes
    name: str
    path: Path
    mode: str


class _PendingDir:
    """A directory whose children are still being turned into objects."""

    def __init__(self, path: Path, name: str, children: List[_Child]):
        self.path = path
        self.name = name
        # Reversed so pop() hands out children in ascending name order.
        self.children = children[::-1]
        self.tree = Tree()


def file_mode(st_mode: int) -> str:
    """Tree entry mode for a regular file."""
    return EXECUTABLE_MODE if st_mode & stat.S_IXUSR else FILE_MODE


class TreeBuilder:
    """
    Turns a directory into Tree and Blob objects.
    
    The walk keeps its own stack of pending directories instead of
    recursing, so directory depth is not limited by the interpreter's
    recursion limit. Children are visited in byte order of their names,
    which makes the resulting hash independent of the order the
    filesystem lists them in.
    
    Args:
        repo: Repository whose metadata directory is left out of every tree
        write: Persist every blob and tree as it is built
    """
    
    def __init__(self, repo, write: bool = False):
        self.repo = repo
        self.write = write
    
    def build(self, path: Optional[Union[str, Path]] = None) -> Tree:
        """
        Build the tree for a directory (the repository root by default).
        
        Raises:
            NotADirectory: path is not a directory
            UnsupportedEntryType: a symlink, device, socket or fifo was found
            IOFailure: a directory could not be listed or a file read
        """
        root = Path(path).resolve() if path is not None else self.repo.work_tree
        try:
            st = root.stat()
        except OSError as e:
            raise IOFailure(root, 'stat', e.strerror) from e
        if not stat.S_ISDIR(st.st_mode):
            raise NotADirectory(root)
        
        stack = [_PendingDir(root, '', self._list_children(root))]
        while True:
            pending = stack[-1]
            if pending.children:
                child = pending.children.pop()
                if child.mode == TREE_MODE:
                    stack.append(_PendingDir(child.path, child.name, self._list_children(child.path)))
                else:
                    blob = self.build_file(child.path)
                    pending.tree.add_entry(child.mode, 'blob', self._store(blob), child.name)
                continue
            
            stack.pop()
            tree_hash = self._store(pending.tree)
            if not stack:
                logger.debug(f"Built tree {tree_hash} for {root}")
                return pending.tree
            stack[-1].tree.add_entry(TREE_MODE, 'tree', tree_hash, pending.name)
    
    def build_file(self, path: Union[str, Path]) -> Blob:
        """
        Build the blob for a regular file.
        
        Raises:
            NotAFile: path is not a regular file
        """
        return Blob.from_file(path)
    
    def _store(self, obj: ShaleObject) -> str:
        if self.write:
            return self.repo.write_object(obj)
        return obj.hash
    
    def _list_children(self, directory: Path) -> List[_Child]:
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            raise IOFailure(directory, 'list directory', e.strerror) from e
        
        children = []
        for entry in entries:
            entry_path = directory / entry.name
            if entry_path == self.repo.meta_dir:
                continue
            try:
                if entry.is_dir(follow_symlinks=False):
                    mode = TREE_MODE
                elif entry.is_file(follow_symlinks=False):
                    mode = file_mode(entry.stat(follow_symlinks=False).st_mode)
                else:
                    raise UnsupportedEntryType(entry_path)
            except OSError as e:
                raise IOFailure(entry_path, 'stat', e.strerror) from e
            children.append(_Child(os.fsencode(entry.name), entry.name, entry_path, mode))
        
        children.sort(key=lambda child: child.key)
        logger.debug(f"Listed {len(children)} entries in {directory}")
        return children
