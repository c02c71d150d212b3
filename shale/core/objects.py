"""Shale objects: the closed union of Blob, Tree and Commit."""

import os
import stat
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Type, Union

from . import codec
from .codec import ObjectKind
from .errors import FormatError, IOFailure, NotAFile
from .hash import HASH_RAW_LENGTH, digest

FILE_MODE = '100644'
EXECUTABLE_MODE = '100755'
# Five-character form, as written by git itself.
TREE_MODE = '40000'
# Older objects of this format spell the subtree mode with a leading zero.
TREE_MODES = frozenset({TREE_MODE, '040000'})


class ShaleObject(ABC):
    """Base class for all Shale objects."""
    
    kind: ObjectKind
    
    def __init__(self):
        self._hash: Optional[str] = None
    
    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to bytes.
        
        Returns:
            bytes: Payload, without the header
        """
    
    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Deserialize object from bytes.
        
        Args:
            data: Payload, without the header
        """
    
    @property
    def type(self) -> str:
        """Object type token (blob, tree, commit)."""
        return self.kind.value
    
    @property
    def payload(self) -> bytes:
        return self.serialize()
    
    @property
    def size(self) -> int:
        """Payload length in bytes, header excluded."""
        return len(self.serialize())
    
    def frame(self) -> bytes:
        """Return ``<kind> <size>\\0<payload>``, the bytes that get hashed and stored."""
        return codec.encode(self.kind, self.serialize())
    
    def compute_hash(self) -> str:
        """
        Compute and cache object hash.
        
        Objects are hashed with a header containing the type and size.
        Format: <type> <size>\\0<content>
        
        Returns:
            str: 40-character SHA-1 hash
        """
        if self._hash is None:
            self._hash = self.digest().hex()
        return self._hash
    
    def digest(self) -> bytes:
        """Raw 20-byte SHA-1 of the framed object."""
        return digest(self.frame())
    
    @property
    def hash(self) -> str:
        """40-character SHA-1 hash."""
        return self.compute_hash()
    
    @staticmethod
    def from_payload(kind, payload: bytes) -> 'ShaleObject':
        """
        Build the object class matching kind from a raw payload.
        
        Raises:
            UnsupportedKind: kind is not blob, tree or commit
            FormatError: payload does not parse for that kind
        """
        obj = OBJECT_TYPES[codec.to_kind(kind)]()
        obj.deserialize(payload)
        return obj


class Blob(ShaleObject):
    """
    Represents file content.
    
    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """
    
    kind = ObjectKind.BLOB
    
    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''
    
    def serialize(self) -> bytes:
        return self.data
    
    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None
    
    @classmethod
    def from_file(cls, filepath: Union[str, Path]) -> 'Blob':
        """
        Create blob from a regular file.
        
        The blob size is the file length reported by stat; a file that
        changes length while being read is reported as an IOFailure.
        
        Raises:
            NotAFile: filepath is not a regular file
            IOFailure: file could not be opened or read
        """
        path = Path(filepath)
        try:
            st = path.lstat()
        except OSError as e:
            raise IOFailure(path, 'stat', e.strerror) from e
        if not stat.S_ISREG(st.st_mode):
            raise NotAFile(path)
        
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise IOFailure(path, 'read', e.strerror) from e
        
        if len(data) != st.st_size:
            raise IOFailure(path, 'read', f"file changed size while reading "
                                          f"({st.st_size} -> {len(data)} bytes)")
        return cls(data)
    
    def __repr__(self) -> str:
        size = len(self.data)
        return f"Blob(hash={self.hash[:7]}, size={size})"


class TreeEntry:
    """
    Represents a single entry in a tree.
    
    Each entry contains:
    - mode: '100644' for a file, '100755' for an executable, '40000' for a directory
    - type: Object type ('blob' or 'tree')
    - hash: SHA-1 hash of the object
    - name: Filename or directory name
    """
    
    def __init__(self, mode: str, obj_type: str, obj_hash: str, name: str):
        self.mode = mode
        self.type = obj_type
        self.hash = obj_hash
        self.name = name
    
    @property
    def sort_key(self) -> bytes:
        """Name as raw bytes; entries sort byte-lexicographically."""
        return os.fsencode(self.name)
    
    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.type} {self.hash[:7]} {self.name})"
    
    def __lt__(self, other: 'TreeEntry') -> bool:
        return self.sort_key < other.sort_key
    
    def __eq__(self, other) -> bool:
        if not isinstance(other, TreeEntry):
            return NotImplemented
        return (self.mode, self.type, self.hash, self.name) == \
            (other.mode, other.type, other.hash, other.name)


class Tree(ShaleObject):
    """
    Represents directory structure.
    
    A tree contains entries pointing to blobs (files) and other trees
    (subdirectories). Entries added with add_entry are serialized in byte
    order of their names; entries read from a payload keep the order they
    were stored in.
    """
    
    kind = ObjectKind.TREE
    
    def __init__(self):
        super().__init__()
        self.entries: List[TreeEntry] = []
        self._needs_sort = False
    
    def add_entry(self, mode: str, obj_type: str, obj_hash: str, name: str) -> None:
        """
        Add entry to tree.
        
        Args:
            mode: File mode
            obj_type: Object type ('blob' or 'tree')
            obj_hash: Object hash
            name: Entry name
        """
        self.entries.append(TreeEntry(mode, obj_type, obj_hash, name))
        self._needs_sort = True
        self._hash = None
    
    def _ordered(self) -> List[TreeEntry]:
        if self._needs_sort:
            self.entries.sort(key=lambda entry: entry.sort_key)
            self._needs_sort = False
        return self.entries
    
    def serialize(self) -> bytes:
        """
        Serialize tree.
        
        Format: <mode> <name>\\0<20-byte hash>
        The hash is raw binary, unlike the hex hashes inside a commit.
        """
        parts = []
        for entry in self._ordered():
            parts.append(entry.mode.encode('ascii') + b' ' + entry.sort_key + b'\0')
            parts.append(bytes.fromhex(entry.hash))
        return b''.join(parts)
    
    def deserialize(self, data: bytes) -> None:
        """
        Deserialize tree.
        
        Raises:
            FormatError: An entry is cut short or its mode is not text
        """
        entries = []
        pos = 0
        
        while pos < len(data):
            space_pos = data.find(b' ', pos)
            null_pos = data.find(b'\0', pos)
            if space_pos < 0 or null_pos < 0 or space_pos > null_pos:
                raise FormatError(f"malformed tree entry at offset {pos}")
            
            try:
                mode = data[pos:space_pos].decode('ascii')
            except UnicodeDecodeError:
                raise FormatError(f"malformed tree entry mode at offset {pos}") from None
            name = os.fsdecode(data[space_pos + 1:null_pos])
            
            hash_bytes = data[null_pos + 1:null_pos + 1 + HASH_RAW_LENGTH]
            if len(hash_bytes) != HASH_RAW_LENGTH:
                raise FormatError(f"truncated hash in tree entry '{name}'")
            
            obj_type = 'tree' if mode in TREE_MODES else 'blob'
            entries.append(TreeEntry(mode, obj_type, hash_bytes.hex(), name))
            
            pos = null_pos + 1 + HASH_RAW_LENGTH
        
        self.entries = entries
        self._needs_sort = False
        self._hash = None
    
    def names(self) -> List[str]:
        return [entry.name for entry in self._ordered()]
    
    def __repr__(self) -> str:
        return f"Tree(entries={len(self.entries)})"


class Commit(ShaleObject):
    """
    Represents a commit.
    
    A commit captures:
    - Snapshot of project (tree hash)
    - Parent commit for history, if any
    - Author and committer lines
    - Other headers (encoding, gpgsig, ...) kept verbatim
    - Commit message, exactly as stored
    """
    
    kind = ObjectKind.COMMIT
    
    def __init__(self):
        super().__init__()
        self.tree: str = ''
        self.parents: List[str] = []
        self.author: str = ''
        self.committer: str = ''
        self.extra_headers: List[str] = []
        self.message: str = ''
    
    def serialize(self) -> bytes:
        """
        Serialize commit.
        
        Format:
        tree <tree-hash>
        parent <parent-hash>  (zero or more)
        author <identity>
        committer <identity>
        <other header lines>
        
        <commit message>
        """
        lines = [f'tree {self.tree}']
        for parent in self.parents:
            lines.append(f'parent {parent}')
        if self.author:
            lines.append(f'author {self.author}')
        if self.committer:
            lines.append(f'committer {self.committer}')
        lines.extend(self.extra_headers)
        
        return ('\n'.join(lines) + '\n\n' + self.message).encode('utf-8')
    
    def deserialize(self, data: bytes) -> None:
        try:
            content = data.decode('utf-8')
        except UnicodeDecodeError:
            raise FormatError("commit payload is not valid UTF-8") from None
        
        head, sep, message = content.partition('\n\n')
        if not sep:
            raise FormatError("commit payload has no blank line before the message")
        
        self.tree = ''
        self.parents = []
        self.author = ''
        self.committer = ''
        self.extra_headers = []
        for line in head.split('\n'):
            key, _, value = line.partition(' ')
            if key == 'tree':
                self.tree = value
            elif key == 'parent':
                self.parents.append(value)
            elif key == 'author':
                self.author = value
            elif key == 'committer':
                self.committer = value
            else:
                # Unknown headers and continuation lines (leading space) are kept as-is.
                self.extra_headers.append(line)
        
        if not self.tree:
            raise FormatError("commit payload has no tree line")
        
        self.message = message
        self._hash = None
    
    @classmethod
    def create(
        cls,
        tree_hash: str,
        parent_hashes: List[str],
        author: str,
        committer: str,
        message: str,
    ) -> 'Commit':
        """
        Create a new commit.
        
        Args:
            tree_hash: Hash of tree object
            parent_hashes: List of parent commit hashes
            author: Full author value (e.g., "Name <email> 0 +0000")
            committer: Full committer value
            message: Commit message; a trailing newline is added if missing
        """
        commit = cls()
        commit.tree = tree_hash
        commit.parents = list(parent_hashes)
        commit.author = author
        commit.committer = committer
        commit.message = message if message.endswith('\n') else message + '\n'
        return commit
    
    def __repr__(self) -> str:
        parent_info = f", parents={len(self.parents)}" if self.parents else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"


OBJECT_TYPES: Dict[ObjectKind, Type[ShaleObject]] = {
    ObjectKind.BLOB: Blob,
    ObjectKind.TREE: Tree,
    ObjectKind.COMMIT: Commit,
}
