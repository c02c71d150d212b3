"""Loose object storage: one zlib-compressed file per object."""

import contextlib
import os
import re
import tempfile
import zlib
from pathlib import Path
from typing import Optional

from loguru import logger

from . import codec
from .errors import CorruptObject, IOFailure, NotFound
from .hash import hash_object, is_valid_hash
from .objects import ShaleObject

MIN_PREFIX_LENGTH = 4
TEMP_PREFIX = 'tmp_obj_'

_PREFIX_RE = re.compile(r'^[0-9a-f]+$')


class ObjectStore:
    """
    Maps hashes to files under an objects directory.
    
    Objects are stored in subdirectories named by the first 2 characters
    of the hash, with the remaining 38 characters as the filename.
    Example: ab/cdef0123456789... for hash abcdef0123456789...
    
    There is no locking: each write goes to a temporary file that is renamed
    over the final path, and two writers storing the same content produce
    the same bytes.
    """
    
    def __init__(self, objects_dir: Path, compression_level: int = zlib.Z_DEFAULT_COMPRESSION):
        self.objects_dir = Path(objects_dir)
        self.compression_level = compression_level
    
    def object_path(self, hash: str) -> Path:
        """
        Get filesystem path for an object.
        
        Args:
            hash: 40-character SHA-1 hash
        """
        return self.objects_dir / hash[:2] / hash[2:]
    
    def write(self, obj: ShaleObject) -> str:
        """
        Write object to the store.
        
        Objects are stored compressed with zlib. The format is:
        <type> <size>\\0<content>
        
        Writing an object that is already present replaces it with the same bytes.
        
        Returns:
            str: SHA-1 hash of the object
            
        Raises:
            IOFailure: Directory or file could not be written
        """
        framed = obj.frame()
        hash = hash_object(framed)
        path = self.object_path(hash)
        
        compressed = codec.compress(framed, self.compression_level)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IOFailure(path.parent, 'create object directory', e.strerror) from e
        
        # Readers never see a partial file: write aside, then rename into place.
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=TEMP_PREFIX)
            with os.fdopen(fd, 'wb') as f:
                f.write(compressed)
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    os.remove(tmp_path)
            raise IOFailure(path, f'write {obj.type} object', e.strerror) from e
        
        logger.debug(f"Wrote {obj.type} {hash} ({len(framed)} bytes, {len(compressed)} compressed)")
        return hash
    
    def read(self, hash: str) -> ShaleObject:
        """
        Read object from the store.
        
        Args:
            hash: 40-character SHA-1 hash
            
        Returns:
            ShaleObject: Blob, Tree or Commit
            
        Raises:
            NotFound: No object is stored under hash
            CorruptObject: Stored bytes cannot be inflated or decoded, or do
                not hash back to the requested name
            IOFailure: Object file exists but cannot be read
        """
        if not is_valid_hash(hash):
            raise NotFound(hash)
        
        path = self.object_path(hash)
        try:
            with open(path, 'rb') as f:
                compressed = f.read()
        except FileNotFoundError:
            raise NotFound(hash, path) from None
        except OSError as e:
            raise IOFailure(path, 'read object', e.strerror) from e
        
        try:
            decoded = codec.decompress(compressed)
        except CorruptObject as e:
            logger.debug(f"Object {hash} at {path} is corrupt: {e}")
            raise
        
        actual = hash_object(codec.encode(decoded.kind, decoded.payload))
        if actual != hash:
            raise CorruptObject(f"object {hash} hashes to {actual}")
        
        logger.debug(f"Read {decoded.kind} {hash} ({decoded.size} bytes)")
        return ShaleObject.from_payload(decoded.kind, decoded.payload)
    
    def exists(self, hash: str) -> bool:
        return is_valid_hash(hash) and self.object_path(hash).is_file()
    
    def resolve_prefix(self, prefix: str) -> Optional[str]:
        """
        Resolve an abbreviated hash to a full one.
        
        Returns:
            The unique full hash starting with prefix, or None when nothing
            or more than one object matches.
        """
        prefix = prefix.lower()
        if is_valid_hash(prefix):
            return prefix
        if len(prefix) < MIN_PREFIX_LENGTH or not _PREFIX_RE.match(prefix):
            return None
        
        subdir = self.objects_dir / prefix[:2]
        if not subdir.is_dir():
            return None
        
        matches = [
            prefix[:2] + obj_file.name
            for obj_file in subdir.iterdir()
            if (prefix[:2] + obj_file.name).startswith(prefix)
        ]
        if len(matches) == 1:
            return matches[0]
        return None
    
    def __repr__(self) -> str:
        return f"ObjectStore(path={self.objects_dir})"
