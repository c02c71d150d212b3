"""Hash utilities for Shale."""

import hashlib
import re

HASH_RAW_LENGTH = 20

_HEX_RE = re.compile(r'^[0-9a-f]{40}$')


def digest(data: bytes) -> bytes:
    """
    Compute the raw 20-byte SHA-1 digest of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        20 raw bytes
    """
    return hashlib.sha1(data).digest()


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def is_valid_hash(value: str) -> bool:
    """Return True if value is a full 40-character lowercase hex digest."""
    return bool(_HEX_RE.match(value))
