"""Object framing and storage compression.

Every object is framed as ``<kind> <size>\\0<payload>`` before it is hashed,
and the framed bytes are zlib-compressed for storage.
"""

import zlib
from enum import Enum
from typing import NamedTuple, Tuple

from .errors import CorruptObject, FormatError, SizeMismatch, UnsupportedKind

# Longest header is "commit " plus a 20-digit size plus the NUL.
MAX_HEADER_LENGTH = 64


class ObjectKind(str, Enum):
    """The closed set of object kinds."""

    BLOB = 'blob'
    TREE = 'tree'
    COMMIT = 'commit'

    def __str__(self) -> str:
        return self.value


_KINDS = {kind.value: kind for kind in ObjectKind}


class Decoded(NamedTuple):
    """Result of decoding framed object bytes."""

    kind: ObjectKind
    size: int
    payload: bytes


def to_kind(token) -> ObjectKind:
    """Map a kind token (or ObjectKind) to ObjectKind, raising UnsupportedKind."""
    if isinstance(token, ObjectKind):
        return token
    try:
        return _KINDS[token]
    except KeyError:
        raise UnsupportedKind(str(token)) from None


def header(kind, size: int) -> bytes:
    """Build the ``<kind> <size>\\0`` header."""
    return f"{to_kind(kind).value} {size}\0".encode('ascii')


def encode(kind, payload: bytes) -> bytes:
    """
    Frame a payload with its header.
    
    Args:
        kind: Object kind (ObjectKind or its token)
        payload: Raw payload bytes
        
    Returns:
        bytes: ``<kind> <len(payload)>\\0`` followed by payload
    """
    return header(kind, len(payload)) + payload


def parse_header(raw: bytes) -> Tuple[ObjectKind, int]:
    """
    Parse a header (without its NUL terminator).
    
    Raises:
        FormatError: Header is not ASCII text of the form ``<token> <digits>``
        UnsupportedKind: Token is not a known kind
    """
    try:
        text = raw.decode('ascii')
    except UnicodeDecodeError:
        raise FormatError(f"object header is not valid text: {raw!r}") from None

    token, sep, digits = text.partition(' ')
    if not sep or not token or not digits or not all('0' <= c <= '9' for c in digits):
        raise FormatError(f"malformed object header: '{text}'")

    return to_kind(token), int(digits)


def decode(framed: bytes) -> Decoded:
    """
    Split framed bytes into kind, declared size and payload.
    
    Raises:
        FormatError: No NUL separator or malformed header
        UnsupportedKind: Unknown kind token
        SizeMismatch: Payload is shorter or longer than declared
    """
    nul = framed.find(b'\0')
    if nul < 0:
        raise FormatError("object header has no NUL separator")

    kind, size = parse_header(framed[:nul])
    payload = framed[nul + 1:]
    if len(payload) < size:
        raise SizeMismatch(size, len(payload), 'truncated')
    if len(payload) > size:
        raise SizeMismatch(size, len(payload), 'trailing bytes')
    return Decoded(kind, size, payload)


def compress(framed: bytes, level: int = zlib.Z_DEFAULT_COMPRESSION) -> bytes:
    """Deflate framed object bytes for storage."""
    return zlib.compress(framed, level)


def decompress(data: bytes) -> Decoded:
    """
    Inflate stored bytes and decode them.
    
    The header is inflated first; the payload is then inflated at most one
    byte past its declared size, so an oversized object is never fully
    expanded in memory.
    
    Raises:
        CorruptObject: Stream cannot be inflated, ends early, or is followed by junk
        FormatError, UnsupportedKind: Header problems
        SizeMismatch: Payload truncated or with trailing bytes
    """
    inflater = zlib.decompressobj()
    try:
        head = inflater.decompress(data, MAX_HEADER_LENGTH)
    except zlib.error as e:
        raise CorruptObject(f"cannot inflate object: {e}") from e

    nul = head.find(b'\0')
    if nul < 0:
        raise FormatError("object header has no NUL separator")

    kind, size = parse_header(head[:nul])
    payload = head[nul + 1:]

    try:
        while len(payload) <= size and not inflater.eof:
            chunk = inflater.decompress(inflater.unconsumed_tail, size - len(payload) + 1)
            if not chunk:
                break
            payload += chunk
    except zlib.error as e:
        raise CorruptObject(f"cannot inflate object: {e}") from e

    if len(payload) > size:
        raise SizeMismatch(size, len(payload), 'trailing bytes')
    if len(payload) < size:
        raise SizeMismatch(size, len(payload), 'truncated')
    if not inflater.eof:
        raise CorruptObject("compressed object stream is truncated")
    if inflater.unused_data:
        raise CorruptObject("unexpected data after compressed object stream")

    return Decoded(kind, size, payload)
