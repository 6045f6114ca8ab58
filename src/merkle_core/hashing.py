from __future__ import annotations
import hashlib
from typing import Union

HASH_SIZE = 32

HashLike = Union[bytes, bytearray, str]


def sha3(data: bytes) -> bytes:
    return hashlib.sha3_256(data).digest()


def hash_data(data: Union[bytes, bytearray, str]) -> bytes:
    """Hash one leaf element. Strings are hashed as their UTF-8 bytes."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    elif not isinstance(data, (bytes, bytearray)):
        raise TypeError(f"cannot hash {type(data).__name__}")
    return sha3(bytes(data))


def combine(left: bytes, right: bytes) -> bytes:
    """Parent node hash: SHA3-256 over the raw bytes of left then right."""
    return sha3(left + right)


def to_hex(h: bytes) -> str:
    return bytes(h).hex()


def from_hex(s: str) -> bytes:
    """Decode a hex hash string with strict length validation."""
    text = s.strip()
    if text[:2].lower() == "0x":
        text = text[2:]
    if any(c.isspace() for c in text):
        raise ValueError(f"invalid hex hash: {s!r}")
    try:
        raw = bytes.fromhex(text)
    except ValueError as e:
        raise ValueError(f"invalid hex hash: {s!r}") from e
    if len(raw) != HASH_SIZE:
        raise ValueError(f"hash must be {HASH_SIZE} bytes, got {len(raw)}")
    return raw


def coerce_hash(value: HashLike) -> bytes:
    if isinstance(value, str):
        return from_hex(value)
    if isinstance(value, (bytes, bytearray)):
        if len(value) != HASH_SIZE:
            raise ValueError(f"hash must be {HASH_SIZE} bytes, got {len(value)}")
        return bytes(value)
    raise TypeError(f"unsupported hash type: {type(value).__name__}")
