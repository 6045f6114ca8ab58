from __future__ import annotations


class MerkleTreeError(Exception):
    """Base class for errors raised by the Merkle tree core."""


class FailedToBuild(MerkleTreeError, ValueError):
    """The tree could not be built (empty or malformed leaf input)."""


class InvalidHash(MerkleTreeError, LookupError):
    """The hash is not part of the tree, or not at the given index."""


class HashAlreadyExists(MerkleTreeError, ValueError):
    """The hash is already reachable from the root."""
