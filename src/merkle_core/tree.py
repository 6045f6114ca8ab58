from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from .errors import FailedToBuild, HashAlreadyExists, InvalidHash
from .hashing import HashLike, coerce_hash, combine, hash_data, to_hex
from .proof import Direction, ProofOfInclusion, fold_path


def _build_levels(hashes: List[bytes]) -> List[List[bytes]]:
    if not hashes:
        raise FailedToBuild("no leaves")
    lvl = list(hashes)
    levels = []
    while len(lvl) > 1:
        if len(lvl) % 2 != 0:
            lvl.append(lvl[-1])  # pad: duplicate last, stored in the level
        levels.append(lvl)
        lvl = [combine(lvl[i], lvl[i + 1]) for i in range(0, len(lvl), 2)]
    levels.append(lvl)
    return levels


@dataclass
class MerkleTree:
    """Binary SHA3-256 Merkle tree.

    ``levels[0]`` holds the leaves in insertion order; every level above holds
    the combined hashes of adjacent pairs of the level below. Odd-length
    levels are padded by duplicating their last hash, and the duplicate is
    stored, so every level but the root has even length.
    """

    _levels: List[List[bytes]]

    @classmethod
    def from_hashes(cls, hashes: Iterable[HashLike]) -> "MerkleTree":
        try:
            leaves = [coerce_hash(h) for h in hashes]
        except (TypeError, ValueError) as e:
            raise FailedToBuild(str(e)) from e
        return cls(_build_levels(leaves))

    @classmethod
    def from_data(cls, items: Iterable[Union[bytes, str]]) -> "MerkleTree":
        return cls.from_hashes([hash_data(item) for item in items])

    @property
    def root(self) -> bytes:
        return self._levels[-1][0]

    @property
    def root_hex(self) -> str:
        return to_hex(self.root)

    @property
    def levels(self) -> List[List[bytes]]:
        return [list(level) for level in self._levels]

    @property
    def leaves(self) -> List[bytes]:
        return list(self._levels[0])

    @property
    def leaf_count(self) -> int:
        """Stored level-0 length, padding slot included."""
        return len(self._levels[0])

    @property
    def height(self) -> int:
        return len(self._levels)

    def index_of(self, leaf: HashLike) -> Optional[int]:
        try:
            h = coerce_hash(leaf)
        except (TypeError, ValueError):
            return None
        try:
            return self._levels[0].index(h)
        except ValueError:
            return None

    def _check_leaf(self, leaf: HashLike, index: int) -> bytes:
        try:
            h = coerce_hash(leaf)
        except (TypeError, ValueError) as e:
            raise InvalidHash(str(e)) from e
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidHash(f"invalid leaf index: {index!r}")
        if index < 0 or index >= len(self._levels[0]):
            raise InvalidHash(f"leaf index {index} out of range")
        if self._levels[0][index] != h:
            raise InvalidHash("Hash is not part of the tree")
        return h

    def proof_of_inclusion_with_index(
        self, leaf: HashLike, index: int
    ) -> ProofOfInclusion:
        """Proof for ``leaf`` at ``index`` in O(log n)."""
        h = self._check_leaf(leaf, index)
        path = []
        idx = index
        for level in self._levels:
            if len(level) == 1:
                break
            if idx % 2 == 0:
                # unpaired tail node pairs with itself, as the builder does
                sibling = level[idx + 1] if idx + 1 < len(level) else level[idx]
                path.append((sibling, Direction.RIGHT))
            else:
                path.append((level[idx - 1], Direction.LEFT))
            idx //= 2
        return ProofOfInclusion(leaf=h, index=index, path=path)

    def proof_of_inclusion(self, leaf: HashLike) -> ProofOfInclusion:
        """Proof for the first leaf equal to ``leaf``, found by linear scan."""
        index = self.index_of(leaf)
        if index is None:
            raise InvalidHash("Hash is not part of the tree")
        return self.proof_of_inclusion_with_index(leaf, index)

    def verify_with_index(self, leaf: HashLike, index: int) -> bool:
        try:
            proof = self.proof_of_inclusion_with_index(leaf, index)
        except InvalidHash:
            return False
        return fold_path(proof.leaf, proof.path) == self.root

    def verify(self, leaf: HashLike) -> bool:
        index = self.index_of(leaf)
        if index is None:
            return False
        return self.verify_with_index(leaf, index)

    def add_hash(self, leaf: HashLike) -> None:
        """Append a leaf and rebuild every level above it.

        If the last two leaves are equal the tail is taken to be a padding
        slot and is overwritten instead of grown. Two genuinely equal leaves
        at the tail are indistinguishable from padding and get the same
        treatment.
        """
        try:
            h = coerce_hash(leaf)
        except (TypeError, ValueError) as e:
            raise InvalidHash(str(e)) from e
        if self.verify(h):
            raise HashAlreadyExists("Hash is already contained in the tree")

        leaves = list(self._levels[0])
        if len(leaves) >= 2 and leaves[-1] == leaves[-2]:
            leaves[-1] = h
        else:
            leaves.append(h)
        # swap in one assignment; readers never see a half-built tree
        self._levels = _build_levels(leaves)

    def add_data(self, item: Union[bytes, str]) -> None:
        self.add_hash(hash_data(item))

    def dump(self) -> str:
        """All levels, root level first, one hex hash per line."""
        lines = []
        for n, level in enumerate(reversed(self._levels)):
            lines.append(f"LEVEL {n}:")
            lines.extend(f"- {to_hex(h)}" for h in level)
        return "\n".join(lines)
