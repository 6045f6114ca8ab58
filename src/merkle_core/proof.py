from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Sequence, Tuple

from .hashing import combine, to_hex


class Direction(str, Enum):
    """Side a sibling hash is concatenated on when folding towards the root."""

    LEFT = "left"
    RIGHT = "right"

    def label(self) -> str:
        return self.value.capitalize()


ProofPath = List[Tuple[bytes, Direction]]


def fold_path(leaf: bytes, path: Sequence[Tuple[bytes, Direction]]) -> bytes:
    h = leaf
    for sibling, side in path:
        if side is Direction.LEFT:
            h = combine(sibling, h)
        else:
            h = combine(h, sibling)
    return h


def verify_inclusion(
    leaf: bytes, path: Sequence[Tuple[bytes, Direction]], root: bytes
) -> bool:
    return fold_path(leaf, path) == root


@dataclass(frozen=True)
class ProofOfInclusion:
    """Sibling path from a leaf up to (but excluding) the root level.

    Entries are ordered leaf -> root. Hashes are copied out of the tree, so a
    proof stays valid as a snapshot after the tree is mutated.
    """

    leaf: bytes
    index: int
    path: ProofPath = field(default_factory=list)

    def __iter__(self) -> Iterator[Tuple[bytes, Direction]]:
        return iter(self.path)

    def __len__(self) -> int:
        return len(self.path)

    def compute_root(self) -> bytes:
        return fold_path(self.leaf, self.path)

    def verify(self, root: bytes) -> bool:
        return verify_inclusion(self.leaf, self.path, root)

    def dump(self) -> str:
        lines = [f"Proof of Inclusion for the leaf: {to_hex(self.leaf)}"]
        for sibling, side in self.path:
            lines.append(f"{to_hex(sibling)} - {side.label()}")
        return "\n".join(lines)
