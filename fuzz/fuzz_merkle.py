"""Fuzz harness for Merkle tree construction, proofs and incremental appends."""
from __future__ import annotations
import atheris
import sys

with atheris.instrument_imports():
    from merkle_core.errors import HashAlreadyExists
    from merkle_core.hashing import hash_data
    from merkle_core.tree import MerkleTree


def TestOneInput(data: bytes):  # noqa: N802
    if len(data) < 2:
        return
    # Split data deterministically into pseudo-leaves (bounded count)
    size = max(1, min(32, data[0]))
    chunks = [data[i : i + size] for i in range(1, min(len(data), 1 + size * 32), size)]
    if not chunks:
        return
    split = data[-1] % len(chunks) + 1
    tree = MerkleTree.from_data(chunks[:split])
    for chunk in chunks[split:]:
        try:
            tree.add_data(chunk)
        except HashAlreadyExists:
            continue
    for level in tree.levels[:-1]:
        if len(level) % 2:
            raise RuntimeError("odd non-root level")
    for chunk in chunks:
        leaf = hash_data(chunk)
        if not tree.verify(leaf):
            raise RuntimeError("added leaf does not verify")
        if tree.proof_of_inclusion(leaf).compute_root() != tree.root:
            raise RuntimeError("proof does not fold to root")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
