"""Inclusion proof fuzzing with mutated proofs and out-of-range indexes."""
from __future__ import annotations
import atheris
import sys
import random

with atheris.instrument_imports():
    from merkle_core.hashing import hash_data
    from merkle_core.proof import Direction, verify_inclusion
    from merkle_core.tree import MerkleTree


def TestOneInput(data: bytes):  # noqa: N802
    if len(data) < 8:
        return
    seed = int.from_bytes(data[:4], "little")
    random.seed(seed)
    chunk_len = 1 + (data[4] % 32)
    body = data[5:]
    raw = [body[i : i + chunk_len] for i in range(0, min(len(body), chunk_len * 16), chunk_len)]
    leaves = list(dict.fromkeys(hash_data(x) for x in raw if x))
    if len(leaves) < 3:
        return
    tree = MerkleTree.from_hashes(leaves)
    idx = seed % len(leaves)
    # any index outside the stored level is a clean False
    if tree.verify_with_index(leaves[idx], tree.leaf_count + (seed % 7)):
        raise RuntimeError("out-of-range index verified")
    if tree.verify_with_index(leaves[idx], -1 - (seed % 7)):
        raise RuntimeError("negative index verified")
    proof = tree.proof_of_inclusion_with_index(leaves[idx], idx)
    path = list(proof.path)
    if random.random() < 0.2 and path:
        sib, side = path[0]
        if random.random() < 0.5:
            path[0] = (bytes([sib[0] ^ 0x01]) + sib[1:], side)
        elif sib != leaves[idx]:
            flipped = Direction.LEFT if side is Direction.RIGHT else Direction.RIGHT
            path[0] = (sib, flipped)
        else:
            return
        if verify_inclusion(leaves[idx], path, tree.root):
            raise RuntimeError("tampered proof unexpectedly verified")
    elif not verify_inclusion(leaves[idx], path, tree.root):
        raise RuntimeError("valid proof failed")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
