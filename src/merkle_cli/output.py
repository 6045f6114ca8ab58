from __future__ import annotations
from typing import Optional

from rich.console import Console
from rich.markup import escape

from merkle_core.proof import ProofOfInclusion
from merkle_core.tree import MerkleTree

# soft_wrap: hashes and messages must come out on one line each
console = Console(soft_wrap=True, highlight=False)


def q(elem: str) -> str:
    return escape(f'"{elem}"')


def inclusion_message(elem: str, index: Optional[int], ok: bool) -> str:
    if index is not None:
        if ok:
            return (
                f"{q(elem)} is included in the tree at index {index}. "
                "Run the `proof` command to see its Proof of Inclusion"
            )
        return f"{q(elem)} is not included in the tree at index {index}."
    if ok:
        return (
            f"{q(elem)} is included in the tree. "
            "Run the `proof` command to see its Proof of Inclusion."
        )
    return f"{q(elem)} is not included in the tree."


def print_tree(tree: MerkleTree, out: Console = console) -> None:
    out.print(tree.dump(), markup=False)


def print_proof(proof: ProofOfInclusion, out: Console = console) -> None:
    out.print(proof.dump(), markup=False)
