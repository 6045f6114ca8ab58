from __future__ import annotations
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from .hashing import from_hex, to_hex
from .proof import Direction, ProofOfInclusion


def _norm_hex(v):
    if not isinstance(v, str):
        raise ValueError("hash must be a hex string")
    return to_hex(from_hex(v))


class ProofEntryModel(BaseModel):
    model_config = ConfigDict(strict=True)

    sibling: str
    direction: Literal["left", "right"]

    @field_validator("sibling", mode="before")
    @classmethod
    def _sibling_hex(cls, v):  # type: ignore[override]
        return _norm_hex(v)


class ProofModel(BaseModel):
    """JSON form of an inclusion proof.

    Hashes are lowercase hex; ``path`` is ordered leaf -> root. ``root`` is the
    root of the tree the proof was taken from and is informational only: a
    verifier should compare against a root it trusts.
    """

    leaf: str
    index: StrictInt = Field(ge=0)
    root: str
    path: List[ProofEntryModel] = Field(default_factory=list)

    @field_validator("leaf", "root", mode="before")
    @classmethod
    def _hashes_hex(cls, v):  # type: ignore[override]
        return _norm_hex(v)

    @classmethod
    def from_proof(cls, proof: ProofOfInclusion, root: bytes) -> "ProofModel":
        return cls(
            leaf=to_hex(proof.leaf),
            index=proof.index,
            root=to_hex(root),
            path=[
                ProofEntryModel(sibling=to_hex(s), direction=d.value)
                for s, d in proof.path
            ],
        )

    def to_proof(self) -> ProofOfInclusion:
        return ProofOfInclusion(
            leaf=from_hex(self.leaf),
            index=self.index,
            path=[(from_hex(e.sibling), Direction(e.direction)) for e in self.path],
        )


class TreeModel(BaseModel):
    root: str
    leaf_count: int
    height: int
    levels: List[List[str]]

    @classmethod
    def from_tree(cls, tree) -> "TreeModel":
        return cls(
            root=tree.root_hex,
            leaf_count=tree.leaf_count,
            height=tree.height,
            levels=[[to_hex(h) for h in level] for level in tree.levels],
        )
