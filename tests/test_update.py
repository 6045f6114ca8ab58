import pytest

from merkle_core.errors import HashAlreadyExists, InvalidHash
from merkle_core.hashing import hash_data, to_hex
from merkle_core.tree import MerkleTree


def test_add_fills_padding_slot(h):
    tree = MerkleTree.from_data(["a", "b", "c"])
    assert tree.leaf_count == 4
    tree.add_data("d")
    assert tree.leaves == [h(s) for s in "abcd"]
    assert tree.root == MerkleTree.from_data(list("abcd")).root


def test_add_grows_even_level(h):
    tree = MerkleTree.from_data(["a", "b", "c", "d"])
    tree.add_data("e")
    assert tree.leaves == [h(s) for s in "abcde"] + [h("e")]
    assert tree.root == MerkleTree.from_data(list("abcde")).root
    tree.add_data("f")
    assert tree.leaf_count == 6
    assert tree.root == MerkleTree.from_data(list("abcdef")).root


def test_add_to_single_leaf(h):
    tree = MerkleTree.from_data(["a"])
    tree.add_hash(h("b"))
    assert tree.height == 2
    assert tree.leaves == [h("a"), h("b")]


def test_add_hex_string(h):
    tree = MerkleTree.from_data(["a", "b"])
    tree.add_hash(to_hex(h("c")))
    assert tree.verify(h("c"))


def test_add_existing_fails_unchanged(h):
    tree = MerkleTree.from_data(["a", "b", "c"])
    root, levels = tree.root, tree.levels
    with pytest.raises(HashAlreadyExists):
        tree.add_hash(h("b"))
    # the pad copy of "c" is found as well
    with pytest.raises(HashAlreadyExists):
        tree.add_data("c")
    assert tree.root == root
    assert tree.levels == levels


def test_add_malformed_fails_unchanged():
    tree = MerkleTree.from_data(["a", "b", "c"])
    levels = tree.levels
    with pytest.raises(InvalidHash):
        tree.add_hash("not-a-hash")
    with pytest.raises(InvalidHash):
        tree.add_hash(b"\x01" * 31)
    assert tree.levels == levels


def test_add_many_all_verify():
    base = [f"leaf-{i}" for i in range(7)]
    extra = [f"new-{i}" for i in range(10)]
    tree = MerkleTree.from_data(base)
    for item in extra:
        tree.add_data(item)
    for item in base + extra:
        assert tree.verify(hash_data(item))
    assert not tree.verify(hash_data("never-added"))
    for level in tree.levels[:-1]:
        assert len(level) % 2 == 0


def test_add_then_prove(h):
    tree = MerkleTree.from_data([f"something0{i}" for i in range(17)])
    tree.add_hash(h("something099"))
    proof = tree.proof_of_inclusion(h("something099"))
    assert proof.verify(tree.root)
    assert proof.index == 17


def test_equal_tail_leaves_treated_as_padding(h):
    # Two genuinely equal trailing leaves look exactly like a pad slot, so the
    # second one is overwritten rather than kept.
    tree = MerkleTree.from_data(["p", "q", "r", "r"])
    tree.add_data("s")
    assert tree.leaves == [h("p"), h("q"), h("r"), h("s")]
    assert tree.verify(h("r"))
