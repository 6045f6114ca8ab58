import pytest

from merkle_core.errors import FailedToBuild, MerkleTreeError
from merkle_core.hashing import HASH_SIZE, combine, hash_data, to_hex
from merkle_core.tree import MerkleTree


def test_merkle_basic():
    leaves = [hash_data(f"leaf-{i}") for i in range(5)]
    tree = MerkleTree.from_hashes(leaves)
    assert len(tree.root) == HASH_SIZE
    assert tree.verify_with_index(leaves[2], 2)


def test_four_leaves_three_levels(h):
    tree = MerkleTree.from_data(["a", "b", "c", "d"])
    assert [len(level) for level in tree.levels] == [4, 2, 1]
    ab = combine(h("a"), h("b"))
    cd = combine(h("c"), h("d"))
    assert tree.levels[1] == [ab, cd]
    assert tree.root == combine(ab, cd)
    assert tree.root_hex == to_hex(tree.root)


def test_odd_level_stores_padding(h):
    tree = MerkleTree.from_data(["a", "b", "c"])
    assert tree.leaves == [h("a"), h("b"), h("c"), h("c")]
    assert tree.leaf_count == 4
    assert tree.root == combine(
        combine(h("a"), h("b")), combine(h("c"), h("c"))
    )


def test_non_root_levels_are_even():
    tree = MerkleTree.from_data([f"something{i:02d}" for i in range(11)])
    for level in tree.levels[:-1]:
        assert len(level) % 2 == 0
    assert len(tree.levels[-1]) == 1


@pytest.mark.parametrize("n,height", [(1, 1), (2, 2), (3, 3), (4, 3), (5, 4), (17, 6), (32, 6)])
def test_height(n, height):
    tree = MerkleTree.from_data([str(i) for i in range(n)])
    assert tree.height == height


def test_single_leaf_is_root(h):
    tree = MerkleTree.from_data(["only"])
    assert tree.levels == [[h("only")]]
    assert tree.root == h("only")


@pytest.mark.parametrize("n", [3, 5, 7, 9])
def test_trailing_duplicate_same_root(n):
    leaves = [hash_data(str(i)) for i in range(n)]
    a = MerkleTree.from_hashes(leaves)
    b = MerkleTree.from_hashes(leaves + [leaves[-1]])
    assert a.root == b.root


def test_from_data_matches_from_hashes():
    items = ["x", b"y", "z"]
    assert (
        MerkleTree.from_data(items).root
        == MerkleTree.from_hashes([hash_data(i) for i in items]).root
    )


def test_hex_leaves_accepted(h):
    hexes = [to_hex(h(s)).upper() for s in "abcd"]
    assert MerkleTree.from_hashes(hexes).root == MerkleTree.from_data(list("abcd")).root


def test_empty_fails():
    with pytest.raises(FailedToBuild):
        MerkleTree.from_hashes([])
    with pytest.raises(MerkleTreeError):
        MerkleTree.from_data([])


@pytest.mark.parametrize("bad", [b"short", "nothex", "ab" * 31, 42])
def test_malformed_leaf_fails(bad, h):
    with pytest.raises(FailedToBuild):
        MerkleTree.from_hashes([h("a"), bad])


def test_levels_are_copies(h):
    tree = MerkleTree.from_data(["a", "b"])
    tree.levels[0].append(h("z"))
    tree.leaves.append(h("z"))
    assert tree.leaf_count == 2


def test_dump_lists_levels_root_first(h):
    tree = MerkleTree.from_data(["a", "b", "c", "d"])
    lines = tree.dump().splitlines()
    assert lines[0] == "LEVEL 0:"
    assert lines[1] == f"- {tree.root_hex}"
    assert lines[2] == "LEVEL 1:"
    assert "LEVEL 2:" in lines
    assert lines[-1] == f"- {to_hex(h('d'))}"
    assert len(lines) == 3 + 1 + 2 + 4
