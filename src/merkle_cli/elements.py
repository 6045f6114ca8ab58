from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional, Union

from merkle_core.errors import FailedToBuild
from merkle_core.hashing import from_hex
from merkle_core.tree import MerkleTree

from .settings import get_settings

log = logging.getLogger(__name__)


class ElementsFileError(Exception):
    """The elements file could not be read or holds no usable elements."""


def read_elements(
    path: Union[str, Path], max_elements: Optional[int] = None
) -> List[str]:
    """Read one element per line; lines are stripped and blank lines dropped."""
    if max_elements is None:
        max_elements = get_settings().max_elements
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ElementsFileError(f"Failed to read file: {e}") from e
    elements = [line.strip() for line in text.splitlines()]
    elements = [e for e in elements if e]
    if not elements:
        raise ElementsFileError(f"no elements in {p}")
    if len(elements) > max_elements:
        raise ElementsFileError(
            f"{p} holds {len(elements)} elements; limit is {max_elements}"
        )
    log.debug("read %d elements from %s", len(elements), p)
    return elements


def parse_hash(element: str) -> bytes:
    try:
        return from_hex(element)
    except ValueError as e:
        raise FailedToBuild(f"{element!r} is not a hex hash: {e}") from e


def build_tree(elements: List[str], hashed: bool) -> MerkleTree:
    """Build from data (``hashed`` true: elements get hashed) or from hex hashes."""
    if hashed:
        return MerkleTree.from_data(elements)
    return MerkleTree.from_hashes([parse_hash(e) for e in elements])


def load_tree(path: Union[str, Path], hashed: bool) -> MerkleTree:
    tree = build_tree(read_elements(path), hashed)
    log.info("built tree from %s: root=%s height=%d", path, tree.root_hex, tree.height)
    return tree
