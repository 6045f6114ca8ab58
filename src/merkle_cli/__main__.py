from __future__ import annotations
import json
import logging
from typing import List, Optional

import typer
from rich.markup import escape

from merkle_core.errors import FailedToBuild, HashAlreadyExists, InvalidHash
from merkle_core.hashing import hash_data, to_hex
from merkle_core.models import ProofModel, TreeModel
from merkle_core.tree import MerkleTree
from merkle_sdk.verify import verify_proof_file

from .elements import ElementsFileError, load_tree
from .logutil import setup_logging
from .output import console, inclusion_message, print_proof, print_tree, q
from .settings import get_settings
from .shell import MerkleShell

log = logging.getLogger("merkle_cli")

app = typer.Typer(add_completion=False, no_args_is_help=True)

HASH_HELP = "Treat file lines and ELEM as data to hash (default: hex hashes)"


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Overrides MERKLE_LOG_LEVEL"
    ),
):
    """Build Merkle trees from element files, verify and prove inclusion."""
    setup_logging(log_level or get_settings().log_level)


def _load(file: str, hashed: bool) -> MerkleTree:
    try:
        return load_tree(file, hashed)
    except (ElementsFileError, FailedToBuild) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def _leaf(elem: str, hashed: bool) -> str:
    """Hex hash to look up: ELEM itself, or the hash of ELEM as data."""
    return to_hex(hash_data(elem)) if hashed else elem


@app.command()
def show(
    file: str,
    hashed: bool = typer.Option(False, "--hash", help=HASH_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON document"),
):
    """Print every level of the tree, root level first."""
    tree = _load(file, hashed)
    if as_json:
        typer.echo(json.dumps(TreeModel.from_tree(tree).model_dump(), indent=2))
        return
    print_tree(tree)


@app.command()
def root(
    file: str,
    hashed: bool = typer.Option(False, "--hash", help=HASH_HELP),
):
    tree = _load(file, hashed)
    typer.echo(tree.root_hex)


@app.command()
def verify(
    file: str,
    elem: str,
    index: Optional[int] = typer.Argument(None, help="Leaf index (O(log n) check)"),
    hashed: bool = typer.Option(False, "--hash", help=HASH_HELP),
):
    """Exit 0 when ELEM is included in the tree, 1 otherwise."""
    tree = _load(file, hashed)
    leaf = _leaf(elem, hashed)
    if index is None:
        ok = tree.verify(leaf)
    else:
        ok = tree.verify_with_index(leaf, index)
    console.print(inclusion_message(elem, index, ok))
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def proof(
    file: str,
    elem: str,
    index: Optional[int] = typer.Argument(None, help="Leaf index (O(log n) lookup)"),
    hashed: bool = typer.Option(False, "--hash", help=HASH_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON document"),
):
    """Print the proof of inclusion for ELEM."""
    tree = _load(file, hashed)
    leaf = _leaf(elem, hashed)
    try:
        if index is None:
            p = tree.proof_of_inclusion(leaf)
        else:
            p = tree.proof_of_inclusion_with_index(leaf, index)
    except InvalidHash:
        console.print(inclusion_message(elem, index, False))
        raise typer.Exit(code=1)
    if as_json:
        typer.echo(json.dumps(ProofModel.from_proof(p, tree.root).model_dump(), indent=2))
        return
    print_proof(p)


@app.command()
def add(
    file: str,
    elems: List[str] = typer.Argument(..., help="Elements to append, in order"),
    hashed: bool = typer.Option(False, "--hash", help=HASH_HELP),
):
    """Append elements to the tree built from FILE and print the new root."""
    tree = _load(file, hashed)
    failed = False
    for elem in elems:
        try:
            if hashed:
                tree.add_data(elem)
            else:
                tree.add_hash(elem)
        except HashAlreadyExists:
            console.print(f"[yellow]{escape(elem)} is already in the tree![/yellow]")
            continue
        except InvalidHash as e:
            console.print(f"[red]{q(elem)} is not a valid hash: {escape(str(e))}[/red]")
            failed = True
            continue
        log.info("added %r, root now %s", elem, tree.root_hex)
        console.print(f"{q(elem)} added to the tree.")
    typer.echo(tree.root_hex)
    if failed:
        raise typer.Exit(code=1)


@app.command()
def check_proof(
    path: str,
    root: Optional[str] = typer.Option(
        None, "--root", help="Trusted root hex; defaults to the root in the document"
    ),
):
    """Verify a JSON proof document without the tree."""
    ok = verify_proof_file(path, root)
    console.print({"proof_valid": ok})
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def shell(
    file: Optional[str] = typer.Option(
        None, "--file", help="Elements file to start from (MERKLE_ELEMENTS_PATH)"
    ),
    hashed: Optional[bool] = typer.Option(
        None, "--hash/--no-hash", help="File holds data to hash (MERKLE_HASH_ELEMENTS)"
    ),
):
    """Interactive shell over one in-memory tree."""
    s = get_settings()
    path = file or s.elements_path
    tree = None
    if path:
        tree = _load(path, s.hash_elements if hashed is None else hashed)
        console.print(
            f"In this example the Merkle Tree is created from file: {q(path)}, "
            "use 'show' to view the current tree."
        )
    MerkleShell(tree).run()


if __name__ == "__main__":
    app()
