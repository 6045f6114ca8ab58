from __future__ import annotations
import logging
import shlex
from typing import Iterable, Iterator, Optional

import typer
from rich.markup import escape

from merkle_core.errors import FailedToBuild, HashAlreadyExists, InvalidHash
from merkle_core.tree import MerkleTree

from .elements import ElementsFileError, load_tree
from .output import console as default_console, inclusion_message, print_proof, print_tree, q

log = logging.getLogger(__name__)

WELCOME = "Welcome to the Merkle Tree CLI, type 'help' to see the list of commands."
INVALID = "That's not a valid command - use the help command if you are stuck."

HELP_TEXT = """\
COMMANDS

-- CREATE --
create <path/to/elements.txt> [--hash]
- Creates a new Merkle Tree from a file with elements. With --hash the elements are hashed before being added to the tree, otherwise each line must be a hex hash.

-- SHOW --
show
- Shows the current state of the Merkle Tree.

-- VERIFY --
verify <hash> [index]
- Verifies if a hash is included in the tree, optionally at a given leaf index.

-- PROOF --
proof <hash> [index]
- Shows the proof of inclusion for a hash.

-- ADD --
add <element> [--hash]
- Adds an element to the tree. With --hash the element is hashed before being added, otherwise it must be a hex hash.

-- EXIT --
exit
- Exits the program."""


def _stdin_lines() -> Iterator[str]:
    while True:
        try:
            yield input()
        except EOFError:
            return


class MerkleShell:
    """Interactive shell holding one current tree.

    Each input line is split with shlex and dispatched to a typer app whose
    commands act on ``self.tree``.
    """

    def __init__(self, tree: Optional[MerkleTree] = None, out=None):
        self.tree = tree if tree is not None else MerkleTree.from_data([""])
        self.out = out if out is not None else default_console
        self.running = True
        self._command = typer.main.get_command(self._build_app())

    def _build_app(self) -> typer.Typer:
        app = typer.Typer(
            add_completion=False, context_settings={"help_option_names": []}
        )
        out = self.out

        @app.command()
        def create(path: str, hashed: bool = typer.Option(False, "--hash")):
            try:
                self.tree = load_tree(path, hashed)
            except (ElementsFileError, FailedToBuild) as e:
                out.print(f"[red]{q(path)}: {escape(str(e))}[/red]")
                return
            out.print(
                f"Merkle Tree created from file: {q(path)}, "
                "use 'show' to view the current tree."
            )

        @app.command()
        def show():
            print_tree(self.tree, out)

        @app.command(name="help")
        def help_():
            out.print(HELP_TEXT, markup=False)

        @app.command()
        def verify(elem: str, index: Optional[int] = typer.Argument(None)):
            if index is None:
                ok = self.tree.verify(elem)
            else:
                ok = self.tree.verify_with_index(elem, index)
            out.print(inclusion_message(elem, index, ok))

        @app.command()
        def proof(elem: str, index: Optional[int] = typer.Argument(None)):
            try:
                if index is None:
                    p = self.tree.proof_of_inclusion(elem)
                else:
                    p = self.tree.proof_of_inclusion_with_index(elem, index)
            except InvalidHash:
                out.print(inclusion_message(elem, index, False))
                return
            print_proof(p, out)

        @app.command()
        def add(elem: str, hashed: bool = typer.Option(False, "--hash")):
            try:
                if hashed:
                    self.tree.add_data(elem)
                else:
                    self.tree.add_hash(elem)
            except HashAlreadyExists:
                out.print(f"{escape(elem)} is already in the tree!")
                return
            except InvalidHash as e:
                out.print(f"[red]{q(elem)} is not a valid hash: {escape(str(e))}[/red]")
                return
            log.info("added %r, new root %s", elem, self.tree.root_hex)
            out.print(f"{q(elem)} added to the tree.")

        @app.command(name="exit")
        def exit_():
            out.print("Exiting...")
            self.running = False

        return app

    def handle_line(self, line: str) -> None:
        try:
            args = shlex.split(line)
        except ValueError:
            self.out.print("error: Invalid quoting")
            return
        if not args:
            return
        try:
            self._command.main(args=args, prog_name="merkle", standalone_mode=False)
        except typer.TyperException as e:
            log.debug("rejected %r: %s", line, e)
            self.out.print(INVALID)

    def run(self, lines: Optional[Iterable[str]] = None) -> None:
        self.out.print(WELCOME)
        source = iter(lines) if lines is not None else _stdin_lines()
        for line in source:
            self.handle_line(line)
            if not self.running:
                return
