"""
Tree command interpreter.

Reads a program of whitespace separated commands and applies them to an
OrderedTree of strings:

    trim            delete all leaf nodes of the tree
    delete <item>   remove the item if it is in the tree
    insert <item>   insert the item, or overwrite the equal one already stored
    traverse        list the items in preorder, inorder and postorder
    stats           height, size, leaf/half-node counts, min/max and the
                    perfect/balanced flags

Any other command stops the program with a ParseError.
"""

import argparse
import sys
from typing import Iterator, List, Optional, TextIO

from ordered_tree import OrderedTree

RULE_WIDTH = 38


class ParseError(ValueError):
    pass


class TreeInterpreter:
    """Executes tree commands and writes their report to ``out``."""

    def __init__(
        self,
        tree: Optional[OrderedTree[str]] = None,
        out: Optional[TextIO] = None,
        source: str = "<input>",
        width: int = 20,
    ):
        """
        Args:
            tree: Tree to operate on; a new empty tree when omitted
            out: Stream the report is written to, stdout by default
            source: Name of the program text, used in parse error messages
            width: Column width of the two-column stats report
        """
        if width < 0:
            raise ValueError(f"width must not be negative, got {width}")
        self.tree: OrderedTree[str] = tree if tree is not None else OrderedTree()
        self.out = out if out is not None else sys.stdout
        self.source = source
        self.width = width

    def run(self, text: str) -> None:
        self._execute(iter(text.split()))

    def run_stream(self, stream: TextIO) -> None:
        self._execute(_tokens(stream))

    def _execute(self, tokens: Iterator[str]) -> None:
        for cmd in tokens:
            if cmd == "trim":
                self.tree.trim()
                self._print("leaf nodes deleted")
                self._print()
            elif cmd == "delete":
                item = self._operand(tokens, cmd)
                self.tree.remove(item)
                self._print(f"deleted {item}")
            elif cmd == "insert":
                item = self._operand(tokens, cmd)
                self.tree.insert(item)
                self._print(f"inserted {item}")
            elif cmd == "traverse":
                self.traverse()
            elif cmd == "stats":
                self.stats()
            else:
                raise ParseError(f"{self.source} parsing error")

    def _operand(self, tokens: Iterator[str], cmd: str) -> str:
        item = next(tokens, None)
        if item is None:
            raise ParseError(f"{self.source} parsing error: '{cmd}' needs an item")
        return item

    def traverse(self) -> None:
        rule = "-" * RULE_WIDTH
        self._print()
        self._print("***Traversals***")
        self._print("=" * RULE_WIDTH)
        for title, walk in (
            ("Preorder Traversal", self.tree.preorder_traverse),
            ("Inorder Traversal", self.tree.inorder_traverse),
            ("Postorder Traversal", self.tree.postorder_traverse),
        ):
            self._print(title)
            self._print(rule)
            walk(self._print)
            self._print(rule)
        self._print()

    def stats(self) -> None:
        tree = self.tree
        self._print()
        self._print("***Statistics/Information***")
        self._columns(f"height = {tree.height()}", f"size = {tree.size()}")
        self._columns(f"#leaves = {tree.count_leaves()}", f"#halves-nodes = {tree.count_halves()}")
        if tree.is_empty():
            self._columns("minimum = UNDEFINED", "maximum = UNDEFINED")
        else:
            self._columns(f"minimum = {tree.min()}", f"maximum = {tree.max()}")
        self._columns(f"?perfect = {_flag(tree.is_perfect())}", f"?balanced = {_flag(tree.is_balanced())}")
        self._print()

    def _columns(self, left: str, right: str) -> None:
        self._print(f"{left:<{self.width}}{right:<{self.width}}")

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{text}'")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bstree-parser",
        description="Run a binary search tree command file.",
    )
    parser.add_argument("filename", help="Path to the tree program file")
    parser.add_argument("--width", type=positive_int, default=20,
                        help="Column width of the stats report")
    args = parser.parse_args(argv)

    try:
        stream = open(args.filename, encoding="utf-8", errors="replace")
    except OSError:
        print(f"Unable to open {args.filename} for input.", file=sys.stderr)
        return 2

    interpreter = TreeInterpreter(source=args.filename, width=args.width)
    with stream:
        try:
            interpreter.run_stream(stream)
        except ParseError as e:
            print(e, file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
