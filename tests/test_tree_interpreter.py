import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from ordered_tree import OrderedTree
from tree_interpreter import TreeInterpreter, ParseError, main


def run(program, width=20):
    out = io.StringIO()
    interpreter = TreeInterpreter(out=out, source="prog.txt", width=width)
    interpreter.run(program)
    return interpreter, out.getvalue().splitlines()


def row(left, right, width=20):
    return left.ljust(width) + right.ljust(width)


class TestInterpreterCommands(unittest.TestCase):

    def test_insert_and_delete(self):
        interpreter, lines = run("insert b insert a delete b")
        self.assertEqual(lines, ["inserted b", "inserted a", "deleted b"])
        self.assertEqual(interpreter.tree.in_order(), ["a"])

    def test_delete_missing_item_still_reports(self):
        interpreter, lines = run("delete zzz")
        self.assertEqual(lines, ["deleted zzz"])
        self.assertTrue(interpreter.tree.is_empty())

    def test_trim(self):
        interpreter, lines = run("insert m insert c insert x trim")
        self.assertEqual(lines[-2:], ["leaf nodes deleted", ""])
        self.assertEqual(interpreter.tree.in_order(), ["m"])

    def test_traverse(self):
        _, lines = run("insert b insert a insert c traverse")
        rule = "-" * 38
        self.assertEqual(lines[3:], [
            "",
            "***Traversals***",
            "=" * 38,
            "Preorder Traversal",
            rule, "b", "a", "c", rule,
            "Inorder Traversal",
            rule, "a", "b", "c", rule,
            "Postorder Traversal",
            rule, "a", "c", "b", rule,
            "",
        ])

    def test_stats(self):
        _, lines = run("insert b insert a insert c stats")
        self.assertEqual(lines[3:], [
            "",
            "***Statistics/Information***",
            row("height = 1", "size = 3"),
            row("#leaves = 2", "#halves-nodes = 0"),
            row("minimum = a", "maximum = c"),
            row("?perfect = true", "?balanced = true"),
            "",
        ])

    def test_stats_on_empty_tree(self):
        _, lines = run("stats")
        self.assertIn(row("height = -1", "size = 0"), lines)
        self.assertIn(row("minimum = UNDEFINED", "maximum = UNDEFINED"), lines)
        self.assertIn(row("?perfect = true", "?balanced = true"), lines)

    def test_stats_on_chain(self):
        _, lines = run("insert a insert b insert c stats", width=24)
        self.assertIn(row("height = 2", "size = 3", 24), lines)
        self.assertIn(row("#leaves = 1", "#halves-nodes = 2", 24), lines)
        self.assertIn(row("?perfect = false", "?balanced = false", 24), lines)

    def test_tokens_span_lines(self):
        interpreter = TreeInterpreter(out=io.StringIO())
        interpreter.run_stream(io.StringIO("insert\n  q\n\ninsert r\n"))
        self.assertEqual(interpreter.tree.in_order(), ["q", "r"])

    def test_uses_given_tree(self):
        tree = OrderedTree()
        tree.insert("k")
        interpreter = TreeInterpreter(tree=tree, out=io.StringIO())
        interpreter.run("insert j")
        self.assertEqual(tree.in_order(), ["j", "k"])


class TestInterpreterErrors(unittest.TestCase):

    def test_unknown_command_aborts(self):
        out = io.StringIO()
        interpreter = TreeInterpreter(out=out, source="prog.txt")
        with self.assertRaises(ParseError) as ctx:
            interpreter.run("insert a bogus insert b")
        self.assertEqual(str(ctx.exception), "prog.txt parsing error")
        self.assertEqual(out.getvalue().splitlines(), ["inserted a"])
        self.assertEqual(interpreter.tree.in_order(), ["a"])

    def test_missing_operand(self):
        with self.assertRaises(ParseError):
            run("insert")

    def test_negative_width_rejected(self):
        with self.assertRaises(ValueError):
            TreeInterpreter(out=io.StringIO(), width=-5)


class TestMain(unittest.TestCase):

    def _write(self, text):
        mode = "wb" if isinstance(text, bytes) else "w"
        handle = tempfile.NamedTemporaryFile(mode, suffix=".txt", delete=False)
        with handle:
            handle.write(text)
        self.addCleanup(os.remove, handle.name)
        return handle.name

    def test_runs_program_file(self):
        path = self._write("insert x\ninsert y\n")
        out = io.StringIO()
        with redirect_stdout(out):
            status = main([path])
        self.assertEqual(status, 0)
        self.assertEqual(out.getvalue().splitlines(), ["inserted x", "inserted y"])

    def test_parse_error_exit_status(self):
        path = self._write("insert x\nfrobnicate\n")
        err = io.StringIO()
        with redirect_stdout(io.StringIO()), redirect_stderr(err):
            status = main([path])
        self.assertEqual(status, 1)
        self.assertIn("parsing error", err.getvalue())

    def test_missing_file(self):
        err = io.StringIO()
        with redirect_stderr(err):
            status = main([os.path.join(tempfile.gettempdir(), "no-such-tree-program.txt")])
        self.assertEqual(status, 2)
        self.assertIn("Unable to open", err.getvalue())

    def test_file_that_is_not_utf8(self):
        path = self._write(b"insert caf\xe9\nstats\n")
        out = io.StringIO()
        with redirect_stdout(out):
            status = main([path])
        self.assertEqual(status, 0)
        self.assertEqual(out.getvalue().splitlines()[0], "inserted caf\ufffd")

    def test_negative_width_is_usage_error(self):
        path = self._write("insert a\nstats\n")
        out = io.StringIO()
        with redirect_stdout(out), redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main([path, "--width", "-5"])
        self.assertEqual(ctx.exception.code, 2)
        self.assertEqual(out.getvalue(), "")

    def test_zero_width_is_usage_error(self):
        path = self._write("stats\n")
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main([path, "--width", "0"])
        self.assertEqual(ctx.exception.code, 2)

    def test_custom_width(self):
        path = self._write("insert a\nstats\n")
        out = io.StringIO()
        with redirect_stdout(out):
            status = main([path, "--width", "24"])
        self.assertEqual(status, 0)
        self.assertIn(row("height = 0", "size = 1", 24), out.getvalue().splitlines())


if __name__ == "__main__":
    unittest.main()
