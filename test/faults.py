"""
Faults module tests (codes, triggering, rendering, host hooks).

Scope
- Validate raising and warning outside shell mode.
- Validate shell-mode rendering, exit statuses and deferred triggering.
- Validate option merging through copy.replace and the docs lookup.

Conventions
- Test method names follow CamelCase per project convention.
- The shared console is swapped for one writing into a buffer.
"""
import io
import unittest
import warnings
from unittest import TestCase, mock

from rich.console import Console

from runfile import faults
from runfile.faults import *


def malformed(**options):
    return MalformedHeaderError(
        "command must have at least one name (third line)",
        title="bad header",
        code=FaultCode.MALFORMED_HEADER,
        hint="start the line with a name",
        **options,
    )


class TestFaults(TestCase):
    """Behavioral tests for trigger() and the fault types."""

    def setUp(self):
        self.stream = io.StringIO()
        patcher = mock.patch.object(faults, "console", Console(file=self.stream, width=120))
        patcher.start()
        self.addCleanup(patcher.stop)

    def testCodeNormalize(self):
        self.assertEqual(FaultCode.MALFORMED_HEADER.normalize(), "21101")

    def testCodesAreUnique(self):
        self.assertEqual(len({code.value for code in FaultCode}), len(FaultCode))

    def testTriggerRaisesOutsideShell(self):
        with self.assertRaises(MalformedHeaderError) as context:
            trigger(malformed(), line=3)
        self.assertEqual(context.exception.options["line"], 3)
        self.assertEqual(str(context.exception), "command must have at least one name (third line)")

    def testReplaceKeepsOriginal(self):
        fault = malformed()
        changed = fault.__replace__(line=7)
        self.assertEqual(changed.options["line"], 7)
        self.assertNotIn("line", fault.options)
        self.assertIsInstance(changed, MalformedHeaderError)

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            malformed().options["line"] = 1  # type: ignore[index]

    def testShellRendersAndExits(self):
        with self.assertRaises(SystemExit) as context:
            trigger(malformed(), shell=True)
        self.assertEqual(context.exception.code, 1)
        output = self.stream.getvalue()
        self.assertIn("[ run — 21101 | Bad Header ]", output)
        self.assertIn("command must have at least one name (third line)", output)
        self.assertIn(" → start the line with a name", output)

    def testShellExitStatus(self):
        with self.assertRaises(SystemExit) as context:
            trigger(CommandFailedError("command exited with status 5", status=5), shell=True)
        self.assertEqual(context.exception.code, 5)

    def testDeferredDoesNotExit(self):
        trigger(malformed(), shell=True, deferred=True)
        self.assertIn("Bad Header", self.stream.getvalue())

    def testFancyUsesPanel(self):
        trigger(malformed(), shell=True, deferred=True, fancy=True)
        self.assertIn("╭", self.stream.getvalue())

    def testHostHooks(self):
        main = __import__("__main__")
        hooks = {
            "__prog__": "tool",
            "__codes__": {FaultCode.MALFORMED_HEADER: "E-HEADER"},
            "__docs__": {FaultCode.MALFORMED_HEADER: "see the header section"},
        }
        for name, value in hooks.items():
            patcher = mock.patch.object(main, name, value, create=True)
            patcher.start()
            self.addCleanup(patcher.stop)
        trigger(malformed(), shell=True, deferred=True)
        output = self.stream.getvalue()
        self.assertIn("[ tool — E-HEADER | Bad Header ]", output)
        self.assertIn("see the header section", output)

    def testWarningOutsideShell(self):
        with warnings.catch_warnings(record=True) as records:
            warnings.simplefilter("always")
            trigger(OverlappingAliasWarning("alias 'x' is declared twice", code=FaultCode.OVERLAPPING_ALIAS))
        self.assertEqual(len(records), 1)
        self.assertIs(records[0].category, OverlappingAliasWarning)
        self.assertEqual(str(records[0].message), "alias 'x' is declared twice")

    def testWarningInShell(self):
        trigger(SurplusArgumentWarning("ignoring 1 extra argument: x", title="extra arguments"), shell=True)
        self.assertIn("Extra Arguments", self.stream.getvalue())

    def testTriggerRejectsPlainExceptions(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))

    def testGetdoc(self):
        self.assertIsNone(getdoc(FaultCode.EMPTY_SCRIPT))
        with self.assertRaises(TypeError):
            getdoc(22131)

    def testStatus(self):
        self.assertEqual(CommandFailedError("failed", status=2).status, 2)
        self.assertEqual(CommandFailedError("failed").status, 1)

    def testHierarchy(self):
        for family in (LexError, ResolveError, BindError, ExecError):
            self.assertTrue(issubclass(family, RunfileException))
        self.assertTrue(issubclass(OverlappingAliasWarning, RunfileWarning))
        self.assertTrue(issubclass(RunfileWarning, Warning))


if __name__ == "__main__":
    unittest.main()
