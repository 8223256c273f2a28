"""
Help renderer tests (layout, alignment, colour).

Scope
- Validate the column layout of ungrouped and grouped commands.
- Validate the shared description column and the absence of trailing padding.
- Validate colour spans and console output.

Conventions
- Test method names follow CamelCase per project convention.
- Documents are built from the models so widths are easy to follow.
"""
import io
import unittest
from unittest import TestCase

from rich.console import Console

from runfile.helper import *
from runfile.models import *
from runfile.pipeline import parse_runfile


def sample():
    return Document(
        [Group("Ops")],
        [
            Command(
                ["build", "b"],
                description="Build it",
                args=[Argument("target", True, description="what")],
                flags=[Flag("release", "r", description="optimised")],
                script="make",
            ),
            Command(["clean"], script="make clean"),
            Command(["deploy"], description="Ship", group="Ops", args=[Argument("env")], script="ship"),
        ],
    )


class TestRender(TestCase):
    """Behavioral tests for render()."""

    def testLayout(self):
        # widest: 4 + len("-r, --release") = 17, rounded up to 18, descriptions start after 17
        expected = (
            "build, b" + " " * 9 + " # Build it\n"
            "  target?" + " " * 10 + " # what\n"
            "  -r, --release" + " " * 4 + " # optimised\n"
            "clean\n"
            "Ops\n"
            "  deploy" + " " * 11 + " # Ship\n"
            "    env\n"
            "\n"
        )
        self.assertEqual(render(sample()).plain, expected)

    def testNoTrailingPadding(self):
        for line in render(sample()).plain.splitlines():
            self.assertEqual(line, line.rstrip())

    def testEmptyDocument(self):
        self.assertEqual(render(Document()).plain, "\n")

    def testCommandWidthDrivesAlignment(self):
        document = Document([], [Command(["a-very-long-command"], description="d", script="x")])
        # 2 + 19 = 21, rounded up to 22
        self.assertEqual(render(document).plain, "a-very-long-command" + " " * 2 + " # d\n")

    def testVariadicLabel(self):
        document = parse_runfile("lint ...files:\n  ruff $files")
        self.assertIn("  ...files\n", render(document).plain)

    def testGroupWithoutCommandsIsHidden(self):
        document = Document([Group("Empty")], [Command(["a"], script="x")])
        self.assertEqual(render(document).plain, "a\n")

    def testGroupsFollowDeclarationOrder(self):
        document = parse_runfile(
            "# ---\n# Second\n# ---\nb:\n  echo b\n"
            "# ---\n# First\n# ---\na:\n  echo a\n"
        )
        self.assertEqual(render(document).plain, "Second\n  b\n\nFirst\n  a\n\n")

    def testColour(self):
        self.assertEqual(render(sample()).spans, [])
        styles = {str(span.style) for span in render(sample(), colorful=True).spans}
        self.assertIn("bold white", styles)
        self.assertIn("color(8)", styles)


class TestShowHelp(TestCase):
    """Behavioral tests for show_help()."""

    def testPrintsListing(self):
        stream = io.StringIO()
        show_help(sample(), console=Console(file=stream, width=200), colorful=False)
        self.assertEqual(stream.getvalue().rstrip("\n"), render(sample()).plain.rstrip("\n"))

    def testLongLinesAreNotWrapped(self):
        stream = io.StringIO()
        document = Document([], [Command(["a"], description="word " * 40, script="x")])
        show_help(document, console=Console(file=stream, width=40))
        self.assertEqual(len(stream.getvalue().rstrip("\n").splitlines()), 1)


if __name__ == "__main__":
    unittest.main()
