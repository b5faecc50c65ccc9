"""
Help rendering tests (usage line, sections, metavars, styled output).

Conventions
- Test method names follow CamelCase per project convention.
- Plain text is compared exactly where the layout matters; rich output is
  captured with color disabled.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from rich.console import Console

from lineargs import ArgumentParser


class TestUsage(TestCase):
    """The synthesized usage line."""

    def testEmptyParser(self):
        self.assertEqual(ArgumentParser(prog="demo").format_usage(), "usage: demo\n")

    def testDecorationsByArity(self):
        parser = (
            ArgumentParser(prog="demo")
            .define("-v", "--verbose", type="boolean")
            .define("-n", "--name")
            .define("--tags", nargs="*")
            .define("input")
            .define("files", nargs="+")
        )
        self.assertEqual(
            parser.format_usage(),
            "usage: demo [-v] [-n NAME] [--tags [TAGS ...]] input files [files ...]\n",
        )

    def testFixedCountAndOptionalValue(self):
        parser = (
            ArgumentParser(prog="demo")
            .define("--point", type="number", nargs=2)
            .define("--level", nargs="?")
            .define("target", nargs="?")
        )
        self.assertEqual(
            parser.format_usage(),
            "usage: demo [--point POINT POINT] [--level [LEVEL]] [target]\n",
        )

    def testPositionalMetavar(self):
        parser = ArgumentParser(prog="demo").define("sources", nargs="+", metavar="SRC").define("target", metavar="DIR")
        self.assertEqual(parser.format_usage(), "usage: demo SRC [SRC ...] DIR\n")
        self.assertIn("  DIR", parser.format_help())
        self.assertNotIn("target", parser.format_help())

    def testRequiredOptionIsNotBracketed(self):
        parser = ArgumentParser(prog="demo").define("--name", required=True)
        self.assertEqual(parser.format_usage(), "usage: demo --name NAME\n")

    def testChoicesReplaceMetavar(self):
        parser = ArgumentParser(prog="demo").define("--mode", choices=["fast", "safe"])
        self.assertEqual(parser.format_usage(), "usage: demo [--mode {fast,safe}]\n")

    def testHiddenArgumentsAreSkipped(self):
        parser = ArgumentParser(prog="demo").define("--secret", hidden=True).define("--name")
        self.assertEqual(parser.format_usage(), "usage: demo [--name NAME]\n")

    def testLongUsageWrapsWithHangingIndent(self):
        parser = ArgumentParser(prog="demo")
        for index in range(12):
            parser.define("--option-%02d" % index)
        lines = parser.format_usage().splitlines()
        self.assertGreater(len(lines), 1)
        for line in lines[1:]:
            self.assertTrue(line.startswith(" " * len("usage: demo ")))
        for line in lines:
            self.assertLessEqual(len(line), 80)


class TestHelp(TestCase):
    """The plain help screen."""

    def testFullLayout(self):
        parser = (
            ArgumentParser("Process files.", prog="demo", epilog="See the manual.")
            .define("input", help="Input file")
            .define("-v", "--verbose", type="boolean", help="Increase output verbosity")
        )
        self.assertEqual(parser.format_help(), "".join((
            "usage: demo [-v] input\n",
            "\n",
            "Process files.\n",
            "\n",
            "positional arguments:\n",
            "  input" + " " * 17 + "Input file\n",
            "\n",
            "options:\n",
            "  -v, --verbose" + " " * 9 + "Increase output verbosity\n",
            "\n",
            "See the manual.\n",
        )))

    def testDescriptionOnly(self):
        self.assertEqual(ArgumentParser("desc", prog="demo").format_help(), "usage: demo\n\ndesc\n")

    def testOptionMetavarInSection(self):
        parser = ArgumentParser(prog="demo").define("-n", "--name", help="who")
        self.assertIn("  -n, --name NAME", parser.format_help())

    def testEntryWithoutHelp(self):
        parser = ArgumentParser(prog="demo").define("--name")
        self.assertTrue(parser.format_help().endswith("options:\n  --name NAME\n"))

    def testWideNamesBreakBeforeDescription(self):
        parser = ArgumentParser(prog="demo").define("--a-really-long-option", help="desc")
        lines = parser.format_help().splitlines()
        index = lines.index("  --a-really-long-option A-REALLY-LONG-OPTION")
        self.assertEqual(lines[index + 1], " " * 24 + "desc")

    def testLongHelpWraps(self):
        parser = ArgumentParser(prog="demo").define("--name", help="word " * 60)
        lines = parser.format_help().splitlines()
        self.assertGreater(len(lines), 4)
        for line in lines:
            self.assertLessEqual(len(line), 80)

    def testDeprecatedArgumentsAreMarked(self):
        parser = ArgumentParser(prog="demo").define("--old", deprecated=True, help="old switch")
        self.assertIn("old switch (deprecated)", parser.format_help())

    def testHiddenArgumentsAreSkipped(self):
        parser = ArgumentParser(prog="demo").define("--secret", hidden=True, help="hush")
        self.assertNotIn("hush", parser.format_help())
        self.assertNotIn("options:", parser.format_help())


class TestPrintHelp(TestCase):
    """Rich output of print_help/print_usage."""

    def console(self):
        return Console(color_system=None, force_terminal=False, width=80)

    def testPrintHelp(self):
        parser = ArgumentParser("Process files.", prog="demo").define("input", help="Input file")
        console = self.console()
        with console.capture() as capture:
            parser.print_help(console)
        output = capture.get()
        self.assertIn("usage: demo input", output)
        self.assertIn("positional arguments:", output)
        self.assertIn("Input file", output)

    def testFancyHelpIsPaneled(self):
        parser = ArgumentParser(prog="demo", fancy=True).define("--name", help="who")
        console = self.console()
        with console.capture() as capture:
            parser.print_help(console)
        output = capture.get()
        self.assertIn("DEMO HELP", output)
        self.assertIn("╭", output)

    def testPrintUsage(self):
        parser = ArgumentParser(prog="demo").define("--name")
        console = self.console()
        with console.capture() as capture:
            parser.print_usage(console)
        self.assertEqual(capture.get(), "usage: demo [--name NAME]\n")


if __name__ == "__main__":
    unittest.main()
