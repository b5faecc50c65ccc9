"""
Faults module tests (structured context, replacement, triggering, rendering).

Conventions
- Test method names follow CamelCase per project convention.
- Rich output is captured with color disabled for deterministic comparison.
"""

from __future__ import annotations

import contextlib
import copy
import io
import unittest
import warnings
from types import MappingProxyType
from unittest import TestCase

from rich.console import Console, Group
from rich.panel import Panel

from lineargs import (
    FaultCode,
    ArgumentParserError,
    UnknownArgumentError,
    InvalidArityError,
    MissingRequiredArgumentError,
    DuplicatedArgumentWarning,
    trigger,
)


def render(fault):
    console = Console(color_system=None, force_terminal=False, width=100)
    with console.capture() as capture:
        console.print(fault)
    return capture.get()


class TestFaultContext(TestCase):
    """Structured options carried by faults."""

    def testDefaultsFromClass(self):
        error = UnknownArgumentError("unknown argument '--x'", argument="--x")
        self.assertEqual(error.code, FaultCode.UNKNOWN_ARGUMENT)
        self.assertEqual(error.title, "unknown argument")
        self.assertEqual(error.argument, "--x")
        self.assertEqual(error.message, "unknown argument '--x'")
        self.assertEqual(str(error), "unknown argument '--x'")
        self.assertIsNone(error.hint)

    def testOptionsAreReadOnly(self):
        error = InvalidArityError("bad", argument="--x", expected=2, received=1)
        self.assertIsInstance(error.options, MappingProxyType)
        with self.assertRaises(TypeError):
            error.options["expected"] = 3  # NOQA: mapping proxy

    def testEveryErrorIsAnArgumentParserError(self):
        self.assertIsInstance(MissingRequiredArgumentError("missing"), ArgumentParserError)

    def testCodeOverride(self):
        error = ArgumentParserError("bad", code=FaultCode.CONFLICTING_DEFINITION)
        self.assertEqual(error.code, FaultCode.CONFLICTING_DEFINITION)

    def testReplaceMergesOptions(self):
        error = UnknownArgumentError("unknown argument '--x'", argument="--x")
        replaced = copy.replace(error, prog="demo")
        self.assertIsNot(replaced, error)
        self.assertIsInstance(replaced, UnknownArgumentError)
        self.assertEqual(replaced.options["prog"], "demo")
        self.assertEqual(replaced.argument, "--x")
        self.assertNotIn("prog", error.options)

    def testNormalizeWithoutHostCodes(self):
        self.assertEqual(FaultCode.INVALID_ARITY.normalize(), "11114")


class TestTrigger(TestCase):
    """trigger() raising, warning and shell rendering."""

    def testRaisesErrors(self):
        with self.assertRaises(UnknownArgumentError) as context:
            trigger(UnknownArgumentError("unknown argument '--x'", argument="--x"), prog="demo")
        self.assertEqual(context.exception.options["prog"], "demo")

    def testWarnsWarnings(self):
        with self.assertWarns(DuplicatedArgumentWarning):
            trigger(DuplicatedArgumentWarning("again", argument="--x"))

    def testShellErrorsExit(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            with self.assertRaises(SystemExit) as context:
                trigger(UnknownArgumentError("unknown argument '--x'"), shell=True, colorful=False, prog="demo")
        self.assertEqual(context.exception.code, 2)
        self.assertIn("unknown argument '--x'", stderr.getvalue())

    def testShellWarningsArePrinted(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), warnings.catch_warnings():
            warnings.simplefilter("error")
            trigger(DuplicatedArgumentWarning("again"), shell=True, colorful=False)
        self.assertIn("again", stderr.getvalue())

    def testRejectsNonTriggerables(self):
        with self.assertRaises(TypeError):
            trigger(object())


class TestRendering(TestCase):
    """Rich renderings of faults."""

    def testHeaderMessageAndHint(self):
        error = UnknownArgumentError(
            "unknown argument '--x'", argument="--x", hint="did you mean '--y'?", prog="demo", colorful=False
        )
        output = render(error)
        self.assertIn("[ demo — 11111 | Unknown Argument ]", output)
        self.assertIn("unknown argument '--x'", output)
        self.assertIn("→ did you mean '--y'?", output)

    def testPlainRenderIsGroup(self):
        self.assertIsInstance(UnknownArgumentError("x").__rich__(), Group)

    def testFancyRenderIsPanel(self):
        error = UnknownArgumentError("x", fancy=True, prog="demo")
        self.assertIsInstance(error.__rich__(), Panel)
        self.assertIn("demo", render(error))

    def testWarningHeader(self):
        warning = DuplicatedArgumentWarning("again", prog="demo", colorful=False)
        self.assertIn("[ demo — 12111 | Duplicated Argument ]", render(warning))


if __name__ == "__main__":
    unittest.main()
