"""
lineargs public facade: ArgumentParser and the Outcome of a parse attempt.

Lifecycle
- define(): validate one argument eagerly and swap in a new, extended Registry
  (chainable).
- parse(): tokenize the prompt, run a fresh ParseContext over the registry
  captured at call time, and return the namespace dict. faults are surfaced
  through faults.trigger with the parser's rendering options.
- attempt(): the same scan, but every parse fault is returned in an Outcome
  instead of being raised.

Example
    >>> parser = ArgumentParser("demo")
    >>> parser.define("-n", "--name").define("-v", "--verbose", type="boolean")  # doctest: +ELLIPSIS
    argument-parser(...)
    >>> parser.parse('-v --name="John Doe"')
    {'verbose': True, 'name': 'John Doe'}
"""
import copy
import os
import sys
from typing import NamedTuple

from rich.console import Console
from rich.text import Text

from . import helper
from .arguments import Argument
from .faults import ArgumentParserError, trigger
from .parsing import ParseContext
from .registry import Registry
from .tokens import tokenize
from .utils import *


class Outcome(NamedTuple):
    """
    result of ArgumentParser.attempt: exactly one of namespace and fault is set.
    """
    namespace: dict | None
    fault: ArgumentParserError | None

    @property
    def ok(self):
        return self.fault is None


class ArgumentParser:
    """
    Parser for a single command-line-style string.

    Runtime flags
    - shell: render faults on stderr and exit with status 2 instead of raising.
    - fancy: wrap help and fault renderings in a panel.
    - colorful: apply the palette (set False for plain output).
    """
    __typename__ = "argument-parser"

    description = mirror("description")
    epilog = mirror("epilog")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    registry = mirror("registry")

    def __init__(self, description="", *, prog=Unset, epilog=Unset, shell=False, fancy=False, colorful=True):
        if not isinstance(description, str | Text):
            raise TypeError("'description' must be a string")
        if not isinstance(prog, str | Unset):
            raise TypeError("'prog' must be a string")
        if not isinstance(epilog, str | Text | Unset):
            raise TypeError("'epilog' must be a string")

        self._description = description
        self._prog = prog
        self._epilog = coalesce(epilog)
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._registry = Registry()

    @property
    def prog(self):
        """
        program name shown in usage and fault headers.

        resolution: the 'prog' keyword, then __prog__ in __main__, then the
        basename of sys.argv[0].
        """
        return coalesce(self._prog, None) or (
            getattr(__import__("__main__"), "__prog__", None) or
            os.path.basename(sys.argv[0] if sys.argv and sys.argv[0] else "") or
            "lineargs"
        )

    @property
    def arguments(self):
        """
        every definition, optional arguments first, then positionals.
        """
        return tuple(self._registry)

    def __repr__(self):
        return "%s(%s)" % (type(self).__typename__, ", ".join("%s=%r" % pair for pair in self.__rich_repr__()))

    def __rich_repr__(self):
        yield "prog", self.prog
        yield "description", self._description
        yield "arguments", self.arguments

    def _options(self):
        return {"prog": self.prog, "shell": self._shell, "fancy": self._fancy, "colorful": self._colorful}

    def define(self, *flags, **metadata):
        """
        register one argument and return the parser (chainable).

        flags may be given as separate strings or as one list/tuple; metadata is
        forwarded to Argument (type, nargs, choices, required, default, dest,
        metavar, help, hidden, deprecated).

        Raises
        - ArgumentDefinitionError on an invalid or conflicting definition; the
          parser is left unchanged.
        """
        self._registry = self._registry.extend(Argument(*flags, **metadata))
        return self

    def parse(self, prompt, /):
        """
        parse a command-line-style string into a destination → value dict.

        Raises
        - UnknownArgumentError, ArgumentTypeError, InvalidChoiceError,
          InvalidArityError, MissingRequiredArgumentError (all ArgumentParserError).
          In shell mode the fault is rendered on stderr and the process exits
          with status 2.
        """
        registry = self._registry
        options = self._options()
        try:
            return ParseContext(registry, tokenize(prompt), **options).run()
        except ArgumentParserError as fault:
            if self._shell:
                helper.print_usage(self, console=Console(stderr=True))
            trigger(fault, **options)

    def attempt(self, prompt, /):
        """
        parse without raising: return Outcome(namespace, None) on success and
        Outcome(None, fault) when the input is rejected.
        """
        registry = self._registry
        options = self._options()
        try:
            return Outcome(ParseContext(registry, tokenize(prompt), **options).run(), None)
        except ArgumentParserError as fault:
            return Outcome(None, copy.replace(fault, **options))

    def format_usage(self):
        return helper.format_usage(self)

    def format_help(self):
        """
        plain-text help: usage, description, "positional arguments:",
        "options:" and the epilog.
        """
        return helper.format_help(self)

    def print_usage(self, console=None):
        helper.print_usage(self, console=console)

    def print_help(self, console=None):
        helper.print_help(self, console=console)


__all__ = (
    "Outcome",
    "ArgumentParser",
)
