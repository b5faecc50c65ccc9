"""
lineargs faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  (definition errors, parse errors and warnings), grouped by domain.
- ArgumentParserError / ArgumentWarning: base types that carry a message plus
  structured options (title, code, hint, argument, expected, received, ...) and
  know how to render themselves with rich.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).

UX goals
- Name-first messages: every parse message quotes the argument spelling the user
  typed (or the positional name) so the offending input is easy to spot.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- The parser raises faults while scanning and surfaces them through trigger(fault, **ctx).
- In non-shell mode, exceptions are raised and warnings go through warnings.warn;
  in shell mode, both are rendered via rich on stderr.
"""
import copy
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - definitions (101xx)
      • INVALID_DEFINITION, CONFLICTING_DEFINITION
    - parsing (111xx)
      • UNKNOWN_ARGUMENT, ARGUMENT_TYPE, INVALID_CHOICE, INVALID_ARITY,
        MISSING_REQUIRED_ARGUMENT
    - warnings (121xx)
      • DUPLICATED_ARGUMENT, DEPRECATED_ARGUMENT
    """
    # --- definition errors (10xxx) ---
    INVALID_DEFINITION          = 10101
    CONFLICTING_DEFINITION      = 10102

    # --- parse errors (11xxx) ---
    UNKNOWN_ARGUMENT            = 11111
    ARGUMENT_TYPE               = 11112
    INVALID_CHOICE              = 11113
    INVALID_ARITY               = 11114
    MISSING_REQUIRED_ARGUMENT   = 11115

    # --- warnings (12xxx) ---
    DUPLICATED_ARGUMENT         = 12111
    DEPRECATED_ARGUMENT         = 12112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _context(name, /):
    """
    read-only accessor over a fault's structured options (None when absent).
    """
    return property(lambda self: self.options.get(name), doc="structured %r context of the fault" % name)


def _render(fault, palette, title, /):
    """
    shared rich renderer for errors and warnings.

    layout
    - header: [ prog — code | Title ]
    - body: the message, then a hint line introduced by an arrow.
    - fancy: the body is wrapped in a panel titled with the header.
    """
    main = __import__("__main__")
    options = fault.options
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = options.get("colorful", True)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style])

    prog = options.get("prog") or getattr(main, "__prog__", None) or "lineargs"
    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " — ",
        text(fault.code.normalize(), "code"),
        " | ",
        text(options.get("title", "").title(), title),
        " ]"
    )
    message = text(fault.message, title.replace("title", "message"))
    renders = [message]
    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if options.get("fancy", False):
        return Panel(Group(*renders), title=header, title_align="left")
    return Group(header, *renders)


class ArgumentParserError(Exception):
    """
    base of every fault raised by lineargs.

    the message is the human-readable sentence; options hold the structured
    context (title, code, hint, argument, value, expected, received, choices)
    plus rendering switches merged in by trigger() (prog, shell, fancy, colorful).

    subclasses only pin their default title and code; callers can branch on
    the class or on `code`.
    """
    __title__ = "argument parser error"
    __fault__ = FaultCode.INVALID_DEFINITION

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({"title": type(self).__title__, "code": type(self).__fault__} | options)

    code = _context("code")
    title = _context("title")
    hint = _context("hint")
    argument = _context("argument")
    value = _context("value")
    expected = _context("expected")
    received = _context("received")
    choices = _context("choices")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error-title")

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(2)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ArgumentDefinitionError(ArgumentParserError):
    __title__ = "invalid argument definition"
    __fault__ = FaultCode.INVALID_DEFINITION


class UnknownArgumentError(ArgumentParserError):
    __title__ = "unknown argument"
    __fault__ = FaultCode.UNKNOWN_ARGUMENT


class ArgumentTypeError(ArgumentParserError):
    __title__ = "invalid value type"
    __fault__ = FaultCode.ARGUMENT_TYPE


class InvalidChoiceError(ArgumentParserError):
    __title__ = "invalid choice"
    __fault__ = FaultCode.INVALID_CHOICE


class InvalidArityError(ArgumentParserError):
    __title__ = "wrong number of values"
    __fault__ = FaultCode.INVALID_ARITY


class MissingRequiredArgumentError(ArgumentParserError):
    __title__ = "missing required argument"
    __fault__ = FaultCode.MISSING_REQUIRED_ARGUMENT


class ArgumentWarning(Warning):
    """
    base of the soft faults: parsing continues, the user is told once.
    """
    __title__ = "argument warning"
    __fault__ = FaultCode.DUPLICATED_ARGUMENT

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({"title": type(self).__title__, "code": type(self).__fault__} | options)

    code = _context("code")
    title = _context("title")
    hint = _context("hint")
    argument = _context("argument")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning-title")

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicatedArgumentWarning(ArgumentWarning):
    __title__ = "duplicated argument"
    __fault__ = FaultCode.DUPLICATED_ARGUMENT


class DeprecatedArgumentWarning(ArgumentWarning):
    __title__ = "deprecated argument"
    __fault__ = FaultCode.DEPRECATED_ARGUMENT


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - errors: raised, or rendered on stderr followed by sys.exit(2) in shell mode.
    - warnings: emitted through warnings.warn, or rendered on stderr in shell mode.

    typical options
    - prog, shell, fancy, colorful, and any context the renderer may want to show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ArgumentParserError",
    "ArgumentDefinitionError",
    "UnknownArgumentError",
    "ArgumentTypeError",
    "InvalidChoiceError",
    "InvalidArityError",
    "MissingRequiredArgumentError",
    "ArgumentWarning",
    "DuplicatedArgumentWarning",
    "DeprecatedArgumentWarning",
    "trigger",
)
