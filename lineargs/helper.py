"""
lineargs help rendering: usage line, argument sections and the styled help screen.

Layout
    usage: prog [-v] [-n NAME] [--tags [TAGS ...]] input [files ...]

    description

    positional arguments:
      input                 help text, wrapped with a hanging indent

    options:
      -v, --verbose         help text
      -n, --name NAME       help text

    epilog

Metavar decorations (by arity)
- FIXED N: "M M ..." (N times); "?": "[M]"; "*": "[M ...]"; "+": "M [M ...]".
- declared choices replace the label: "{a,b,c}".

Palette keys
- usage-label, program-name, description-section, epilog-section, group-label
- option-name, positional-name, deprecated-name
- metavar, greedy-metavar, choice, deprecated-metavar
- argument-description, deprecated-note, panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed; deprecated* still apply strike.
"""
from collections import defaultdict

from rich.console import Console
from rich.containers import Lines
from rich.panel import Panel
from rich.text import Text

from .arguments import ArityKind

_PADDING = 2  # Leading spaces before the names column
_INDENT = 24  # Column for description wrap/hanging indent
_WIDTH = 80  # Width of the plain-text renderings


def _styler(colorful, /):
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "description-section": "italic #A3A3A3",  # Neutral gray
        "epilog-section": "#737373",  # Dim footer gray

        # === Groups / arguments ===
        "group-label": "bold #FFFFFF",  # Pure white headers
        "argument-description": "#9CA3AF",  # Muted gray
        "deprecated-note": "italic #F97316",

        # === Names / metavars ===
        "option-name": "bold #00E6FF",  # CYAN for options
        "positional-name": "bold #22C55E",  # GREEN for positionals
        "deprecated-name": "bold #F97316 strike",  # ORANGE strike for deprecated

        "metavar": "bold #FFD600",  # AMBER for parameters
        "greedy-metavar": "bold italic #FFD600",
        "deprecated-metavar": "bold #F97316 strike",
        "choice": "bold #FF4D94",  # MAGENTA → choices stand out

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        # Keep strike for deprecated even in non-color mode
        if "deprecated" in style and not colorful:
            return "strike" if style != "deprecated-note" else ""
        return styles[style] if colorful else ""

    return styler


def _text(fragment, style, colorful, /):
    # Normalize to rich Text; in non-colorful mode strip the styles of given Text too.
    if not colorful:
        return Text(str(fragment), style)
    if isinstance(fragment, Text):
        return fragment.copy()
    return Text(str(fragment), style)


def _metavar(argument, styler, /):
    """
    the value label of an argument, decorated by its arity.
    """
    if argument.choices:
        style = "deprecated-metavar" if argument.deprecated else "choice"
        label = Text.assemble("{", Text(",").join(Text(str(choice), styler(style)) for choice in argument.choices), "}")
    else:
        style = "deprecated-metavar" if argument.deprecated else (
            "greedy-metavar" if argument.arity.variadic else "metavar"
        )
        label = Text(argument.metavar, styler(style))

    arity = argument.arity
    match arity.kind:
        case ArityKind.OPTIONAL:
            return Text.assemble("[", label, "]")
        case ArityKind.ZERO_OR_MORE:
            return Text.assemble("[", label, " ...]")
        case ArityKind.ONE_OR_MORE:
            return Text.assemble(label, " [", label.copy(), " ...]")
        case ArityKind.FIXED:
            return Text(" ").join(label.copy() for _ in range(arity.count))


def _names(argument, styler, /):
    if argument.positional:
        return Text(argument.metavar, styler("deprecated-name" if argument.deprecated else "positional-name"))
    style = "deprecated-name" if argument.deprecated else "option-name"
    return Text(", ").join(Text(flag, styler(style)) for flag in argument.flags)


def usage(parser, /, *, colorful=True, width=_WIDTH):
    """
    build the usage line of a parser (wrapped with a hanging indent).
    """
    styler = _styler(colorful)
    headline = Text()
    headline.append("usage", styler("usage-label")).append(": ")
    headline.append(parser.prog, styler("program-name"))
    offset = len(headline) + 1  # Hanging-indent column for wrapped usage items

    inputs = []
    for argument in parser.arguments:
        if argument.hidden:
            continue
        if argument.positional:
            inputs.append(_metavar(argument, styler))
            continue
        style = "deprecated-name" if argument.deprecated else "option-name"
        input = Text(argument.flags[0], styler(style))
        if not argument.presence:
            input = Text.assemble(input, " ", _metavar(argument, styler))
        inputs.append(input if argument.required else Text.assemble("[", input, "]"))

    lines = Lines()
    for input in inputs:
        if lines and len(lines[-1]) + 1 + len(input) <= width - offset:
            lines[-1].append(" ").append(input)
        else:
            lines.append(input)

    for index, line in enumerate(lines):
        headline.append(" " if index == 0 else "\n" + " " * offset).append(line)
    return headline


def _entry(argument, styler, console, colorful, width, /):
    """
    one row of an argument section: names column, then the wrapped description.
    """
    names = _names(argument, styler)
    if not argument.positional and not argument.presence:
        names.append(" ").append(_metavar(argument, styler))
    entry = Text(" " * _PADDING).append(names)

    descr = Text()
    if argument.help:
        descr.append(_text(argument.help, styler("argument-description"), colorful))
    if argument.deprecated:
        descr.append(" (deprecated)" if descr else "(deprecated)", styler("deprecated-note"))
    if not descr:
        return entry

    # Description flow: break the line before the description when the names column is wide
    if len(entry) + _PADDING > _INDENT:
        entry.append("\n").append(" " * _INDENT)
    else:
        entry.append(" " * (_INDENT - len(entry)))
    for index, line in enumerate(descr.wrap(console, max(width - _INDENT, _INDENT))):
        if index:
            entry.append("\n").append(" " * _INDENT)
        entry.append(line)
    return entry


def render(parser, /, *, console=None, colorful=True, width=None):
    """
    build the whole help screen as a single rich Text.

    parameters
    - parser: ArgumentParser, the parser to describe.
    - console: rich Console used to measure wrapping (a detached one by default).
    - colorful: bool, whether palette styles are applied.
    - width: int, wrapping width (defaults to the console width).
    """
    console = console or Console(width=_WIDTH, color_system=None)
    width = width or console.width
    styler = _styler(colorful)

    renders = [usage(parser, colorful=colorful, width=width)]
    if parser.description:
        renders.append(_text(parser.description, styler("description-section"), colorful))

    for label, arguments in (
            ("positional arguments", parser.registry.positionals),
            ("options", tuple(parser.registry.named.values())),
    ):
        if not (visible := [argument for argument in arguments if not argument.hidden]):
            continue
        section = Text()
        section.append(label, styler("group-label")).append(":")
        for argument in visible:
            section.append("\n").append(_entry(argument, styler, console, colorful, width))
        renders.append(section)

    if parser.epilog:
        renders.append(_text(parser.epilog, styler("epilog-section"), colorful))

    return Text("\n\n").join(renders)


def format_usage(parser, /):
    """
    the plain-text usage line (no styles), newline-terminated.
    """
    return usage(parser, colorful=False).plain + "\n"


def format_help(parser, /):
    """
    the plain-text help screen (no styles), newline-terminated.
    """
    return render(parser, colorful=False).plain + "\n"


def print_usage(parser, /, console=None):
    console = console or Console()
    console.print(usage(parser, colorful=parser.colorful, width=console.width))


def print_help(parser, /, console=None):
    """
    print the styled help screen, inside a panel when the parser is fancy.
    """
    console = console or Console()
    width = console.width - 4 * parser.fancy  # Account for panel gutters when fancy=True
    renderable = render(parser, console=console, colorful=parser.colorful, width=width)

    if parser.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{parser.prog} help".upper(), " ", "]",
                                style=_styler(parser.colorful)("panel-title")),
            title_align="left",
        )

    console.print(renderable)


__all__ = (
    "usage",
    "render",
    "format_usage",
    "format_help",
    "print_usage",
    "print_help",
)
