"""
lineargs coercion: turn raw tokens into typed values and check choices.

Pipeline (per raw token)
1. convert(argument, input, raw): exhaustive match over the argument's ValueType.
   • NUMBER  → int for integer literals (decimal or 0x/0o/0b prefixed), float otherwise;
               empty text and NaN are rejected.
   • BOOLEAN → "true"/"false", case-insensitive.
   • STRING  → unchanged.
2. pick(argument, input, value): when choices are declared, return the matching
   *declared* choice (compared by string form, numbers also by value).

Faults
- ArgumentTypeError(argument=input, expected=<type>, received=<raw>)
- InvalidChoiceError(argument=input, value=<value>, choices=<choices>)
"""
import math
import re

from .arguments import ValueType
from .faults import ArgumentTypeError, InvalidChoiceError
from .utils import Unset

_INTEGER = re.compile(r"[+-]?(?:0[xX][0-9a-fA-F_]+|0[oO][0-7_]+|0[bB][01_]+|\d[\d_]*)")


def _number(raw, /):
    text = raw.strip()
    if _INTEGER.fullmatch(text):
        return int(text, 0) if not text.lstrip("+-").isdigit() else int(text)
    value = float(text)
    if math.isnan(value):
        raise ValueError("not a number")
    return value


def convert(argument, input, raw, /):
    """
    convert one raw token per the argument's declared type.

    parameters
    - argument: Argument, the definition (its type drives the conversion).
    - input: str, the spelling the user typed (or the positional name), used in messages.
    - raw: str, the token text.
    """
    match argument.type:
        case ValueType.STRING:
            return raw
        case ValueType.NUMBER:
            try:
                return _number(raw)
            except ValueError:
                pass
        case ValueType.BOOLEAN:
            match raw.lower():
                case "true":
                    return True
                case "false":
                    return False
    raise ArgumentTypeError(
        "argument %r expected a %s, but received %r" % (input, argument.type, raw),
        argument=input,
        expected=str(argument.type),
        received=raw,
        hint={
            ValueType.NUMBER: "use a numeric literal such as 42, -7 or 3.14",
            ValueType.BOOLEAN: "use 'true' or 'false'",
        }.get(argument.type, "check the value format"),
    )


def _same(choice, value, /):
    if str(choice) == str(value):
        return True
    # 8080 and 8080.0 name the same port; bools never equal numbers here.
    numbers = (int, float)
    return (
        isinstance(choice, numbers) and not isinstance(choice, bool) and
        isinstance(value, numbers) and not isinstance(value, bool) and
        choice == value
    )


def pick(argument, input, value, /):
    """
    validate a converted value against the declared choices.

    returns the declared choice instance that matched (so a "number" argument with
    string choices yields the string choice), or the value itself when the
    argument declares no choices.
    """
    if argument.choices is Unset:
        return value
    for choice in argument.choices:
        if _same(choice, value):
            return choice
    raise InvalidChoiceError(
        "invalid choice for %r: %r (choose from %s)" % (input, value, ", ".join(map(repr, argument.choices))),
        argument=input,
        value=value,
        choices=argument.choices,
        hint="pick one of %s" % ", ".join(map(str, argument.choices)),
    )


def coerce(argument, input, raw, /):
    """
    convert and validate one raw token (convert, then pick).
    """
    return pick(argument, input, convert(argument, input, raw))


__all__ = (
    "convert",
    "pick",
    "coerce",
)
