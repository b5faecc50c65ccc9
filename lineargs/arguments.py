r"""
lineargs argument definitions.

Overview
- Argument: one declared argument, either optional (flag-addressed, e.g. -o/--output)
  or positional (a single bare name, consumed left to right).
- ValueType: the closed set of value kinds ("string", "number", "boolean").
- Arity: the normalized "nargs" tagged value, (kind, count), where kind is an ArityKind:
  • FIXED        : exactly `count` values (count >= 1)
  • OPTIONAL     : "?", zero or one value
  • ZERO_OR_MORE : "*"
  • ONE_OR_MORE  : "+"
- ArgumentKind: OPTIONAL (flags start with a dash) or POSITIONAL.

Introspection & representation
- DefinitionType metaclass provides stable __repr__/__rich_repr__ and exposes the
  fields named in __introspectable__ as read-only properties (see utils.mirror).

Metadata (sanitized on construction, every failure raises ArgumentDefinitionError)
- flags: one bare name (positional) or dash-prefixed spellings (optional); no duplicates.
- type: ValueType member or its string value.
- nargs: Unset | "?" | "*" | "+" | int (>= 1); booleans default to "?", others to 1.
- choices: Unset | non-empty sequence (or set) without duplicates; normalized to a tuple.
- required/default: mutually exclusive; positional slots are required unless they
  declare a default or an arity that may be empty ("?" or "*").
- dest: defaults to the last flag without leading dashes (or the positional name).
- metavar: defaults to dest upper-cased (the bare name for positionals); help: str or rich Text.
- hidden/deprecated: help visibility and usage warnings.

Quick example:
    >>> from lineargs.arguments import Argument
    >>> Argument("-p", "--port", type="number", choices=[8080, 8081]).dest
    'port'
    >>> Argument("files", nargs="+").arity
    Arity(kind=<ArityKind.ONE_OR_MORE: '+'>, count=1)
"""
import functools
import operator
import re
from collections.abc import Sequence, Set, Mapping
from enum import Enum, StrEnum
from typing import NamedTuple

from rich.text import Text

from .faults import ArgumentDefinitionError, FaultCode
from .utils import *


class ValueType(StrEnum):
    """
    value kinds an argument can be coerced to.
    """
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class ArgumentKind(StrEnum):
    OPTIONAL = "optional"
    POSITIONAL = "positional"


class ArityKind(Enum):
    FIXED = "N"
    OPTIONAL = "?"
    ZERO_OR_MORE = "*"
    ONE_OR_MORE = "+"


class Arity(NamedTuple):
    """
    normalized arity: the tagged form of a "nargs" declaration.

    count is the fixed number for FIXED, and the minimum number of values
    otherwise (0 for "?" and "*", 1 for "+").
    """
    kind: ArityKind
    count: int

    @classmethod
    def of(cls, nargs, /):
        """
        build the tagged arity from a declared nargs (int or "?", "*", "+").
        """
        match nargs:
            case "?":
                return cls(ArityKind.OPTIONAL, 0)
            case "*":
                return cls(ArityKind.ZERO_OR_MORE, 0)
            case "+":
                return cls(ArityKind.ONE_OR_MORE, 1)
            case int():
                return cls(ArityKind.FIXED, nargs)
        raise ValueError("unsupported nargs %r" % (nargs,))

    @property
    def scalar(self):
        """
        whether a result of this arity is stored as a single value.
        """
        return self.kind is ArityKind.OPTIONAL or (self.kind is ArityKind.FIXED and self.count == 1)

    @property
    def variadic(self):
        return self.kind in (ArityKind.ZERO_OR_MORE, ArityKind.ONE_OR_MORE)


class DefinitionType(type):
    """
    Metaclass that turns definitions into introspectable, read-only descriptors.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and help output.
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - argument(flags=('-v', '--verbose'), type=<ValueType.BOOLEAN: 'boolean'>, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers (rich.pretty).
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _fail(cls, message, /, **options):
    return ArgumentDefinitionError(
        "%s %s" % (cls.__typename__, message),
        code=options.pop("code", FaultCode.INVALID_DEFINITION),
        hint=options.pop("hint", "fix the definition before parsing"),
        **options
    )


def _sanitize_flags(cls, metadata, /):
    """
    Internal: validate the surface spellings and derive the argument kind.

    Rules
    - at least one spelling, each a non-empty string without whitespace.
    - positional: exactly one bare name (no leading dash).
    - optional: every spelling is '-x', '-name' or '--name' (one or two dashes
      followed by at least one non-dash character); duplicates are rejected.
    """
    flags = metadata["flags"]
    if len(flags) == 1 and isinstance(flags[0], Sequence) and not isinstance(flags[0], str):
        flags = tuple(flags[0])
    if not flags:
        raise _fail(cls, "must specify at least one flag or name")

    for flag in flags:
        if not isinstance(flag, str):
            raise _fail(cls, "flags must be strings, not %s" % type(flag).__name__)
        if not flag or re.search(r"\s", flag):
            raise _fail(cls, "flags cannot be empty or contain whitespace (got %r)" % flag, argument=flag)

    if flags[0].startswith("-"):
        kind = ArgumentKind.OPTIONAL
        for flag in flags:
            if not re.fullmatch(r"--?[^-=]\S*", flag) or "=" in flag:
                raise _fail(cls, "option flags must look like '-x' or '--name' (got %r)" % flag, argument=flag)
        if len(set(flags)) != len(flags):
            raise _fail(cls, "flags cannot contain duplicates", argument=flags[0])
    else:
        kind = ArgumentKind.POSITIONAL
        if len(flags) != 1:
            raise _fail(cls, "positional arguments take exactly one name (got %r)" % (flags,), argument=flags[0])

    metadata["flags"] = tuple(flags)
    metadata["kind"] = kind


def _sanitize_parametric_metadata(cls, metadata, /):
    """
    Internal: validate type/nargs/choices and normalize them.

    Side effects
    - type becomes a ValueType member.
    - nargs defaults to "?" for booleans and 1 otherwise; arity is derived from it.
    - choices becomes a tuple (or stays Unset).
    """
    try:
        metadata["type"] = valuetype = ValueType(metadata["type"])
    except (ValueError, TypeError):
        raise _fail(cls, "'type' must be one of %s (got %r)" % (
            ", ".join(map(repr, ValueType)), metadata["type"]
        )) from None

    nargs = metadata["nargs"]
    if nargs is Unset:
        nargs = "?" if valuetype is ValueType.BOOLEAN else 1
    if isinstance(nargs, bool) or not isinstance(nargs, str | int):
        raise _fail(cls, "'nargs' must be a positive integer or one of '?', '*', '+' (got %r)" % (nargs,))
    if isinstance(nargs, str) and nargs not in ("?", "*", "+"):
        raise _fail(cls, "'nargs' must be one of '?', '*', '+' (got %r)" % nargs)
    if isinstance(nargs, int) and nargs < 1:
        raise _fail(cls, "'nargs' must be a positive integer (got %r)" % nargs)
    metadata["nargs"] = nargs
    metadata["arity"] = Arity.of(nargs)

    if (choices := metadata["choices"]) is not Unset:
        if isinstance(choices, str | Mapping) or not isinstance(choices, Sequence | Set):
            raise _fail(cls, "'choices' must be a sequence (got %s)" % type(choices).__name__)
        sanitized = []
        for choice in choices:
            if choice in sanitized:
                raise _fail(cls, "'choices' cannot contain duplicates (got %r twice)" % (choice,))
            sanitized.append(choice)
        if not sanitized:
            raise _fail(cls, "'choices' cannot be empty")
        metadata["choices"] = tuple(sanitized)


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize requirement, destination and help fields.

    - required/default are mutually exclusive; required defaults per kind.
    - dest/metavar must be non-empty strings after trimming when provided.
    - help must be a string or rich Text when provided.
    """
    if not isinstance(metadata["required"], bool | Unset):
        raise _fail(cls, "'required' must be a boolean")
    if metadata["required"] is True and metadata["default"] is not Unset:
        raise _fail(cls, "cannot be both required and have a default value", argument=metadata["flags"][-1])

    if metadata["kind"] is ArgumentKind.OPTIONAL:
        metadata["required"] = coalesce(metadata["required"], False)
    else:
        metadata["required"] = coalesce(metadata["required"], (
            metadata["default"] is Unset and
            metadata["arity"].kind not in (ArityKind.OPTIONAL, ArityKind.ZERO_OR_MORE)
        ))

    for field in ("dest", "metavar"):
        if not isinstance(value := metadata[field], str | Unset):
            raise _fail(cls, "%r must be a string" % field)
        elif isinstance(value, str) and not (value := value.strip()):
            raise _fail(cls, "%r cannot be empty" % field)
        metadata[field] = value

    metadata["dest"] = coalesce(metadata["dest"], metadata["flags"][-1].lstrip("-"))
    metadata["metavar"] = coalesce(metadata["metavar"], (
        metadata["dest"].upper() if metadata["kind"] is ArgumentKind.OPTIONAL else metadata["flags"][0]
    ))

    if not isinstance(help := metadata["help"], str | Text | Unset):
        raise _fail(cls, "'help' must be a string")
    elif isinstance(help, str) and not (help := help.strip()):
        raise _fail(cls, "'help' cannot be empty")
    metadata["help"] = coalesce(help)


class Argument(metaclass=DefinitionType):
    """
    One declared argument: how its tokens are found, counted, coerced and stored.

    Highlights
    - kind is derived from the first flag: a leading dash makes it optional.
    - arity is the tagged form of nargs, used by the collector and the cursor.
    - default is Unset unless declared (None is a legitimate default).

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes,
      mirroring the sanitized metadata values.
    """

    __introspectable__ = (
        "flags",
        "kind",
        "type",
        "nargs",
        "arity",
        "choices",
        "required",
        "default",
        "dest",
        "metavar",
        "help",
        "hidden",
        "deprecated",
    )

    __displayable__ = (
        "flags",
        "type",
        "nargs",
        "choices",
        "required",
        "default",
        "dest",
    )

    def __new__(
            cls,
            *flags,
            type=ValueType.STRING,
            nargs=Unset,
            choices=Unset,
            required=Unset,
            default=Unset,
            dest=Unset,
            metavar=Unset,
            help=Unset,
            hidden=False,
            deprecated=False
    ):
        """
        Construct an Argument with the provided metadata.

        Parameters
        - flags: one or more str (or a single list/tuple of them)
          "-x"/"--name" spellings for optional arguments, one bare name for positionals.
        - type: "string" | "number" | "boolean" (or ValueType)
        - nargs: Unset | "?" | "*" | "+" | int (>= 1)
        - choices: Unset | sequence of allowed post-coercion values
        - required: Unset | bool (cannot be True together with a default)
        - default: Unset | Any, stored when the argument never shows up
        - dest: Unset | str, the result key
        - metavar: Unset | str, the value label in usage text
        - help: Unset | str | Text, the help text
        - hidden: bool, suppress from help output
        - deprecated: bool, warn when used

        Raises
        - ArgumentDefinitionError on any invalid combination.
        """
        metadata = {
            "flags": flags,
            "type": type,
            "nargs": nargs,
            "choices": choices,
            "required": required,
            "default": default,
            "dest": dest,
            "metavar": metavar,
            "help": help,
            "hidden": bool(hidden),
            "deprecated": bool(deprecated),
        }
        _sanitize_flags(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def primary(self):
        """
        the spelling used to name this argument in messages (last flag or positional name).
        """
        return self._flags[-1]

    @property
    def positional(self):
        return self._kind is ArgumentKind.POSITIONAL

    @property
    def presence(self):
        """
        whether this is a presence switch (boolean with the default "?" arity).

        presence switches never consume following tokens; only '--flag=value'
        can attach an explicit boolean.
        """
        return self._type is ValueType.BOOLEAN and self._arity.kind is ArityKind.OPTIONAL


__all__ = (
    "ValueType",
    "ArgumentKind",
    "ArityKind",
    "Arity",
    "Argument",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del DefinitionType
