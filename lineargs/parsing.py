"""
lineargs parsing engine: one left-to-right scan over a token tuple.

What happens in a scan
- dispatch: every token is routed either to the option resolver (it looks like a
  flag) or to the positional cursor (anything else, including the lone '-').
- option resolver
  • '--name[=value]': looked up by spelling; the attached value is unquoted once more.
  • '-x' / '-name': an exact spelling match wins; otherwise each character of a
    bundle ('-abc') resolves on its own as '-a', '-b', '-c', each taking its values
    from the tokens that follow, in bundle order.
- value collector: decides how many following tokens belong to an option, per its
  arity, and checks the arity contract.
- positional cursor: fills positional slots in declaration order.
- post-pass: defaults, empty lists for "*", partially filled fixed slots and the
  required check.

Design
- a ParseContext is created per parse call and discarded afterwards; it only reads
  the Registry it was given. faults are raised immediately (no partial results).
- warnings (duplicated or deprecated arguments) are surfaced through faults.trigger
  with the caller's rendering options and never stop the scan.
"""
import copy
import difflib

from .arguments import ArityKind
from .coercion import coerce
from .faults import *
from .tokens import flagged, unquote
from .utils import *


class ParseContext:
    """
    Per-call parse state over an immutable registry.

    parameters
    - registry: Registry, the definitions to parse against (read-only).
    - tokens: sequence of str, the tokenized input.
    - options: rendering options forwarded to warnings (prog, shell, fancy, colorful).
    """

    def __init__(self, registry, tokens, /, **options):
        self._registry = registry
        self._tokens = tuple(tokens)
        self._options = options
        self._index = 0
        self._cursor = 0
        self._namespace = {}
        self._seen = set()
        self._trailing = None

    def run(self):
        """
        scan every token, then run the post-pass; return the namespace.
        """
        while self._index < len(self._tokens):
            token = self._tokens[self._index]
            if flagged(token):
                self._trailing = None
                if token.startswith("--"):
                    self._resolve_long(token)
                else:
                    self._resolve_short(token)
            else:
                self._positional(token)
                self._trailing = None
            self._index += 1

        self._finalize()
        return self._namespace

    # --- option resolver ---------------------------------------------------

    def _unknown(self, input, /):
        suggestions = difflib.get_close_matches(input, self._registry.spellings.keys(), 5)
        try:
            hint = "did you mean %r?" % suggestions[0]
        except IndexError:
            hint = "registered options: %s" % ", ".join(self._registry.spellings) if self._registry.spellings \
                else "this parser does not define any option"
        return UnknownArgumentError(
            "unknown argument %r" % input,
            argument=input,
            hint=hint,
            suggestions=tuple(suggestions),
        )

    def _resolve_long(self, token):
        name, separator, value = token[2:].partition("=")
        argument = self._registry.lookup("--" + name)
        if argument is None:
            raise self._unknown(token)
        self._option(argument, "--" + name, unquote(value) if separator else Unset)

    def _resolve_short(self, token):
        if (argument := self._registry.lookup(token)) is not None:
            return self._option(argument, token, Unset)
        for char in token[1:]:
            argument = self._registry.lookup("-" + char)
            if argument is None:
                raise self._unknown("-" + char)
            self._option(argument, "-" + char, Unset)

    def _option(self, argument, input, value):
        """
        handle one resolved optional argument (value is Unset unless attached with '=').
        """
        if argument.deprecated:
            self._warn(DeprecatedArgumentWarning(
                "argument %r is deprecated" % input,
                argument=input,
                hint="check the help text for its replacement",
            ))
        if argument.dest in self._seen:
            self._warn(DuplicatedArgumentWarning(
                "argument %r was already provided; the last occurrence wins" % input,
                argument=input,
                hint="keep a single %s" % input,
            ))
        self._seen.add(argument.dest)

        if argument.presence:
            # boolean switches never look past their own token
            self._namespace[argument.dest] = True if value is Unset or not value else coerce(argument, input, value)
            return

        values = self._collect(argument, input, value)
        if values:
            result = [coerce(argument, input, raw) for raw in values]
            self._namespace[argument.dest] = result[0] if argument.arity.scalar else result
        elif argument.arity.kind is ArityKind.ZERO_OR_MORE:
            self._namespace[argument.dest] = []

        if argument.arity.kind is ArityKind.FIXED and value is Unset:
            self._trailing = (argument, input)

    # --- value collector ---------------------------------------------------

    def _collect(self, argument, input, value):
        """
        gather the raw values of an option starting after the current token.

        rules
        - an attached value ('--name=value') is the only value; nothing else is consumed.
        - target: FIXED → count; "?" and "+" → 1; "*" → 0.
        - stop once the target is reached (FIXED, "?"), or at a flag-looking token
          once the target is satisfied (or always, for "?"). below the target,
          flag-looking tokens are taken as values ('--offset -5').
        - FIXED needs exactly count values; "+" needs at least one.
        """
        arity = argument.arity
        if value is not Unset:
            values = [value]
        else:
            target = 1 if arity.kind in (ArityKind.OPTIONAL, ArityKind.ONE_OR_MORE) else arity.count
            values = []
            for token in self._tokens[self._index + 1:]:
                if flagged(token) and (len(values) >= target or arity.kind is ArityKind.OPTIONAL):
                    break
                values.append(token)
                if arity.kind in (ArityKind.FIXED, ArityKind.OPTIONAL) and len(values) == target:
                    break
            self._index += len(values)

        match arity.kind:
            case ArityKind.FIXED if len(values) != arity.count:
                raise self._arity(input, arity.count, len(values))
            case ArityKind.ONE_OR_MORE if not values:
                raise self._arity(input, "at least one", 0)
        return values

    def _arity(self, input, expected, received, /):
        noun = pluralize("value", expected if isinstance(expected, int) else 2)
        return InvalidArityError(
            "argument %r expected %s %s, but received %d" % (input, expected, noun, received),
            argument=input,
            expected=expected,
            received=received,
            hint="pass %s %s to %s" % (expected, noun, input),
        )

    # --- positional cursor -------------------------------------------------

    def _positional(self, token):
        positionals = self._registry.positionals
        if self._cursor >= len(positionals):
            if positionals and positionals[-1].arity.variadic:
                self._cursor = len(positionals) - 1
            elif self._trailing is not None:
                argument, input = self._trailing
                surplus = 0
                for other in self._tokens[self._index:]:
                    if flagged(other):
                        break
                    surplus += 1
                raise self._arity(input, argument.arity.count, argument.arity.count + surplus)
            else:
                raise UnknownArgumentError(
                    "unexpected positional argument %r" % token,
                    argument=token,
                    hint="remove the extra value or quote it together with the previous one",
                )

        argument = positionals[self._cursor]
        value = coerce(argument, argument.primary, token)
        arity = argument.arity
        if arity.scalar:
            self._namespace[argument.dest] = value
            self._cursor += 1
            return

        values = self._namespace.setdefault(argument.dest, [])
        values.append(value)
        if arity.kind is ArityKind.FIXED and len(values) == arity.count:
            self._cursor += 1

    # --- post-pass ---------------------------------------------------------

    def _finalize(self):
        """
        apply defaults, then enforce fixed positional counts and required-ness.
        """
        for argument in self._registry:
            if argument.dest in self._namespace:
                continue
            if (default := argument._default) is not Unset:
                # a fresh copy per parse, of the declared type; multi-valued results are lists
                default = copy.deepcopy(default)
                self._namespace[argument.dest] = list(default) if isinstance(default, tuple) and not argument.arity.scalar else default
            elif argument.arity.kind is ArityKind.ZERO_OR_MORE:
                self._namespace[argument.dest] = []

        for argument in self._registry.positionals:
            arity = argument.arity
            values = self._namespace.get(argument.dest, Unset)
            if (
                    arity.kind is ArityKind.FIXED and not arity.scalar and
                    isinstance(values, list) and 0 < len(values) < arity.count
            ):
                raise self._arity(argument.primary, arity.count, len(values))

        for argument in self._registry:
            if argument.required and argument.dest not in self._namespace:
                raise MissingRequiredArgumentError(
                    "required argument %r is missing" % argument.primary,
                    argument=argument.primary,
                    hint="provide %s" % (
                        argument.primary if argument.positional else "%s %s" % (argument.primary, argument.metavar)
                    ),
                )

    def _warn(self, warning, /):
        trigger(warning, **self._options)


__all__ = (
    "ParseContext",
)
