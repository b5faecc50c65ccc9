"""
lineargs argument registry: the immutable configuration a parse runs against.

Structure
- named: canonical option name → Argument, in registration order (the order used
  when reporting missing required arguments).
- positionals: tuple of positional Arguments; the order is the left-to-right
  consumption order.
- spellings: every flag spelling ('-x', '-name', '--name') → Argument, used by
  the option resolver.

Immutability
- a Registry never changes once built; extend() returns a new one. a parser swaps
  its registry on every define(), and each parse captures the registry it started
  with, so parse calls never observe a half-registered argument.
"""
from types import MappingProxyType

from .arguments import Argument
from .faults import ArgumentDefinitionError, FaultCode


class Registry:
    """
    Immutable collection of argument definitions.
    """
    __slots__ = ("_named", "_positionals", "_spellings")

    def __init__(self, named=(), positionals=(), spellings=()):
        object.__setattr__(self, "_named", MappingProxyType(dict(named)))
        object.__setattr__(self, "_positionals", tuple(positionals))
        object.__setattr__(self, "_spellings", MappingProxyType(dict(spellings)))

    def __setattr__(self, name, value, /):
        raise AttributeError("registry is read-only")

    @property
    def named(self):
        return self._named

    @property
    def positionals(self):
        return self._positionals

    @property
    def spellings(self):
        return self._spellings

    def __iter__(self):
        """
        iterate every definition: optional arguments first, then positionals.
        """
        yield from self._named.values()
        yield from self._positionals

    def __len__(self):
        return len(self._named) + len(self._positionals)

    def __repr__(self):
        return "registry(named=%r, positionals=%r)" % (
            tuple(self._named), tuple(argument.dest for argument in self._positionals)
        )

    def extend(self, argument, /):
        """
        return a new registry that also holds the given argument.

        conflicts
        - a flag spelling already owned by another argument.
        - a canonical option name (last flag without dashes) already taken.
        - a positional name already used by another positional.
        - a destination already written by another argument (optional or positional).
        """
        if not isinstance(argument, Argument):
            raise TypeError("extend() argument must be an argument definition")

        if argument.positional:
            name, = argument.flags
            if any(other.flags[0] == name for other in self._positionals):
                raise ArgumentDefinitionError(
                    "positional argument %r is already defined" % name,
                    code=FaultCode.CONFLICTING_DEFINITION,
                    argument=name,
                    hint="give every positional argument a distinct name",
                )
            self._claim(argument)
            return Registry(self._named, self._positionals + (argument,), self._spellings)

        canonical = argument.primary.lstrip("-")
        for flag in argument.flags:
            if flag in self._spellings:
                raise ArgumentDefinitionError(
                    "option %r is already defined" % flag,
                    code=FaultCode.CONFLICTING_DEFINITION,
                    argument=flag,
                    hint="every flag spelling can belong to one argument only",
                )
        if canonical in self._named:
            raise ArgumentDefinitionError(
                "option name %r is already defined (by %r)" % (canonical, self._named[canonical].primary),
                code=FaultCode.CONFLICTING_DEFINITION,
                argument=argument.primary,
                hint="use a different last flag for one of the two options",
            )
        self._claim(argument)
        return Registry(
            {**self._named, canonical: argument},
            self._positionals,
            {**self._spellings, **dict.fromkeys(argument.flags, argument)},
        )

    def _claim(self, argument, /):
        for other in self:
            if other.dest == argument.dest:
                raise ArgumentDefinitionError(
                    "destination %r of %r is already used by %r" % (argument.dest, argument.primary, other.primary),
                    code=FaultCode.CONFLICTING_DEFINITION,
                    argument=argument.primary,
                    hint="pass a distinct dest= to one of the two arguments",
                )

    def lookup(self, spelling, /):
        """
        return the argument owning a flag spelling, or None.
        """
        return self._spellings.get(spelling)


__all__ = (
    "Registry",
)
