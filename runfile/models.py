"""
Runfile document model.

Overview
- Group(name): a display label; commands point at it by name (weak reference).
- Argument / Flag: immutable parameter records.
- Command: one invocable unit, read-only once built (fields are exposed through
  mirror() as tuples, never as the builder's lists).
- Document: ordered groups + ordered commands, with name-based group lookup.

Representation
- Command and Document provide __rich_repr__ so rich.pretty renders them field
  by field; __repr__ is derived from the same field list.
"""
import functools
import operator
import re
from typing import NamedTuple

from .utils import *

DEFAULT_SHEBANG = "#!/bin/sh"


class Group(NamedTuple):
    name: str


class Argument(NamedTuple):
    name: str
    optional: bool = False
    variadic: bool = False
    description: str | None = None

    @property
    def label(self):
        """Help-style label: "name", "name?" or "...name"."""
        if self.variadic:
            return "..." + self.name
        return self.name + ("?" if self.optional else "")


class Flag(NamedTuple):
    long: str
    short: str | None = None
    takes_value: bool = False
    type_hint: str | None = None
    description: str | None = None

    @property
    def label(self):
        """Help-style label: "-s, --long" or "--long"."""
        return (f"-{self.short}, " if self.short else "") + "--" + self.long

    @property
    def keys(self):
        """Every name a caller may use for this flag (long name and short char)."""
        return frozenset(filter(None, (self.long, self.short)))


class _Introspectable:
    """
    Mixin providing __repr__/__rich_repr__ from a class-level __introspectable__
    tuple, and read-only properties (via mirror) for each listed field.
    """
    __introspectable__ = ()

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        cls.__typename__ = re.sub(r"(?<!^)(?=[A-Z])", r"-", cls.__name__).lower()
        for name in cls.__introspectable__:
            setattr(cls, name, mirror(name))

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"{type(self).__typename__}({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in type(self).__introspectable__)

    __hash__ = None


class Command(_Introspectable):
    """
    A named, invocable unit with declared parameters and a script body.

    Fields
    - names (tuple[str, ...]): every alias, in declaration order.
    - description (str | None): joined comment block above the header.
    - group (str | None): name of the Group the command was declared under.
    - args / flags (tuple[Argument, ...] / tuple[Flag, ...]): declared parameters.
    - script (str): the body lines joined with newlines (indentation kept).
    - shebang (str): interpreter line, "#!/bin/sh" unless the body declares one.
    """
    __introspectable__ = (
        "names",
        "description",
        "group",
        "args",
        "flags",
        "script",
        "shebang",
    )

    def __init__(
            self,
            names,
            /,
            description=None,
            group=None,
            args=(),
            flags=(),
            script="",
            shebang=DEFAULT_SHEBANG,
    ):
        if isinstance(names, str) or not names:
            raise TypeError("command names must be a non-empty sequence of strings")
        self._names = tuple(names)
        self._description = description
        self._group = group
        self._args = tuple(args)
        self._flags = tuple(flags)
        self._script = script
        self._shebang = shebang

    @property
    def name(self):
        """The first declared alias."""
        return self._names[0]

    @property
    def interpreter(self):
        """Interpreter command line taken from the shebang ("#!" stripped)."""
        return self._shebang.removeprefix("#!").strip() or DEFAULT_SHEBANG.removeprefix("#!")

    @property
    def variadic(self):
        """Position and Argument of the variadic argument, or None."""
        for position, argument in enumerate(self._args):
            if argument.variadic:
                return position, argument
        return None


class Document(_Introspectable):
    """
    Parsed Runfile: ordered groups and ordered commands.

    Group membership lives on each Command (by name); use members() and
    group() instead of storing commands on groups.
    """
    __introspectable__ = (
        "groups",
        "commands",
    )

    def __init__(self, groups=(), commands=(), /):
        self._groups = tuple(group for group in groups if group.name)
        self._commands = tuple(commands)

    def group(self, name, /):
        """Return the first Group called `name`, or None."""
        return next((group for group in self._groups if group.name == name), None)

    def members(self, name, /):
        """Commands attached to the group called `name` (None: ungrouped), in order."""
        return tuple(command for command in self._commands if command.group == name)

    def find(self, name, /):
        """Every command declaring `name` as an alias, in declaration order."""
        return tuple(command for command in self._commands if name in command.names)


__all__ = (
    "DEFAULT_SHEBANG",
    "Group",
    "Argument",
    "Flag",
    "Command",
    "Document",
)
