"""
Runfile token variants.

The lexer turns text into a flat sequence of these immutable records, in
document order. The union is closed: consumers dispatch with a `match`
statement over the six classes below and nothing else.

Variants
- GroupHeader(name)
- CommandHeader(names, arguments, flags, comment)
- ArgumentDecl(name, optional, variadic, comment)
- FlagDecl(long, short, takes_value, type_hint, comment)
- ScriptLine(content)   raw line, leading whitespace preserved
- Comment(content)      trimmed line, '#' marker included
"""
from typing import NamedTuple


class GroupHeader(NamedTuple):
    name: str


class ArgumentDecl(NamedTuple):
    name: str
    optional: bool = False
    variadic: bool = False
    comment: str | None = None


class FlagDecl(NamedTuple):
    long: str
    short: str | None = None
    takes_value: bool = False
    type_hint: str | None = None
    comment: str | None = None


class CommandHeader(NamedTuple):
    names: tuple[str, ...]
    arguments: tuple[ArgumentDecl, ...] = ()
    flags: tuple[FlagDecl, ...] = ()
    comment: str | None = None


class ScriptLine(NamedTuple):
    content: str


class Comment(NamedTuple):
    content: str


Token = GroupHeader | CommandHeader | ArgumentDecl | FlagDecl | ScriptLine | Comment


__all__ = (
    "Token",
    "GroupHeader",
    "CommandHeader",
    "ArgumentDecl",
    "FlagDecl",
    "ScriptLine",
    "Comment",
)
