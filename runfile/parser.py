"""
Runfile parser: token sequence → Document.

The parser is a fold over the lexer's tokens with two pieces of running state:
- the current group name (set by GroupHeader, kept until the next one);
- a CommandBuilder for the command under construction, replaced (never
  shared) at every GroupHeader/CommandHeader boundary and finalized into an
  immutable Command.

Declarations only precede the script: a builder starts in PREAMBLE and moves
to SCRIPT on its first ScriptLine or Comment. From then on argument- and
flag-shaped lines are plain script text and are rendered back verbatim-ish
(an argument as its name, a flag as "-s, --long" or "--long").

The parser stays permissive; structural invariants (duplicate names, varargs
placement, empty scripts) are checked by the resolver.
"""
from enum import Enum

from .models import *
from .tokens import *


class BuilderState(Enum):
    PREAMBLE = "preamble"
    SCRIPT = "script"


class CommandBuilder:
    """
    Mutable accumulator for one command; build() returns the frozen Command.
    """

    def __init__(self, header, /, group=None):
        self.names = list(header.names)
        self.description = header.comment
        self.group = group
        self.args = [_to_argument(token) for token in header.arguments]
        self.flags = [_to_flag(token) for token in header.flags]
        self.lines = []
        self.shebang = DEFAULT_SHEBANG
        self.state = BuilderState.PREAMBLE

    def declare(self, token, /):
        """Record an ArgumentDecl/FlagDecl; once in the script it becomes a script line."""
        if self.state is BuilderState.SCRIPT:
            match token:
                case ArgumentDecl(name=name):
                    self.lines.append(name)
                case FlagDecl(long=long, short=short):
                    self.lines.append((f"-{short}, " if short else "") + "--" + long)
            return
        match token:
            case ArgumentDecl():
                self.args.append(_to_argument(token))
            case FlagDecl():
                self.flags.append(_to_flag(token))

    def script(self, content, /):
        # the first body line may carry the interpreter
        if self.state is BuilderState.PREAMBLE and content.strip().startswith("#!"):
            self.shebang = content.strip()
        self.state = BuilderState.SCRIPT
        self.lines.append(content)

    def comment(self, content, /):
        self.state = BuilderState.SCRIPT
        self.lines.append(content)

    def build(self):
        return Command(
            self.names,
            description=self.description,
            group=self.group,
            args=self.args,
            flags=self.flags,
            script="\n".join(self.lines),
            shebang=self.shebang,
        )


def _to_argument(token):
    return Argument(token.name, token.optional, token.variadic, token.comment)


def _to_flag(token):
    return Flag(token.long, token.short, token.takes_value, token.type_hint, token.comment)


def parse(tokens, /):
    """
    Fold tokens into a Document.

    Tokens appearing before the first command header (other than group
    headers) belong to no command and are dropped.
    """
    groups = []
    commands = []
    group = None
    builder = None

    for token in tokens:
        match token:
            case GroupHeader(name=name):
                if builder is not None:
                    commands.append(builder.build())
                    builder = None
                group = name or None
                groups.append(Group(name))
            case CommandHeader():
                if builder is not None:
                    commands.append(builder.build())
                builder = CommandBuilder(token, group=group)
            case ArgumentDecl() | FlagDecl():
                if builder is not None:
                    builder.declare(token)
            case ScriptLine(content=content):
                if builder is not None:
                    builder.script(content)
            case Comment(content=content):
                if builder is not None:
                    builder.comment(content)
            case _:
                raise TypeError(f"parse() got an unexpected token {token!r}")

    if builder is not None:
        commands.append(builder.build())

    return Document(groups, commands)


__all__ = (
    "BuilderState",
    "CommandBuilder",
    "parse",
)
