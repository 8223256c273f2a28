"""
Runfile lexer: raw text → ordered token sequence.

Approach
- Script bodies are free text; nothing delimits them from declarations. Every
  physical line is therefore classified with a small set of overlapping
  heuristics, evaluated in a fixed precedence order, using only the line itself
  plus limited look-behind/look-ahead over neighbouring lines.

Precedence (first match wins, see Lexer.classify)
1. BLANK             whitespace only; produces nothing.
2. GROUP_HEADER      "# ---" / "# Title" / "# ---" triple; one GroupHeader, three lines consumed.
3. COMMAND_HEADER    unindented "name[, alias]* [param]*[:]"; inline params attached,
                     description collected from the comment lines right above.
4. SHEBANG           any line whose trimmed text starts with "#!/"; a ScriptLine.
5. DECLARATION       exactly two-space indented flag ("-x, --long[=<hint>]", "--long[=<hint>]",
                     "-x") or single-word argument ("name", "name?", "...name", "name...").
6. ATTACHED_COMMENT  "#" line followed (blank/comment lines skipped) by a command header;
                     folded into that header's description, never emitted.
7. COMMENT           any other "#" line; a standalone Comment.
8. SCRIPT            everything else; a ScriptLine keeping its leading whitespace.

State machine
- LexerState records where the scan stands (START, IN_GROUP_HEADER,
  IN_COMMAND_PREAMBLE, IN_SCRIPT). transition(state, kind) is a pure function so
  every edge can be unit-tested; Lexer.trace keeps one (line, kind, state) entry
  per classified line. The state never alters how a line is classified.

Faults
- MalformedHeaderError: a header whose alias run is empty (e.g. ":").
- InlineHeaderCommentError: a " # " comment on the header line itself.
Every other line is classified, never rejected.

Quick example
    >>> tokenize("# Say hi\\nhello name?:\\n  echo hi $name")
    [CommandHeader(names=('hello',), arguments=(ArgumentDecl(name='name', optional=True, ...),), ...),
     ScriptLine(content='  echo hi $name')]
"""
from enum import Enum

from .faults import FaultCode, MalformedHeaderError, InlineHeaderCommentError
from .tokens import *
from .utils import ordinal

_INDENT = "  "


class LineKind(Enum):
    """Shape of one physical line, in classification precedence order."""

    BLANK = "blank"
    GROUP_HEADER = "group-header"
    COMMAND_HEADER = "command-header"
    SHEBANG = "shebang"
    DECLARATION = "declaration"
    ATTACHED_COMMENT = "attached-comment"
    COMMENT = "comment"
    SCRIPT = "script"


class LexerState(Enum):
    """Where the scan stands relative to the surrounding command."""

    START = "start"
    IN_GROUP_HEADER = "in-group-header"
    IN_COMMAND_PREAMBLE = "in-command-preamble"
    IN_SCRIPT = "in-script"


def transition(state, kind, /):
    """
    Return the state reached from `state` after a line of shape `kind`.

    - a group triple enters IN_GROUP_HEADER; the next line continues as from START.
    - a command header always enters IN_COMMAND_PREAMBLE.
    - declarations keep the current state (they only declare inside a preamble).
    - script, shebang and comment lines move a command into IN_SCRIPT; outside a
      command they leave the scan at START.
    - blank lines and attached comments change nothing.
    """
    if state is LexerState.IN_GROUP_HEADER:
        state = LexerState.START

    match kind:
        case LineKind.GROUP_HEADER:
            return LexerState.IN_GROUP_HEADER
        case LineKind.COMMAND_HEADER:
            return LexerState.IN_COMMAND_PREAMBLE
        case LineKind.SHEBANG | LineKind.COMMENT | LineKind.SCRIPT:
            if state is LexerState.START:
                return LexerState.START
            return LexerState.IN_SCRIPT
        case LineKind.DECLARATION | LineKind.BLANK | LineKind.ATTACHED_COMMENT:
            return state
        case _:
            raise TypeError(f"transition() got an unexpected line kind {kind!r}")


def _is_separator(line):
    # "# -", "# ---", … (after trimming)
    trimmed = line.strip()
    return trimmed.startswith("# ") and len(trimmed) > 2 and not trimmed[2:].strip("-")


def _strip_colon(trimmed):
    return trimmed.removesuffix(":").strip() if trimmed.endswith(":") else trimmed


def _split_header(parts):
    """
    Split header words into (aliases, consumed, parameters).

    The alias run is the contiguous leading run of words that do not start with
    '-' and contain no '?', '...' or '='. A word joins the run when it is the
    first word, carries a comma, or follows a word that carried one; commas may
    trail a word ("b, build") or lead the next ("b ,build").
    """
    aliases = []
    index = 0
    comma = False
    while index < len(parts):
        part = parts[index]
        if part.startswith("-") or "?" in part or "..." in part or "=" in part:
            break
        if "," in part:
            aliases.extend(alias for alias in map(str.strip, part.split(",")) if alias)
            comma = True
        elif comma:
            aliases.append(part)
            comma = False
        elif index == 0:
            aliases.append(part)
        else:
            break
        index += 1
    return aliases, index, parts[index:]


def _is_header(line):
    trimmed = line.strip()
    if not trimmed or trimmed.startswith("#") or line.startswith(_INDENT):
        return False
    # first word "echo" is script; "echo:" falls through as a header
    if trimmed.split(maxsplit=1)[0] == "echo":
        return False
    if not (body := _strip_colon(trimmed)):
        return True  # reported as a malformed header
    return _split_header(body.split())[1] > 0


def _argument(word, comment=None):
    if word.startswith("..."):
        return ArgumentDecl(word[3:] or "args", True, True, comment)
    if word.endswith("..."):
        return ArgumentDecl(word[:-3] or "args", True, True, comment)
    if word.endswith("?"):
        return ArgumentDecl(word[:-1], True, False, comment)
    return ArgumentDecl(word, False, False, comment)


def _flag(spec, short=None, comment=None):
    # "--name" or "--name=<hint>"; None when the name is empty
    name = spec.removeprefix("--")
    if not name.partition("=")[0]:
        return None
    if "=" not in name:
        return FlagDecl(name, short, False, None, comment)
    name, _, hint = name.partition("=")
    if len(hint) >= 2 and hint.startswith("<") and hint.endswith(">"):
        return FlagDecl(name, short, True, hint[1:-1], comment)
    return FlagDecl(name, short, True, None, comment)


def _inline_parameters(parts):
    arguments = []
    flags = []
    index = 0
    while index < len(parts):
        part = parts[index]
        if part.startswith("...") or part.endswith("..."):
            arguments.append(_argument(part))
        elif part.startswith("-"):
            if part.endswith(",") and index + 1 < len(parts):
                # "-d, --debug" spans two words
                short = part.removesuffix(",").removeprefix("-")[:1] or None
                if (flag := _flag(parts[index + 1], short)) is not None:
                    flags.append(flag)
                index += 1
            elif part.startswith("--"):
                if (flag := _flag(part)) is not None:
                    flags.append(flag)
            elif len(part) == 2:
                flags.append(FlagDecl(part[1], part[1]))
        else:
            arguments.append(_argument(part))
        index += 1
    return tuple(arguments), tuple(flags)


def _declaration(line):
    """
    Parse a two-space indented declaration line, or return None.

    Lines indented deeper, comment lines, and lines that match no declaration
    shape (e.g. "  echo hi") return None and end up as script text.
    """
    if not line.startswith(_INDENT) or line.startswith(_INDENT + " "):
        return None
    content = line.strip()
    if content.startswith("#"):
        return None

    comment = None
    if (position := content.find(" # ")) >= 0:
        content, comment = content[:position].strip(), content[position:].strip().removeprefix("#").strip()

    if content.startswith("-"):
        parts = [part.strip() for part in content.split(",")]
        if len(parts) == 2:
            return _flag(parts[1].removesuffix(":"), parts[0].removeprefix("-")[:1] or None, comment)
        if content.startswith("--"):
            return _flag(content.removesuffix(":"), None, comment)
        if len(content) == 2:
            return FlagDecl(content[1], content[1], False, None, comment)
        return None

    if content and " " not in content:
        return _argument(content.removesuffix(":"), comment)
    return None


class Lexer:
    """
    Single-pass classifier over the lines of one Runfile.

    A Lexer holds the text it was built with; tokenize() may be called any
    number of times and always yields the same tokens (state and trace are
    reset on every call).
    """

    def __init__(self, text, /):
        if not isinstance(text, str):
            raise TypeError("Lexer() argument must be a string")
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        self._lines = [line.removesuffix("\r") for line in lines]
        self.state = LexerState.START
        self.trace = []

    @property
    def lines(self):
        return tuple(self._lines)

    def _opens_group(self, index):
        return (
            index + 2 < len(self._lines)
            and _is_separator(self._lines[index])
            and self._lines[index + 1].strip().startswith("# ")
            and _is_separator(self._lines[index + 2])
        )

    def _is_title(self, index):
        # a "# Title" line sandwiched between two separators
        return (
            0 < index < len(self._lines) - 1
            and _is_separator(self._lines[index - 1])
            and _is_separator(self._lines[index + 1])
        )

    def _precedes_header(self, index):
        for line in self._lines[index + 1:]:
            trimmed = line.strip()
            if not trimmed:
                continue
            if trimmed.startswith("#") and not _is_separator(trimmed):
                continue
            return _is_header(line)
        return False

    def _describe(self, index):
        """
        Collect the comment block right above a header, top to bottom, joined
        with single spaces; group separators and titles are skipped.
        """
        collected = []
        for previous in range(index - 1, -1, -1):
            trimmed = self._lines[previous].strip()
            if not trimmed.startswith("#"):
                break
            if _is_separator(trimmed) or self._is_title(previous):
                continue
            collected.append(trimmed.removeprefix("#").strip())
        return " ".join(reversed(collected)) if collected else None

    def _header(self, index):
        line = self._lines[index]
        trimmed = line.strip()
        if " # " in trimmed:
            raise InlineHeaderCommentError(
                "comment on the %s line must go on the line above the command" % ordinal(index + 1),
                title="comment on command line",
                code=FaultCode.INLINE_HEADER_COMMENT,
                hint="move the comment to its own line right above %r" % trimmed.split(" # ")[0].strip(),
                line=index + 1,
                source=line,
            )

        aliases, _, parameters = _split_header(_strip_colon(trimmed).split())
        if not aliases:
            raise MalformedHeaderError(
                "command must have at least one name (%s line)" % ordinal(index + 1),
                title="command without a name",
                code=FaultCode.MALFORMED_HEADER,
                hint="start the line with a name, for example 'build:'",
                line=index + 1,
                source=line,
            )

        arguments, flags = _inline_parameters(parameters)
        return CommandHeader(tuple(aliases), arguments, flags, self._describe(index))

    def classify(self, index, /):
        """
        Return the LineKind of the line at `index` (0-based), applying the
        precedence order documented at module level.
        """
        line = self._lines[index]
        trimmed = line.strip()

        if not trimmed:
            return LineKind.BLANK
        if self._opens_group(index):
            return LineKind.GROUP_HEADER
        if _is_header(line):
            return LineKind.COMMAND_HEADER
        if trimmed.startswith("#!/"):
            return LineKind.SHEBANG
        if _declaration(line) is not None:
            return LineKind.DECLARATION
        if trimmed.startswith("#"):
            if not _is_separator(trimmed) and self._precedes_header(index):
                return LineKind.ATTACHED_COMMENT
            return LineKind.COMMENT
        return LineKind.SCRIPT

    def tokenize(self):
        """
        Classify every line and return the token list.

        Raises
        - MalformedHeaderError / InlineHeaderCommentError on the first malformed header.
        """
        tokens = []
        self.state = LexerState.START
        self.trace = []

        index = 0
        while index < len(self._lines):
            line = self._lines[index]
            kind = self.classify(index)

            match kind:
                case LineKind.BLANK | LineKind.ATTACHED_COMMENT:
                    pass
                case LineKind.GROUP_HEADER:
                    tokens.append(GroupHeader(self._lines[index + 1].strip()[2:].strip()))
                case LineKind.COMMAND_HEADER:
                    tokens.append(self._header(index))
                case LineKind.DECLARATION:
                    tokens.append(_declaration(line))
                case LineKind.SHEBANG | LineKind.SCRIPT:
                    tokens.append(ScriptLine(line))
                case LineKind.COMMENT:
                    tokens.append(Comment(line.strip()))

            self.state = transition(self.state, kind)
            self.trace.append((index + 1, kind, self.state))
            index += 3 if kind is LineKind.GROUP_HEADER else 1

        return tokens


def tokenize(text, /):
    """
    Lex a whole Runfile text into tokens (see Lexer).
    """
    return Lexer(text).tokenize()


__all__ = (
    "LineKind",
    "LexerState",
    "Lexer",
    "transition",
    "tokenize",
)
