"""
Runfile faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  (errors and warnings), grouped by pipeline stage so logs and searches stay
  predictable.
- RunfileException / RunfileWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased and actionable way.
- LexError / ResolveError / BindError / ExecError: one family per pipeline stage.
- trigger(): central entry point to surface any fault (respecting shell/deferred/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Location-first messages: lexing faults name the line, binding faults name the
  ordinal position of the offending token (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- Pipeline stages raise faults directly (non-shell mode is the default).
- The CLI calls trigger(fault, shell=True, ...) so faults are rendered via rich
  on standard error and the process exits with the fault's status.
"""
import copy
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the pipeline (stable identifiers).

    grouping (by stage)
    - lexing (21xxx)
      • MALFORMED_HEADER, INLINE_HEADER_COMMENT
    - resolving (22xxx)
      • COMMAND_NOT_FOUND, DUPLICATE_ARGUMENT, MULTIPLE_VARARGS,
        VARARGS_NOT_LAST, DUPLICATE_FLAG, EMPTY_SCRIPT
    - binding (23xxx)
      • UNKNOWN_FLAG, MISSING_FLAG_VALUE, MISSING_REQUIRED_ARGUMENT
    - execution (24xxx)
      • RUNFILE_NOT_FOUND, SPAWN_FAILURE, COMMAND_FAILED
    - warnings (25xxx)
      • OVERLAPPING_ALIAS, SURPLUS_ARGUMENT
    """
    # --- lexing errors (21xxx) ---
    MALFORMED_HEADER            = 21101
    INLINE_HEADER_COMMENT       = 21102

    # --- resolving errors (22xxx) ---
    COMMAND_NOT_FOUND           = 22101
    DUPLICATE_ARGUMENT          = 22111
    MULTIPLE_VARARGS            = 22112
    VARARGS_NOT_LAST            = 22113
    DUPLICATE_FLAG              = 22121
    EMPTY_SCRIPT                = 22131

    # --- binding errors (23xxx) ---
    UNKNOWN_FLAG                = 23101
    MISSING_FLAG_VALUE          = 23102
    MISSING_REQUIRED_ARGUMENT   = 23111

    # --- execution errors (24xxx) ---
    RUNFILE_NOT_FOUND           = 24101
    SPAWN_FAILURE               = 24111
    COMMAND_FAILED              = 24112

    # --- warnings (25xxx) ---
    OVERLAPPING_ALIAS           = 25101
    SURPLUS_ARGUMENT            = 25111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, /):
    """
    build the rich renderable shared by exceptions and warnings.

    layout
    - header: "[ prog — code | title ]"
    - body:   the message
    - hint:   " → hint"
    - docs:   optional host-provided documentation line
    in fancy mode the body is wrapped in a titled Panel.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(getattr(main, "__prog__", options.get("prog", "run")), styler("prog-name"))
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "?", styler("code")),
        " | ",
        text(options.get("title", type(fault).__name__).title(), styler("title")),
        " ]"
    )
    message = text(fault.message, styler("message"))
    parts = [message]
    if hint := options.get("hint"):
        parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
    if docs := options.get("docs"):
        parts.append(text(docs, styler("docs")))

    if fancy:
        width = console.width - 4
        try:
            width = int(width * options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(*parts), title=header, title_align="left", width=width)

    return Group(header, *parts)


class RunfileException(Exception):
    """
    base type of every pipeline error.

    carries
    - message: one lowercased sentence describing what went wrong.
    - options: read-only mapping with presentation (title, code, hint, docs) and
      context (line, command, argument, flag, status, …) entries.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        if isinstance(code := options.get("code"), FaultCode):
            options.setdefault("docs", getdoc(code))
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if isinstance(self.message, str) else ""

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title

            # body
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "#737373",
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(self.options.get("status", 1))

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class LexError(RunfileException): ...
class MalformedHeaderError(LexError): ...
class InlineHeaderCommentError(LexError): ...

class ResolveError(RunfileException): ...
class CommandNotFoundError(ResolveError): ...
class DuplicateArgumentError(ResolveError): ...
class MultipleVarargsError(ResolveError): ...
class VarargsNotLastError(ResolveError): ...
class DuplicateFlagError(ResolveError): ...
class EmptyScriptError(ResolveError): ...

class BindError(RunfileException): ...
class UnknownFlagError(BindError): ...
class MissingFlagValueError(BindError): ...
class MissingRequiredArgumentError(BindError): ...

class ExecError(RunfileException): ...
class RunfileNotFoundError(ExecError): ...
class SpawnError(ExecError): ...


class CommandFailedError(ExecError):
    """
    the child process exited with a non-zero status.

    the status is kept in options["status"] so that shell-mode triggering exits
    the whole program with the same status.
    """

    @property
    def status(self):
        return self.options.get("status", 1)


class RunfileWarning(ABC, Warning):
    """
    base type of every non-fatal pipeline diagnostic.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if isinstance(self.message, str) else ""

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
            "docs": "#737373",
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=3)
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class OverlappingAliasWarning(RunfileWarning): ...
class SurplusArgumentWarning(RunfileWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via the rich console; otherwise
      exceptions are raised and warnings are emitted through warnings.warn.

    typical options
    - shell, fancy, colorful, deferred, prog, status, and any other context the
      reporter may want to show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings. when
    not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "RunfileException",
    "LexError",
    "MalformedHeaderError",
    "InlineHeaderCommentError",
    "ResolveError",
    "CommandNotFoundError",
    "DuplicateArgumentError",
    "MultipleVarargsError",
    "VarargsNotLastError",
    "DuplicateFlagError",
    "EmptyScriptError",
    "BindError",
    "UnknownFlagError",
    "MissingFlagValueError",
    "MissingRequiredArgumentError",
    "ExecError",
    "RunfileNotFoundError",
    "SpawnError",
    "CommandFailedError",
    "RunfileWarning",
    "OverlappingAliasWarning",
    "SurplusArgumentWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
