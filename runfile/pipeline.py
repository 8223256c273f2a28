"""
Pipeline: locator → lexer → parser → resolver → invoker → executor.

Pipeline keeps only where to start looking for the Runfile; every call
re-reads and re-parses the document, so a Pipeline carries no state between
runs.
"""
from .executor import OutputMode
from .helper import show_help
from .invoker import invoke
from .lexer import tokenize
from .locator import locate, read
from .parser import parse
from .resolver import resolve
from .utils import Unset, coalesce


def parse_runfile(text, /):
    """Lex and parse Runfile text into a Document."""
    return parse(tokenize(text))


def execute_command(text, name, argv=(), /, mode=OutputMode.INHERIT):
    """
    Parse `text`, resolve `name` and run it with `argv`.

    Returns None when inheriting the streams, the CompletedProcess when capturing.
    """
    return invoke(resolve(parse_runfile(text), name), argv, mode)


class Pipeline:
    """
    The whole interpreter rooted at one directory.

    Example
        >>> Pipeline("/srv/project").execute("test", ["--verbose"])
    """

    def __init__(self, start=Unset, /):
        self._start = start

    @property
    def start(self):
        return coalesce(self._start, None)

    def locate(self):
        """Path of the Runfile governing the start directory."""
        if self._start is Unset:
            return locate()
        return locate(self._start)

    def load(self):
        """Text of the located Runfile."""
        return read(self.locate())

    def document(self, text=Unset, /):
        """Parsed Document of `text`, or of the located Runfile."""
        return parse_runfile(self.load() if text is Unset else text)

    def execute(self, name, argv=(), /, mode=OutputMode.INHERIT):
        return invoke(resolve(self.document(), name), argv, mode)

    def help(self, **options):
        """Print the command listing (options are passed to show_help())."""
        show_help(self.document(), **options)

    def __repr__(self):
        return f"Pipeline({self._start!r})" if self._start is not Unset else "Pipeline()"


__all__ = (
    "Pipeline",
    "parse_runfile",
    "execute_command",
)
