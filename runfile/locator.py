"""
Runfile locator: finds the nearest "Runfile" and reads it.
"""
from pathlib import Path

from .faults import FaultCode, RunfileNotFoundError
from .utils import Unset

FILENAME = "Runfile"


def locate(start=Unset, /):
    """
    Walk from `start` (default: the current directory) up to the filesystem
    root and return the first "Runfile" found.
    """
    origin = Path.cwd() if start is Unset else Path(start).expanduser()
    origin = origin.resolve()
    if origin.is_file():
        origin = origin.parent

    for directory in (origin, *origin.parents):
        if (candidate := directory / FILENAME).is_file():
            return candidate

    raise RunfileNotFoundError(
        "no %s found in %s or any parent directory" % (FILENAME, origin),
        title="runfile not found",
        code=FaultCode.RUNFILE_NOT_FOUND,
        hint="create a file named %r in the project root" % FILENAME,
        start=str(origin),
    )


def read(path, /):
    """Read a Runfile as UTF-8 text."""
    return Path(path).read_text(encoding="utf-8")


__all__ = (
    "FILENAME",
    "locate",
    "read",
)
