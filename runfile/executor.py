"""
Process executor: runs a bound script under its interpreter.

The child is started as `[*shlex.split(interpreter), "-c", script]` with the
current process environment overlaid by the bound variables. Two output modes:
- INHERIT: the child shares our stdout/stderr; only the status matters.
- CAPTURE: stdout/stderr are buffered (text, utf-8, undecodable bytes replaced)
  and returned in a subprocess.CompletedProcess.
"""
import os
import shlex
import subprocess
from enum import Enum

from .faults import FaultCode, SpawnError, CommandFailedError


class OutputMode(Enum):
    INHERIT = "inherit"
    CAPTURE = "capture"


def execute(interpreter, script, environ, mode=OutputMode.INHERIT, /):
    """
    Run `script` with `interpreter` and wait for it.

    Returns None in INHERIT mode and the CompletedProcess in CAPTURE mode.

    Raises
    - SpawnError when the interpreter cannot be started.
    - CommandFailedError when the child exits with a non-zero status (the
      status, and in CAPTURE mode the streams, are kept in its options).
    """
    if not isinstance(mode, OutputMode):
        raise TypeError("execute() mode must be an output-mode")

    captured = mode is OutputMode.CAPTURE
    try:
        command = [*shlex.split(interpreter), "-c", script]
        completed = subprocess.run(
            command,
            env=os.environ | dict(environ),
            capture_output=captured,
            text=captured,
            encoding="utf-8" if captured else None,
            errors="replace" if captured else None,
            check=False,
        )
    except (OSError, ValueError) as error:
        raise SpawnError(
            "could not start interpreter %r (%s)" % (interpreter, getattr(error, "strerror", None) or error),
            title="interpreter failed to start",
            code=FaultCode.SPAWN_FAILURE,
            hint="check the shebang line of the command",
            interpreter=interpreter,
        ) from error

    if completed.returncode != 0:
        raise CommandFailedError(
            "command exited with status %d" % completed.returncode,
            title="command failed",
            code=FaultCode.COMMAND_FAILED,
            status=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )

    return completed if captured else None


__all__ = (
    "OutputMode",
    "execute",
)
