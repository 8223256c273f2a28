"""
`run` console entry point.

    run                  print the commands of the nearest Runfile
    run <name> [args…]   run one command; its exit status becomes ours

Warnings raised while loading and binding are printed (through rich, on
standard error) before the command starts. Any fault is rendered the same way
and exits with status 1; a failing command exits with its own status (a child
killed by signal N exits with 128 + N).
"""
import sys
import warnings

from .executor import OutputMode, execute
from .faults import *
from .faults import console
from .helper import show_help
from .invoker import bind
from .pipeline import Pipeline
from .resolver import resolve
from .utils import Unset, coalesce


def _report(records, /, **options):
    for record in records:
        if isinstance(record.message, RunfileWarning):
            trigger(record.message, **options)
        else:
            warnings.showwarning(record.message, record.category, record.filename, record.lineno)


def main(argv=Unset, /):
    """
    Run the interpreter for `argv` (default: sys.argv[1:]) and return the exit
    status.
    """
    argv = list(coalesce(argv, sys.argv[1:]))
    options = {"shell": True, "colorful": console.is_terminal}
    pipeline = Pipeline()

    fault = binding = None
    with warnings.catch_warnings(record=True) as records:
        warnings.simplefilter("always")
        try:
            document = pipeline.document()
            if not argv:
                show_help(document)
            else:
                name, *arguments = argv
                binding = bind(resolve(document, name), arguments)
        except RunfileException as error:
            fault = error

    _report(records, **options)
    if fault is not None:
        trigger(fault, **options)

    if binding is None:
        return 0

    try:
        execute(binding.interpreter, binding.script, binding.environ, OutputMode.INHERIT)
    except CommandFailedError as error:
        # the child already reported on its own streams
        return error.status if error.status > 0 else 128 - error.status
    except ExecError as error:
        trigger(error, **options)
    return 0


__all__ = (
    "main",
)
