"""
Runfile invoker: validated Command + raw CLI argument list → bound invocation.

Binding scans the argument list left to right:
- "--key=value"  value flag, looked up by long name (must take a value)
- "--key"        boolean flag, looked up by long name (must not take a value)
- "-c"           flag by short key; a value flag consumes the next token whole
- anything else  positional value

Then
- a variadic argument at slot P absorbs positional values P.. joined with single
  spaces ("" when there are none);
- every required argument must have a value;
- surplus positional values are ignored with a SurplusArgumentWarning.

Environment (both spellings of every key are set)
- argument     NAME=value, name=value
- value flag   LONG=value, long=--long=value
- boolean flag LONG=true,  long=<literal the caller typed>

Binding never runs anything; every fault is raised before the executor is
reached, and the Command is only read.
"""
from typing import NamedTuple

from .executor import *
from .faults import *
from .utils import ordinal


class Binding(NamedTuple):
    """Everything the executor needs: interpreter, script and added environment."""
    interpreter: str
    script: str
    environ: dict


def _unknown(token, name, position, command):
    return UnknownFlagError(
        "unknown flag %r at %s position" % (token, ordinal(position)),
        title="unknown flag",
        code=FaultCode.UNKNOWN_FLAG,
        hint="command %r accepts: %s" % (
            command.name, ", ".join(flag.label for flag in command.flags) or "no flags"
        ),
        command=command.name,
        flag=name,
        position=position,
    )


def bind(command, argv, /):
    """
    Bind `argv` (the tokens after the command name) against `command`.

    Raises
    - UnknownFlagError: no matching flag, or a flag used in the wrong form
      ("--name" for a value flag, "--name=value" for a boolean one).
    - MissingFlagValueError: "-c" for a value flag with no token left.
    - MissingRequiredArgumentError: a required argument received no value.
    """
    argv = list(argv)
    positionals = []
    values = {}     # long name -> value, for value flags
    toggles = {}    # long name -> literal typed, for boolean flags

    index = 0
    while index < len(argv):
        token = argv[index]
        position = index + 1

        if token.startswith("--") and "=" in token:
            name, _, value = token[2:].partition("=")
            flag = next((flag for flag in command.flags if flag.long == name and flag.takes_value), None)
            if flag is None:
                raise _unknown(token, name, position, command)
            values[flag.long] = value

        elif token.startswith("--"):
            name = token[2:]
            flag = next((flag for flag in command.flags if flag.long == name and not flag.takes_value), None)
            if flag is None:
                raise _unknown(token, name, position, command)
            toggles[flag.long] = token

        elif token.startswith("-") and len(token) == 2:
            name = token[1]
            flag = next((flag for flag in command.flags if flag.short == name), None)
            if flag is None:
                raise _unknown(token, name, position, command)
            if flag.takes_value:
                if index + 1 >= len(argv):
                    raise MissingFlagValueError(
                        "flag %r at %s position expects a value" % (token, ordinal(position)),
                        title="missing flag value",
                        code=FaultCode.MISSING_FLAG_VALUE,
                        hint="pass it as '%s <%s>' or '--%s=<%s>'" % (
                            token, flag.type_hint or "value", flag.long, flag.type_hint or "value"
                        ),
                        command=command.name,
                        flag=flag.long,
                        position=position,
                    )
                index += 1
                values[flag.long] = argv[index]
            else:
                toggles[flag.long] = token

        else:
            positionals.append(token)

        index += 1

    bound = dict(zip((argument.name for argument in command.args), positionals))
    if (variadic := command.variadic) is not None:
        slot, argument = variadic
        bound[argument.name] = " ".join(positionals[slot:])
        surplus = ()
    else:
        surplus = positionals[len(command.args):]

    for slot, argument in enumerate(command.args):
        if not argument.optional and argument.name not in bound:
            raise MissingRequiredArgumentError(
                "missing required argument %r (%s position)" % (argument.name, ordinal(slot + 1)),
                title="missing argument",
                code=FaultCode.MISSING_REQUIRED_ARGUMENT,
                hint="usage: %s" % " ".join(
                    [command.name, *(argument.label for argument in command.args)]
                ),
                command=command.name,
                argument=argument.name,
            )

    if surplus:
        trigger(SurplusArgumentWarning(
            "ignoring %d extra argument%s: %s" % (len(surplus), "s" if len(surplus) > 1 else "", " ".join(surplus)),
            title="extra arguments",
            code=FaultCode.SURPLUS_ARGUMENT,
            hint="command %r takes at most %d argument%s" % (
                command.name, len(command.args), "" if len(command.args) == 1 else "s"
            ),
            command=command.name,
        ))

    environ = {}
    for name, value in bound.items():
        environ[name.upper()] = value
        environ[name] = value
    for flag in command.flags:
        if flag.long in values:
            environ[flag.long.upper()] = values[flag.long]
            environ[flag.long] = "--%s=%s" % (flag.long, values[flag.long])
        elif flag.long in toggles:
            environ[flag.long.upper()] = "true"
            environ[flag.long] = toggles[flag.long]

    return Binding(command.interpreter, command.script, environ)


def invoke(command, argv, /, mode=OutputMode.INHERIT, *, executor=execute):
    """
    Bind `argv` against `command` and hand the result to `executor`.

    Returns whatever the executor returns (None when inheriting streams, the
    CompletedProcess when capturing).
    """
    binding = bind(command, argv)
    return executor(binding.interpreter, binding.script, binding.environ, mode)


__all__ = (
    "Binding",
    "bind",
    "invoke",
)
