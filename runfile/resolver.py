"""
Runfile resolver: Document + target name → one validated Command.

Lookup is a linear scan in declaration order; the first command listing the
name among its aliases wins. When a later command declares the same alias an
OverlappingAliasWarning is emitted, naming both definitions.

validate() checks, in order, and stops at the first violation:
1. argument names are unique              → DuplicateArgumentError
2. at most one variadic argument          → MultipleVarargsError
3. the variadic argument is the last one  → VarargsNotLastError
4. flag keys are unique                   → DuplicateFlagError
   (long names, and short chars against every other flag's long-or-short key)
5. the script is not blank                → EmptyScriptError

Nothing is mutated.
"""
import difflib

from .faults import *


def validate(command, /):
    """
    Enforce the structural invariants of one command; return it unchanged.
    """
    names = set()
    variadics = []
    for position, argument in enumerate(command.args):
        if argument.name in names:
            raise DuplicateArgumentError(
                "argument %r is declared twice in command %r" % (argument.name, command.name),
                title="duplicate argument",
                code=FaultCode.DUPLICATE_ARGUMENT,
                hint="rename or remove one of the %r declarations" % argument.name,
                command=command.name,
                argument=argument.name,
            )
        names.add(argument.name)
        if argument.variadic:
            variadics.append(position)

    if len(variadics) > 1:
        raise MultipleVarargsError(
            "command %r declares %d variadic arguments, only one is allowed" % (command.name, len(variadics)),
            title="multiple variadic arguments",
            code=FaultCode.MULTIPLE_VARARGS,
            hint="keep a single '...name' argument and put it last",
            command=command.name,
        )

    if variadics and variadics[0] != len(command.args) - 1:
        argument = command.args[variadics[0]]
        raise VarargsNotLastError(
            "variadic argument %r must be the last argument of command %r" % (argument.name, command.name),
            title="variadic argument not last",
            code=FaultCode.VARARGS_NOT_LAST,
            hint="move '...%s' after every other argument" % argument.name,
            command=command.name,
            argument=argument.name,
        )

    keys = set()
    for flag in command.flags:
        # a bare "-x" flag uses "x" as both keys; only other flags can collide with it
        for key in sorted(flag.keys, key=len, reverse=True):
            if key in keys:
                raise DuplicateFlagError(
                    "flag %r collides with another flag of command %r" % (("--" if len(key) > 1 else "-") + key, command.name),
                    title="duplicate flag",
                    code=FaultCode.DUPLICATE_FLAG,
                    hint="give every flag its own long name and short letter",
                    command=command.name,
                    flag=key,
                )
        keys |= flag.keys

    if not command.script.strip():
        raise EmptyScriptError(
            "command %r has no script body" % command.name,
            title="empty script",
            code=FaultCode.EMPTY_SCRIPT,
            hint="add at least one indented line under the command header",
            command=command.name,
        )

    return command


def resolve(document, name, /):
    """
    Find the command called `name` and validate it.

    Raises
    - CommandNotFoundError when no command declares the alias (close matches are
      suggested in the hint).
    - any validate() fault for the matched command.
    """
    matches = document.find(name)
    if not matches:
        aliases = [alias for command in document.commands for alias in command.names]
        try:
            hint = "did you mean %r? run without arguments to list every command" % difflib.get_close_matches(name, aliases, 1)[0]
        except IndexError:
            hint = "run without arguments to list every command"
        raise CommandNotFoundError(
            "command %r not found" % name,
            title="unknown command",
            code=FaultCode.COMMAND_NOT_FOUND,
            hint=hint,
            command=name,
        )

    command, *shadowed = matches
    if shadowed:
        trigger(OverlappingAliasWarning(
            "alias %r is declared by %d commands, using the first one (%s)" % (name, len(matches), ", ".join(command.names)),
            title="overlapping alias",
            code=FaultCode.OVERLAPPING_ALIAS,
            hint="give each command its own aliases",
            command=name,
        ))

    return validate(command)


__all__ = (
    "validate",
    "resolve",
)
