"""
Help renderer: the command listing shown by `run` without arguments.

Layout
    ungrouped, commands        # description
      arg?                     # description
      -f, --flag
    Group
      command                  # description
        ...args

- ungrouped commands come first (column 0, parameters at 2), then every group
  in declaration order (name at 0, commands at 2, parameters at 4) followed by
  a blank line;
- descriptions are appended as " # text" at one column shared by the whole
  listing; lines without a description carry no trailing padding;
- a document without commands renders as a single newline.
"""
from rich.cells import cell_len
from rich.console import Console
from rich.text import Text

from .utils import Unset

_GROUP_STYLE = "bold white"
_DESCRIPTION_STYLE = "color(8)"


def _align(document):
    # widest of "2 + command label" and "4 + parameter label", rounded up to even
    commands = max((cell_len(", ".join(command.names)) for command in document.commands), default=0)
    parameters = max(
        (cell_len(parameter.label) for command in document.commands for parameter in (*command.args, *command.flags)),
        default=0,
    )
    widest = max(2 + commands, 4 + parameters)
    return (widest + 1) // 2 * 2 - 1


def render(document, /, *, colorful=False):
    """Return the help listing of `document` as a rich Text."""
    output = Text(end="")
    if not document.commands:
        output.append("\n")
        return output

    align = _align(document)

    def line(indent, label, description):
        output.append(" " * indent + label)
        if description:
            output.append(" " * max(0, align - cell_len(label)))
            output.append(" # " + description, _DESCRIPTION_STYLE if colorful else "")
        output.append("\n")

    def entry(command, indent):
        line(indent, ", ".join(command.names), command.description)
        for parameter in (*command.args, *command.flags):
            line(indent + 2, parameter.label, parameter.description)

    for command in document.members(None):
        entry(command, 0)

    seen = set()
    for group in document.groups:
        if group.name in seen or not (members := document.members(group.name)):
            continue
        seen.add(group.name)
        output.append(group.name, _GROUP_STYLE if colorful else "")
        output.append("\n")
        for command in members:
            entry(command, 2)
        output.append("\n")

    return output


def show_help(document, /, *, console=Unset, colorful=Unset):
    """
    Print the help listing on `console` (default: a stdout Console).

    Colour follows the console being a terminal unless `colorful` is given.
    """
    if console is Unset:
        console = Console()
    if colorful is Unset:
        colorful = console.is_terminal
    console.print(render(document, colorful=colorful), end="", soft_wrap=True, highlight=False)


__all__ = (
    "render",
    "show_help",
)
