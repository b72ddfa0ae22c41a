"""
cmdline usage page.

Layout
    Usage: <program> OPTIONS <arg> ... [<trailing> ...]

    OPTIONS

    -h, --help    print help and exit
    -n <value>    an example value (default: 5)

    ARGUMENTS | COMMANDS

    name          description

Rules
- every row of every section is aligned on one left column, as wide as the
  widest option signature, command name (when commands are used) or argument
  name (otherwise), measured in terminal cells.
- options are listed once each, sorted by short name, or by long name when
  there is no short name.
- commands and arguments keep their declaration order.
- a command line with commands lists COMMANDS, never ARGUMENTS.

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
  Styles only apply when the page is rendered with colorful=True.
"""
import sys
from collections import defaultdict

from rich.cells import cell_len
from rich.console import Console
from rich.text import Text


def render_usage(cmdline, program, /, *, colorful=False):
    """
    Build the usage page of `cmdline` as a rich Text (no final newline).

    parameters
    - cmdline: CmdLine
    - program: str
      name shown after "Usage:", normally token 0 of the parsed vector.
    - colorful: bool
      apply the palette; otherwise the Text carries no style at all.
    """
    styles = defaultdict(str, {
        # === Head ===
        "usage-label": "bold #00E6FF",  # CYAN
        "program-name": "bold #FF4D94",  # MAGENTA-PINK
        "argument-metavar": "bold #FFD600",  # AMBER

        # === Sections ===
        "section-label": "bold #FFFFFF",
        "option-name": "bold #00E6FF",
        "command-name": "bold #36C5F0",  # SKY-BLUE
        "argument-name": "bold #FFD600",
        "description": "#9CA3AF",  # Muted gray
        "default": "italic #9CA3AF",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    options = sorted(cmdline.options, key=lambda x: x.sortkey)
    commands = cmdline.commands
    arguments = cmdline.arguments

    # Left column: option signatures, then commands or arguments
    names = [option.signature for option in options]
    if commands:
        names.extend(commands.keys())
    else:
        names.extend(argument.name for argument in arguments)
    width = max(map(cell_len, names), default=0)

    def row(name, style, descr, default=""):
        line = Text.assemble(
            (name, styler(style)),
            " " * (width - cell_len(name)),
            "  ",
            (descr, styler("description")),
        )
        if default:
            line.append(f" (default: {default})", styler("default"))
        return line

    usage = Text()
    usage.append("Usage", styler("usage-label")).append(": ")
    usage.append(program, styler("program-name")).append(" OPTIONS")
    for argument in arguments:
        if argument.trailing:
            usage.append(" [").append(f"<{argument.name}>", styler("argument-metavar")).append(" ...]")
        else:
            usage.append(" ").append(f"<{argument.name}>", styler("argument-metavar"))

    lines = [usage, Text(), Text("OPTIONS", styler("section-label")), Text()]

    for option in options:
        lines.append(row(option.signature, "option-name", option.descr, option.default or ""))

    if commands:
        lines.extend((Text(), Text("COMMANDS", styler("section-label")), Text()))
        for command in commands.values():
            lines.append(row(command.name, "command-name", command.descr))
    elif arguments:
        lines.extend((Text(), Text("ARGUMENTS", styler("section-label")), Text()))
        for argument in arguments:
            lines.append(row(argument.name, "argument-name", argument.descr))

    return Text("\n").join(lines)


def format_usage(cmdline, program, /):
    """Return the usage page of `cmdline` as plain text, newline-terminated."""
    return render_usage(cmdline, program).plain + "\n"


def print_usage(cmdline, program, /, file=None, *, colorful=False):
    """
    Print the usage page of `cmdline`.

    parameters
    - file: IO[str] | None
      destination stream; standard output when None.
    - colorful: bool
      style the page with the palette (ignored by rich on non-terminals).

    Without colors the page is written exactly as format_usage() returns it.
    Rich expands tab characters, so a colorful page shows tabs as spaces.
    """
    if not colorful:
        (sys.stdout if file is None else file).write(format_usage(cmdline, program))
        return

    console = Console(file=file, highlight=False, soft_wrap=True)
    console.print(render_usage(cmdline, program, colorful=colorful))


__all__ = (
    "render_usage",
    "format_usage",
    "print_usage",
)
