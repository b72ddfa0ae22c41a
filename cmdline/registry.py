"""
cmdline registry: declare a command line, then parse a token vector with it.

What this module provides
- CmdLine: the declaration of one command line.
  • Options (flags and value-bearing options) reachable by short and long name.
  • Positional arguments, the last of which may collect trailing tokens.
  • Commands, mutually exclusive with explicit positional arguments.
  • evaluate(): pure parse returning Success / HelpRequested / Fatal.
  • parse(): the process-level entry point that prints and exits on help or
    on bad input, and otherwise returns the ParseResult.

Quick start
    from cmdline import CmdLine

    cl = CmdLine()
    cl.add_option("n", "", "value", "an example value")
    cl.add_argument("foo", "the first argument")
    cl.add_trailing_arguments("name", "a trailing argument")

    result = cl.parse()           # reads sys.argv
    result.option_value("n")
    result.trailing_arguments_values("name")

Declaration rules
- short names are one character, long names at least two; every name is
  unique across all options, so -h/--help can never be redefined.
- defaults only apply to options that take a value.
- nothing may follow the trailing argument.
- the first command creates the synthetic "command" argument; commands and
  other arguments cannot be mixed; command names are unique.

Every rule violation raises InvalidSpecificationError at declaration time.
"""
import copy
import sys

from .faults import DelegatedError, InvalidSpecificationError, trigger
from .parser import Success, HelpRequested, Fatal, parse
from .specs import Option, Argument, Command
from .usage import format_usage, print_usage
from .utils import *


class CmdLine:
    """
    Declaration of a command line.

    Options are owned in one list, in declaration order, and indexed twice:
    by short name and by long name. A one-character key resolves through the
    short index and any longer key through the long index, so both indexes
    behave as one namespace of unique keys.

    Runtime settings (keyword-only)
    - shell: when True (default), parse() prints faults to standard error and
      exits with status 1; when False, faults are raised as exceptions.
    - colorful: style the help page and diagnostics with the rich palette.
    """
    __introspectable__ = (
        "options",
        "arguments",
        "commands",
        "shell",
        "colorful",
    )

    options = mirror("options")
    arguments = mirror("arguments")
    shell = mirror("shell")
    colorful = mirror("colorful")

    def __init__(self, *, shell=True, colorful=False):
        self._options = []
        self._shorts = {}
        self._longs = {}
        self._arguments = []
        self._commands = {}
        self._shell = bool(shell)
        self._colorful = bool(colorful)

        self.add_flag("h", "help", "print help and exit")

    @property
    def commands(self):
        """Declared commands by name, in declaration order."""
        return dict(self._commands)

    @property
    def trailing(self):
        """The trailing argument, or None."""
        if self._arguments and self._arguments[-1].trailing:
            return self._arguments[-1]
        return None

    def __repr__(self):
        return "cmdline(%s)" % ", ".join(
            "%s=%r" % (name, getattr(self, name)) for name in self.__introspectable__
        )

    def __rich_repr__(self):
        for name in self.__introspectable__:
            yield name, getattr(self, name)

    # --- options ---

    def _index(self, key):
        return self._shorts if len(key) == 1 else self._longs

    def lookup(self, name, /):
        """Return the option known as `name` (short or long), or None."""
        try:
            return self._options[self._index(name)[name]]
        except KeyError:
            return None

    def option(self, name, /):
        """Return the option known as `name`; unknown names are a programming error."""
        if not isinstance(name, str):
            raise TypeError("option() argument must be a string")
        if (option := self.lookup(name)) is None:
            raise InvalidSpecificationError(f"unknown option {name!r}")
        return option

    def _add_option(self, option):
        for name in option.names:
            if name in self._index(name):
                raise InvalidSpecificationError(f"option name {name!r} is already in use")

        self._options.append(option)
        if option.short:
            self._shorts[option.short] = len(self._options) - 1
        if option.long:
            self._longs[option.long] = len(self._options) - 1

    def add_flag(self, short, long, descr, /):
        """Declare a flag: an option without value, e.g. add_flag("v", "verbose", "...")."""
        self._add_option(Option(short, long, "", descr))

    def add_option(self, short, long, value, descr, /):
        """
        Declare an option taking a value.

        `value` is the placeholder shown in help (e.g. "path"); an empty
        placeholder declares a flag, as add_flag() does.
        """
        self._add_option(Option(short, long, value, descr))

    def set_option_default(self, name, value, /):
        """Give the option known as `name` a default; flags cannot have one."""
        option = self.option(name)
        if option.flag:
            raise InvalidSpecificationError(f"flag {name!r} cannot have a default value")
        self._options[self._index(name)[name]] = copy.replace(option, default=value)

    # --- arguments and commands ---

    def _add_argument(self, argument):
        if self._commands:
            raise InvalidSpecificationError("cannot have both arguments and commands")
        if self.trailing is not None:
            raise InvalidSpecificationError("cannot add argument after trailing argument")
        self._arguments.append(argument)

    def add_argument(self, name, descr, /):
        self._add_argument(Argument(name, descr))

    def add_trailing_arguments(self, name, descr, /):
        """Declare the argument collecting every remaining token; it must come last."""
        self._add_argument(Argument(name, descr, trailing=True))

    def add_command(self, name, descr, /):
        """
        Declare a command.

        The first command creates the "command" argument that receives the
        command name; a command line that already has other arguments cannot
        have commands.
        """
        if self._arguments and [(argument.name, argument.trailing) for argument in self._arguments] != [("command", False)]:
            raise InvalidSpecificationError("cannot have both arguments and commands")

        command = Command(name, descr)
        if command.name in self._commands:
            raise InvalidSpecificationError(f"command name {name!r} is already in use")

        if not self._arguments:
            self._arguments.append(Argument("command", "the command to execute"))
        self._commands[command.name] = command

    # --- parsing ---

    def evaluate(self, tokens, /):
        """
        Parse `tokens` (token 0 is the program name) without side effects.

        Returns Success(result), HelpRequested(result) or Fatal(fault).
        """
        return parse(self, tokens)

    def parse(self, tokens=Unset, /):
        """
        Parse `tokens` (default: sys.argv) and return the ParseResult.

        Behavior
        - help requested: print the usage page to standard output and exit
          with status 0.
        - bad input: trigger the fault; in shell mode it is printed to
          standard error as "error: <message>" and the process exits with
          status 1, otherwise the fault is raised.
        """
        outcome = self.evaluate(coalesce(tokens, sys.argv))

        match outcome:
            case Success(result):
                return result
            case HelpRequested(result):
                print_usage(self, result.program, colorful=self._colorful)
                sys.exit(0)
            case Fatal(fault):
                trigger(fault, shell=self._shell, colorful=self._colorful)
            case _:
                raise RuntimeError("unexpected outcome")

    def die(self, message, /, *args):
        """
        Report a problem with the user's input the same way parse() does.

        `message` is a printf-style format applied to `args`.
        """
        trigger(
            DelegatedError(message % args if args else message),
            shell=self._shell,
            colorful=self._colorful,
        )

    # --- usage ---

    def format_usage(self, program, /):
        return format_usage(self, program)

    def print_usage(self, program, /, file=None):
        print_usage(self, program, file, colorful=self._colorful)


__all__ = (
    "CmdLine",
)
