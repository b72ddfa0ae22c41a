"""
cmdline parse results and typed accessors.

A ParseResult is produced by the parser and never changes afterwards. Every
accessor checks the queried name against the command line that produced the
result: asking about something that was never declared is a programming
error and raises InvalidSpecificationError instead of returning a guess.
"""
from types import MappingProxyType

from .faults import InvalidSpecificationError
from .utils import *


class ParseResult:
    """
    Values bound by one parse of a token vector.

    Fields (read-only)
    - cmdline: the command line the tokens were parsed against.
    - program: the program name (token 0).
    - options: mapping of each option that appeared to its bound value
      ("" for flags); the last occurrence of an option wins.
    - arguments: mapping of argument name to bound value.
    - trailing: values collected by the trailing argument.
    - command: resolved command name ("" when commands are not used).
    - command_arguments: tokens following the command token.
    """
    __introspectable__ = (
        "program",
        "options",
        "arguments",
        "trailing",
        "command",
        "command_arguments",
    )
    __slots__ = (
        "_cmdline",
        "_program",
        "_options",
        "_arguments",
        "_trailing",
        "_command",
        "_command_arguments",
    )

    program = mirror("program")
    options = mirror("options")
    arguments = mirror("arguments")
    trailing = mirror("trailing")
    command = mirror("command")
    command_arguments = mirror("command_arguments")

    def __init__(
            self,
            cmdline,
            /,
            program,
            *,
            options=MappingProxyType({}),
            arguments=MappingProxyType({}),
            trailing=(),
            command="",
            command_arguments=(),
    ):
        self._cmdline = cmdline
        self._program = program
        self._options = MappingProxyType(dict(options))
        self._arguments = MappingProxyType(dict(arguments))
        self._trailing = tuple(trailing)
        self._command = command
        self._command_arguments = tuple(command_arguments)

    @property
    def cmdline(self):
        return self._cmdline

    def __repr__(self):
        return "parse-result(%s)" % ", ".join(
            "%s=%r" % (name, getattr(self, name)) for name in self.__introspectable__
        )

    def __rich_repr__(self):
        for name in self.__introspectable__:
            yield name, getattr(self, name)

    def is_option_set(self, name, /):
        """Tell whether the option known as `name` (short or long) appeared."""
        return self._cmdline.option(name) in self._options

    def option_value(self, name, /):
        """
        Return the value of an option.

        Resolution order
        - the value bound by the last occurrence of the option;
        - otherwise the declared default;
        - otherwise "".
        """
        option = self._cmdline.option(name)
        try:
            return self._options[option]
        except KeyError:
            return coalesce(option.default, "")

    def argument_value(self, name, /):
        for argument in self._cmdline.arguments:
            if argument.name == name:
                return self._arguments.get(name, "")
        raise InvalidSpecificationError(f"unknown argument {name!r}")

    def trailing_arguments_values(self, name, /):
        """Return the tokens collected by the trailing argument `name`, possibly none."""
        trailing = self._cmdline.trailing
        if trailing is None:
            raise InvalidSpecificationError("no trailing arguments")
        if trailing.name != name:
            raise InvalidSpecificationError(f"unknown trailing argument {name!r}")
        return list(self._trailing)

    def command_name(self):
        if not self._cmdline.commands:
            raise InvalidSpecificationError("no command defined")
        return self._command

    def command_arguments_values(self):
        """Return the tokens that follow the command token."""
        if not self._cmdline.commands:
            raise InvalidSpecificationError("no command defined")
        return list(self._command_arguments)

    def command_name_and_arguments(self):
        """
        Return the command token followed by its arguments.

        The command name takes the place of the program name, so the result
        can be handed as-is to the parse of a nested command line.
        """
        return [self.command_name(), *self.command_arguments_values()]


__all__ = (
    "ParseResult",
)
