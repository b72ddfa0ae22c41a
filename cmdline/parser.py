"""
cmdline parsing engine.

parse(cmdline, tokens) scans an argv-like token vector against a command line
and returns one of three outcomes instead of terminating the process:

- Success(result): every value is bound.
- HelpRequested(result): -h/--help appeared; result holds what was bound
  while scanning options.
- Fatal(fault): the input is wrong; fault is a CommandLineError.

phases
- program name: token 0; an empty vector is fatal.
- option scanning: consume "-x" / "--name" tokens (and the value token of
  options that take one) until "--", the first other token, or the end.
  unknown options and missing values are fatal even when help was requested.
- positional binding: fill declared arguments in order, hand the rest to the
  trailing argument. skipped when help was requested.
- command resolution: the "command" argument names the command; the tokens
  after it are its arguments.
- help: checked last, after every fatal condition that applies to it.

The command line itself is never modified, so the same command line can be
parsed any number of times.
"""
from typing import NamedTuple

from .faults import (
    CommandLineError,
    EmptyInvocationError,
    UnknownOptionError,
    MissingOptionValueError,
    MissingArgumentsError,
    ExtraArgumentsError,
    UnknownCommandError,
)
from .results import ParseResult


class Success(NamedTuple):
    result: ParseResult


class HelpRequested(NamedTuple):
    result: ParseResult


class Fatal(NamedTuple):
    fault: CommandLineError

    @property
    def code(self):
        return self.fault.code

    @property
    def message(self):
        return self.fault.message


def _option_key(token):
    """
    Return the lookup key of an option token, or None for any other token.

    - short form: exactly two characters, "-" then anything but "-".
    - long form: more than two characters starting with "--".
    """
    if len(token) == 2 and token[0] == "-" and token[1] != "-":
        return token[1]
    if len(token) > 2 and token.startswith("--"):
        return token[2:]
    return None


def parse(cmdline, tokens, /):
    """
    Parse `tokens` against `cmdline`.

    parameters
    - cmdline: CmdLine
      the declared options, arguments and commands.
    - tokens: Sequence[str]
      the full token vector; tokens[0] is the program name.

    returns
    - Success | HelpRequested | Fatal
    """
    tokens = list(tokens)
    if not tokens:
        return Fatal(EmptyInvocationError("empty argument array"))

    program, index = tokens[0], 1
    options = {}

    # options
    while index < len(tokens):
        token = tokens[index]

        if token == "--":
            index += 1
            break

        if (key := _option_key(token)) is None:
            break

        if (option := cmdline.lookup(key)) is None:
            return Fatal(UnknownOptionError('unknown option "%s"' % key, input=key))

        if option.flag:
            options[option] = ""
            index += 1
        else:
            if index + 1 >= len(tokens):
                return Fatal(MissingOptionValueError('missing value for option "%s"' % key, input=key))
            options[option] = tokens[index + 1]
            index += 2

    help = cmdline.option("help") in options
    remaining = tokens[index:]

    arguments = {}
    trailing = ()

    # positionals
    if cmdline.arguments and not help:
        declared = cmdline.arguments
        required = len(declared) - 1 if declared[-1].trailing else len(declared)

        if len(remaining) < required:
            return Fatal(MissingArgumentsError("missing argument(s)"))

        for argument, value in zip(declared[:required], remaining):
            arguments[argument.name] = value
        remaining = remaining[required:]

        if declared[-1].trailing:
            trailing, remaining = tuple(remaining), []

    # commands
    command = ""
    if cmdline.commands:
        command = arguments.get("command", "")
        if not help and command not in cmdline.commands:
            return Fatal(UnknownCommandError('unknown command "%s"' % command, input=command))
    elif remaining and not help:
        return Fatal(ExtraArgumentsError("invalid extra argument(s)", leftover=tuple(remaining)))

    result = ParseResult(
        cmdline,
        program,
        options=options,
        arguments=arguments,
        trailing=trailing,
        command=command,
        command_arguments=remaining if cmdline.commands else (),
    )

    if help:
        return HelpRequested(result)
    return Success(result)


__all__ = (
    "Success",
    "HelpRequested",
    "Fatal",
    "parse",
)
