"""
cmdline faults (configuration errors and user-input errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault the
  package can report. Codes are grouped by domain.
- InvalidSpecificationError: programmer mistakes made while declaring a
  command line or while querying a parse result. Raised immediately, never
  rendered to end users.
- CommandLineError and its subclasses: problems with the user's input,
  detected while parsing. They know how to render themselves as the single
  diagnostic line `error: <message>`.
- trigger(): central entry point to surface a user-input fault (print and
  exit in shell mode, raise otherwise).

Integration
- The parser never triggers anything: it returns a Fatal outcome carrying the
  fault. CmdLine.parse() is the only place that calls trigger().
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

console = Console(stderr=True, highlight=False)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - specification (10xxx)
      • INVALID_SPECIFICATION
    - invocation (11100)
      • EMPTY_INVOCATION
    - routing (1110x)
      • UNKNOWN_COMMAND
    - options (1111x)
      • UNKNOWN_OPTION, MISSING_OPTION_VALUE
    - positionals (1112x)
      • MISSING_ARGUMENTS, EXTRA_ARGUMENTS
    - delegated (11131)
      • DELEGATED_ERROR, reported by the host program itself
    """
    # --- specification errors (10xxx) ---
    INVALID_SPECIFICATION = 10101

    # --- invocation errors (11xxx) ---
    EMPTY_INVOCATION      = 11100

    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND       = 11101

    # --- option errors (11xxx) ---
    UNKNOWN_OPTION        = 11112
    MISSING_OPTION_VALUE  = 11117

    # --- positional errors (11xxx) ---
    MISSING_ARGUMENTS     = 11121
    EXTRA_ARGUMENTS       = 11122

    # --- delegated errors (11xxx) ---
    DELEGATED_ERROR       = 11131


class InvalidSpecificationError(ValueError):
    """
    A command line was declared or queried incorrectly.

    This is a contract violation by the program, not by its user: duplicated
    or malformed option names, illegal argument/command ordering, a default on
    a flag, or an accessor asked about a name that was never declared.
    """
    code = FaultCode.INVALID_SPECIFICATION


class CommandLineError(Exception):
    """
    Base type of every user-input fault.

    A fault carries a message and a read-only mapping of options (rendering
    and context such as shell, colorful, input). Subclasses only pin the
    FaultCode.
    """
    code = FaultCode.DELEGATED_ERROR

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "error-label": "bold #FF4DA6",  # friendly pinky label
            "error-message": "",
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if self.options.get("colorful", False) else ""

        return Text.assemble(
            Text("error", styler("error-label")),
            ": ",
            Text(self.message, styler("error-message")),
        )

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self, soft_wrap=True)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyInvocationError(CommandLineError):
    code = FaultCode.EMPTY_INVOCATION


class UnknownOptionError(CommandLineError):
    code = FaultCode.UNKNOWN_OPTION


class MissingOptionValueError(CommandLineError):
    code = FaultCode.MISSING_OPTION_VALUE


class MissingArgumentsError(CommandLineError):
    code = FaultCode.MISSING_ARGUMENTS


class ExtraArgumentsError(CommandLineError):
    code = FaultCode.EXTRA_ARGUMENTS


class UnknownCommandError(CommandLineError):
    code = FaultCode.UNKNOWN_COMMAND


class DelegatedError(CommandLineError):
    code = FaultCode.DELEGATED_ERROR


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandLineError).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode the fault is printed to standard error and the process exits
      with status 1; otherwise the fault is raised.

    typical options
    - shell, colorful, and any context the caller wants to carry (e.g., input).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "InvalidSpecificationError",
    "CommandLineError",
    "EmptyInvocationError",
    "UnknownOptionError",
    "MissingOptionValueError",
    "MissingArgumentsError",
    "ExtraArgumentsError",
    "UnknownCommandError",
    "DelegatedError",
    "trigger",
)
