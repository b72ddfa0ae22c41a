"""
Fault and process-level tests (exit codes, streams, shell vs non-shell).

Scope
- Validate CmdLine.parse(): help → usage on stdout + exit 0; bad input →
  "error: <message>" on stderr + exit 1; success → ParseResult.
- Validate non-shell mode: faults are raised instead of exiting.
- Validate CmdLine.die() and trigger().
- Validate fault rendering and copy.replace support.

Conventions
- Test method names follow CamelCase per project convention.
- Standard streams are captured with contextlib redirection.
"""

from __future__ import annotations

import contextlib
import copy
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.text import Text

from cmdline import (
    CmdLine,
    ParseResult,
    FaultCode,
    CommandLineError,
    DelegatedError,
    UnknownOptionError,
    MissingArgumentsError,
    UnknownCommandError,
    InvalidSpecificationError,
    trigger,
)


def _run(cl, tokens):
    """Run cl.parse(tokens) and return (exit code, stdout, stderr)."""
    stdout, stderr = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
        try:
            cl.parse(tokens)
        except SystemExit as exit:
            return exit.code, stdout.getvalue(), stderr.getvalue()
    return None, stdout.getvalue(), stderr.getvalue()


class TestProcessLevelParse(TestCase):
    """Behavioral tests for CmdLine.parse in shell mode."""

    def testUnknownOptionExitsWithOne(self):
        code, stdout, stderr = _run(CmdLine(), ["prog", "--badflag"])
        self.assertEqual(code, 1)
        self.assertEqual(stdout, "")
        self.assertEqual(stderr, 'error: unknown option "badflag"\n')

    def testMissingArgumentsExitsWithOne(self):
        cl = CmdLine()
        cl.add_argument("foo", "")
        cl.add_argument("bar", "")
        code, _, stderr = _run(cl, ["prog", "a"])
        self.assertEqual(code, 1)
        self.assertEqual(stderr, "error: missing argument(s)\n")

    def testHelpPrintsUsageAndExitsWithZero(self):
        cl = CmdLine()
        cl.add_argument("foo", "the first argument")
        code, stdout, stderr = _run(cl, ["prog", "--help"])
        self.assertEqual(code, 0)
        self.assertEqual(stdout, cl.format_usage("prog"))
        self.assertEqual(stderr, "")

    def testHelpUsesProgramToken(self):
        _, stdout, _ = _run(CmdLine(), ["./tool", "-h"])
        self.assertTrue(stdout.startswith("Usage: ./tool OPTIONS\n"))

    def testSuccessReturnsResult(self):
        cl = CmdLine()
        cl.add_flag("v", "verbose", "")
        code, stdout, stderr = _run(cl, ["prog", "-v"])
        self.assertIsNone(code)
        self.assertEqual((stdout, stderr), ("", ""))
        self.assertTrue(cl.parse(["prog", "-v"]).is_option_set("verbose"))

    def testDefaultTokensComeFromSysArgv(self):
        cl = CmdLine()
        cl.add_argument("foo", "")
        with mock.patch.object(sys, "argv", ["prog", "value"]):
            result = cl.parse()
        self.assertIsInstance(result, ParseResult)
        self.assertEqual(result.argument_value("foo"), "value")

    def testEmptyInvocationExitsWithOne(self):
        code, _, stderr = _run(CmdLine(), [])
        self.assertEqual(code, 1)
        self.assertEqual(stderr, "error: empty argument array\n")


class TestNonShellParse(TestCase):
    """Behavioral tests for CmdLine.parse with shell=False."""

    def testFaultIsRaised(self):
        cl = CmdLine(shell=False)
        with self.assertRaises(UnknownOptionError) as context:
            cl.parse(["prog", "--badflag"])
        self.assertEqual(context.exception.message, 'unknown option "badflag"')
        self.assertEqual(context.exception.code, FaultCode.UNKNOWN_OPTION)
        self.assertFalse(context.exception.options["shell"])

    def testUnknownCommandIsRaised(self):
        cl = CmdLine(shell=False)
        cl.add_command("foo", "")
        with self.assertRaises(UnknownCommandError):
            cl.parse(["prog", "bar"])

    def testFaultsShareBaseType(self):
        cl = CmdLine(shell=False)
        cl.add_argument("foo", "")
        with self.assertRaises(CommandLineError):
            cl.parse(["prog"])

    def testHelpStillExits(self):
        code, stdout, _ = _run(CmdLine(shell=False), ["prog", "-h"])
        self.assertEqual(code, 0)
        self.assertIn("OPTIONS", stdout)


class TestDie(TestCase):
    """Behavioral tests for CmdLine.die."""

    def testDieFormatsAndExits(self):
        cl = CmdLine()
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            cl.die("invalid value %r for %s", "x", "n")
        self.assertEqual(context.exception.code, 1)
        self.assertEqual(stderr.getvalue(), "error: invalid value 'x' for n\n")

    def testDieWithoutArgumentsKeepsPercentSigns(self):
        cl = CmdLine(shell=False)
        with self.assertRaises(DelegatedError) as context:
            cl.die("100% wrong")
        self.assertEqual(context.exception.message, "100% wrong")
        self.assertEqual(context.exception.code, FaultCode.DELEGATED_ERROR)


class TestFaults(TestCase):
    """Behavioral tests for fault objects and trigger()."""

    def testRenderIsPlainByDefault(self):
        rendered = MissingArgumentsError("missing argument(s)").__rich__()
        self.assertIsInstance(rendered, Text)
        self.assertEqual(rendered.plain, "error: missing argument(s)")
        self.assertEqual(rendered.spans, [])

    def testRenderIsStyledWhenColorful(self):
        rendered = MissingArgumentsError("missing argument(s)", colorful=True).__rich__()
        self.assertEqual(rendered.plain, "error: missing argument(s)")
        self.assertTrue(rendered.spans)

    def testReplaceMergesOptions(self):
        fault = UnknownOptionError('unknown option "x"', input="x")
        replaced = copy.replace(fault, shell=True)
        self.assertIsInstance(replaced, UnknownOptionError)
        self.assertEqual(dict(replaced.options), {"input": "x", "shell": True})
        self.assertEqual(dict(fault.options), {"input": "x"})

    def testOptionsAreReadOnly(self):
        fault = UnknownOptionError('unknown option "x"', input="x")
        with self.assertRaises(TypeError):
            fault.options["input"] = "y"  # type: ignore[index]

    def testTriggerRaisesOutsideShell(self):
        with self.assertRaises(UnknownOptionError):
            trigger(UnknownOptionError('unknown option "x"'), shell=False)

    def testTriggerRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))

    def testSpecificationErrorIsValueError(self):
        self.assertTrue(issubclass(InvalidSpecificationError, ValueError))
        self.assertEqual(InvalidSpecificationError.code, FaultCode.INVALID_SPECIFICATION)

    def testStrIsMessage(self):
        self.assertEqual(str(UnknownOptionError('unknown option "x"')), 'unknown option "x"')


if __name__ == "__main__":
    unittest.main()
