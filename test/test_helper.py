"""
Helper module behavioral tests (help table rendering).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from cali import ArgumentParser
from cali.helper import render


def _capture(renderable):
    buffer = io.StringIO()
    Console(file=buffer, width=120, color_system=None).print(renderable)
    return buffer.getvalue()


class TestHelp(TestCase):
    """Behavioral tests for render() and ArgumentParser.help()."""

    def setUp(self) -> None:
        self.parser = ArgumentParser(colorful=False)
        self.parser.register("v", "verbose", "print more output")
        self.parser.register("t", "test", "a test flag", True)
        self.parser.register("o", "output", "where to write", True, True)
        self.parser.parse(["tool"])

    def testEveryFlagListed(self):
        output = _capture(render(self.parser))
        for fragment in ("-v", "--verbose", "print more output", "-t", "--test", "-o", "--output"):
            with self.subTest(fragment=fragment):
                self.assertIn(fragment, output)

    def testValueLabels(self):
        lines = _capture(render(self.parser)).splitlines()
        test = next(line for line in lines if "--test" in line)
        output = next(line for line in lines if "--output" in line)
        verbose = next(line for line in lines if "--verbose" in line)
        self.assertIn("<value>", test)
        self.assertIn("[<value>]", output)
        self.assertNotIn("value>", verbose)

    def testRegistrationOrder(self):
        output = _capture(render(self.parser))
        self.assertLess(output.index("--verbose"), output.index("--test"))
        self.assertLess(output.index("--test"), output.index("--output"))

    def testUsageLine(self):
        self.assertIn("usage: tool [flags]", _capture(render(self.parser)))

    def testFancyUsesPanel(self):
        parser = ArgumentParser(fancy=True, colorful=False)
        parser.register("v", "verbose", "print more output")
        self.assertIn("╭", _capture(render(parser)))

    def testHelpPrintsToGivenConsole(self):
        buffer = io.StringIO()
        self.parser.help(Console(file=buffer, width=120, color_system=None))
        self.assertIn("--verbose", buffer.getvalue())

    def testHelpUsesGivenConsoleOnly(self):
        buffer = io.StringIO()
        with mock.patch("cali.parser.Console") as factory:
            self.parser.help(Console(file=buffer, width=120, color_system=None))
        factory.assert_not_called()
        self.assertIn("--verbose", buffer.getvalue())

    def testHelpFallsBackToNewConsole(self):
        with mock.patch("cali.parser.Console") as factory:
            self.parser.help()
        factory.assert_called_once_with()
        factory.return_value.print.assert_called_once()


if __name__ == "__main__":
    unittest.main()
