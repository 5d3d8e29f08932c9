"""
Cali argument parser: declare flags, parse invocation tokens, look up results.

What this module provides
- ArgumentParser: owns the registered FlagDefinitions, walks an argv-like token
  sequence once and records an ordered list of MatchedFlags.
- invoke(parser, tokens): convenience runner that reads sys.argv when no tokens
  are given and, in shell mode, renders faults to stderr and exits.

Parsing policy (single pass, token 0 is the program name)
- '--name' resolves against long identifiers, '-n' against short ones; the
  first registered definition that matches wins.
- anything else where a flag is expected is an unrecognized token.
- a flag that takes a value consumes the next token unless that token is
  missing or starts with '-':
    • optional value: record the flag without value (or with its default) and
      leave the next token for the next iteration.
    • required value: fail with a missing-value fault.
- results keep input order; duplicated flags produce duplicated entries and
  lookups return the first one.
- parsing stops at the first fault; results recorded up to that point stay
  available through .results.

Quick start
    from cali import ArgumentParser, ValueKind

    parser = ArgumentParser()
    parser.register("v", "verbose", "print more output")
    parser.register("c", "count", "how many times", True, kind=ValueKind.NUMBER)
    parser.parse(["prog", "-v", "--count", "3"])
    parser.value_of("count")  # 3
"""
import difflib
import logging
import os.path
import sys
from collections.abc import Sequence

from rich.console import Console

from . import helper
from .definitions import FlagDefinition
from .faults import *
from .matches import MatchedFlag
from .utils import *
from .values import convert

logger = logging.getLogger(__name__)


class ArgumentParser:
    """
    Declarative flag registry plus a one-shot token parser.

    Options
    - strict: reject a registration whose short or long identifier is already
      taken (DuplicateDefinitionError). Off by default: first match wins.
    - fancy: render help and faults inside panels.
    - colorful: apply styles when rendering help and faults.

    Lifecycle
    - register() flags, then parse() once. A second parse() raises RuntimeError
      until reset() clears the recorded results.
    """

    strict = mirror("strict")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(self, *, strict=False, fancy=False, colorful=True):
        self._strict = bool(strict)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._definitions = []
        self._results = []
        self._consumed = False
        self._prog = Unset

    def __repr__(self):
        return "%s(definitions=%d, results=%d, strict=%r)" % (
            type(self).__name__, len(self._definitions), len(self._results), self._strict
        )

    @property
    def prog(self):
        """
        Program name used in help and fault headers.

        Resolution order: __prog__ in __main__, basename of the parsed token 0,
        basename of sys.argv[0].
        """
        fallback = coalesce(self._prog, sys.argv[0] if sys.argv else "")
        return getattr(__import__("__main__"), "__prog__", os.path.basename(fallback))

    @property
    def results(self):
        """Owned snapshot of the matched flags recorded so far, in input order."""
        return tuple(self._results)

    def register(self, short, long, description="", takes_value=False, optional_value=False, *, kind=Unset, default=Unset):
        """
        Append a new FlagDefinition and return it.

        No uniqueness check is performed unless the parser is strict; with
        duplicated identifiers the first registered definition wins.
        """
        definition = FlagDefinition(
            short,
            long,
            description,
            takes_value,
            optional_value,
            kind=kind,
            default=default,
        )
        if self._strict:
            for other in self._definitions:
                if other.short == definition.short or other.long == definition.long:
                    clash = ("-" + other.short) if other.short == definition.short else ("--" + other.long)
                    raise self._fault(
                        DuplicateDefinitionError,
                        "flag %r is already defined" % clash,
                        title="duplicate flag definition",
                        code=FaultCode.DUPLICATE_DEFINITION,
                        flag=clash,
                        hint="give -%s/--%s identifiers that no other flag uses" % (definition.short, definition.long),
                    )
        self._definitions.append(definition)
        logger.debug("registered %r", definition)
        return definition

    def list_definitions(self):
        """Owned snapshot of the registered definitions, in registration order."""
        return tuple(self._definitions)

    def reset(self):
        """Forget every recorded match so the parser can parse again."""
        self._results.clear()
        self._consumed = False
        self._prog = Unset

    def parse(self, tokens, /):
        """
        Parse argv-like tokens and return the matched flags in input order.

        parameters
        - tokens: Sequence[str]
          token 0 is the program name and is skipped.

        raises
        - UnrecognizedTokenError: a token is not a declared flag, or a bare value
          shows up where a flag was expected.
        - MissingValueError: a flag requires a value and none could be captured.
        - ValueConversionError: a captured value does not fit the flag's kind.
        - RuntimeError: parse() was already called without reset().
        """
        if isinstance(tokens, str) or not isinstance(tokens, Sequence):
            raise TypeError("parse() argument must be a sequence of strings")
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must contain only strings")
        if self._consumed:
            raise RuntimeError("parse() was already called; call reset() before parsing again")

        self._consumed = True
        if tokens:
            self._prog = tokens[0]

        index = 1
        while index < len(tokens):
            token = tokens[index]
            definition = self._resolve(token, index)
            start = index
            index += 1

            if not definition.takes_value:
                self._record(definition, None, token, start)
                continue

            # end of input or the next flag: no separate value is available
            if index >= len(tokens) or tokens[index].startswith("-"):
                if not definition.optional_value:
                    raise self._missing(definition, token, start, tokens[index] if index < len(tokens) else Unset)
                logger.debug("flag %r at %s position has no value", token, ordinal(start))
                self._record(definition, definition.default, token, start)
                continue

            self._record(definition, tokens[index], token, start)
            index += 1

        return list(self._results)

    def lookup_by_long(self, long, /):
        """First matched flag whose long identifier is long ("test" or "--test"), or None."""
        if not isinstance(long, str):
            raise TypeError("lookup_by_long() argument must be a string")
        for match in self._results:
            if match.definition.matches_long(long):
                return match
        return None

    def lookup_by_short(self, short, /):
        """First matched flag whose short identifier is short ("t" or "-t"), or None."""
        if not isinstance(short, str):
            raise TypeError("lookup_by_short() argument must be a string")
        for match in self._results:
            if match.definition.matches_short(short):
                return match
        return None

    def value_of(self, name, /, default=None):
        """
        Converted value of the first match for name, or default.

        name may be "--long", "-short" or a bare identifier (long tried first).
        default is returned when the flag was not given or carries no value.
        """
        if not isinstance(name, str):
            raise TypeError("value_of() first argument must be a string")
        if name.startswith("--"):
            match = self.lookup_by_long(name)
        elif name.startswith("-"):
            match = self.lookup_by_short(name)
        else:
            match = self.lookup_by_long(name) or self.lookup_by_short(name)
        if match is None or match.value is None:
            return default
        return match.converted

    def help(self, console=Unset, /):
        """Print the flag table (see cali.helper.render)."""
        (console if console is not Unset else Console()).print(helper.render(self))

    def _resolve(self, token, index):
        """
        find the definition selected by a flag-shaped token.

        '--name' is matched against long identifiers, '-n' against short ones.
        """
        if token.startswith("--"):
            form, predicate = "long", FlagDefinition.matches_long
            candidates = ["--" + definition.long for definition in self._definitions]
        elif token.startswith("-"):
            form, predicate = "short", FlagDefinition.matches_short
            candidates = ["-" + definition.short for definition in self._definitions]
        else:
            raise self._fault(
                UnrecognizedTokenError,
                "expected a flag but got %r at %s position" % (token, ordinal(index)),
                title="unrecognized token",
                code=FaultCode.UNRECOGNIZED_TOKEN,
                token=token,
                index=index,
                hint="values must directly follow a flag that takes one; flags start with '-' or '--'",
            )

        for definition in self._definitions:
            if predicate(definition, token):
                logger.debug("found %s flag %r at %s position", form, token, ordinal(index))
                return definition

        suggestions = difflib.get_close_matches(token, candidates, 3)
        try:
            hint = "did you mean %r? run '%s --help' to see all flags" % (suggestions[0], self.prog)
        except IndexError:
            hint = "run '%s --help' to see all flags" % self.prog
        raise self._fault(
            UnrecognizedTokenError,
            "unknown flag %r at %s position" % (token, ordinal(index)),
            title="unrecognized token",
            code=FaultCode.UNRECOGNIZED_TOKEN,
            token=token,
            index=index,
            suggestions=suggestions,
            hint=hint,
        )

    def _missing(self, definition, token, index, following):
        if following is Unset:
            message = "flag %r at %s position requires a value but the input ended" % (token, ordinal(index))
        else:
            message = "flag %r at %s position requires a value but got flag %r" % (token, ordinal(index), following)
        return self._fault(
            MissingValueError,
            message,
            title="missing value",
            code=FaultCode.MISSING_VALUE,
            flag=token,
            index=index,
            hint="pass it after a space (for example: %s <value>)" % token,
        )

    def _record(self, definition, value, token, index):
        converted = value
        if value is not None and definition.kind is not None:
            try:
                converted = convert(definition.kind, value)
            except ValueError as error:
                raise self._fault(
                    ValueConversionError,
                    "invalid %s value %r for flag %r at %s position" % (definition.kind.value, value, token, ordinal(index)),
                    title="invalid value",
                    code=FaultCode.INVALID_VALUE,
                    flag=token,
                    index=index,
                    value=value,
                    hint=str(error),
                ) from error
        self._results.append(MatchedFlag(definition, value, converted=converted, token=token, index=index))

    def _fault(self, cls, message, /, **options):
        logger.debug("%s: %s", cls.__name__, message)
        return cls(message, prog=self.prog, fancy=self._fancy, colorful=self._colorful, **options)


def invoke(parser, tokens=Unset, /, *, shell=False, console=Unset):
    """
    Parse tokens (sys.argv when omitted) with parser.

    - shell=False: faults propagate to the caller.
    - shell=True: the fault is rendered to stderr (or console) and the process
      exits with status 1.
    """
    if not isinstance(parser, ArgumentParser):
        raise TypeError("invoke() first argument must be an argument parser")
    try:
        return parser.parse(coalesce(tokens, sys.argv))
    except ParseFailure as fault:
        if not shell:
            raise
        report(fault, console=console)
        sys.exit(1)


__all__ = (
    "ArgumentParser",
    "invoke",
)
