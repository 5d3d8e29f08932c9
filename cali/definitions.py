r"""
Cali flag definitions.

Overview
- FlagDefinition: immutable description of one declarable flag, e.g. -t/--test.
  • short/long identifiers are stored without their leading dashes.
  • takes_value/optional_value decide what the parser does with the next token.
  • kind/default describe how a captured value is converted and what an
    optional value falls back to.

Metadata (sanitized on construction)
- short, long: str, leading dashes stripped, non-empty, no whitespace or '='.
- description: str, trimmed (may be empty; only shown in help).
- takes_value, optional_value: bool; optional_value requires takes_value.
- kind: None | ValueKind; only allowed on flags that take a value.
- default: None | str; only allowed on flags whose value is optional, and must
  convert cleanly under kind.

Matching
- matches_long(token) / matches_short(token) strip any leading '-' from the
  token and compare case-sensitively against long/short.

Quick example:
    >>> verbose = FlagDefinition("v", "verbose", "Print more output")
    >>> verbose.matches_short("-v"), verbose.matches_long("--verbose")
    (True, True)
"""
import re

from .utils import *
from .utils import RecordType
from .values import ValueKind, convert


def _sanitize_identifier(cls, metadata, key, /):
    if not isinstance(identifier := metadata[key], str):
        raise TypeError(f"{cls.__typename__} '{key}' must be a string")
    elif not (identifier := identifier.strip().lstrip("-")):
        raise ValueError(f"{cls.__typename__} '{key}' cannot be empty")
    elif re.search(r"[\s=]", identifier):
        raise ValueError(f"{cls.__typename__} '{key}' cannot contain whitespace or '='")
    metadata[key] = identifier


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate FlagDefinition metadata in place.

    Raises
    - TypeError: wrong types, or value-related fields on a flag without a value.
    - ValueError: empty/malformed identifiers, or a default that does not
      convert under the declared kind.
    """
    _sanitize_identifier(cls, metadata, "short")
    _sanitize_identifier(cls, metadata, "long")

    if not isinstance(description := metadata["description"], str):
        raise TypeError(f"{cls.__typename__} 'description' must be a string")
    metadata["description"] = description.strip()

    if metadata["optional_value"] and not metadata["takes_value"]:
        raise TypeError(f"{cls.__typename__} without a value cannot have an optional value")

    if not isinstance(kind := metadata["kind"], ValueKind | Unset):
        raise TypeError(f"{cls.__typename__} 'kind' must be a value-kind")
    elif kind and not metadata["takes_value"]:
        raise TypeError(f"{cls.__typename__} without a value cannot have a 'kind'")
    metadata["kind"] = coalesce(kind)

    if not isinstance(default := metadata["default"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'default' must be a string")
    elif isinstance(default, str) and not metadata["optional_value"]:
        raise TypeError(f"{cls.__typename__} 'default' requires an optional value")
    elif isinstance(default, str) and metadata["kind"] is not None:
        try:
            convert(metadata["kind"], default)
        except ValueError as error:
            raise ValueError(f"{cls.__typename__} 'default' does not fit its kind: {error}") from None
    metadata["default"] = coalesce(default)


class FlagDefinition(metaclass=RecordType, sealed=True):
    """
    Immutable description of one declarable flag.

    Instances are created once at registration time, compare structurally and
    are hashable. All fields listed in __introspectable__ are read-only.
    """

    __introspectable__ = (
        "short",
        "long",
        "description",
        "takes_value",
        "optional_value",
        "kind",
        "default",
    )

    __displayable__ = (
        "short",
        "long",
        "takes_value",
        "optional_value",
    )

    def __new__(
            cls,
            short,
            long,
            description="",
            takes_value=False,
            optional_value=False,
            *,
            kind=Unset,
            default=Unset
    ):
        """
        Construct a FlagDefinition with the provided metadata.

        Parameters
        - short: str
          Short identifier, e.g. "t" or "-t".
        - long: str
          Long identifier, e.g. "test" or "--test".
        - description: str
          Help text.
        - takes_value: bool
          Whether a value token must follow the flag.
        - optional_value: bool
          Whether a missing value is tolerated (requires takes_value).
        - kind: ValueKind
          Converter for the captured value. When omitted the raw string is kept.
        - default: str
          Value recorded when an optional value is missing.
        """
        metadata = {
            "short": short,
            "long": long,
            "description": description,
            "takes_value": bool(takes_value),
            "optional_value": bool(optional_value),
            "kind": kind,
            "default": default,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def matches_long(self, token, /):
        """
        Return True when token names this flag's long form ("--test" or "test").
        """
        if not isinstance(token, str):
            raise TypeError("matches_long() argument must be a string")
        return token.lstrip("-") == self._long

    def matches_short(self, token, /):
        """
        Return True when token names this flag's short form ("-t" or "t").
        """
        if not isinstance(token, str):
            raise TypeError("matches_short() argument must be a string")
        return token.lstrip("-") == self._short

    @property
    def metavar(self):
        """
        Help label for the value: "<value>", "[<value>]" when optional, None without a value.
        """
        if not self._takes_value:
            return None
        return "[<value>]" if self._optional_value else "<value>"

    def __str__(self):
        if self._takes_value:
            return "-%s \t --%s %s\n%s" % (self._short, self._long, self.metavar, self._description)
        return "-%s \t --%s\n%s" % (self._short, self._long, self._description)


__all__ = (
    "FlagDefinition",
)
