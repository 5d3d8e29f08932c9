"""
Typed conversion of captured flag values.

A flag that takes a value may declare a ValueKind. After the parser captures
the raw string, convert() turns it into a Python value:

    kind                text            result
    NONE                anything        None (input ignored)
    NUMBER              "42", "-7"      int (signed 32-bit range)
    BOOLEAN             "true"/"false"  bool
    STRING              "hello"         "hello" (empty text is rejected)
    OPTIONAL_*          bad input       None instead of an error

Required kinds raise ValueError on bad input; the parser turns that into a
ValueConversionError carrying the flag and its position.
"""
import re
from enum import Enum

_INT32_MIN = -2 ** 31
_INT32_MAX = 2 ** 31 - 1


class ValueKind(Enum):
    """
    declared shape of a flag value.

    optional kinds never fail: unparsable input resolves to None.
    """
    NONE = "none"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    OPTIONAL_NUMBER = "optional-number"
    OPTIONAL_BOOLEAN = "optional-boolean"
    OPTIONAL_STRING = "optional-string"

    @property
    def optional(self):
        return self in (ValueKind.OPTIONAL_NUMBER, ValueKind.OPTIONAL_BOOLEAN, ValueKind.OPTIONAL_STRING)

    @property
    def required(self):
        """the non-optional counterpart (NONE maps to itself)."""
        return {
            ValueKind.OPTIONAL_NUMBER: ValueKind.NUMBER,
            ValueKind.OPTIONAL_BOOLEAN: ValueKind.BOOLEAN,
            ValueKind.OPTIONAL_STRING: ValueKind.STRING,
        }.get(self, self)


def _number(text):
    # ascii digits only; int() would also accept whitespace, underscores and unicode digits
    if not re.fullmatch(r"[+-]?[0-9]+", text):
        raise ValueError("invalid digit found in %r" % text)
    number = int(text)
    if not _INT32_MIN <= number <= _INT32_MAX:
        raise ValueError("number %r is out of range [%d, %d]" % (text, _INT32_MIN, _INT32_MAX))
    return number


def _boolean(text):
    try:
        return {"true": True, "false": False}[text]
    except KeyError:
        raise ValueError("provided string %r was not 'true' or 'false'" % text) from None


def _string(text):
    if not text:
        raise ValueError("empty string")
    return text


_converters = {
    ValueKind.NUMBER: _number,
    ValueKind.BOOLEAN: _boolean,
    ValueKind.STRING: _string,
}


def convert(kind, text, /):
    """
    convert a captured value according to its declared kind.

    raises
    - TypeError: kind is not a ValueKind or text is not a string.
    - ValueError: text does not fit a required kind.
    """
    if not isinstance(kind, ValueKind):
        raise TypeError("convert() first argument must be a value-kind")
    if not isinstance(text, str):
        raise TypeError("convert() second argument must be a string")

    if kind is ValueKind.NONE:
        return None

    converter = _converters[kind.required]
    if not kind.optional:
        return converter(text)
    try:
        return converter(text)
    except ValueError:
        return None


__all__ = (
    "ValueKind",
    "convert",
)
