"""
Cali matched flags.

A MatchedFlag is the record the parser produces for every flag token it
resolves: the FlagDefinition it selected, the captured value (if any), and
where in the input it came from. Records are immutable and compare on
(definition, value), so the same logical flag looked up by its short or long
name yields equal results.
"""
from .definitions import FlagDefinition
from .utils import *
from .utils import RecordType


class MatchedFlag(metaclass=RecordType, sealed=True):
    """
    Result of resolving one input token against a FlagDefinition.

    Fields
    - definition: FlagDefinition that matched.
    - value: captured string, or the definition's default, or None.
    - converted: value converted through the definition's kind (value itself when
      the definition has no kind; None when there is no value).
    - token: raw input token that selected the definition.
    - index: position of that token in the input sequence.
    """

    __introspectable__ = (
        "definition",
        "value",
        "converted",
        "token",
        "index",
    )

    __displayable__ = (
        "definition",
        "value",
        "token",
        "index",
    )

    __comparable__ = (
        "definition",
        "value",
    )

    def __new__(cls, definition, value=None, /, *, converted=Unset, token=Unset, index=Unset):
        if not isinstance(definition, FlagDefinition):
            raise TypeError(f"{cls.__typename__} 'definition' must be a flag-definition")
        if not isinstance(value, str | None):
            raise TypeError(f"{cls.__typename__} 'value' must be a string")
        if value is not None and not definition.takes_value:
            raise ValueError(f"{cls.__typename__} cannot carry a value for a flag that takes none")

        self = super().__new__(cls)
        self._definition = definition
        self._value = value
        self._converted = coalesce(converted, value)
        self._token = coalesce(token, "--" + definition.long)
        self._index = coalesce(index)
        return self

    def __str__(self):
        if self._value is None:
            return self._token
        return "%s %s" % (self._token, self._value)


__all__ = (
    "MatchedFlag",
)
