r"""
posixargs data types: value validators and parsers for option-arguments and operands.

Overview
- DataType: abstract validator/parser. Every concrete type implements
  • parse_string(raw) → Parsed(value) | EmptyValue() | UnknownEnumValue(enum_values)
  • validate(value)   → bool (pure predicate, used when building a DataValue directly)
- StringDataType(accept_empty=...): any string; optionally rejects "".
  Shared instances: StringDataType.ACCEPT_EMPTY, StringDataType.REJECT_EMPTY.
- StringEnumDataType(*values): a fixed, non-empty, duplicate-free set of literals.
- DataValue(data_type, value): a value paired with the data type that validated it.

Failure contract
- Only two failure kinds exist: "empty" and "invalid enum value". Any new scalar
  kind must report its failures through the same two outcomes so that the parsing
  engine stays generic over value kinds.

Example
    >>> style = StringEnumDataType("compact", "tab", "spaces:4")
    >>> style.parse_string("tab")
    Parsed(value='tab')
    >>> style.parse_string("spaces:5")
    UnknownEnumValue(enum_values=('compact', 'tab', 'spaces:4'))
"""
from abc import abstractmethod

from .utils import *


class DataParseOutcome(metaclass=ValueType):
    """base of the three outcomes of DataType.parse_string()."""


class Parsed(DataParseOutcome):
    __introspectable__ = ("value",)

    def __init__(self, value, /):
        self._value = value


class EmptyValue(DataParseOutcome):
    __introspectable__ = ()


class UnknownEnumValue(DataParseOutcome):
    __introspectable__ = ("enum_values",)

    def __init__(self, enum_values, /):
        self._enum_values = tuple(enum_values)


class DataType(metaclass=ValueType):
    """
    abstract value validator/parser.

    contract
    - parse_string(raw) must return exactly one DataParseOutcome and never raise
      for string input.
    - validate(value) must be pure and agree with parse_string: every Parsed(value)
      it produces must satisfy validate(value).
    """

    @abstractmethod
    def parse_string(self, raw, /):
        raise NotImplementedError

    @abstractmethod
    def validate(self, value, /):
        raise NotImplementedError

    @abstractmethod
    def __str__(self):
        raise NotImplementedError


class StringDataType(DataType):
    __introspectable__ = ("accept_empty",)

    def __init__(self, *, accept_empty):
        if not isinstance(accept_empty, bool):
            raise TypeError(f"{type(self).__typename__} 'accept_empty' must be a boolean")
        self._accept_empty = accept_empty

    def parse_string(self, raw, /):
        if not raw and not self._accept_empty:
            return EmptyValue()
        return Parsed(raw)

    def validate(self, value, /):
        return isinstance(value, str) and (self._accept_empty or bool(value))

    def __str__(self):
        return "string"


StringDataType.ACCEPT_EMPTY = StringDataType(accept_empty=True)
StringDataType.REJECT_EMPTY = StringDataType(accept_empty=False)


class StringEnumDataType(DataType):
    __introspectable__ = ("values",)

    def __init__(self, *values):
        if not values:
            raise ValueError(f"{type(self).__typename__} values must not be empty")

        for index, value in enumerate(values):
            if not isinstance(value, str):
                raise TypeError(f"{type(self).__typename__} value at index {index} must be a string")
            if not value:
                raise ValueError(f"{type(self).__typename__} value at index {index} must not be empty")

        for index_a, index_b, value in duplicates(values):
            raise ValueError(f"duplicate value {quote(value)} at index {index_a} and {index_b}")

        self._values = tuple(values)

    def parse_string(self, raw, /):
        if not raw:
            return EmptyValue()
        if raw not in self._values:
            return UnknownEnumValue(self._values)
        return Parsed(raw)

    def validate(self, value, /):
        return value in self._values

    def __str__(self):
        return "enum { %s }" % ", ".join(map(quote, self._values))


class DataValue(metaclass=ValueType):
    """
    a validated value together with the data type that accepted it.

    errors
    - TypeError: data_type is not a DataType.
    - ValueError: data_type.validate(value) is false.
    """
    __introspectable__ = ("data_type", "value")

    def __init__(self, data_type, value, /):
        if not isinstance(data_type, DataType):
            raise TypeError(f"{type(self).__typename__} data type must be a DataType")
        if not data_type.validate(value):
            raise ValueError(f"invalid value {value!r} for data type {data_type}")
        self._data_type = data_type
        self._value = value

    def __str__(self):
        return str(self._value)


__all__ = (
    "DataParseOutcome",
    "Parsed",
    "EmptyValue",
    "UnknownEnumValue",
    "DataType",
    "StringDataType",
    "StringEnumDataType",
    "DataValue",
)
