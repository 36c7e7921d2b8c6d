r"""
posixargs definitions: declarative, immutable descriptions of operands and options.

Overview
- OperandDefinition(name, data_type=StringDataType.REJECT_EMPTY)
  • one positional argument slot; renders as "<name>".
- OptionArgumentDefinition(name, data_type)
  • the value an option itself takes; renders as "<name>".
- OptionPriority: NORMAL | HIGH
  • HIGH options (help/version) short-circuit every other validation failure.
- OptionDefinition(identifiers, argument=Unset, *, argument_required=True, priority=NORMAL)
  • one or more identifiers (OptionIdentifier objects or an optids() string),
    no duplicates, optional argument definition, priority.
  • renders as "-S, --style=<style>" (or "[=<style>]" when the argument is optional).
- OptionInstance(definition, used_identifier, argument_value=Unset)
  • one successfully parsed occurrence of an option.
- OperandInstance(definition, value)
  • one successfully parsed operand.

Validation highlights
- Names must be non-empty strings without '<' or '>'.
- Construction-time violations raise TypeError (wrong kind) or ValueError (wrong value).
- Instances require the DataValue to carry the very data type of its definition.

Example
    >>> style = OptionDefinition(
    ...     "-S, --style",
    ...     OptionArgumentDefinition("style", StringEnumDataType("compact", "tab")),
    ... )
    >>> str(style)
    '-S, --style=<style>'
"""
import re
from enum import StrEnum

from .datatypes import DataType, DataValue, StringDataType
from .identifiers import OptionIdentifier, optids
from .utils import *


def _sanitize_name(cls, name, /):
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} name must be a string")
    elif not name:
        raise ValueError(f"{cls.__typename__} name must not be empty")
    elif re.search(r"[<>]", name):
        raise ValueError(f"{cls.__typename__} name must not contain less-than or greater-than characters ('<', '>')")
    return name


def _sanitize_data_type(cls, data_type, /):
    if not isinstance(data_type, DataType):
        raise TypeError(f"{cls.__typename__} data type must be a DataType")
    return data_type


class OperandDefinition(metaclass=ValueType):
    __introspectable__ = ("name", "data_type")

    def __init__(self, name, data_type=StringDataType.REJECT_EMPTY, /):
        self._name = _sanitize_name(type(self), name)
        self._data_type = _sanitize_data_type(type(self), data_type)

    def __str__(self):
        return f"<{self._name}>"


class OptionArgumentDefinition(metaclass=ValueType):
    __introspectable__ = ("name", "data_type")

    def __init__(self, name, data_type, /):
        self._name = _sanitize_name(type(self), name)
        self._data_type = _sanitize_data_type(type(self), data_type)

    def __str__(self):
        return f"<{self._name}>"


class OptionPriority(StrEnum):
    NORMAL = "normal"
    HIGH = "high"


class OptionDefinition(metaclass=ValueType):
    """
    one option accepted by a usage.

    parameters
    - identifiers: Iterable[OptionIdentifier] | str
      a string is parsed with optids() (e.g. "-h, --help").
    - argument: OptionArgumentDefinition (positional, optional)
      the value this option takes; omit for presence-only options.
    - argument_required: bool (keyword-only)
      when False, the argument may only be attached (-Sx / --style=x); a
      separate token is never consumed.
    - priority: OptionPriority (keyword-only)

    errors
    - TypeError: identifiers, argument, argument_required or priority of the wrong kind.
    - ValueError: no identifiers, or duplicate identifiers.
    """
    __introspectable__ = ("identifiers", "argument_definition", "argument_required", "priority")
    __displayable__ = ("identifiers", "argument_definition", "priority")

    def __init__(self, identifiers, argument=Unset, /, *, argument_required=True, priority=OptionPriority.NORMAL):
        if isinstance(identifiers, str):
            identifiers = optids(identifiers)

        identifiers = tuple(identifiers)

        if not identifiers:
            raise ValueError(f"{type(self).__typename__} must specify at least one identifier")

        for identifier in identifiers:
            if not isinstance(identifier, OptionIdentifier):
                raise TypeError(f"{type(self).__typename__} identifiers must be OptionIdentifier objects")

        for index_a, index_b, identifier in duplicates(identifiers):
            raise ValueError(
                f"duplicate {identifier.style}-style identifier {quote(identifier.render(dashes=False))}"
                f" at index {index_a} and {index_b}"
            )

        if not isinstance(argument, OptionArgumentDefinition | UnsetType):
            raise TypeError(f"{type(self).__typename__} argument must be an OptionArgumentDefinition")

        if not isinstance(argument_required, bool):
            raise TypeError(f"{type(self).__typename__} 'argument_required' must be a boolean")

        if not isinstance(priority, OptionPriority):
            raise TypeError(f"{type(self).__typename__} 'priority' must be an OptionPriority")

        self._identifiers = identifiers
        self._argument_definition = coalesce(argument)
        # an option without argument cannot require one
        self._argument_required = argument_required and argument is not Unset
        self._priority = priority

    @property
    def is_argument_defined(self):
        return self._argument_definition is not None

    @property
    def is_argument_required(self):
        return self._argument_required

    @property
    def is_high_priority(self):
        return self._priority is OptionPriority.HIGH

    def matches(self, identifier, /):
        return identifier in self._identifiers

    def __str__(self):
        rendered = ", ".join(map(str, self._identifiers))

        if self._argument_definition is not None:
            argument = str(self._argument_definition)
            if self._identifiers[-1].is_long:
                argument = "=" + argument
            if not self._argument_required:
                argument = f"[{argument}]"
            rendered += argument

        return rendered


class OptionInstance(metaclass=ValueType):
    """
    one parsed occurrence of an option: its definition, the identifier actually
    used on the command line, and the argument value (when the option takes one).
    """
    __introspectable__ = ("definition", "used_identifier", "argument_value")

    def __init__(self, definition, used_identifier, argument_value=Unset, /):
        if not isinstance(definition, OptionDefinition):
            raise TypeError(f"{type(self).__typename__} definition must be an OptionDefinition")
        if not isinstance(used_identifier, OptionIdentifier):
            raise TypeError(f"{type(self).__typename__} used identifier must be an OptionIdentifier")
        if not definition.matches(used_identifier):
            raise ValueError(f"identifier {used_identifier} does not belong to option definition {definition}")

        if definition.is_argument_defined:
            if not isinstance(argument_value, DataValue):
                raise ValueError("missing argument value")
            if argument_value.data_type is not definition.argument_definition.data_type:
                raise ValueError("argument definition's data type and argument value's data type must be the same instance")
        elif argument_value is not Unset:
            raise ValueError("excess argument value")

        self._definition = definition
        self._used_identifier = used_identifier
        self._argument_value = coalesce(argument_value)

    def __str__(self):
        rendered = str(self._used_identifier)

        if self._argument_value is not None:
            if self._used_identifier.is_long:
                rendered += "="
            rendered += str(self._argument_value)

        return rendered


class OperandInstance(metaclass=ValueType):
    __introspectable__ = ("definition", "value")

    def __init__(self, definition, value, /):
        if not isinstance(definition, OperandDefinition):
            raise TypeError(f"{type(self).__typename__} definition must be an OperandDefinition")
        if not isinstance(value, DataValue):
            raise TypeError(f"{type(self).__typename__} value must be a DataValue")
        if definition.data_type is not value.data_type:
            raise ValueError("operand definition's data type and argument value's data type must be the same instance")

        self._definition = definition
        self._value = value

    def __str__(self):
        return str(self._value)


__all__ = (
    "OperandDefinition",
    "OptionArgumentDefinition",
    "OptionPriority",
    "OptionDefinition",
    "OptionInstance",
    "OperandInstance",
)
