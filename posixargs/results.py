r"""
posixargs parsing results: a closed, tagged union of outcomes.

Every result carries
- command_name_path: tuple[str, ...]  (empty at top level, one name per command level)
- source_usage: the Usage that produced it

Success variants
- RegularSuccess(options, operands)
- RegularHighPriorityOption(high_priority_option)
- CommandsSuccess(pre_command_options, command_name, command_result)
- CommandsHighPriorityOption(high_priority_option)

Failure variants
- MissingArguments(missing_argument_definitions, option_definition=None)
- ExcessiveArguments(count, option_definition=None)
- InvalidOption(invalid_option_identifier)
- InvalidEnumValue(enum_values, actual_value, option_definition=None, operand_number=None)
- UnknownCommand(command_name)
- EmptyArgument(option_definition=None, operand_number=None)

Results are immutable and compare structurally; all fields are keyword arguments
at construction and positional in `match` patterns:

    match parse_args(usage, args):
        case RegularHighPriorityOption(high_priority_option=option): ...
        case RegularSuccess(options=options, operands=operands): ...
        case InvalidOption(invalid_option_identifier=identifier): ...
        case Failure(): ...
"""
from types import MappingProxyType

from .utils import *


class ParsingResult(metaclass=ValueType):
    """
    base of every parsing outcome.

    subclasses declare
    - __introspectable__: every field, in match order.
    - __defaults__: optional fields and their default values.
    - tag: a stable "success/..." or "failure/..." label (logs and diagnostics).
    """
    __defaults__ = MappingProxyType({})
    tag = Unset

    def __init__(self, **fields):
        cls = type(self)

        for name in fields.keys() - set(cls.__introspectable__):
            raise TypeError(f"{cls.__name__}() got an unexpected keyword argument {name!r}")

        for name in cls.__introspectable__:
            try:
                value = fields[name]
            except KeyError:
                if name not in cls.__defaults__:
                    raise TypeError(f"{cls.__name__}() missing required keyword argument {name!r}") from None
                value = cls.__defaults__[name]
            setattr(self, "_" + name, value)

        self._command_name_path = tuple(self._command_name_path)

    @property
    def is_success(self):
        return isinstance(self, Success)

    @property
    def is_failure(self):
        return isinstance(self, Failure)


class Success(ParsingResult):
    """base of every successful outcome."""


class Failure(ParsingResult):
    """base of every failed outcome; always rendered by the caller, never raised."""


class RegularSuccess(Success):
    __introspectable__ = ("command_name_path", "source_usage", "options", "operands")
    tag = "success/regular/normal"

    def __init__(self, **fields):
        super().__init__(**fields)
        self._options = frozenset(self._options)
        self._operands = tuple(self._operands)


class RegularHighPriorityOption(Success):
    __introspectable__ = ("command_name_path", "source_usage", "high_priority_option")
    tag = "success/regular/high-priority-option"


class CommandsSuccess(Success):
    __introspectable__ = ("command_name_path", "source_usage", "pre_command_options", "command_name", "command_result")
    tag = "success/commands/normal"

    def __init__(self, **fields):
        super().__init__(**fields)
        self._pre_command_options = frozenset(self._pre_command_options)
        if not isinstance(self._command_result, Success):
            raise TypeError(f"{type(self).__typename__} command result must be a Success")


class CommandsHighPriorityOption(Success):
    __introspectable__ = ("command_name_path", "source_usage", "high_priority_option")
    tag = "success/commands/high-priority-option"


class MissingArguments(Failure):
    __introspectable__ = ("command_name_path", "source_usage", "missing_argument_definitions", "option_definition")
    __defaults__ = MappingProxyType({"option_definition": None})
    tag = "failure/missing-arguments"

    def __init__(self, **fields):
        super().__init__(**fields)
        self._missing_argument_definitions = tuple(self._missing_argument_definitions)
        if not self._missing_argument_definitions:
            raise ValueError(f"{type(self).__typename__} must name at least one missing argument")
        if self._option_definition is not None and len(self._missing_argument_definitions) != 1:
            raise ValueError(f"{type(self).__typename__} of an option must name exactly its argument definition")


class ExcessiveArguments(Failure):
    __introspectable__ = ("command_name_path", "source_usage", "count", "option_definition")
    __defaults__ = MappingProxyType({"option_definition": None})
    tag = "failure/excessive-arguments"


class InvalidOption(Failure):
    __introspectable__ = ("command_name_path", "source_usage", "invalid_option_identifier")
    tag = "failure/invalid-option"


class InvalidEnumValue(Failure):
    __introspectable__ = (
        "command_name_path",
        "source_usage",
        "enum_values",
        "actual_value",
        "option_definition",
        "operand_number",
    )
    __defaults__ = MappingProxyType({"option_definition": None, "operand_number": None})
    tag = "failure/invalid-enum-value"

    def __init__(self, **fields):
        super().__init__(**fields)
        self._enum_values = tuple(self._enum_values)


class UnknownCommand(Failure):
    __introspectable__ = ("command_name_path", "source_usage", "command_name")
    tag = "failure/unknown-command"


class EmptyArgument(Failure):
    __introspectable__ = ("command_name_path", "source_usage", "option_definition", "operand_number")
    __defaults__ = MappingProxyType({"option_definition": None, "operand_number": None})
    tag = "failure/empty-argument"


__all__ = (
    "ParsingResult",
    "Success",
    "Failure",
    "RegularSuccess",
    "RegularHighPriorityOption",
    "CommandsSuccess",
    "CommandsHighPriorityOption",
    "MissingArguments",
    "ExcessiveArguments",
    "InvalidOption",
    "InvalidEnumValue",
    "UnknownCommand",
    "EmptyArgument",
)
