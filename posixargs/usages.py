r"""
posixargs usages: what a program (or one of its commands) accepts.

Overview
- Usage: abstract base of every usage.
- RegularUsage(option_definitions=(), operand_definitions=())
  • ordered options + ordered operands; RegularUsage.empty() for none of either.
- CommandsUsage(pre_command_option_definitions, command_usages)
  • options accepted before the command name, plus a name → Usage mapping.
  • command_usages may be a Mapping or an iterable of (name, usage) pairs.
  • nests recursively: a command's usage may itself be a CommandsUsage.

Invariants (checked eagerly, raising TypeError/ValueError)
- no two option definitions of one usage level share an identifier
  (short and long namespaces are independent by construction of OptionIdentifier equality).
- a CommandsUsage has at least one command; names are non-empty and unique.

Rendering
    >>> str(RegularUsage([OptionDefinition("-h, --help")], [OperandDefinition("file")]))
    '[-h, --help] <file>'
"""
import itertools
from collections.abc import Mapping

from .definitions import OperandDefinition, OptionDefinition
from .utils import *


def _sanitize_option_definitions(cls, option_definitions, /):
    option_definitions = tuple(option_definitions)

    for option_definition in option_definitions:
        if not isinstance(option_definition, OptionDefinition):
            raise TypeError(f"{cls.__typename__} option definitions must be OptionDefinition objects")

    for (index_a, option_definition_a), (index_b, option_definition_b) in itertools.combinations(enumerate(option_definitions), 2):
        for identifier in option_definition_a.identifiers:
            if option_definition_b.matches(identifier):
                raise ValueError(
                    f"duplicate {identifier.style}-style identifier {quote(identifier.render(dashes=False))}"
                    f" of option definitions at index {index_a} and {index_b}"
                )

    return option_definitions


def _render_option_definitions(option_definitions, /):
    return " ".join(f"[{option_definition}]" for option_definition in option_definitions)


class Usage(metaclass=ValueType):
    """abstract base of RegularUsage and CommandsUsage."""

    @property
    def is_regular(self):
        return isinstance(self, RegularUsage)

    @property
    def is_commands(self):
        return isinstance(self, CommandsUsage)


class RegularUsage(Usage):
    __introspectable__ = ("option_definitions", "operand_definitions")

    def __init__(self, option_definitions=(), operand_definitions=(), /):
        self._option_definitions = _sanitize_option_definitions(type(self), option_definitions)

        operand_definitions = tuple(operand_definitions)
        for operand_definition in operand_definitions:
            if not isinstance(operand_definition, OperandDefinition):
                raise TypeError(f"{type(self).__typename__} operand definitions must be OperandDefinition objects")
        self._operand_definitions = operand_definitions

    @classmethod
    def empty(cls):
        return cls()

    def __str__(self):
        return " ".join(filter(None, (
            _render_option_definitions(self._option_definitions),
            *map(str, self._operand_definitions),
        )))


class CommandsUsage(Usage):
    __introspectable__ = ("pre_command_option_definitions", "command_usages")

    def __init__(self, pre_command_option_definitions, command_usages, /):
        self._pre_command_option_definitions = _sanitize_option_definitions(type(self), pre_command_option_definitions)

        if isinstance(command_usages, Mapping):
            command_usages = command_usages.items()

        names = []
        usages = {}
        for pair in command_usages:
            try:
                name, usage = pair
            except (TypeError, ValueError):
                raise TypeError(f"{type(self).__typename__} commands must be (name, usage) pairs") from None
            if not isinstance(name, str):
                raise TypeError(f"{type(self).__typename__} command names must be strings")
            elif not name:
                raise ValueError(f"{type(self).__typename__} command name must not be empty")
            if not isinstance(usage, Usage):
                raise TypeError(f"{type(self).__typename__} command usages must be Usage objects")
            names.append(name)
            usages[name] = usage

        if not names:
            raise ValueError(f"{type(self).__typename__} must specify at least one command")

        for index_a, index_b, name in duplicates(names):
            raise ValueError(f"duplicate command name {quote(name)} at index {index_a} and {index_b}")

        self._command_usages = usages

    def __str__(self):
        commands = " | ".join(
            " ".join(filter(None, (name, str(usage))))
            for name, usage in self._command_usages.items()
        )

        if len(self._command_usages) > 1:
            commands = f"({commands})"

        return " ".join(filter(None, (
            _render_option_definitions(self._pre_command_option_definitions),
            commands,
        )))


__all__ = (
    "Usage",
    "RegularUsage",
    "CommandsUsage",
)
