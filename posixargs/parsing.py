r"""
posixargs parsing engine: consume an argument vector against a Usage.

Entry points
- parse_args(usage, args, /, *, process_options=True) → ParsingResult
- parse_process_args(usage, /) → ParsingResult for sys.argv[1:]

Tokenization (one pass, index-based so an option can consume the next token)
- a token is option-like while options are processed, it has at least two
  characters, starts with '-' and does not start with '--='.
  • '--'            → stop processing options for the rest of this usage level.
  • '--word[=value]' → long option; '=value' (even empty) always wins over the
                       next token, which is only consumed by required arguments.
  • '-abc'          → bundled short options; the first defined option that takes
                       an argument swallows the rest of the token as its argument.
- anything else is an operand (regular usage) or the command name (commands usage;
  every remaining token goes to that command's usage, together with the current
  option-processing state).

Resolution order (regular usage)
1. resolve every option occurrence (argument presence + data type).
2. the first resolved high-priority option wins outright (help/version must work
   on an otherwise malformed command line).
3. the first invalid option identifier.
4. operand count, then operand data.
5. the first option failure from step 1.
6. success.

Resolution order (commands usage)
1. pre-command options as above (high priority, invalid identifier, option failures).
2. missing / empty / unknown command.
3. recurse into the command's usage; failures are returned as-is, successes wrapped.

The engine never raises for user input: every problem is a Failure result.
"""
import logging
import sys

from .datatypes import DataValue, EmptyValue, Parsed, UnknownEnumValue
from .definitions import OperandDefinition, OperandInstance, OptionInstance
from .identifiers import OptionIdentifier, OptionStyle
from .results import *
from .usages import CommandsUsage, RegularUsage

logger = logging.getLogger(__name__)

_COMMAND_OPERAND = OperandDefinition("command")


def parse_args(usage, args, /, *, process_options=True):
    """
    parse `args` against `usage` and return exactly one ParsingResult.

    parameters
    - usage: RegularUsage | CommandsUsage
    - args: Iterable[str] (argv without the program name)
    - process_options: bool (keyword-only)
      when False, every token is treated as an operand / command name, as if
      preceded by '--'.

    errors
    - TypeError: usage is not a supported Usage, or an argument is not a string
      (programmer errors; user-input problems are returned as Failure results).
    """
    args = tuple(args)
    for index, arg in enumerate(args):
        if not isinstance(arg, str):
            raise TypeError(f"parse_args() argument at index {index} must be a string")

    result = _parse((), usage, args, process_options)
    logger.debug("parsed %r as %s (command path %r)", args, result.tag, result.command_name_path)
    return result


def parse_process_args(usage, /):
    """
    parse the current process' arguments (sys.argv without the program name).
    """
    return parse_args(usage, sys.argv[1:])


def _parse(command_name_path, usage, args, processing_options):
    match usage:
        case RegularUsage():
            return _parse_regular(command_name_path, usage, args, processing_options)
        case CommandsUsage():
            return _parse_commands(command_name_path, usage, args, processing_options)
        case _:
            raise TypeError(f"unsupported usage {type(usage).__name__}")


def _is_option(arg):
    return len(arg) >= 2 and arg.startswith("-") and not arg.startswith("--=")


def _find_option_definition(option_definitions, identifier):
    for option_definition in option_definitions:
        if option_definition.matches(identifier):
            return option_definition
    return None


class _Scan:
    """
    the raw outcome of tokenizing one usage level.

    - occurrences: list of (definition | None, used identifier, raw argument | None)
    - operands: raw operand values (regular usage)
    - command_index: index of the command name token, or None (commands usage)
    - processing_options: option-processing state at the point the scan stopped
    """
    __slots__ = ("occurrences", "operands", "command_index", "processing_options")

    def __init__(self, processing_options):
        self.occurrences = []
        self.operands = []
        self.command_index = None
        self.processing_options = processing_options


def _scan(option_definitions, args, processing_options, *, stop_at_operand):
    scan = _Scan(processing_options)

    index = 0
    while index < len(args):
        arg = args[index]

        if not (scan.processing_options and _is_option(arg)):
            if stop_at_operand:
                scan.command_index = index
                break
            logger.debug("token %d %r: operand", index, arg)
            scan.operands.append(arg)
            index += 1
            continue

        if arg == "--":
            logger.debug("token %d %r: end of options", index, arg)
            scan.processing_options = False
            index += 1
            continue

        if arg.startswith("--"):
            word, equals, value = arg[2:].partition("=")
            identifier = OptionIdentifier(OptionStyle.LONG, word)
            definition = _find_option_definition(option_definitions, identifier)

            argument = value if equals else None

            if argument is None and definition is not None and definition.is_argument_required and index + 1 < len(args):
                index += 1
                argument = args[index]

            logger.debug("token %r: long option %s (argument %r)", arg, identifier, argument)
            scan.occurrences.append((definition, identifier, argument))
            index += 1
            continue

        position = 1
        while position < len(arg):
            identifier = OptionIdentifier(OptionStyle.SHORT, arg[position])
            definition = _find_option_definition(option_definitions, identifier)

            argument = None

            if definition is not None and definition.is_argument_defined:
                if position + 1 < len(arg):
                    argument = arg[position + 1:]
                    position = len(arg)
                elif definition.is_argument_required and index + 1 < len(args):
                    index += 1
                    argument = args[index]

            logger.debug("token %r: short option %s (argument %r)", arg, identifier, argument)
            scan.occurrences.append((definition, identifier, argument))
            position += 1

        index += 1

    return scan


def _check_data(command_name_path, usage, data_type, raw, *, option_definition=None, operand_number=None):
    match data_type.parse_string(raw):
        case Parsed(value=value):
            return DataValue(data_type, value)
        case EmptyValue():
            return EmptyArgument(
                command_name_path=command_name_path,
                source_usage=usage,
                option_definition=option_definition,
                operand_number=operand_number,
            )
        case UnknownEnumValue(enum_values=enum_values):
            return InvalidEnumValue(
                command_name_path=command_name_path,
                source_usage=usage,
                enum_values=enum_values,
                actual_value=raw,
                option_definition=option_definition,
                operand_number=operand_number,
            )
        case outcome:
            raise TypeError(f"{type(data_type).__name__}.parse_string() returned {outcome!r}")


def _create_option_instance(command_name_path, usage, definition, used_identifier, argument):
    argument_definition = definition.argument_definition

    if argument_definition is None:
        if argument is None:
            return OptionInstance(definition, used_identifier)
        return ExcessiveArguments(
            command_name_path=command_name_path,
            source_usage=usage,
            count=1,
            option_definition=definition,
        )

    if argument is None:
        return MissingArguments(
            command_name_path=command_name_path,
            source_usage=usage,
            missing_argument_definitions=(argument_definition,),
            option_definition=definition,
        )

    checked = _check_data(
        command_name_path,
        usage,
        argument_definition.data_type,
        argument,
        option_definition=definition,
    )
    if isinstance(checked, Failure):
        return checked

    return OptionInstance(definition, used_identifier, checked)


def _resolve_options(command_name_path, usage, occurrences):
    """
    turn raw occurrences into (invalid identifiers, option instances, option failures).
    """
    invalid_identifiers = []
    instances = []
    failures = []

    for definition, used_identifier, argument in occurrences:
        if definition is None:
            invalid_identifiers.append(used_identifier)
            continue

        resolved = _create_option_instance(command_name_path, usage, definition, used_identifier, argument)
        if isinstance(resolved, Failure):
            failures.append(resolved)
        else:
            instances.append(resolved)

    return invalid_identifiers, instances, failures


def _first_high_priority(instances):
    for instance in instances:
        if instance.definition.is_high_priority:
            return instance
    return None


def _parse_regular(command_name_path, usage, args, processing_options):
    scan = _scan(usage.option_definitions, args, processing_options, stop_at_operand=False)

    invalid_identifiers, instances, failures = _resolve_options(command_name_path, usage, scan.occurrences)

    if (option := _first_high_priority(instances)) is not None:
        return RegularHighPriorityOption(
            command_name_path=command_name_path,
            source_usage=usage,
            high_priority_option=option,
        )

    if invalid_identifiers:
        return InvalidOption(
            command_name_path=command_name_path,
            source_usage=usage,
            invalid_option_identifier=invalid_identifiers[0],
        )

    operand_definitions = usage.operand_definitions

    if len(scan.operands) < len(operand_definitions):
        return MissingArguments(
            command_name_path=command_name_path,
            source_usage=usage,
            missing_argument_definitions=operand_definitions[len(scan.operands):],
        )

    if len(scan.operands) > len(operand_definitions):
        return ExcessiveArguments(
            command_name_path=command_name_path,
            source_usage=usage,
            count=len(scan.operands) - len(operand_definitions),
        )

    operands = []
    for number, (operand_definition, raw) in enumerate(zip(operand_definitions, scan.operands), start=1):
        checked = _check_data(
            command_name_path,
            usage,
            operand_definition.data_type,
            raw,
            operand_number=number if len(operand_definitions) > 1 else None,
        )
        if isinstance(checked, Failure):
            return checked
        operands.append(OperandInstance(operand_definition, checked))

    if failures:
        return failures[0]

    return RegularSuccess(
        command_name_path=command_name_path,
        source_usage=usage,
        options=instances,
        operands=operands,
    )


def _parse_commands(command_name_path, usage, args, processing_options):
    scan = _scan(usage.pre_command_option_definitions, args, processing_options, stop_at_operand=True)

    invalid_identifiers, instances, failures = _resolve_options(command_name_path, usage, scan.occurrences)

    if (option := _first_high_priority(instances)) is not None:
        return CommandsHighPriorityOption(
            command_name_path=command_name_path,
            source_usage=usage,
            high_priority_option=option,
        )

    if invalid_identifiers:
        return InvalidOption(
            command_name_path=command_name_path,
            source_usage=usage,
            invalid_option_identifier=invalid_identifiers[0],
        )

    if failures:
        return failures[0]

    if scan.command_index is None:
        return MissingArguments(
            command_name_path=command_name_path,
            source_usage=usage,
            missing_argument_definitions=(_COMMAND_OPERAND,),
        )

    command_name = args[scan.command_index]

    if not command_name:
        return EmptyArgument(
            command_name_path=command_name_path,
            source_usage=usage,
        )

    try:
        command_usage = usage.command_usages[command_name]
    except KeyError:
        return UnknownCommand(
            command_name_path=command_name_path,
            source_usage=usage,
            command_name=command_name,
        )

    logger.debug("token %d %r: command", scan.command_index, command_name)

    command_result = _parse(
        (*command_name_path, command_name),
        command_usage,
        args[scan.command_index + 1:],
        scan.processing_options,
    )

    if isinstance(command_result, Failure):
        return command_result

    return CommandsSuccess(
        command_name_path=command_name_path,
        source_usage=usage,
        pre_command_options=instances,
        command_name=command_name,
        command_result=command_result,
    )


__all__ = (
    "parse_args",
    "parse_process_args",
)
