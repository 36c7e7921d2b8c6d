"""
posixargs faults: turning Failure results into diagnostics and exit statuses.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure kind; the
  numeric value doubles as the process exit status in shell mode.
- ParsingFault (+ one subclass per failure kind): carries message + options and
  knows how to render itself with rich.
- fault_for(failure): build the ParsingFault describing a Failure result.
- trigger(fault, **options): surface a fault (raise it, or print it and exit).
- report(result, **options): no-op for successes, trigger() for failures.

The parsing engine itself never raises for user input; this module is the
presentation boundary where a caller decides to print-and-exit or to raise.

Message format (one line, program name first)
    prog: sort: -S: missing argument <style>
    prog: too many arguments: 2
    prog: --bogus: invalid option
    prog: frobnicate: unknown command
    prog: argument 2: must not be empty

Host configuration (optional attributes of __main__)
- __prog__: program name (defaults to the basename of sys.argv[0]).
- __styles__: mapping of style names to rich styles, merged over the defaults.
- __codes__: mapping of FaultCode to a display label (see FaultCode.normalize()).
"""
import copy
import logging
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .results import *
from .utils import *

logger = logging.getLogger(__name__)

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers and exit statuses).

    - 3: MISSING_ARGUMENTS    required operand(s), option-argument or command absent
    - 4: EXCESSIVE_ARGUMENTS  surplus operands, or an argument given to an argument-less option
    - 5: INVALID_OPTION       identifier not declared at that usage level
    - 6: INVALID_ENUM_VALUE   value outside the declared enum set
    - 8: UNKNOWN_COMMAND      command token matches no declared command
    - 9: EMPTY_ARGUMENT       empty string where the data type rejects it

    0-2 are left to the host (success, generic failure, usage), 7 is unused.
    """
    MISSING_ARGUMENTS   = 3
    EXCESSIVE_ARGUMENTS = 4
    INVALID_OPTION      = 5
    INVALID_ENUM_VALUE  = 6
    UNKNOWN_COMMAND     = 8
    EMPTY_ARGUMENT      = 9

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _program_name():
    return getattr(__import__("__main__"), "__prog__", os.path.basename(sys.argv[0]) or "posixargs")


class ParsingFault(Exception):
    """
    a renderable, triggerable parsing diagnostic.

    options (all optional)
    - code: FaultCode, the exit status in shell mode (1 when absent).
    - title: short label of the fancy header ("error" when absent).
    - hint: follow-up line under the message (omitted when absent).
    - prog, shell, fancy, colorful: presentation switches (see trigger()).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = text(self.options.get("prog", _program_name()), "prog-name")
        message = text(self.message, "error-message")

        lines = [message]
        if hint := self.options.get("hint"):
            lines.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            header = Text.assemble(
                "[ ",
                prog,
                " — ",
                text("-" if self.code is None else self.code.normalize(), "code"),
                " | ",
                text(self.options.get("title", "error").title(), "error-title"),
                " ]"
            )
            return Panel(Group(*lines), title=header, title_align="left")

        lines[0] = Text.assemble(prog, ": ", message)
        return Group(*lines)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1 if self.code is None else int(self.code))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingArgumentsError(ParsingFault): ...
class ExcessiveArgumentsError(ParsingFault): ...
class InvalidOptionError(ParsingFault): ...
class InvalidEnumValueError(ParsingFault): ...
class UnknownCommandError(ParsingFault): ...
class EmptyArgumentError(ParsingFault): ...


def _context(failure, /):
    """the leading "cmd: --opt: " fragments shared by every message."""
    fragments = list(failure.command_name_path)
    option_definition = getattr(failure, "option_definition", None)
    if option_definition is not None:
        fragments.append(str(option_definition.identifiers[0]))
    return "".join(fragment + ": " for fragment in fragments)


def _route(failure, /, prog):
    return " ".join((prog, *failure.command_name_path))


def fault_for(failure, /, *, prog=Unset):
    """
    build the ParsingFault describing a Failure result.

    returns
    - a ParsingFault subclass instance whose options carry: code, title, hint,
      failure (the result being described) and prog.

    errors
    - TypeError if `failure` is not a Failure result.
    """
    if not isinstance(failure, Failure):
        raise TypeError("fault_for() argument must be a parsing failure")

    prog = coalesce(prog, _program_name())
    context = _context(failure)
    route = _route(failure, prog)

    match failure:
        case MissingArguments(missing_argument_definitions=definitions):
            noun = "argument" if len(definitions) == 1 else pluralize("argument")
            return MissingArgumentsError(
                context + "missing %s %s" % (noun, " ".join(map(str, definitions))),
                code=FaultCode.MISSING_ARGUMENTS,
                title="missing %s" % noun,
                hint="run '%s --help' to see the expected usage" % route,
                failure=failure,
                prog=prog,
            )
        case ExcessiveArguments(count=count):
            return ExcessiveArgumentsError(
                context + "too many arguments: %d" % count,
                code=FaultCode.EXCESSIVE_ARGUMENTS,
                title="too many arguments",
                hint="remove the extra %s or run '%s --help' to see the expected usage" % (
                    "value" if count == 1 else pluralize("value"), route
                ),
                failure=failure,
                prog=prog,
            )
        case InvalidOption(invalid_option_identifier=identifier):
            return InvalidOptionError(
                context + "%s: invalid option" % identifier,
                code=FaultCode.INVALID_OPTION,
                title="invalid option",
                hint="run '%s --help' to see all available options" % route,
                failure=failure,
                prog=prog,
            )
        case InvalidEnumValue(enum_values=enum_values, actual_value=actual_value, operand_number=number):
            position = "" if number is None else "argument %d: " % number
            return InvalidEnumValueError(
                context + position + "%s: invalid value (expected one of %s)" % (
                    actual_value, ", ".join(map(quote, enum_values))
                ),
                code=FaultCode.INVALID_ENUM_VALUE,
                title="invalid value",
                hint="use one of %s" % ", ".join(map(quote, enum_values)),
                failure=failure,
                prog=prog,
            )
        case UnknownCommand(command_name=name):
            return UnknownCommandError(
                context + "%s: unknown command" % name,
                code=FaultCode.UNKNOWN_COMMAND,
                title="unknown command",
                hint="run '%s --help' to see available commands" % route,
                failure=failure,
                prog=prog,
            )
        case EmptyArgument(operand_number=number):
            position = "argument" if number is None else "argument %d:" % number
            return EmptyArgumentError(
                context + "%s must not be empty" % position,
                code=FaultCode.EMPTY_ARGUMENT,
                title="empty argument",
                hint="pass a non-empty value",
                failure=failure,
                prog=prog,
            )
        case _:
            raise TypeError(f"unsupported failure {type(failure).__name__}")


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParsingFault).
    - options are merged into the fault via copy.replace() before triggering.
    - shell=True prints the fault through the rich console and exits with its code;
      otherwise the fault is raised.

    typical options
    - shell, fancy, colorful, prog.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def report(result, /, **options):
    """
    surface a parsing result: nothing happens for a Success, a Failure is
    turned into its ParsingFault and triggered with `options`.
    """
    if not isinstance(result, ParsingResult):
        raise TypeError("report() argument must be a parsing result")
    if isinstance(result, Success):
        return
    fault = fault_for(result, prog=options.get("prog", Unset))
    logger.debug("reporting %s as fault %s", result.tag, fault.code.name)
    trigger(fault, **options)


__all__ = (
    "FaultCode",
    "ParsingFault",
    "MissingArgumentsError",
    "ExcessiveArgumentsError",
    "InvalidOptionError",
    "InvalidEnumValueError",
    "UnknownCommandError",
    "EmptyArgumentError",
    "fault_for",
    "trigger",
    "report",
)
