"""
posixargs demonstration: the command line of a playlist tool.

    python -m posixargs [-h | -V]
    python -m posixargs download [-R] <playlist_file>
    python -m posixargs sort [-S (compact|tab|spaces:4)] <playlist_file>

Failures are printed as one-line diagnostics on stderr and exit with their
FaultCode; successes are pretty-printed. Set POSIXARGS_LOG_LEVEL=DEBUG to see
how every token was classified.
"""
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.pretty import pprint

from . import __version__
from .datatypes import StringEnumDataType
from .definitions import OperandDefinition, OptionArgumentDefinition, OptionDefinition, OptionPriority
from .faults import report
from .parsing import parse_args
from .results import CommandsHighPriorityOption, CommandsSuccess, RegularHighPriorityOption
from .usages import CommandsUsage, RegularUsage

__prog__ = "playlist-tool"

console = Console()

help_option = OptionDefinition("-h, --help", priority=OptionPriority.HIGH)
version_option = OptionDefinition("-V, --version", priority=OptionPriority.HIGH)
replace_option = OptionDefinition("-R, --replace")
style_option = OptionDefinition(
    "-S, --style",
    OptionArgumentDefinition("style", StringEnumDataType("compact", "tab", "spaces:4")),
)
playlist_file = OperandDefinition("playlist_file")

usage = CommandsUsage(
    [help_option, version_option],
    {
        "download": RegularUsage([help_option, replace_option], [playlist_file]),
        "sort": RegularUsage([help_option, style_option], [playlist_file]),
    },
)


def _configure_logging():
    level = os.environ.get("POSIXARGS_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _print_usage(command_name_path):
    target = usage
    for name in command_name_path:
        target = target.command_usages[name]
    console.print("usage:", " ".join((__prog__, *command_name_path, str(target))), highlight=False, markup=False)


def main(argv=None, /):
    _configure_logging()

    result = parse_args(usage, sys.argv[1:] if argv is None else argv)
    report(result, shell=True, prog=__prog__)

    match result:
        case CommandsHighPriorityOption(high_priority_option=option) if option.definition is version_option:
            console.print(__prog__, __version__, highlight=False, markup=False)
        case CommandsHighPriorityOption():
            _print_usage(())
        case CommandsSuccess(command_name=name, command_result=RegularHighPriorityOption()):
            _print_usage((name,))
        case _:
            pprint(result, console=console)

    return 0


if __name__ == "__main__":
    sys.exit(main())
