"""
Demonstration CLI tests (python -m posixargs).

Scope
- Validate that successes print and return 0.
- Validate help/version handling at the top level and inside a command.
- Validate that failures print one diagnostic line and exit with their FaultCode.

Conventions
- Test method names follow CamelCase per project convention.
- Both the CLI console and the fault console are captured.
"""
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from posixargs import __main__ as cli
from posixargs import __version__, faults


class TestDemoCommandLine(TestCase):
    """Behavioral tests for the playlist-tool demonstration."""

    def setUp(self):
        self.out = Console(file=io.StringIO(), width=1000, color_system=None)
        self.err = Console(file=io.StringIO(), width=1000, color_system=None)
        patches = (
            mock.patch.object(cli, "console", self.out),
            mock.patch.object(faults, "console", self.err),
            mock.patch.object(cli, "_configure_logging"),
        )
        for patch in patches:
            patch.start()
            self.addCleanup(patch.stop)

    def main(self, *args):
        return cli.main(list(args))

    def exitCode(self, *args):
        with self.assertRaises(SystemExit) as context:
            self.main(*args)
        return context.exception.code

    def testSuccessReturnsZero(self):
        self.assertEqual(self.main("download", "-R", "list.m3u"), 0)
        output = self.out.file.getvalue()
        self.assertIn("CommandsSuccess", output)
        self.assertIn("list.m3u", output)

    def testVersion(self):
        self.assertEqual(self.main("--version"), 0)
        self.assertEqual(self.out.file.getvalue().strip(), "playlist-tool %s" % __version__)

    def testTopLevelHelp(self):
        self.assertEqual(self.main("-h", "--bogus"), 0)
        output = self.out.file.getvalue()
        self.assertTrue(output.startswith("usage: playlist-tool [-h, --help] [-V, --version] (download"))

    def testCommandHelp(self):
        self.assertEqual(self.main("download", "--help"), 0)
        self.assertEqual(
            self.out.file.getvalue().strip(),
            "usage: playlist-tool download [-h, --help] [-R, --replace] <playlist_file>",
        )

    def testMissingCommand(self):
        self.assertEqual(self.exitCode(), 3)
        self.assertIn("playlist-tool: missing argument <command>", self.err.file.getvalue())

    def testExcessiveArguments(self):
        self.assertEqual(self.exitCode("download", "a", "b"), 4)
        self.assertIn("playlist-tool: download: too many arguments: 1", self.err.file.getvalue())

    def testInvalidOption(self):
        self.assertEqual(self.exitCode("sort", "-R", "list.m3u"), 5)
        self.assertIn("playlist-tool: sort: -R: invalid option", self.err.file.getvalue())

    def testInvalidEnumValue(self):
        self.assertEqual(self.exitCode("sort", "--style=spaces:5", "list.m3u"), 6)
        self.assertIn('expected one of "compact", "tab", "spaces:4"', self.err.file.getvalue())

    def testUnknownCommand(self):
        self.assertEqual(self.exitCode("shuffle"), 8)
        self.assertIn("playlist-tool: shuffle: unknown command", self.err.file.getvalue())

    def testEmptyArgument(self):
        self.assertEqual(self.exitCode("sort", ""), 9)
        self.assertIn("playlist-tool: sort: argument must not be empty", self.err.file.getvalue())

    def testBuiltinHelpNotShadowed(self):
        self.assertNotIn("help", vars(cli))
        self.assertIn(cli.help_option, cli.usage.pre_command_option_definitions)


if __name__ == '__main__':
    unittest.main()
