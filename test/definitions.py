"""
Definitions module behavioral tests.

Scope
- Validate operand and option-argument definition names and data types.
- Validate OptionDefinition identifiers, argument flags, priority and rendering.
- Validate OptionInstance / OperandInstance consistency checks.

Conventions
- Test method names follow CamelCase per project convention.
- Identifiers are spelled with optid()/optids() wherever the style is irrelevant.
"""
import unittest
from unittest import TestCase

from posixargs import (
    DataValue,
    OperandDefinition,
    OperandInstance,
    OptionArgumentDefinition,
    OptionDefinition,
    OptionInstance,
    OptionPriority,
    StringDataType,
    StringEnumDataType,
    optid,
)


class TestOperandDefinition(TestCase):
    """Behavioral tests for OperandDefinition and OptionArgumentDefinition."""

    def testDefaultDataTypeRejectsEmpty(self):
        self.assertIs(OperandDefinition("file").data_type, StringDataType.REJECT_EMPTY)

    def testRender(self):
        self.assertEqual(str(OperandDefinition("file")), "<file>")
        self.assertEqual(str(OptionArgumentDefinition("style", StringDataType.ACCEPT_EMPTY)), "<style>")

    def testNameRules(self):
        with self.assertRaises(ValueError):
            OperandDefinition("")
        with self.assertRaises(ValueError):
            OperandDefinition("<file>")
        with self.assertRaises(ValueError):
            OptionArgumentDefinition("a>b", StringDataType.ACCEPT_EMPTY)
        with self.assertRaises(TypeError):
            OperandDefinition(1)

    def testDataTypeRequired(self):
        with self.assertRaises(TypeError):
            OperandDefinition("file", "string")
        with self.assertRaises(TypeError):
            OptionArgumentDefinition("style", str)

    def testStructuralEquality(self):
        self.assertEqual(OperandDefinition("command"), OperandDefinition("command"))
        self.assertNotEqual(OperandDefinition("a"), OperandDefinition("b"))


class TestOptionDefinition(TestCase):
    """Behavioral tests for OptionDefinition."""

    def setUp(self):
        self.style_argument = OptionArgumentDefinition("style", StringEnumDataType("compact", "tab"))

    def testIdentifiersFromString(self):
        option = OptionDefinition("-h, --help")
        self.assertEqual(option.identifiers, (optid("-h"), optid("--help")))

    def testIdentifiersFromIterable(self):
        option = OptionDefinition([optid("-v")])
        self.assertEqual(option.identifiers, (optid("-v"),))

    def testIdentifiersRequired(self):
        with self.assertRaises(ValueError):
            OptionDefinition([])

    def testIdentifiersMustBeIdentifiers(self):
        with self.assertRaises(TypeError):
            OptionDefinition(["-h"])

    def testDuplicateIdentifierRejected(self):
        with self.assertRaises(ValueError):
            OptionDefinition("-h, --help, -h")

    def testSameCharacterInBothStylesAllowed(self):
        option = OptionDefinition("-x, --x")
        self.assertEqual(len(option.identifiers), 2)

    def testFlagWithoutArgument(self):
        option = OptionDefinition("-v, --verbose")
        self.assertFalse(option.is_argument_defined)
        self.assertFalse(option.is_argument_required)
        self.assertIsNone(option.argument_definition)
        self.assertFalse(option.is_high_priority)
        self.assertIs(option.priority, OptionPriority.NORMAL)

    def testArgumentRequiredByDefault(self):
        option = OptionDefinition("-S, --style", self.style_argument)
        self.assertTrue(option.is_argument_defined)
        self.assertTrue(option.is_argument_required)
        self.assertIs(option.argument_definition, self.style_argument)

    def testArgumentOptional(self):
        option = OptionDefinition("-S, --style", self.style_argument, argument_required=False)
        self.assertTrue(option.is_argument_defined)
        self.assertFalse(option.is_argument_required)

    def testArgumentRequiredWithoutArgumentIsFalse(self):
        self.assertFalse(OptionDefinition("-v", argument_required=True).is_argument_required)

    def testHighPriority(self):
        self.assertTrue(OptionDefinition("-h, --help", priority=OptionPriority.HIGH).is_high_priority)

    def testWrongKindsRejected(self):
        with self.assertRaises(TypeError):
            OptionDefinition("-S", "style")
        with self.assertRaises(TypeError):
            OptionDefinition("-S", self.style_argument, argument_required="yes")
        with self.assertRaises(TypeError):
            OptionDefinition("-h", priority="high")

    def testMatches(self):
        option = OptionDefinition("-h, --help")
        self.assertTrue(option.matches(optid("--help")))
        self.assertFalse(option.matches(optid("-H")))

    def testRender(self):
        self.assertEqual(str(OptionDefinition("-h, --help")), "-h, --help")
        self.assertEqual(str(OptionDefinition("-S, --style", self.style_argument)), "-S, --style=<style>")
        self.assertEqual(str(OptionDefinition("--style, -S", self.style_argument)), "--style, -S<style>")
        self.assertEqual(
            str(OptionDefinition("-S, --style", self.style_argument, argument_required=False)),
            "-S, --style[=<style>]",
        )


class TestInstances(TestCase):
    """Behavioral tests for OptionInstance and OperandInstance."""

    def setUp(self):
        self.style_type = StringEnumDataType("compact", "tab")
        self.style = OptionDefinition("-S, --style", OptionArgumentDefinition("style", self.style_type))
        self.verbose = OptionDefinition("-v, --verbose")

    def testFlagInstance(self):
        instance = OptionInstance(self.verbose, optid("-v"))
        self.assertIsNone(instance.argument_value)
        self.assertEqual(str(instance), "-v")

    def testArgumentInstance(self):
        instance = OptionInstance(self.style, optid("--style"), DataValue(self.style_type, "tab"))
        self.assertEqual(instance.argument_value.value, "tab")
        self.assertEqual(str(instance), "--style=tab")
        self.assertEqual(str(OptionInstance(self.style, optid("-S"), DataValue(self.style_type, "tab"))), "-Stab")

    def testForeignIdentifierRejected(self):
        with self.assertRaises(ValueError):
            OptionInstance(self.verbose, optid("-x"))

    def testMissingArgumentValueRejected(self):
        with self.assertRaises(ValueError):
            OptionInstance(self.style, optid("-S"))

    def testExcessArgumentValueRejected(self):
        with self.assertRaises(ValueError):
            OptionInstance(self.verbose, optid("-v"), DataValue(StringDataType.ACCEPT_EMPTY, "x"))

    def testArgumentValueDataTypeMustMatch(self):
        with self.assertRaises(ValueError):
            OptionInstance(self.style, optid("-S"), DataValue(StringDataType.ACCEPT_EMPTY, "tab"))

    def testOperandInstance(self):
        definition = OperandDefinition("file")
        instance = OperandInstance(definition, DataValue(StringDataType.REJECT_EMPTY, "a.txt"))
        self.assertEqual(str(instance), "a.txt")
        self.assertIs(instance.definition, definition)

    def testOperandInstanceDataTypeMustMatch(self):
        with self.assertRaises(ValueError):
            OperandInstance(OperandDefinition("file"), DataValue(StringDataType.ACCEPT_EMPTY, "a.txt"))
        with self.assertRaises(TypeError):
            OperandInstance(OperandDefinition("file"), "a.txt")

    def testInstancesAreHashable(self):
        instances = {OptionInstance(self.verbose, optid("-v")), OptionInstance(self.verbose, optid("-v"))}
        self.assertEqual(len(instances), 1)


if __name__ == '__main__':
    unittest.main()
