"""
Capabilities module behavioral tests (strategy values, registry, binding).

Scope
- Validate Capability construction: switch vocabulary, ordering, read-only exposure.
- Validate register/lookup/unregister with versioned precedence and generic fallback.
- Validate select_revision binding per variant and per version, without touching classes.

Conventions
- Test method names follow CamelCase per project convention.
- Registrations made by a test are removed with addCleanup.
"""
import time
import unittest
from unittest import TestCase

from terranaut import Command, Plan
from terranaut.capabilities import Capability, register, unregister, lookup, select_revision
from terranaut.faults import UnsupportedVariantError, FaultCode
from terranaut.utils import Unset


class TestCapability(TestCase):
    """Behavioral tests for the Capability value."""

    def testSwitchesJoinVocabularyAfterDefaults(self):
        capability = Capability({"out": "plan.bin"}, ("detailed-exitcode",), "plan")
        self.assertEqual(list(capability.defaults), ["out", "detailed-exitcode"])
        self.assertEqual(capability.defaults["detailed-exitcode"], False)

    def testExplicitSwitchDefaultKept(self):
        capability = Capability({"no-color": True}, ("no-color",))
        self.assertEqual(capability.defaults, {"no-color": True})

    def testEmptyCapability(self):
        capability = Capability()
        self.assertEqual(capability.defaults, {})
        self.assertEqual(capability.switches, set())
        self.assertEqual(capability.subcommand, "")

    def testDefaultsAreCopies(self):
        capability = Capability({"out": None})
        capability.defaults["bogus"] = 1
        self.assertNotIn("bogus", capability.defaults)

    def testPropertiesAreReadOnly(self):
        capability = Capability({"out": None})
        with self.assertRaises(AttributeError):
            capability.defaults = {}  # type: ignore[misc]

    def testEquality(self):
        self.assertEqual(Capability({"a": 1}, ("b",), "x"), Capability({"a": 1}, ["b"], "x"))
        self.assertNotEqual(Capability({"a": 1}), Capability({"a": 2}))

    def testDefaultsMustBeMapping(self):
        with self.assertRaises(TypeError):
            Capability(["out"])

    def testSwitchesMustNotBeString(self):
        with self.assertRaises(TypeError):
            Capability({}, "no-color")

    def testFlagNamesMustBeHyphenatedWords(self):
        for name in ("-out", "out_file", "out--file", "", "1st"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                Capability({name: None})

    def testLongInvalidFlagNameRejectedQuickly(self):
        started = time.monotonic()
        with self.assertRaises(ValueError):
            Capability({"a" * 64 + "!": None})
        self.assertLess(time.monotonic() - started, 1.0)

    def testHyphenatedFlagNamesAccepted(self):
        capability = Capability({"lock-timeout": "0s", "var-file": None}, ("x1-compact-warnings",))
        self.assertIn("x1-compact-warnings", capability.defaults)

    def testSwitchesFromGenerator(self):
        capability = Capability({}, (name for name in ("json", "no-color")))
        self.assertEqual(capability.switches, {"json", "no-color"})
        self.assertEqual(capability.defaults, {"json": False, "no-color": False})

    def testRepr(self):
        self.assertEqual(
            repr(Capability({"out": None}, (), "plan")),
            "capability(subcommand='plan', defaults={'out': None}, switches=set())",
        )


class TestRegistry(TestCase):
    """Behavioral tests for register/lookup/unregister."""

    def registered(self, variant, revision=Unset, /, **metadata):
        capability = register(variant, revision, **metadata)
        self.addCleanup(unregister, variant, revision)
        return capability

    def testSubcommandDefaultsToLowercasedVariant(self):
        capability = self.registered("Sample", defaults={"out": None})
        self.assertEqual(capability.subcommand, "sample")

    def testExplicitSubcommand(self):
        capability = self.registered("Sample", subcommand="providers")
        self.assertEqual(capability.subcommand, "providers")

    def testGenericFallback(self):
        generic = self.registered("Sample", defaults={"out": None})
        self.assertIs(lookup("Rev013", "Sample"), generic)
        self.assertIs(lookup(None, "Sample"), generic)

    def testVersionedTakesPrecedence(self):
        self.registered("Sample", defaults={"out": None})
        versioned = self.registered("Sample", "Rev013", defaults={"out": None, "module-depth": -1})
        self.assertIs(lookup("Rev013", "Sample"), versioned)

    def testMissingVariant(self):
        self.assertIs(lookup("Rev013", "Unheard"), Unset)

    def testDuplicateRegistrationRejected(self):
        self.registered("Sample")
        with self.assertRaises(ValueError):
            register("Sample")

    def testUnregisterMissingRaises(self):
        with self.assertRaises(LookupError):
            unregister("Unheard")

    def testVariantMustBeIdentifier(self):
        with self.assertRaises(TypeError):
            register("not a variant")

    def testRevisionMustBeTag(self):
        with self.assertRaises(ValueError):
            register("Sample", "latest")


class TestSelectRevision(TestCase):
    """Behavioral tests for binding capabilities to objects."""

    @staticmethod
    def variant(name):
        return type(name, (), {})()

    def testBaseCommandBindsNothing(self):
        self.assertEqual(select_revision("1.2.0", self.variant("Command")), Capability())

    def testLegacyRevisionSelected(self):
        capability = select_revision("0.12.31", self.variant("Plan"))
        self.assertIn("compact-warnings", capability.defaults)
        self.assertNotIn("refresh-only", capability.defaults)

    def testGenericSelectedForUnpinnedRevision(self):
        capability = select_revision("1.2.0", self.variant("Plan"))
        self.assertIn("refresh-only", capability.defaults)
        self.assertEqual(capability.subcommand, "plan")

    def testUnsupportedVariantRaises(self):
        with self.assertRaises(UnsupportedVariantError) as context:
            select_revision("1.2.0", self.variant("Unheard"))
        self.assertEqual(context.exception.options["code"], FaultCode.UNSUPPORTED_VARIANT)
        self.assertEqual(context.exception.options["revision"], "Rev1_02")

    def testBindingIsPerInstance(self):
        legacy = Plan("", binary="/usr/bin/tool", version="0.11.14")
        current = Plan("", binary="/usr/bin/tool", version="1.5.7")
        self.assertIn("module-depth", legacy.defaults)
        self.assertNotIn("module-depth", current.defaults)
        self.assertIn("refresh-only", current.defaults)
        self.assertIsNot(legacy.capability, current.capability)
        self.assertFalse(hasattr(Plan, "_capability"))

    def testBaseCommandInstance(self):
        command = Command(binary="/usr/bin/tool")
        self.assertEqual(command.subcommand, "")
        self.assertEqual(command.defaults, {})


if __name__ == "__main__":
    unittest.main()
