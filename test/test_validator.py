"""
Validator behavioral tests against the launcher catalog and small ad-hoc registries.

Scope
- Defaults for omitted required arguments; failure when no default exists.
- Dependency (one-directional) and conflict checks.
- Enumerated values, missing values and unexpected tokens.
- Unknown arguments, including the verbatim-only spec name.
- Trailing segment pass-through and help bypass.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from vmargs import (
    ArgumentRegistry,
    ArgumentSpec,
    Validator,
    ValueStore,
    build_registry,
    tokenize,
    validate,
    DEFAULT_API_SOCK_PATH,
    DEFAULT_INSTANCE_ID,
)
from vmargs.faults import (
    FaultCode,
    UnknownArgumentError,
    ConflictingArgumentError,
    MissingDependencyError,
    MissingValueError,
    UnexpectedTokenError,
    InvalidEnumValueError,
    MissingRequiredArgumentError,
)


class TestLauncherCatalog(TestCase):
    """Behavioral tests for the launcher catalog."""

    def setUp(self):
        self.registry = build_registry()

    def testRegistryIsBuiltOnce(self):
        self.assertIs(build_registry(), self.registry)

    def testEmptyInvocationYieldsDefaults(self):
        values = validate(self.registry, [])
        self.assertEqual(dict(values), {
            "api-sock": DEFAULT_API_SOCK_PATH,
            "id": DEFAULT_INSTANCE_ID,
            "seccomp-level": "2",
        })
        self.assertEqual(values.trailing, ())

    def testEveryDefaultIsApplied(self):
        values = validate(self.registry, [])
        for spec in self.registry:
            if spec.default is not None:
                self.assertEqual(values[spec.name], spec.default)

    def testOptionalArgumentsAreAbsent(self):
        values = validate(self.registry, [])
        for name in ("start-time-us", "start-time-cpu-us", "no-api", "config-file", "extra-args"):
            self.assertNotIn(name, values)

    def testSuppliedValueOverridesDefault(self):
        values = validate(self.registry, ["--id", "vm-1", "--api-sock", "/run/api.sock"])
        self.assertEqual(values["id"], "vm-1")
        self.assertEqual(values["api-sock"], "/run/api.sock")

    def testNoApiWithoutConfigFileFails(self):
        with self.assertRaises(MissingDependencyError) as context:
            validate(self.registry, ["--no-api"])
        self.assertEqual(context.exception.code, FaultCode.MISSING_DEPENDENCY)
        self.assertIn("--config-file", str(context.exception))

    def testNoApiWithConfigFileSucceeds(self):
        values = validate(self.registry, ["--no-api", "--config-file", "foo.json"])
        self.assertEqual(values["no-api"], "")
        self.assertEqual(values["config-file"], "foo.json")

    def testDependencyIsOneDirectional(self):
        values = validate(self.registry, ["--config-file", "foo.json"])
        self.assertNotIn("no-api", values)

    def testInvalidSeccompLevelFails(self):
        with self.assertRaises(InvalidEnumValueError) as context:
            validate(self.registry, ["--seccomp-level", "3"])
        self.assertEqual(context.exception.options["value"], "3")
        self.assertEqual(context.exception.options["hint"], "must be 0, 1 or 2")

    def testValidSeccompLevelsRoundTrip(self):
        for level in ("0", "1", "2"):
            with self.subTest(level=level):
                self.assertEqual(validate(self.registry, ["--seccomp-level", level])["seccomp-level"], level)

    def testUnknownArgumentFails(self):
        with self.assertRaises(UnknownArgumentError) as context:
            validate(self.registry, ["--bogus-flag"])
        self.assertEqual(context.exception.options["input"], "--bogus-flag")

    def testUnknownArgumentSuggestsCloseMatch(self):
        with self.assertRaises(UnknownArgumentError) as context:
            validate(self.registry, ["--api-sok", "/tmp/x.sock"])
        self.assertEqual(context.exception.options["suggestions"][0], "api-sock")

    def testVerbatimSpecIsNotAcceptedAsFlag(self):
        with self.assertRaises(UnknownArgumentError):
            validate(self.registry, ["--extra-args", "x"])

    def testTrailingSegmentPassesThrough(self):
        values = validate(self.registry, ["--api-sock", "/tmp/x.sock", "--", "extra1", "extra2"])
        self.assertEqual(values["api-sock"], "/tmp/x.sock")
        self.assertEqual(values.trailing, ("extra1", "extra2"))

    def testTrailingSegmentIsNotValidated(self):
        values = validate(self.registry, ["--", "--bogus-flag", "--seccomp-level", "9"])
        self.assertEqual(values.trailing, ("--bogus-flag", "--seccomp-level", "9"))
        self.assertEqual(values["seccomp-level"], "2")

    def testMissingValueFails(self):
        with self.assertRaises(MissingValueError):
            validate(self.registry, ["--api-sock"])

    def testBareTokenAfterFlagShapedValueFails(self):
        with self.assertRaises(UnexpectedTokenError) as context:
            validate(self.registry, ["--api-sock", "--id", "x"])
        self.assertEqual(context.exception.options["input"], "x")
        self.assertEqual(context.exception.options["index"], 3)

    def testFlagShapedTokenIsConsumedAsValue(self):
        values = validate(self.registry, ["--id", "--no-api", "--config-file", "f"])
        self.assertEqual(values["id"], "--no-api")
        self.assertEqual(values["no-api"], "")
        self.assertEqual(values["config-file"], "f")

    def testFlagShapedValueIsStillCheckedAgainstChoices(self):
        with self.assertRaises(InvalidEnumValueError):
            validate(self.registry, ["--seccomp-level", "--id"])

    def testValueSpanningTwoTokensFails(self):
        with self.assertRaises(UnexpectedTokenError) as context:
            validate(self.registry, ["--id", "a", "b"])
        self.assertEqual(context.exception.options["input"], "b")
        self.assertEqual(context.exception.options["index"], 3)

    def testFlagOnlyWithValueFails(self):
        with self.assertRaises(UnexpectedTokenError) as context:
            validate(self.registry, ["--no-api", "extra", "--config-file", "f"])
        self.assertEqual(context.exception.options["input"], "extra")

    def testLeadingOrphanFails(self):
        with self.assertRaises(UnexpectedTokenError):
            validate(self.registry, ["stray", "--id", "vm"])

    def testFirstViolationWins(self):
        with self.assertRaises(UnknownArgumentError):
            validate(self.registry, ["--bogus", "--seccomp-level", "7"])
        with self.assertRaises(InvalidEnumValueError):
            validate(self.registry, ["--seccomp-level", "7", "--bogus"])

    def testRepeatedFlagLastWins(self):
        values = validate(self.registry, ["--id", "a", "--id", "b"])
        self.assertEqual(values["id"], "b")

    def testHelpBypassesValidation(self):
        validator = Validator(self.registry)
        for invocation in (
            ["--help"],
            ["--bogus", "--help"],
            ["--no-api", "--help"],
            ["--seccomp-level", "9", "--help"],
            ["stray", "--help", "--id"],
        ):
            with self.subTest(invocation=invocation):
                self.assertIsNone(validator.validate(tokenize(invocation)))

    def testHelpAfterSeparatorIsVerbatim(self):
        values = validate(self.registry, ["--", "--help"])
        self.assertEqual(values.trailing, ("--help",))

    def testResultIsSealed(self):
        values = validate(self.registry, [])
        self.assertIsInstance(values, ValueStore)
        self.assertTrue(values.sealed)
        with self.assertRaises(TypeError):
            values.store("id", "other")


class TestAdHocRegistries(TestCase):
    """Behavior that the launcher catalog does not exercise."""

    def testRequiredWithoutDefaultFails(self):
        registry = ArgumentRegistry(ArgumentSpec("kernel", required=True, takes_value=True))
        with self.assertRaises(MissingRequiredArgumentError) as context:
            validate(registry, [])
        self.assertEqual(context.exception.options["input"], "--kernel")

    def testRequiredWithoutDefaultSupplied(self):
        registry = ArgumentRegistry(ArgumentSpec("kernel", required=True, takes_value=True))
        self.assertEqual(validate(registry, ["--kernel", "vmlinux"])["kernel"], "vmlinux")

    def testEveryRequiredSpecWithoutDefaultFailsWhenOmitted(self):
        registry = ArgumentRegistry(
            ArgumentSpec("a", required=True, takes_value=True),
            ArgumentSpec("b", required=True),
            ArgumentSpec("c", required=True, takes_value=True, default="x"),
        )
        for omitted in ("a", "b"):
            invocation = {"a": ["--a", "1"], "b": ["--b"]}
            supplied = [token for name, tokens in invocation.items() if name != omitted for token in tokens]
            with self.subTest(omitted=omitted):
                with self.assertRaises(MissingRequiredArgumentError):
                    validate(registry, supplied)

    def testConflictingArgumentsFail(self):
        registry = ArgumentRegistry(
            ArgumentSpec("no-api", conflicts_with="api-sock"),
            ArgumentSpec("api-sock", takes_value=True),
        )
        with self.assertRaises(ConflictingArgumentError) as context:
            validate(registry, ["--api-sock", "/tmp/a", "--no-api"])
        self.assertEqual(context.exception.options["input"], "--no-api")
        self.assertEqual(context.exception.options["index"], 3)

    def testConflictIsOneDirectional(self):
        registry = ArgumentRegistry(
            ArgumentSpec("no-api", conflicts_with="api-sock"),
            ArgumentSpec("api-sock", takes_value=True),
        )
        self.assertEqual(validate(registry, ["--api-sock", "/tmp/a"])["api-sock"], "/tmp/a")


if __name__ == '__main__':
    unittest.main()
