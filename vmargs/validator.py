"""
vmargs validator: walk tokens against a registry and resolve argument values.

Scan (left to right, one pass, fail-fast)
- leading orphan tokens (values before any flag) → UnexpectedTokenError.
- for each flag token:
  1. unknown name (not in registry.names)          → UnknownArgumentError
  2. conflicts_with is present among the flags      → ConflictingArgumentError
  3. requires is absent among the flags             → MissingDependencyError
  4. value-taking:
     • a bare token follows the value token         → UnexpectedTokenError
     • no token after the flag                      → MissingValueError
     • the next token (even a flag-shaped one) is consumed as the value
     • value outside choices                        → InvalidEnumValueError
     • otherwise store name → value
  5. flag-only:
     • a bare token follows the flag                → UnexpectedTokenError
     • otherwise store name → ""

Finalize
- every required spec not supplied gets its default, or → MissingRequiredArgumentError.

Help mode
- when the literal flag 'help' is present, validation is bypassed entirely and
  validate() returns None; rendering is the caller's business.

Repeated flags are accepted; the last occurrence wins.
"""
import difflib
import logging

from .faults import *
from .tokens import Tokens, is_flag, tokenize
from .utils import ordinal
from .values import FLAG_SENTINEL, ValueStore

logger = logging.getLogger(__name__)

HELP = "help"


class Validator:
    """
    Enforce the constraints of an ArgumentRegistry over tokenized invocations.

    The validator holds no per-run state; validate() may be called any number of times.
    """

    def __init__(self, registry, /, *, prog="vmargs"):
        self.registry = registry
        self.prog = prog

    @staticmethod
    def wants_help(tokens, /):
        return HELP in tokens.names

    def validate(self, tokens, /):
        """
        Resolve a Tokens record (or a raw invocation) into a sealed ValueStore.

        Returns None in help mode. Raises the first ArgumentException encountered.
        """
        if not isinstance(tokens, Tokens):
            tokens = tokenize(tokens)

        if self.wants_help(tokens):
            logger.debug("help requested; validation bypassed")
            return None

        store = ValueStore(trailing=tokens.trailing)

        if tokens.orphans:
            raise UnexpectedTokenError(
                "unexpected token %r at first position" % tokens.orphans[0],
                title="unexpected token",
                code=FaultCode.UNEXPECTED_TOKEN,
                input=tokens.orphans[0],
                index=1,
                hint="values must follow the argument they belong to; run '%s --help' to see valid forms" % self.prog,
                docs=getdoc(FaultCode.UNEXPECTED_TOKEN),
            )

        for token in tokens.flags:
            self._check(token, tokens.names)
            spec = self.registry.lookup(token.name)
            if spec.takes_value:
                store.store(spec.name, self._value(spec, token))
            else:
                if token.value is not None and not is_flag(token.value):
                    self._unexpected(token.value, token.index + 1, "flag %r takes no value" % ("--" + spec.name))
                store.store(spec.name, FLAG_SENTINEL)
            logger.debug("resolved --%s → %r", spec.name, store[spec.name])

        self._finalize(store, tokens.names)
        return store.seal()

    def _check(self, token, names):
        input = "--" + token.name

        if token.name not in self.registry.names:
            suggestions = difflib.get_close_matches(token.name, sorted(self.registry.names), 5)
            try:
                hint = "did you mean '--%s'? you can also run '%s --help' to see all arguments" % (suggestions[0], self.prog)
            except IndexError:
                hint = "run '%s --help' to see all available arguments" % self.prog
            raise UnknownArgumentError(
                "unknown argument %r at %s position" % (input, ordinal(token.index)),
                title="unknown argument",
                code=FaultCode.UNKNOWN_ARGUMENT,
                input=input,
                index=token.index,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.UNKNOWN_ARGUMENT),
            )

        spec = self.registry.lookup(token.name)

        if spec.conflicts_with is not None and spec.conflicts_with in names:
            raise ConflictingArgumentError(
                "argument %r at %s position cannot be used together with '--%s'" % (
                    input, ordinal(token.index), spec.conflicts_with
                ),
                title="conflicting arguments",
                code=FaultCode.CONFLICTING_ARGUMENT,
                input=input,
                index=token.index,
                argument=spec,
                hint="keep either %s or --%s, not both" % (input, spec.conflicts_with),
                docs=getdoc(FaultCode.CONFLICTING_ARGUMENT),
            )

        if spec.requires is not None and spec.requires not in names:
            raise MissingDependencyError(
                "argument %r at %s position requires '--%s', but it was not found" % (
                    input, ordinal(token.index), spec.requires
                ),
                title="missing dependency",
                code=FaultCode.MISSING_DEPENDENCY,
                input=input,
                index=token.index,
                argument=spec,
                hint="add --%s to the invocation or remove %s" % (spec.requires, input),
                docs=getdoc(FaultCode.MISSING_DEPENDENCY),
            )

    def _value(self, spec, token):
        input = "--" + spec.name

        if token.overflow is not None:
            self._unexpected(token.overflow, token.index + 2, "argument %r takes a single value" % input)

        if token.value is None:
            raise MissingValueError(
                "argument %r at %s position requires a value" % (input, ordinal(token.index)),
                title="missing value",
                code=FaultCode.MISSING_VALUE,
                input=input,
                index=token.index,
                argument=spec,
                hint="pass it after a space (for example: %s %s)" % (input, spec.metavar or "<%s>" % spec.name),
                docs=getdoc(FaultCode.MISSING_VALUE),
            )

        if not spec.accepts(token.value):
            *head, tail = spec.choices
            choices = "%s or %s" % (", ".join(head), tail) if head else tail
            raise InvalidEnumValueError(
                "%r at %s position isn't a valid value for %r" % (token.value, ordinal(token.index + 1), input),
                title="invalid value",
                code=FaultCode.INVALID_ENUM_VALUE,
                input=input,
                index=token.index + 1,
                argument=spec,
                value=token.value,
                choices=spec.choices,
                hint="must be %s" % choices,
                docs=getdoc(FaultCode.INVALID_ENUM_VALUE),
            )

        return token.value

    def _unexpected(self, value, index, reason):
        raise UnexpectedTokenError(
            "unexpected token %r at %s position" % (value, ordinal(index)),
            title="unexpected token",
            code=FaultCode.UNEXPECTED_TOKEN,
            input=value,
            index=index,
            hint="%s; quote values containing spaces or run '%s --help'" % (reason, self.prog),
            docs=getdoc(FaultCode.UNEXPECTED_TOKEN),
        )

    def _finalize(self, store, names):
        for spec in self.registry.required:
            if spec.name in names:
                continue
            if spec.default is None:
                raise MissingRequiredArgumentError(
                    "argument '--%s' required, but not found" % spec.name,
                    title="missing required argument",
                    code=FaultCode.MISSING_REQUIRED_ARGUMENT,
                    input="--" + spec.name,
                    argument=spec,
                    hint="add --%s to the invocation; run '%s --help' for details" % (spec.name, self.prog),
                    docs=getdoc(FaultCode.MISSING_REQUIRED_ARGUMENT),
                )
            store.store(spec.name, spec.default)
            logger.debug("defaulted --%s → %r", spec.name, spec.default)


def validate(registry, invocation, /):
    """
    Convenience: tokenize an invocation and validate it against registry.
    """
    return Validator(registry).validate(tokenize(invocation))


__all__ = (
    "HELP",
    "Validator",
    "validate",
)
