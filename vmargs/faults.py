"""
vmargs faults (validation errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing
  validation failure. Codes are grouped by domain to keep copy consistent and
  make logs/searches predictable.
- ArgumentException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way.
- one subclass per failure kind (unknown, conflicting, missing dependency,
  missing value, unexpected token, invalid enum value, missing required).
- trigger(): central entry point to surface a fault (raise or print-and-exit).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: messages name the ordinal position of the offending
  token (“at third position”) whenever the fault is tied to a token.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- The validator raises faults directly (fail-fast, first violation wins).
- The top-level caller catches ArgumentException and calls trigger(fault, shell=True, ...)
  which renders through rich and exits with status 1.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the validator (stable identifiers).

    grouping (by high-level domain)
    - catalog (2110x)
      • UNKNOWN_ARGUMENT
    - relations (2111x)
      • CONFLICTING_ARGUMENT, MISSING_DEPENDENCY
    - values (2112x)
      • MISSING_VALUE, UNEXPECTED_TOKEN, INVALID_ENUM_VALUE
    - finalization (2113x)
      • MISSING_REQUIRED_ARGUMENT

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- catalog errors ---
    UNKNOWN_ARGUMENT            = 21101

    # --- relation errors ---
    CONFLICTING_ARGUMENT        = 21111
    MISSING_DEPENDENCY          = 21112

    # --- value errors ---
    MISSING_VALUE               = 21121
    UNEXPECTED_TOKEN            = 21122
    INVALID_ENUM_VALUE          = 21123

    # --- finalization errors ---
    MISSING_REQUIRED_ARGUMENT   = 21131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentException(Exception):
    """
    base class of every validation fault.

    options
    - title, code, hint: header and footer copy.
    - argument, index, input: context about the offending token (when known).
    - shell, fancy, colorful, prog: rendering switches, merged in by trigger().
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "vmargs")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize() if self.code is not None else "", styler("code")),
            " | ",
            text(self.options.get("title", "").title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint", ""), styler("hint")))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownArgumentError(ArgumentException): ...
class ConflictingArgumentError(ArgumentException): ...
class MissingDependencyError(ArgumentException): ...
class MissingValueError(ArgumentException): ...
class UnexpectedTokenError(ArgumentException): ...
class InvalidEnumValueError(ArgumentException): ...
class MissingRequiredArgumentError(ArgumentException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgumentException).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode the fault is rendered on stderr and the process exits with status 1;
      otherwise the (merged) exception is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArgumentException",
    "UnknownArgumentError",
    "ConflictingArgumentError",
    "MissingDependencyError",
    "MissingValueError",
    "UnexpectedTokenError",
    "InvalidEnumValueError",
    "MissingRequiredArgumentError",
    "FaultCode",
    "trigger",
    "getdoc",
)
