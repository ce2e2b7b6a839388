r"""
vmargs argument specifications and the registry that owns them.

Overview
- ArgumentSpec: immutable description of one named argument and its constraints
  (required, conflicts_with, requires, takes_value, default, choices, help).
- ArgumentRegistry: ordered, read-only collection of specs; the single source of
  truth for accepted flag names (see ArgumentRegistry.names).

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields declared in __introspectable__ via read-only properties.

Metadata (sanitized on construction)
- name: flag name without the leading '--'; must match r"[a-z][a-z0-9]*(-[a-z0-9]+)*".
- help: Unset | str | Text (becomes "" when Unset).
- takes_value: bool; flag-only specs cannot carry a default, choices or metavar.
- default: Unset | str (becomes None when Unset); must be one of choices when both are set.
- choices: iterable of strings; duplicates rejected unless a Set; empty means unrestricted.
- conflicts_with / requires: Unset | str naming another spec of the same registry.
- verbatim: bool; documents the trailing segment after a bare '--' and is never
  accepted as a flag name.

Validation highlights
- Spec-level problems raise TypeError/ValueError at construction time.
- Registry-level problems (duplicate names, dangling conflicts_with/requires
  references) raise ValueError when the registry is built.

Examples
    >>> sock = ArgumentSpec("api-sock", "Path to the API socket", takes_value=True, default="/tmp/api.sock")
    >>> registry = ArgumentRegistry(sock)
    >>> registry.lookup("api-sock") is sock
    True
"""
import functools
import logging
import operator
import re
from collections import defaultdict
from collections.abc import Iterable, Set
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import *

logger = logging.getLogger(__name__)


class ArgumentType(type):
    """
    Metaclass that turns specs into introspectable, read-only records.

    Responsibilities
    - Expose the names listed in __introspectable__ as read-only properties
      backed by private "_{name}" fields (see mirror()).
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and help output.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the metadata of one ArgumentSpec.

    Mutates the given dict in place. Raises TypeError for wrong types and
    ValueError for well-typed but inconsistent values.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif not re.fullmatch(r"[a-z][a-z0-9]*(-[a-z0-9]+)*", name):
        raise ValueError(f"{cls.__typename__} 'name' must be a lowercase, hyphen-separated flag name without prefix")
    metadata["name"] = name

    if not isinstance(help := metadata["help"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")
    metadata["help"] = coalesce(help, "")

    if not isinstance(metavar := metadata["metavar"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif isinstance(metavar, str) and not (metavar := metavar.strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    metadata["metavar"] = coalesce(metavar)

    if not isinstance(default := metadata["default"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'default' must be a string")
    metadata["default"] = coalesce(default)

    if isinstance(choices := metadata["choices"], str) or not isinstance(choices, Iterable):
        raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")
    sanitized = []
    for choice in choices:
        if not isinstance(choice, str):
            raise TypeError(f"{cls.__typename__} 'choices' must be an iterable of strings")
        if choice in sanitized:
            if isinstance(choices, Set):
                continue
            raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
        sanitized.append(choice)
    metadata["choices"] = tuple(sorted(sanitized) if isinstance(choices, Set) else sanitized)

    for field in ("conflicts_with", "requires"):
        if not isinstance(other := metadata[field], str | Unset):
            raise TypeError(f"{cls.__typename__} '{field}' must be a string")
        elif isinstance(other, str) and not (other := other.strip()):
            raise ValueError(f"{cls.__typename__} '{field}' cannot be empty")
        elif other == name:
            raise ValueError(f"{cls.__typename__} {name!r} cannot reference itself in '{field}'")
        metadata[field] = coalesce(other)

    if not metadata["takes_value"]:
        for field in ("default", "metavar"):
            if metadata[field] is not None:
                raise TypeError(f"flag-only {cls.__typename__} {name!r} cannot specify a '{field}'")
        if metadata["choices"]:
            raise TypeError(f"flag-only {cls.__typename__} {name!r} cannot specify 'choices'")

    if metadata["choices"] and metadata["default"] is not None and metadata["default"] not in metadata["choices"]:
        raise ValueError(f"{cls.__typename__} {name!r} default {metadata['default']!r} is not one of its choices")

    if metadata["verbatim"] and metadata["required"]:
        raise ValueError(f"verbatim {cls.__typename__} {name!r} cannot be required")


class ArgumentSpec(metaclass=ArgumentType):
    """
    Immutable description of one recognized argument.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes
      mirroring the sanitized metadata values.
    """

    __introspectable__ = (
        "name",
        "help",
        "required",
        "takes_value",
        "default",
        "choices",
        "metavar",
        "conflicts_with",
        "requires",
        "verbatim",
    )

    def __new__(
            cls,
            name,
            /,
            help=Unset,
            *,
            required=False,
            takes_value=False,
            default=Unset,
            choices=(),
            metavar=Unset,
            conflicts_with=Unset,
            requires=Unset,
            verbatim=False,
    ):
        """
        Construct an ArgumentSpec with the provided metadata.

        Parameters
        - name: str
          Flag name without the '--' prefix (e.g., "api-sock").
        - help: Unset | str | Text
          Help text rendered by ArgumentRegistry.display_help().
        - required: bool
          When absent from the invocation, the default is applied; without a default
          the invocation fails with MissingRequiredArgumentError.
        - takes_value: bool
          Whether the flag consumes the following token as its value.
        - default: Unset | str
          Value applied to an absent required argument.
        - choices: Iterable[str]
          Allowed values; empty means unrestricted.
        - metavar: Unset | str
          Label for the value in help output.
        - conflicts_with / requires: Unset | str
          Name of another spec in the same registry.
        - verbatim: bool
          Marks the spec documenting the trailing segment after a bare '--'.
        """
        metadata = {
            "name": name,
            "help": help,
            "required": bool(required),
            "takes_value": bool(takes_value),
            "default": default,
            "choices": choices,
            "metavar": metavar,
            "conflicts_with": conflicts_with,
            "requires": requires,
            "verbatim": bool(verbatim),
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for field, value in metadata.items():
            setattr(self, "_" + field, value)
        return self

    def __setattr__(self, name, value, /):
        if not name.startswith("_") or hasattr(self, name):
            raise AttributeError(f"{type(self).__typename__} is read-only")
        object.__setattr__(self, name, value)

    def accepts(self, value, /):
        """
        Return True when value satisfies the choices restriction (always True when unrestricted).
        """
        return not self.choices or value in self.choices


class ArgumentRegistry:
    """
    Ordered, read-only collection of ArgumentSpec.

    Contract
    - names are unique; conflicts_with/requires reference existing, non-verbatim specs.
    - iteration yields specs in declaration order.
    - `names` is the canonical catalog of accepted flag names.
    """

    def __init__(self, *specs):
        registry = {}
        for spec in specs:
            if not isinstance(spec, ArgumentSpec):
                raise TypeError("argument-registry entries must be argument-spec instances")
            if spec.name in registry:
                raise ValueError(f"argument-registry cannot contain duplicate name {spec.name!r}")
            registry[spec.name] = spec

        for spec in registry.values():
            for field in ("conflicts_with", "requires"):
                if (other := getattr(spec, field)) is None:
                    continue
                if other not in registry:
                    raise ValueError(f"argument {spec.name!r} '{field}' references unknown argument {other!r}")
                if registry[other].verbatim:
                    raise ValueError(f"argument {spec.name!r} '{field}' cannot reference verbatim argument {other!r}")

        self._specs = MappingProxyType(registry)
        self._names = frozenset(name for name, spec in registry.items() if not spec.verbatim)
        logger.debug("built argument registry with %d specs", len(registry))

    @property
    def names(self):
        """
        canonical set of accepted flag names (verbatim specs excluded).
        """
        return self._names

    @property
    def required(self):
        return tuple(spec for spec in self if spec.required)

    def lookup(self, name, /):
        """
        return the spec registered under name; KeyError when unknown.
        """
        return self._specs[name]

    def __getitem__(self, name, /):
        return self._specs[name]

    def __contains__(self, name, /):
        return name in self._specs

    def __iter__(self):
        return iter(self._specs.values())

    def __len__(self):
        return len(self._specs)

    def __repr__(self):
        return f"argument-registry({", ".join(map(repr, self._specs))})"

    def __rich_repr__(self):
        yield from self._specs.values()

    def display_help(self, banner=Unset, /, *, prog=Unset, console=Unset, fancy=False, colorful=True):
        """
        Render the banner and every spec's help, in registry order.

        Palette keys
        - banner, usage-label, program-name, group-label
        - flag-name, option-name, metavar, choice, argument-description, note

        Customization
        - Define a mapping named __styles__ in __main__ to override any palette entry.
        - When colorful is False, styling is suppressed.
        """
        main = __import__("__main__")
        console = coalesce(console, Console())
        prog = coalesce(prog, getattr(main, "__prog__", "vmargs"))

        styles = defaultdict(str, {
            "banner": "italic #A3A3A3",  # neutral gray
            "usage-label": "bold #00E6FF",  # cyan
            "program-name": "bold #FF4D94",  # magenta-pink
            "group-label": "bold #FFFFFF",  # white headers
            "flag-name": "bold #22C55E",  # green for flags
            "option-name": "bold #00E6FF",  # cyan for value-taking flags
            "metavar": "bold #FFD600",  # amber
            "choice": "bold #FF4D94",  # magenta
            "argument-description": "#9CA3AF",  # muted gray
            "note": "#737373",  # dim footer gray
            "panel-title": "bold #FF4D94",
        } | getattr(main, "__styles__", {}))

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

        def label(spec):
            if spec.verbatim:
                return Text.assemble("-- ", text(f"<{spec.name}>", styler("metavar")), " ...")
            label = text("--" + spec.name, styler("option-name" if spec.takes_value else "flag-name"))
            if not spec.takes_value:
                return label
            if spec.choices:
                metavar = Text.assemble("{", Text(",").join(text(choice, styler("choice")) for choice in spec.choices), "}")
            else:
                metavar = text(spec.metavar or f"<{spec.name}>", styler("metavar"))
            return Text.assemble(label, " ", metavar)

        def notes(spec):
            if spec.default is not None:
                yield "default: %s" % spec.default
            if spec.requires is not None:
                yield "requires --%s" % spec.requires
            if spec.conflicts_with is not None:
                yield "conflicts with --%s" % spec.conflicts_with

        renders = []
        width = console.width - 4 * fancy

        if banner:
            renders.append(text(banner, styler("banner")).copy().append("\n"))

        usage = Text()
        usage.append("usage", styler("usage-label")).append(": ")
        usage.append(text(prog, styler("program-name")))
        usage.append(" [--help]")
        for spec in self:
            usage.append(" [").append(label(spec)).append("]")
        renders.append(usage.append("\n"))

        padding = 2
        indent = 28

        section = Text()
        section.append(text("arguments", styler("group-label"))).append(":\n")
        entries = [(text("--help", styler("flag-name")), Text("show this help and exit"), ())]
        entries += [(label(spec), text(spec.help, styler("argument-description")), tuple(notes(spec))) for spec in self]

        for name, descr, extras in entries:
            line = Text(" " * padding).append(name)
            if descr.plain.strip() or extras:
                # Description flow: break before the description when the name column is wide
                if len(line) >= indent:
                    line.append("\n").append(" " * indent)
                else:
                    line.append(" " * (indent - len(line)))
                body = Text("\n").join(
                    [Text(" ".join(segment.split()), descr.style) for segment in descr.plain.splitlines() if segment.strip()]
                    + [text("(%s)" % extra, styler("note")) for extra in extras]
                )
                wrapped = body.wrap(console, max(width - indent, 20))
                for index, segment in enumerate(wrapped):
                    if index:
                        line.append("\n").append(" " * indent)
                    line.append(segment)
            section.append(line).append("\n")
        section.rstrip()
        renders.append(section)

        renderable = Group(*renders)
        if fancy:
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", f"{prog} HELP".upper(), " ", "]", style=styler("panel-title")),
                title_align="left",
            )
        console.print(renderable)


__all__ = (
    "ArgumentSpec",
    "ArgumentRegistry",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in star-imports. Not part of the public API.
del ArgumentType
