"""
vmargs command layer: resolve an invocation and report the outcome.

What this module provides
- resolve(prompt): tokenize, short-circuit on --help, validate. Raises faults.
- main(prompt): the program entry point. Renders help, reports faults on stderr
  and exits with status 1, echoes the verbatim trailing segment one token per line,
  and hands the resolved ValueStore back to the caller.
- configure_logging(): attach a rich logging handler to the package logger.

Prompt forms (as accepted by resolve/main)
- Unset: read tokens from sys.argv[1:].
- str: shell-like string; split via shlex.split.
- Iterable[str]: pre-tokenized sequence used as-is.

Quick start
    from vmargs import main

    if __name__ == "__main__":
        values = main()
        # values["api-sock"], values["id"], values["seccomp-level"] are always present
"""
import logging
import pathlib
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console
from rich.logging import RichHandler

from .catalog import BANNER, build_registry
from .faults import ArgumentException, trigger
from .tokens import tokenize
from .utils import *
from .validator import Validator

logger = logging.getLogger(__name__)


def _tokens(prompt):
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("prompt must be a string or an iterable of strings")
        return tokens
    raise TypeError("prompt must be a string or an iterable of strings")


def _prog(prog):
    return coalesce(prog, getattr(__import__("__main__"), "__prog__", "vmargs"))


def configure_logging(level=logging.DEBUG, /, *, console=Unset):
    """
    Route the package logger through rich on stderr at the given level.

    Calling it again only updates the level; a single handler is ever installed.
    """
    root = logging.getLogger(__package__)
    root.setLevel(level)
    if not any(isinstance(handler, RichHandler) for handler in root.handlers):
        root.addHandler(RichHandler(console=coalesce(console, Console(stderr=True)), show_path=False))
    return root


def resolve(prompt=Unset, /, *, registry=Unset, prog=Unset, console=Unset, fancy=False, colorful=True):
    """
    Resolve an invocation against a registry (the launcher catalog by default).

    Returns
    - ValueStore on success.
    - None when --help was requested (help has been rendered on console).

    Raises
    - ArgumentException subclasses for the first violation found.
    - TypeError for a malformed prompt.
    """
    registry = registry if registry is not Unset else build_registry()
    tokens = tokenize(_tokens(prompt))
    validator = Validator(registry, prog=_prog(prog))

    if validator.wants_help(tokens):
        registry.display_help(BANNER, prog=_prog(prog), console=console, fancy=fancy, colorful=colorful)
        return None

    return validator.validate(tokens)


def main(prompt=Unset, /, *, registry=Unset, prog=Unset, console=Unset, fancy=False, colorful=True, verbose=False):
    """
    Program entry point.

    Behavior
    - help mode: renders help and returns None.
    - fault: renders the fault on stderr and exits with status 1.
    - success: prints each trailing token on its own line and returns the ValueStore.
    """
    if verbose:
        configure_logging()

    console = coalesce(console, Console())

    try:
        values = resolve(prompt, registry=registry, prog=prog, console=console, fancy=fancy, colorful=colorful)
    except ArgumentException as fault:
        trigger(fault, shell=True, prog=_prog(prog), fancy=fancy, colorful=colorful)

    if values is None:
        return None

    for extra in values.trailing:
        console.out(extra, highlight=False)

    if registry is Unset:
        # the launcher binds its API socket from here; a missing value is a bug in the catalog
        bind_path = pathlib.Path(values["api-sock"])
        logger.debug("api socket path resolved to %s", bind_path)

    return values


__all__ = (
    "configure_logging",
    "resolve",
    "main",
)
