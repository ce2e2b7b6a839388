"""
vmargs tokenizer: split a raw invocation into flag tokens, values and the trailing segment.

Vocabulary
- flag token: a token starting with '--' that is not the bare separator '--'.
- value token: the token right after a flag token (it may itself be flag-shaped; a
  value-taking flag consumes it as-is).
- verbatim trailing segment: every token after the first bare '--', copied as-is.
- orphan: a non-flag token appearing before the first flag token.

Shape of the result
- Tokens.flags: one Token per flag token, in order of appearance.
  • Token.name: the flag name with the '--' prefix stripped.
  • Token.index: 1-based position of the flag token in the invocation.
  • Token.value: the following token when it exists (flag-shaped or not), else None.
  • Token.overflow: the token after Token.value when both exist and it is not flag-shaped, else None.
- Tokens.names: frozenset of every flag name present.
- Tokens.trailing: the verbatim trailing segment (tuple, possibly empty).
- Tokens.orphans: orphan tokens (tuple, possibly empty).

Scanning stops at the first bare separator; nothing after it is inspected, so a
flag-shaped token in the trailing segment is never treated as a flag.
"""
import logging
from collections.abc import Iterable
from typing import NamedTuple

logger = logging.getLogger(__name__)

PREFIX = "--"
SEPARATOR = "--"


class Token(NamedTuple):
    name: str
    index: int
    value: str | None
    overflow: str | None


class Tokens(NamedTuple):
    flags: tuple[Token, ...]
    names: frozenset[str]
    trailing: tuple[str, ...]
    orphans: tuple[str, ...]


def is_flag(token, /):
    """
    Return True when token is flag-shaped ('--name'), excluding the bare separator.
    """
    return token.startswith(PREFIX) and token != SEPARATOR


def tokenize(invocation, /):
    """
    Split an invocation (program name excluded) into a Tokens record.

    Raises
    - TypeError: when invocation is a string or contains non-string items.
    """
    if isinstance(invocation, str) or not isinstance(invocation, Iterable):
        raise TypeError("tokenize() argument must be an iterable of strings")

    tokens = list(invocation)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("tokenize() argument must be an iterable of strings")

    try:
        position = tokens.index(SEPARATOR)
    except ValueError:
        head, trailing = tokens, []
    else:
        head, trailing = tokens[:position], tokens[position + 1:]

    def peek(index):
        # Value candidates never cross the separator
        if index < len(head):
            return head[index]
        return None

    flags = []
    orphans = []
    for index, token in enumerate(head):
        if not is_flag(token):
            if not flags:
                orphans.append(token)
            continue
        value = peek(index + 1)
        overflow = peek(index + 2) if value is not None else None
        if overflow is not None and is_flag(overflow):
            overflow = None
        flags.append(Token(token.removeprefix(PREFIX), index + 1, value, overflow))

    if trailing:
        logger.debug("verbatim trailing segment of %d tokens", len(trailing))

    return Tokens(
        flags=tuple(flags),
        names=frozenset(flag.name for flag in flags),
        trailing=tuple(trailing),
        orphans=tuple(orphans),
    )


__all__ = (
    "Token",
    "Tokens",
    "is_flag",
    "tokenize",
)
