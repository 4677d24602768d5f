"""Validation and repair of run options and glob patterns."""

from __future__ import annotations

import logging
import os
import re

from recently.errors import InvalidOptionsError
from recently.messages import incorrect_braces, invalid_option, unbalanced_brackets
from recently.ui import Logger

logger = logging.getLogger(__name__)

# A brace group with no unescaped comma, no `..` sequence and no nested brace,
# not escaped and not preceded by `$`. Such a group does not expand, so
# `*.{js}` would otherwise only match a file literally named `*.{js}`.
#
#   *.{js,ts}        expands, left alone
#   file_{1..10}.css expands, left alone
#   *.{js}           rewritten as *.js
#   *.{js,{ts}}      rewritten as *.{js,ts}
#   *.\{js\}         escaped, left alone
#   *.${js}          dollar sign, left alone
#   *.{js\,ts}       comma escaped, rewritten as *.js\,ts
BRACES_RE = re.compile(r"(?<![\\$])(\{)(?:(?!(?<!\\),|\.\.|\{|\}).)*?(?<!\\)(\})")


def without_incorrect_braces(pattern: str) -> str:
    return BRACES_RE.sub(lambda match: match.group(0)[1:-1], pattern)


def validate_and_fix_braces(pattern: str, log: Logger) -> str:
    """Strip single-value brace groups from `pattern`, warning when anything changed."""
    fixed = without_incorrect_braces(pattern)
    if fixed != pattern:
        log.warn(incorrect_braces(pattern, fixed))
    return fixed


def has_unbalanced_brackets(pattern: str) -> bool:
    """True when `pattern` has an unescaped `[` without a closing `]`, or a stray `]`."""
    open_at: int | None = None
    index = 0
    while index < len(pattern):
        char = pattern[index]
        if char == "\\":
            index += 2
            continue
        if open_at is None:
            if char == "[":
                open_at = index
            elif char == "]":
                return True
        elif char == "]":
            # A `]` right after `[` or `[!` belongs to the set.
            first = open_at + 2 if pattern[open_at + 1 : open_at + 2] in ("!", "^") else open_at + 1
            if index > first:
                open_at = None
        index += 1
    return open_at is not None


def warn_unbalanced_brackets(pattern: str, log: Logger) -> None:
    if has_unbalanced_brackets(pattern):
        log.warn(unbalanced_brackets(pattern))


def validate_shell(shell: bool | str | None, log: Logger) -> None:
    """Ensure a shell given as a path points at an executable file.

    Raises:
        InvalidOptionsError: If the path is missing or not executable.
    """
    if not isinstance(shell, str):
        return
    logger.debug("Validating shell...")
    if not os.path.isfile(shell):
        message = f"No such file: {shell}"
    elif not os.access(shell, os.X_OK):
        message = f"Permission denied, not executable: {shell}"
    else:
        logger.debug("Validated shell!")
        return
    log.error(invalid_option("shell", shell, message))
    raise InvalidOptionsError(message)


def validate_concurrent(concurrent: bool | int, log: Logger) -> None:
    """Ensure `concurrent` is a boolean or a positive integer.

    Raises:
        InvalidOptionsError: For zero, negative or non-integer values.
    """
    if isinstance(concurrent, bool):
        return
    if isinstance(concurrent, int) and concurrent >= 1:
        return
    message = "Expected a boolean or a positive integer."
    log.error(invalid_option("concurrent", str(concurrent), message))
    raise InvalidOptionsError(message)
