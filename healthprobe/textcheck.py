"""Checks that a probe's output text contains, or does not contain, a string or pattern."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

__all__ = ["TextCheckError", "TextChecker", "check_empty"]

_LOOKAROUND = ("(?<=", "(?<!", "(?=", "(?!", "(?P=")


class TextCheckError(Exception):
    """The output failed a text check, or a check pattern is not usable."""


def _unsupported_syntax(pattern: str) -> str | None:
    """Return the first lookaround or back-reference construct in *pattern*, if any.

    Only patterns with linear-time semantics are accepted, so these
    constructs are rejected even though the ``re`` module knows them.
    """
    in_class = False
    escaped = False
    for pos, ch in enumerate(pattern):
        if escaped:
            escaped = False
            if not in_class and ch in "123456789":
                return "\\" + ch
            continue
        if ch == "\\":
            escaped = True
        elif in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
        elif ch == "(":
            for marker in _LOOKAROUND:
                if pattern.startswith(marker, pos):
                    return marker
    return None


def _compile(pattern: str) -> re.Pattern[str]:
    construct = _unsupported_syntax(pattern)
    if construct is not None:
        raise TextCheckError(
            f"error parsing regexp: invalid or unsupported Perl syntax: `{construct}`"
        )
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise TextCheckError(f"error parsing regexp: {exc}") from exc


@dataclass
class TextChecker:
    """Text or regular-expression check of a probe's output."""

    contain: str = ""
    not_contain: str = ""
    regexp: bool = False

    _contain_re: re.Pattern[str] | None = field(default=None, init=False, repr=False, compare=False)
    _not_contain_re: re.Pattern[str] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def configure(self) -> None:
        """Compile the patterns when in regular-expression mode."""
        if not self.regexp:
            return

        if not self.contain:
            self._contain_re = None
        else:
            try:
                self._contain_re = _compile(self.contain)
            except TextCheckError:
                self._contain_re = None
                raise

        if not self.not_contain:
            self._not_contain_re = None
        else:
            try:
                self._not_contain_re = _compile(self.not_contain)
            except TextCheckError:
                self._not_contain_re = None
                raise

    def check(self, text: str) -> None:
        """Check *text* in the configured mode; raise TextCheckError on failure."""
        if self.regexp:
            self.check_regexp(text)
        else:
            self.check_text(text)

    def check_text(self, output: str) -> None:
        """Plain substring check."""
        if self.contain and self.contain not in output:
            raise TextCheckError(f"the output does not contain [{self.contain}]")
        if self.not_contain and self.not_contain in output:
            raise TextCheckError(f"the output contains [{self.not_contain}]")

    def check_regexp(self, output: str) -> None:
        """Regular-expression check; patterns that were not compiled are skipped."""
        if self.contain and self._contain_re is not None and not self._contain_re.search(output):
            raise TextCheckError(f"the output does not match the pattern [{self.contain}]")
        if (
            self.not_contain
            and self._not_contain_re is not None
            and self._not_contain_re.search(output)
        ):
            raise TextCheckError(f"the output match the pattern [{self.not_contain}]")

    def __str__(self) -> str:
        mode = "RegExp Mode" if self.regexp else "Text Mode"
        return f"{mode} - Contain:[{self.contain}], NotContain:[{self.not_contain}]"


def check_empty(s: str) -> str:
    """Return ``"empty"`` for a blank string, otherwise the string itself."""
    if not s.strip():
        return "empty"
    return s