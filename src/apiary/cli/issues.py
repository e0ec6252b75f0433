"""Problems found while validating a command line.

The engine never stops at the first problem: every issue is appended to a
list and the whole list is reported at once through
:class:`~apiary.exceptions.InvalidOptionsError`. Each issue renders as one
human-readable line.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from typing import Optional, Sequence


def did_you_mean(value: str, possible_values: Sequence[str]) -> Optional[str]:
    """Return the entry of *possible_values* closest to *value*, if any is close."""
    matches = difflib.get_close_matches(value, list(possible_values), 1)
    return matches[0] if matches else None


class CLIError:
    """Base class of every command-line issue."""


@dataclass(frozen=True)
class UnknownParameter(CLIError):
    """A ``-p`` key that is neither a typed nor a standard parameter."""

    name: str
    possible_values: tuple[str, ...]

    def __str__(self) -> str:
        suggestion = did_you_mean(self.name, self.possible_values)
        suffix = f" Did you mean '{suggestion}' ?" if suggestion else ""
        return f"Parameter '{self.name}' is unknown.{suffix}"


@dataclass(frozen=True)
class InvalidKeyValueSyntax(CLIError):
    kv: str
    for_hashmap: bool = False

    def __str__(self) -> str:
        kind = "hashmap " if self.for_hashmap else ""
        return f"'{self.kv}' does not match {kind}pattern <key>=<value>."


@dataclass(frozen=True)
class ParseError(CLIError):
    """A value that does not parse as the type its argument requires."""

    arg_name: str
    type_name: str
    value: str
    description: str

    def __str__(self) -> str:
        return (
            f"Failed to parse argument '{self.arg_name}' with value '{self.value}' "
            f"as {self.type_name} with error: {self.description}."
        )


@dataclass(frozen=True)
class RequestValidation(CLIError):
    """The assembled request body does not fit its schema type."""

    type_name: str
    description: str

    def __str__(self) -> str:
        return f"Request structure {self.type_name} is invalid: {self.description}"


@dataclass(frozen=True)
class MissingCommandError(CLIError):
    def __str__(self) -> str:
        return "Please specify the main sub-command."


@dataclass(frozen=True)
class MissingMethodError(CLIError):
    command: str

    def __str__(self) -> str:
        return f"Please specify the method to call on the '{self.command}' command."


@dataclass(frozen=True)
class ConfigurationError(CLIError):
    """The config directory or the application secret is unusable."""

    description: str

    def __str__(self) -> str:
        return f"Configuration -> {self.description}"


# ---------------------------------------------------------------------------
# Field cursor issues
# ---------------------------------------------------------------------------


class FieldError(CLIError):
    """An issue with a ``-r`` field path."""

    def __str__(self) -> str:
        return f"Field -> {self.describe()}"

    def describe(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class UnknownField(FieldError):
    """A field path missing from the request table, with the closest known spelling."""

    field: str
    suggestion: Optional[str] = None
    value: Optional[str] = None

    def describe(self) -> str:
        suffix = ""
        if self.suggestion is not None:
            kv = self.suggestion if self.value is None else f"{self.suggestion}={self.value}"
            suffix = f" Did you mean '{kv}' ?"
        return f"Field '{self.field}' does not exist.{suffix}"


@dataclass(frozen=True)
class EmptyField(FieldError):
    def describe(self) -> str:
        return "Field names must not be empty."


@dataclass(frozen=True)
class PopOnEmpty(FieldError):
    field: str

    def describe(self) -> str:
        return f"'{self.field}': Cannot move up on empty field cursor."


@dataclass(frozen=True)
class TrailingFieldSep(FieldError):
    field: str

    def describe(self) -> str:
        return f"'{self.field}': Single field separator may not be last character."


@dataclass(frozen=True)
class DuplicateField(FieldError):
    field: str

    def describe(self) -> str:
        return f"Value at '{self.field}' was already set"
