"""Turn one parsed command line into one call, and run it.

Every operation of a generated command-line tool is described by a static
:class:`Command` table: where its call builder comes from, which positional
arguments it binds, which ``-r`` request fields and ``-p`` parameters it
understands. :class:`Engine` interprets those tables.

Validation and execution are separate steps. Constructing an
:class:`Engine` runs the validation pass, which parses and type-checks every
argument and builds the call without acquiring a token, opening the output
file or sending anything. Only :meth:`Engine.doit` touches the outside world.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import IO, Any, Mapping, NamedTuple, Optional, Sequence

from pydantic import ValidationError

from apiary.cli.issues import (
    CLIError,
    MissingCommandError,
    MissingMethodError,
    RequestValidation,
    UnknownField,
    UnknownParameter,
)
from apiary.cli.kv import FieldCursor, JsonTypeInfo, arg_from_str, default_value, parse_kv_arg
from apiary.common.call import CallBuilder
from apiary.common.hub import Hub
from apiary.common.schema import Schema, remove_json_null_values
from apiary.exceptions import InvalidOptionsError, OutputError
from apiary.output import write_json

logger = logging.getLogger(__name__)

# Standard query parameters accepted by every operation, as typed on the
# command line.
GLOBAL_PARAMS: tuple[str, ...] = (
    "$-xgafv",
    "access-token",
    "alt",
    "callback",
    "fields",
    "key",
    "oauth-token",
    "pretty-print",
    "quota-user",
    "upload-type",
    "upload-protocol",
)

# Command-line spelling -> wire name, where they differ.
GLOBAL_PARAM_MAP: dict[str, str] = {
    "$-xgafv": "$.xgafv",
    "access-token": "access_token",
    "oauth-token": "oauth_token",
    "pretty-print": "prettyPrint",
    "quota-user": "quotaUser",
    "upload-type": "uploadType",
    "upload-protocol": "upload_protocol",
}


class Arg(NamedTuple):
    """A required positional argument of an operation."""

    name: str
    help: str = ""


class Param(NamedTuple):
    """A typed ``-p`` parameter: the call builder setter and the value's type name."""

    setter: str
    type_name: str = "string"


@dataclass(frozen=True)
class Command:
    """Static description of one operation of a command-line tool.

    Attributes:
        group: Resource group sub-command, e.g. ``"projects"``. The hub
            method of the same name (dashes as underscores) returns the
            method builder.
        name: Operation sub-command, e.g. ``"locations-queues-create"``.
        method: Method builder attribute creating the call builder.
        about: One-line help.
        args: Positional arguments, passed to *method* in order.
        request: Request body type, for operations that take one.
        fields: ``kebab.path -> (camelCase.pointer, JsonTypeInfo)`` for
            every ``-r`` field of *request*.
        params: ``kebab-name -> Param`` for every typed ``-p`` parameter.
    """

    group: str
    name: str
    method: str
    about: str = ""
    args: tuple[Arg, ...] = ()
    request: Optional[type[Schema]] = None
    fields: Mapping[str, tuple[str, JsonTypeInfo]] = field(default_factory=dict)
    params: Mapping[str, Param] = field(default_factory=dict)

    @property
    def field_names(self) -> list[str]:
        """Every component of every known field path, sorted; the suggestion vocabulary."""
        return sorted({part for path in self.fields for part in path.split(".")})

    @property
    def param_names(self) -> tuple[str, ...]:
        """Every name ``-p`` accepts for this operation."""
        return GLOBAL_PARAMS + tuple(sorted(self.params))


@dataclass(frozen=True)
class Invocation:
    """What the user asked for on the command line.

    Attributes:
        group: Resource group, ``None`` when missing.
        method: Operation name, ``None`` when missing.
        args: Positional argument values.
        kv: Raw ``-r`` arguments, in order.
        params: Raw ``-p`` arguments, in order.
        out: Output file; ``None`` or ``"-"`` for stdout.
        scopes: ``--scope`` values.
    """

    group: Optional[str]
    method: Optional[str]
    args: tuple[str, ...] = ()
    kv: tuple[str, ...] = ()
    params: tuple[str, ...] = ()
    out: Optional[str] = None
    scopes: tuple[str, ...] = ()


class Engine:
    """Validate an invocation against its command table, then execute it.

    Args:
        hub: The hub the call is built on. Validation never uses its
            transport or token provider.
        commands: All operations of the tool.
        invocation: The parsed command line.

    Raises:
        InvalidOptionsError: With every issue found, when validation fails.
    """

    def __init__(self, hub: Hub, commands: Sequence[Command], invocation: Invocation) -> None:
        self.hub = hub
        self.invocation = invocation
        self._commands = {(command.group, command.name): command for command in commands}
        issues: list[CLIError] = []
        self._call = self._prepare(issues)
        if issues:
            raise InvalidOptionsError(issues)

    # ------------------------------------------------------------------ #
    # Validation pass
    # ------------------------------------------------------------------ #

    def _find_command(self, issues: list[CLIError]) -> Optional[Command]:
        group, method = self.invocation.group, self.invocation.method
        if not group or not any(key[0] == group for key in self._commands):
            issues.append(MissingCommandError())
            return None
        command = self._commands.get((group, method or ""))
        if command is None:
            issues.append(MissingMethodError(group))
        return command

    def _prepare(self, issues: list[CLIError]) -> Optional[CallBuilder]:
        command = self._find_command(issues)
        if command is None:
            return None

        positional: list[Any] = list(self.invocation.args)
        positional += [""] * (len(command.args) - len(positional))
        if command.request is not None:
            positional.insert(0, self._build_request(command, issues))

        methods = getattr(self.hub, command.group.replace("-", "_"))()
        call: CallBuilder = getattr(methods, command.method)(*positional)

        for kv in self.invocation.params:
            key, value = parse_kv_arg(kv, issues)
            param = command.params.get(key)
            if param is not None:
                call = getattr(call, param.setter)(_param_value(key, value, param.type_name, issues))
            elif key in GLOBAL_PARAMS:
                call = call.param(GLOBAL_PARAM_MAP.get(key, key), "unset" if value is None else value)
            else:
                issues.append(UnknownParameter(key, command.param_names))
        return call

    def _build_request(self, command: Command, issues: list[CLIError]) -> Schema:
        assert command.request is not None
        cursor = FieldCursor()
        obj: dict[str, Any] = {}

        for kv in self.invocation.kv:
            last = len(issues)
            key, value = parse_kv_arg(kv, issues)
            temp = cursor.copy()
            field_issue = temp.set(key)

            if value is None:
                # A bare key only moves the cursor.
                del issues[last:]
                if field_issue is not None:
                    issues.append(field_issue)
                else:
                    cursor = temp
                continue
            if field_issue is not None:
                issues.append(field_issue)
                continue

            path = str(temp)
            entry = command.fields.get(path)
            if entry is None:
                suggestion = FieldCursor.did_you_mean(key, command.field_names)
                issues.append(UnknownField(path, suggestion, value))
                continue
            pointer, type_info = entry
            FieldCursor.from_path(pointer).set_json_value(obj, value, type_info, issues, temp)

        try:
            return command.request.from_json_value(obj)
        except ValidationError as exc:
            issues.append(RequestValidation(command.request.__name__, _first_error(exc)))
            return command.request()

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #

    def doit(self) -> Any:
        """Send the validated call and write its pretty-printed result.

        Returns:
            The JSON value that was written.

        Raises:
            OutputError: If the output file cannot be opened or written.
            ApiError: Whatever the call raised.
        """
        assert self._call is not None
        call = self._call.add_scopes(self.invocation.scopes)
        out = self.invocation.out
        stream: Optional[IO[str]] = None
        if out and out != "-":
            try:
                stream = open(out, "w", encoding="utf-8")
            except OSError as exc:
                raise OutputError(out, exc) from exc

        try:
            _, result = call.doit()
            value = remove_json_null_values(result.to_json_value())
            try:
                write_json(value, stream)
            except OSError as exc:
                raise OutputError(out or "-", exc) from exc
        finally:
            if stream is not None:
                stream.close()
        logger.debug("%s %s done", self.invocation.group, self.invocation.method)
        return value


def _param_value(key: str, value: Optional[str], type_name: str, issues: list[CLIError]) -> Any:
    if type_name == "string":
        return value or ""
    if value is None:
        if type_name == "google-fieldmask":
            return arg_from_str("", issues, key, type_name)
        return default_value(type_name)
    return arg_from_str(value, issues, key, type_name)


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}" if location else error["msg"]
