"""``key=value`` arguments, typed argument parsing and field cursors.

Request bodies are assembled from ``-r key=value`` arguments. Keys are
dotted kebab-case field paths interpreted relative to a *cursor*, so that
nested structures can be filled without repeating their prefix::

    -r rate-limits.max-burst-size=10   # sets rateLimits.maxBurstSize
    -r rate-limits                     # moves the cursor into rateLimits
    -r max-dispatches-per-second=5     # sets rateLimits.maxDispatchesPerSecond
    -r ..name=q                        # one level up, then name
    -r .retry-config.max-attempts=3    # a leading dot starts at the root

A key without a value only moves the cursor.
"""

from __future__ import annotations

import math
from datetime import datetime
from enum import Enum
from typing import Any, NamedTuple, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from apiary.cli.issues import (
    CLIError,
    DuplicateField,
    EmptyField,
    InvalidKeyValueSyntax,
    ParseError,
    PopOnEmpty,
    TrailingFieldSep,
    did_you_mean,
)
from apiary.common.field_mask import FieldMask
from apiary.common.schema import Timestamp, parse_duration

FIELD_SEP = "."


def parse_kv_arg(
    kv: str, issues: list[CLIError], for_hashmap: bool = False
) -> tuple[str, Optional[str]]:
    """Split ``key=value`` at the first ``=``.

    ``key=`` yields ``(key, None)``. A missing ``=`` yields the same but also
    records :class:`~apiary.cli.issues.InvalidKeyValueSyntax`; callers that
    accept bare keys drop that issue again.
    """
    key, sep, value = kv.partition("=")
    if not sep:
        issues.append(InvalidKeyValueSyntax(kv, for_hashmap))
        return kv, None
    return key, value or None


# ---------------------------------------------------------------------------
# Typed argument parsing
# ---------------------------------------------------------------------------

_INT_RANGES = {
    "int32": (-(2**31), 2**31 - 1),
    "uint32": (0, 2**32 - 1),
    "int64": (-(2**63), 2**63 - 1),
    "uint64": (0, 2**64 - 1),
}

_timestamp_adapter: TypeAdapter[datetime] = TypeAdapter(Timestamp)


def _parse_bool(value: str) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError("provided string was not `true` or `false`")


def _parse_int(value: str, type_name: str) -> int:
    try:
        result = int(value, 10)
    except ValueError:
        raise ValueError("invalid digit found in string") from None
    low, high = _INT_RANGES.get(type_name, (None, None))
    if low is not None and not low <= result <= high:
        raise ValueError(f"number out of range for {type_name}")
    return result


def _parse_float(value: str) -> float:
    try:
        result = float(value)
    except ValueError:
        raise ValueError("invalid float literal") from None
    if math.isnan(result) and value.lower() not in ("nan", "+nan", "-nan"):
        raise ValueError("invalid float literal")
    return result


def _parse_timestamp(value: str) -> datetime:
    try:
        return _timestamp_adapter.validate_python(value)
    except ValidationError as exc:
        raise ValueError(exc.errors()[0]["msg"]) from None


def _parse(value: str, type_name: str) -> Any:
    if type_name == "boolean":
        return _parse_bool(value)
    if type_name in _INT_RANGES or type_name in ("integer", "unsigned number"):
        result = _parse_int(value, type_name)
        if type_name == "unsigned number" and result < 0:
            raise ValueError("number out of range for unsigned number")
        return result
    if type_name in ("float", "double", "number"):
        return _parse_float(value)
    if type_name == "google-fieldmask":
        return FieldMask.parse(value)
    if type_name == "google-datetime":
        return _parse_timestamp(value)
    if type_name == "google-duration":
        return parse_duration(value)
    return value


_DEFAULTS: dict[str, Any] = {
    "boolean": False,
    "int32": 0,
    "uint32": 0,
    "int64": 0,
    "uint64": 0,
    "integer": 0,
    "unsigned number": 0,
    "float": 0.0,
    "double": 0.0,
    "number": 0.0,
    "google-fieldmask": FieldMask(),
    "string": "",
}


def default_value(type_name: str) -> Any:
    """Zero value of *type_name*; ``None`` for timestamps and durations."""
    return _DEFAULTS.get(type_name)


def arg_from_str(value: str, issues: list[CLIError], arg_name: str, type_name: str) -> Any:
    """Parse *value* as *type_name*.

    On failure a :class:`~apiary.cli.issues.ParseError` is recorded and the
    type's zero value returned, so validation can continue.

    Supported type names: ``boolean``, ``int32``, ``uint32``, ``int64``,
    ``uint64``, ``integer``, ``unsigned number``, ``float``, ``double``,
    ``number``, ``google-fieldmask``, ``google-datetime``,
    ``google-duration`` and ``string``.
    """
    try:
        return _parse(value, type_name)
    except ValueError as exc:
        issues.append(ParseError(arg_name, type_name, value, str(exc)))
        return default_value(type_name)


# ---------------------------------------------------------------------------
# JSON type tables
# ---------------------------------------------------------------------------


class JsonType(str, Enum):
    """The JSON kind a request field's values are converted to."""

    BOOLEAN = "boolean"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    STRING = "string"


class ComplexType(str, Enum):
    """How values are stored at a field: one value, appended to a list, or as map entries."""

    POD = "pod"
    VEC = "vec"
    MAP = "map"


class JsonTypeInfo(NamedTuple):
    jtype: JsonType
    ctype: ComplexType = ComplexType.POD


def _to_json_value(value: str, jtype: JsonType, issues: list[CLIError]) -> Any:
    if jtype is JsonType.BOOLEAN:
        return arg_from_str(value, issues, "boolean", "boolean")
    if jtype is JsonType.INT:
        return arg_from_str(value, issues, "int", "integer")
    if jtype is JsonType.UINT:
        return arg_from_str(value, issues, "uint", "unsigned number")
    if jtype is JsonType.FLOAT:
        return arg_from_str(value, issues, "float", "number")
    return value


# ---------------------------------------------------------------------------
# Field cursor
# ---------------------------------------------------------------------------


class FieldCursor:
    """A position inside a nested JSON object, as a list of field names.

    Args:
        fields: Initial path components.
    """

    def __init__(self, fields: Sequence[str] = ()) -> None:
        self.fields: list[str] = list(fields)

    @classmethod
    def from_path(cls, path: str) -> FieldCursor:
        """Cursor for the dotted absolute path *path*, e.g. ``"rateLimits.maxBurstSize"``."""
        return cls(part for part in path.split(FIELD_SEP) if part)

    def copy(self) -> FieldCursor:
        return FieldCursor(self.fields)

    def set(self, value: str) -> Optional[CLIError]:
        """Move the cursor according to *value*.

        Components are appended to the current position. A single leading
        ``.`` starts from the root; every ``.`` directly following another
        one moves up a level.

        Returns:
            ``None`` on success, otherwise the issue; the cursor is then
            left unchanged.
        """
        if not value:
            return EmptyField()

        fields = list(self.fields)
        field = ""
        first_is_sep = False
        last_c = FIELD_SEP
        consecutive_seps = 0

        for index, c in enumerate(value):
            if c == FIELD_SEP:
                if index == 0:
                    first_is_sep = True
                consecutive_seps += 1
                if index > 0 and last_c == FIELD_SEP:
                    if not fields:
                        return PopOnEmpty(value)
                    fields.pop()
                elif field:
                    fields.append(field)
                    field = ""
            else:
                consecutive_seps = 0
                if index == 1 and first_is_sep:
                    fields.clear()
                field += c
            last_c = c

        if field:
            fields.append(field)
        if len(value) == 1 and first_is_sep:
            fields.clear()
        if len(value) > 1 and consecutive_seps == 1:
            return TrailingFieldSep(value)

        self.fields = fields
        return None

    @staticmethod
    def did_you_mean(value: str, possible_values: Sequence[str]) -> Optional[str]:
        """Suggest a spelling of *value* with each component replaced by its closest match.

        Returns ``None`` when no component changes.
        """
        if not value:
            return None
        output = []
        for part in value.split(FIELD_SEP):
            output.append((did_you_mean(part, possible_values) or part) if part else part)
        suggestion = FIELD_SEP.join(output)
        return None if suggestion == value else suggestion

    def set_json_value(
        self,
        obj: dict[str, Any],
        value: str,
        type_info: JsonTypeInfo,
        issues: list[CLIError],
        orig_cursor: FieldCursor,
    ) -> None:
        """Store *value* at this cursor inside *obj*, creating objects on the way.

        *orig_cursor* is the user-facing kebab-case position, used in issues.
        """
        if not self.fields:
            raise ValueError("cannot set a value at the root")
        for field in self.fields[:-1]:
            obj = obj.setdefault(field, {})

        field = self.fields[-1]
        if type_info.ctype is ComplexType.POD:
            if field in obj:
                issues.append(DuplicateField(str(orig_cursor)))
            obj[field] = _to_json_value(value, type_info.jtype, issues)
        elif type_info.ctype is ComplexType.VEC:
            obj.setdefault(field, []).append(_to_json_value(value, type_info.jtype, issues))
        else:
            key, item = parse_kv_arg(value, issues, for_hashmap=True)
            mapping = obj.setdefault(field, {})
            if key in mapping:
                issues.append(DuplicateField(str(orig_cursor)))
            mapping[key] = _to_json_value(item or "", type_info.jtype, issues)

    def __str__(self) -> str:
        return FIELD_SEP.join(self.fields)

    def __repr__(self) -> str:
        return f"FieldCursor({self.fields!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldCursor):
            return NotImplemented
        return self.fields == other.fields
