"""Schema base type and the wire codecs shared by every generated API.

Google REST payloads are JSON objects with camelCase member names, every
member optional. A handful of value kinds do not travel as their natural
JSON type:

* 64-bit integers are decimal strings (``"123"``), because JavaScript
  numbers cannot hold them exactly.
* Byte strings are standard base64.
* Timestamps are RFC3339 text (``"2024-06-01T12:00:00.5Z"``).
* Durations are decimal seconds with an ``s`` suffix (``"3.5s"``).
  Both carry up to nine fractional digits; decoded values are
  :class:`NanoDatetime` and :class:`NanoTimedelta`, which keep the
  nanoseconds a plain ``datetime`` or ``timedelta`` cannot hold.
* Field masks are comma-joined camelCase paths.

Each kind is an annotated type below; schema fields declare it and pydantic
applies the conversion in both directions. Absent members are ``None`` and
are left out of the encoded form, so that encoding a decoded value yields the
members that were present and nothing else.
"""

from __future__ import annotations

import base64
import binascii
import re
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any, Optional, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    PlainSerializer,
    PlainValidator,
    TypeAdapter,
    ValidationError,
)

from apiary.common.field_mask import FieldMask, snake_to_camel
from apiary.exceptions import JsonDecodeError

S = TypeVar("S", bound="Schema")


# ---------------------------------------------------------------------------
# Codecs
# ---------------------------------------------------------------------------


def decode_bytes(value: Any) -> bytes:
    """Decode base64 text; url-safe alphabets and missing padding are accepted."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise ValueError(f"expected base64 text, got {type(value).__name__}")
    text = value.replace("-", "+").replace("_", "/")
    text += "=" * (-len(text) % 4)
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64: {exc}") from exc


def encode_bytes(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


class NanoTimedelta(timedelta):
    """A :class:`~datetime.timedelta` that also keeps the nanoseconds below its microsecond.

    ``nanosecond`` is always in ``0..999`` and adds to the (floored)
    microsecond value, so ``-0.0000005s`` is ``-1us`` plus ``500ns``.
    Arithmetic and comparisons behave like a plain ``timedelta`` and ignore
    the remainder.
    """

    def __new__(cls, *args: Any, nanosecond: int = 0, **kwargs: Any) -> NanoTimedelta:
        if not 0 <= nanosecond < 1000:
            raise ValueError(f"nanosecond must be in 0..999, got {nanosecond}")
        self = super().__new__(cls, *args, **kwargs)
        self._nanosecond = nanosecond
        return self

    @classmethod
    def from_nanoseconds(cls, total: int) -> NanoTimedelta:
        micros, nanos = divmod(total, 1000)
        return cls(microseconds=micros, nanosecond=nanos)

    @property
    def nanosecond(self) -> int:
        return self._nanosecond

    def __reduce_ex__(self, protocol: Any) -> Any:
        return (_nano_timedelta, (self.days, self.seconds, self.microseconds, self._nanosecond))

    def __repr__(self) -> str:
        return f"{super().__repr__()[:-1]}, nanosecond={self._nanosecond})"


class NanoDatetime(datetime):
    """A :class:`~datetime.datetime` that also keeps the nanoseconds below its microsecond.

    Arithmetic and comparisons behave like a plain ``datetime`` and ignore
    the remainder.
    """

    def __new__(cls, *args: Any, nanosecond: int = 0, **kwargs: Any) -> NanoDatetime:
        if not 0 <= nanosecond < 1000:
            raise ValueError(f"nanosecond must be in 0..999, got {nanosecond}")
        self = super().__new__(cls, *args, **kwargs)
        self._nanosecond = nanosecond
        return self

    @classmethod
    def from_datetime(cls, value: datetime, nanosecond: int = 0) -> NanoDatetime:
        return cls(
            value.year, value.month, value.day,
            value.hour, value.minute, value.second, value.microsecond,
            value.tzinfo, fold=value.fold, nanosecond=nanosecond,
        )

    @property
    def nanosecond(self) -> int:
        return self._nanosecond

    def __reduce_ex__(self, protocol: Any) -> Any:
        base = datetime(
            self.year, self.month, self.day,
            self.hour, self.minute, self.second, self.microsecond,
            self.tzinfo, fold=self.fold,
        )
        return (_nano_datetime, (base, self._nanosecond))

    def __repr__(self) -> str:
        return f"{super().__repr__()[:-1]}, nanosecond={self._nanosecond})"


def _nano_timedelta(days: int, seconds: int, microseconds: int, nanosecond: int) -> NanoTimedelta:
    return NanoTimedelta(days, seconds, microseconds, nanosecond=nanosecond)


def _nano_datetime(base: datetime, nanosecond: int) -> NanoDatetime:
    return NanoDatetime.from_datetime(base, nanosecond)


def _total_nanoseconds(value: timedelta) -> int:
    micros = (value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds
    return micros * 1000 + getattr(value, "nanosecond", 0)


def _fraction(nanos: int) -> str:
    return f".{nanos:09d}".rstrip("0") if nanos else ""


_DURATION_RE = re.compile(r"^(-)?(\d+)(?:\.(\d{1,9}))?s$")


def parse_duration(value: Any) -> timedelta:
    """Parse ``"3.5s"``; fractions are kept down to the nanosecond."""
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return timedelta(seconds=value)
    if not isinstance(value, str):
        raise ValueError(f"expected a duration string, got {type(value).__name__}")
    match = _DURATION_RE.match(value.strip())
    if match is None:
        raise ValueError(f"invalid duration {value!r}, expected e.g. '3.5s'")
    sign, seconds, fraction = match.groups()
    total = int(seconds) * 1_000_000_000 + int((fraction or "").ljust(9, "0"))
    return NanoTimedelta.from_nanoseconds(-total if sign else total)


def format_duration(value: timedelta) -> str:
    total = _total_nanoseconds(value)
    sign = "-" if total < 0 else ""
    seconds, nanos = divmod(abs(total), 1_000_000_000)
    return f"{sign}{seconds}{_fraction(nanos)}s"


_FRACTION_RE = re.compile(r"\.(\d+)")
_datetime_adapter: TypeAdapter[datetime] = TypeAdapter(datetime)


def parse_timestamp(value: Any) -> datetime:
    """Parse RFC3339 text, keeping a fraction of up to nine digits.

    Digits beyond the microsecond go to :attr:`NanoDatetime.nanosecond`.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected an RFC3339 timestamp, got {type(value).__name__}")
    nanosecond = 0
    match = _FRACTION_RE.search(value)
    if match is not None and len(match.group(1)) > 6:
        digits = match.group(1)
        nanosecond = int(digits[6:9].ljust(3, "0"))
        value = value[: match.start(1) + 6] + value[match.end(1):]
    try:
        parsed = _datetime_adapter.validate_python(value)
    except ValidationError as exc:
        raise ValueError(f"invalid timestamp {value!r}") from exc
    return NanoDatetime.from_datetime(parsed, nanosecond)


def format_timestamp(value: datetime) -> str:
    """RFC3339 in UTC with a ``Z`` suffix. Naive datetimes are taken as UTC."""
    nanosecond = getattr(value, "nanosecond", 0)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    return text + _fraction(value.microsecond * 1000 + nanosecond) + "Z"


Bytes = Annotated[
    bytes,
    PlainValidator(decode_bytes),
    PlainSerializer(encode_bytes, return_type=str, when_used="json"),
]
Int64 = Annotated[int, PlainSerializer(str, return_type=str, when_used="json")]
UInt64 = Int64
Timestamp = Annotated[
    datetime,
    PlainValidator(parse_timestamp),
    PlainSerializer(format_timestamp, return_type=str, when_used="json"),
]
Duration = Annotated[
    timedelta,
    PlainValidator(parse_duration),
    PlainSerializer(format_duration, return_type=str, when_used="json"),
]


def remove_json_null_values(value: Any) -> Any:
    """Drop ``None`` members from every object inside *value*, in place.

    Array elements are recursed into but never removed.
    """
    if isinstance(value, dict):
        for key in [key for key, item in value.items() if item is None]:
            del value[key]
        for item in value.values():
            remove_json_null_values(item)
    elif isinstance(value, list):
        for item in value:
            remove_json_null_values(item)
    return value


# ---------------------------------------------------------------------------
# Schema base
# ---------------------------------------------------------------------------


class Schema(BaseModel):
    """Base class of every resource, request and response type.

    Fields are snake_case in Python and camelCase on the wire; both spellings
    are accepted when constructing an instance. Unknown wire members are
    ignored.

    Example::

        >>> class Limits(Schema):
        ...     max_burst_size: Optional[int] = None
        >>> Limits(max_burst_size=5).to_json()
        '{"maxBurstSize":5}'
    """

    model_config = ConfigDict(
        alias_generator=snake_to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_json_value(self) -> dict[str, Any]:
        """Encode into a JSON-compatible dict, absent members omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_json(cls: type[S], text: str) -> S:
        """Decode JSON text.

        Raises:
            JsonDecodeError: If *text* is not JSON or does not fit the type.
        """
        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            raise JsonDecodeError(text, exc) from exc

    @classmethod
    def from_json_value(cls: type[S], value: Any) -> S:
        return cls.model_validate(value)


# ---------------------------------------------------------------------------
# Error payloads
# ---------------------------------------------------------------------------


class ErrorItem(Schema):
    domain: Optional[str] = None
    reason: Optional[str] = None
    message: Optional[str] = None
    location: Optional[str] = None
    location_type: Optional[str] = None


class ErrorDetails(Schema):
    """The ``error`` member of a Google error response."""

    code: Optional[int] = None
    message: Optional[str] = None
    status: Optional[str] = None
    errors: Optional[list[ErrorItem]] = None
    details: Optional[list[dict[str, Any]]] = None


class ErrorResponse(Schema):
    """A structured error body, ``{"error": {...}}``."""

    error: Optional[ErrorDetails] = None

    @classmethod
    def parse(cls, text: str) -> Optional[ErrorResponse]:
        """Return the parsed payload, or ``None`` when *text* is not one."""
        try:
            value = cls.model_validate_json(text)
        except ValidationError:
            return None
        return value if value.error is not None else None


__all__ = [
    "Bytes",
    "Duration",
    "ErrorDetails",
    "ErrorItem",
    "ErrorResponse",
    "FieldMask",
    "Int64",
    "NanoDatetime",
    "NanoTimedelta",
    "Schema",
    "Timestamp",
    "UInt64",
    "decode_bytes",
    "encode_bytes",
    "format_duration",
    "format_timestamp",
    "parse_duration",
    "remove_json_null_values",
]
