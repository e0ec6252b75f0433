"""Query parameter assembly and URI template substitution."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Iterable, Iterator, Optional
from urllib.parse import quote

from apiary.common.field_mask import FieldMask
from apiary.common.schema import encode_bytes, format_duration, format_timestamp

# Left literal by RFC 6570 reserved expansion, minus "?" and "#".
RESERVED_SAFE = "/:@!$&'()*+,;="


def to_query_value(value: Any) -> str:
    """Render a typed parameter value the way the API expects it in a URL."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, FieldMask):
        return str(value)
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, bytes):
        return encode_bytes(value)
    return str(value)


class Params:
    """An ordered multi-map of wire parameter names to string values.

    Order is preserved because it is the order the parameters appear in the
    query string.
    """

    def __init__(self) -> None:
        self._pairs: list[tuple[str, str]] = []

    def push(self, name: str, value: Any) -> None:
        self._pairs.append((name, to_query_value(value)))

    def extend(self, items: Iterable[tuple[str, Any]]) -> None:
        for name, value in items:
            self.push(name, value)

    def get(self, name: str) -> Optional[str]:
        for key, value in self._pairs:
            if key == name:
                return value
        return None

    def remove(self, names: Iterable[str]) -> None:
        drop = set(names)
        self._pairs = [(key, value) for key, value in self._pairs if key not in drop]

    def uri_replacement(
        self, url: str, param_name: str, find_this: str, reserved: bool
    ) -> str:
        """Substitute the placeholder *find_this* with the value of *param_name*.

        ``{+name}`` placeholders use reserved expansion (*reserved*):
        ``/``, ``:``, ``@`` and the other sub-delimiters stay literal. Plain
        ``{name}`` placeholders escape every reserved character.

        Raises:
            ValueError: If the parameter was never pushed.
        """
        value = self.get(param_name)
        if value is None:
            raise ValueError(f"path parameter '{param_name}' is not set")
        return url.replace(find_this, quote(value, safe=RESERVED_SAFE if reserved else ""))

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"Params({self._pairs!r})"
