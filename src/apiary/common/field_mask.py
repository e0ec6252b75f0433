"""Field masks: lists of dotted field paths selecting parts of a resource.

On the wire a mask is a single string of comma-separated paths whose
components are camelCase (``"rateLimits.maxBurstSize,name"``). In Python the
paths are kept in snake_case, matching the attribute names of the schema
types.
"""

from __future__ import annotations

import re
from typing import Any, Iterable

_CAMEL_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")


def snake_to_camel(name: str) -> str:
    """``"max_burst_size"`` -> ``"maxBurstSize"``. Dots separate independent components."""
    return ".".join(_component_to_camel(part) for part in name.split("."))


def camel_to_snake(name: str) -> str:
    """``"maxBurstSize"`` -> ``"max_burst_size"``. Dots separate independent components."""
    return ".".join(
        _CAMEL_BOUNDARY_RE.sub(r"\1_\2", part).lower() for part in name.split(".")
    )


def _component_to_camel(part: str) -> str:
    head, *rest = part.split("_")
    return head + "".join(word[:1].upper() + word[1:] for word in rest)


class FieldMask:
    """An immutable list of snake_case field paths.

    Example::

        >>> mask = FieldMask(["rate_limits.max_burst_size", "name"])
        >>> str(mask)
        'rateLimits.maxBurstSize,name'
        >>> FieldMask.parse("rateLimits.maxBurstSize,name") == mask
        True
    """

    __slots__ = ("_paths",)

    def __init__(self, paths: Iterable[str] = ()) -> None:
        self._paths = tuple(paths)

    @property
    def paths(self) -> tuple[str, ...]:
        return self._paths

    @classmethod
    def parse(cls, text: str) -> FieldMask:
        """Parse the wire form. The empty string yields an empty mask."""
        if not text:
            return cls()
        return cls(camel_to_snake(path.strip()) for path in text.split(","))

    @classmethod
    def coerce(cls, value: object) -> FieldMask:
        """Accept a mask, its wire string, or an iterable of paths."""
        if isinstance(value, FieldMask):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, (list, tuple)):
            return cls(str(path) for path in value)
        raise ValueError(f"cannot interpret {value!r} as a field mask")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        from pydantic_core import core_schema

        return core_schema.no_info_plain_validator_function(
            cls.coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used="json"
            ),
        )

    def __str__(self) -> str:
        return ",".join(snake_to_camel(path) for path in self._paths)

    def __repr__(self) -> str:
        return f"FieldMask({list(self._paths)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldMask):
            return NotImplemented
        return self._paths == other._paths

    def __hash__(self) -> int:
        return hash(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __bool__(self) -> bool:
        # An empty mask is still a value that gets transmitted.
        return True
