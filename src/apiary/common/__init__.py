"""Runtime shared by every generated API.

Modules:
    schema: :class:`Schema` base type and the wire codecs.
    field_mask: :class:`FieldMask` and camelCase path conversion.
    delegate: Call hooks and retry decisions.
    hub: :class:`Hub`, the transport and token holder.
    url: Query parameter assembly.
    call: :class:`CallBuilder` and the request execution loop.
"""

from apiary.common.call import CallBuilder
from apiary.common.delegate import BackoffDelegate, DefaultDelegate, Delegate, MethodInfo, Retry
from apiary.common.field_mask import FieldMask
from apiary.common.hub import Hub
from apiary.common.schema import Schema, remove_json_null_values

__all__ = [
    "BackoffDelegate",
    "CallBuilder",
    "DefaultDelegate",
    "Delegate",
    "FieldMask",
    "Hub",
    "MethodInfo",
    "Retry",
    "Schema",
    "remove_json_null_values",
]
