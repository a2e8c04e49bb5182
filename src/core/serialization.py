"""JSON serialization for request payloads.

Dataclasses are converted field by field using the wire name stored in
field metadata ("json"), falling back to the attribute name. Plain
mappings and sequences pass through. Anything JSON cannot represent is
reported as EncodingError.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any, Mapping

from core.errors import EncodingError


def to_wire(value: Any) -> Any:
    """Convert a payload into JSON-compatible primitives."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.metadata.get("json", f.name): to_wire(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, Mapping):
        out = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise EncodingError(f"Mapping keys must be strings, got {type(k).__name__}")
            out[k] = to_wire(v)
        return out
    if isinstance(value, (list, tuple)):
        return [to_wire(v) for v in value]
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    raise EncodingError(f"Cannot serialize value of type {type(value).__name__}")


class JsonSerializer:
    def __init__(self, *, ensure_ascii: bool = False) -> None:
        self._ensure_ascii = ensure_ascii

    def serialize(self, payload: Any) -> bytes:
        if payload is None:
            raise EncodingError("Payload is empty")
        try:
            text = json.dumps(to_wire(payload), ensure_ascii=self._ensure_ascii, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise EncodingError(f"Payload is not JSON serializable: {e}") from e
        return text.encode("utf-8")
