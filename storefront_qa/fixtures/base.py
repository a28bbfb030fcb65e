"""Immutable fixture records.

Fixture payloads are frozen once at import time: mappings become read-only
``MappingProxyType`` views and lists become tuples, so no test can leak a
mutation into another. Call :func:`thaw` for a plain ``dict``/``list`` copy
to send as a request body, a mock response or a schema-validation input.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from types import MappingProxyType
from typing import Any


def freeze(value: Any) -> Any:
    """Return a deeply read-only copy of a JSON-like value."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Return a plain, mutable deep copy of a frozen (or regular) value."""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: thaw(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value
