"""JSON Schema validation that reports every violation.

Unlike ``jsonschema.validate``, which stops at the best single error, the
validator here walks all errors so a failing payload lists each offending
field in one message.

Example:
    >>> from storefront_qa.assertions import validate_schema
    >>> from storefront_qa.schemas import PRODUCT_SCHEMA
    >>> validate_schema(response.data, PRODUCT_SCHEMA)
    True
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from jsonschema import Draft7Validator, FormatChecker
from jsonschema.exceptions import ValidationError as JSONSchemaValidationError

from storefront_qa.errors import SchemaMismatchError
from storefront_qa.fixtures.base import thaw


def _format_path(path: Iterable[Any]) -> str:
    parts = ["$"]
    for segment in path:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        else:
            parts.append(f".{segment}")
    return "".join(parts)


def schema_errors(data: Any, schema: dict[str, Any]) -> list[str]:
    """Return every violation of ``schema`` in ``data``, ordered by location.

    Each entry reads ``"<json path>: <message>"``, e.g.
    ``"$.data[0]: 'price' is a required property"``.
    """
    validator = Draft7Validator(schema, format_checker=FormatChecker())
    found: list[JSONSchemaValidationError] = sorted(
        validator.iter_errors(thaw(data)),
        key=lambda e: [str(p) for p in e.absolute_path],
    )
    return [f"{_format_path(e.absolute_path)}: {e.message}" for e in found]


def validate_schema(data: Any, schema: dict[str, Any]) -> bool:
    """Validate ``data`` against ``schema``.

    Args:
        data: Decoded JSON payload. Frozen fixture records are accepted.
        schema: JSON Schema (draft 7) descriptor.

    Returns:
        True when the payload conforms.

    Raises:
        SchemaMismatchError: Listing all violations and echoing the payload.
    """
    errors = schema_errors(data, schema)
    if not errors:
        return True

    payload = json.dumps(thaw(data), indent=2, default=str)
    raise SchemaMismatchError(
        f"Schema validation failed: {'; '.join(errors)}\nData: {payload}",
        errors=errors,
        value=data,
    )
