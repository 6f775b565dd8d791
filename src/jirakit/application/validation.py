"""
Validation - Required-field checks and value coercion against create metadata.

validate_required is a pre-flight check that saves a round trip Jira would
reject anyway. It reports what is missing; the caller decides whether to
block submission.
"""

import logging
import math
from typing import Any, NamedTuple, Optional

from ..core.domain.fields import FieldSchemaEntry, extract_fields


class MissingField(NamedTuple):
    """A required field absent from a payload."""

    key: str
    name: str

    def __str__(self) -> str:
        return f"{self.key} ({self.name})"


ValidationResult = list[MissingField]


def is_present(payload: Any, field_key: str) -> bool:
    """
    Presence test for fields.<key>.

    Empty strings, empty lists, 0 and false are present; an absent key or
    null is not.
    """
    if not isinstance(payload, dict):
        return False
    fields = payload.get("fields")
    if not isinstance(fields, dict):
        return False
    return fields.get(field_key) is not None


def validate_required(
    metadata: Any,
    payload: Any,
    logger: Optional[logging.Logger] = None,
) -> ValidationResult:
    """
    List the required fields missing from a payload, in metadata order.

    An empty result means the payload passes, including when the metadata
    lists no required fields at all. project and issuetype are not
    exempted: the caller must put them in the payload first.

    Args:
        metadata: Raw createmeta document
        payload: Candidate issue payload ({"fields": {...}})
        logger: Optional logger (defaults to "RequiredFieldValidator")
    """
    logger = logger or logging.getLogger("RequiredFieldValidator")
    logger.debug("Validating required fields...")

    required = extract_fields(metadata, required_only=True)
    if not required:
        logger.debug("No required fields found or unable to parse metadata.")
        return []

    missing: ValidationResult = []
    for entry in required:
        if not is_present(payload, entry.key):
            logger.debug(f"Missing required field: {entry.key}")
            missing.append(MissingField(entry.key, entry.name))

    if not missing:
        logger.debug("All required fields are present.")
    return missing


# -------------------------------------------------------------------------
# Value Coercion
# -------------------------------------------------------------------------

def coerce_value(entry: FieldSchemaEntry, value: Any) -> Any:
    """
    Convert a text answer to the field's schema type.

    Numbers become int/float; arrays of strings are split on commas.
    Anything else, including unparseable numbers, is returned unchanged.
    """
    if not isinstance(value, str):
        return value

    if entry.schema_type == "number":
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return value
        return number if math.isfinite(number) else value

    if entry.schema_type == "array" and entry.items == "string":
        return [part.strip() for part in value.split(",") if part.strip()]

    return value


def coerce_payload(metadata: Any, payload: dict[str, Any]) -> dict[str, Any]:
    """
    Return a copy of payload with text answers converted per field schema.

    The input payload is not modified.
    """
    fields = payload.get("fields")
    if not isinstance(fields, dict):
        return payload

    schema = {entry.key: entry for entry in extract_fields(metadata)}
    coerced = {
        key: coerce_value(schema[key], value) if key in schema else value
        for key, value in fields.items()
    }
    if coerced == fields:
        return payload

    updated = dict(payload)
    updated["fields"] = coerced
    return updated
