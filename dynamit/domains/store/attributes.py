"""Conversion between DynamoDB typed attributes and plain JSON values."""

from __future__ import annotations

import base64
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from boto3.dynamodb.types import Binary, TypeDeserializer

_deserializer = TypeDeserializer()


def to_plain(value: Any) -> Any:
    """Normalize deserialized values so json.dumps accepts them.

    Numbers become int when integral and float otherwise, sets become sorted
    lists and binary values become base64 strings.
    """
    if isinstance(value, dict):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [to_plain(item) for item in value]
    if isinstance(value, set):
        converted = [to_plain(item) for item in value]
        try:
            return sorted(converted)
        except TypeError:
            return converted
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, Binary):
        return base64.b64encode(value.value).decode("ascii")
    if isinstance(value, bytes | bytearray):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value


def attribute_to_json(attribute: Mapping[str, Any]) -> Any:
    """Convert one typed attribute (e.g. ``{"N": "42"}``) to a plain value."""
    return to_plain(_deserializer.deserialize(dict(attribute)))


def item_to_json(item: Mapping[str, Mapping[str, Any]]) -> dict[str, Any]:
    return {name: attribute_to_json(attribute) for name, attribute in item.items()}


def key_attribute(value: str, attribute_type: str) -> dict[str, Any]:
    """Build a typed key attribute from text typed by the user."""
    if attribute_type == "N":
        return {"N": value.strip()}
    if attribute_type == "B":
        return {"B": value.encode("utf-8")}
    return {"S": value}
