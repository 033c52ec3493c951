from __future__ import annotations

from typing import Any

import requests
from jsonschema import validate
from jsonschema.exceptions import ValidationError as _SchemaValidationError

from .errors import ProviderResponseMalformed


def parse_json(provider: str, resp: requests.Response) -> dict[str, Any]:
    """Decode a provider response body that is expected to be a JSON object."""

    try:
        data = resp.json()
    except ValueError as e:
        raise ProviderResponseMalformed(
            provider, f"Response body is not JSON: {e}"
        ) from e
    if not isinstance(data, dict):
        raise ProviderResponseMalformed(
            provider, f"Expected a JSON object, got {type(data).__name__}"
        )
    return data


def validate_envelope(
    provider: str, instance: dict[str, Any], schema: dict[str, Any]
) -> None:
    try:
        validate(instance=instance, schema=schema)
    except _SchemaValidationError as e:
        raise ProviderResponseMalformed(
            provider, f"Unexpected response envelope: {e.message}"
        ) from e
