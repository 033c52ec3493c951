from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from svgcompare import logger as logger_mod

from .orchestrator import GenerationOrchestrator
from .providers.errors import InvalidRequest

log = logger_mod.get_logger()

GENERIC_FAILURE = "Failed to generate SVGs"


def _parse_payload(payload: Any) -> Mapping[str, Any]:
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8", errors="replace")
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise InvalidRequest(f"Request body is not JSON: {e}") from e
    if not isinstance(payload, Mapping):
        raise InvalidRequest("Request body must be a JSON object")
    return payload


def handle_generate(
    payload: Any, *, orchestrator: GenerationOrchestrator | None = None
) -> tuple[int, dict[str, Any]]:
    """Boundary for a `{"prompt": ...}` request, e.g. behind a POST route.

    Returns `(status, body)`:
    - 200 with `{provider_id: markup}` (always one entry per provider)
    - 400 when the prompt is missing or blank; no provider is called
    - 500 with a generic message for anything unexpected
    """

    try:
        body = _parse_payload(payload)
        orchestrator = orchestrator or GenerationOrchestrator.from_env()
        result = orchestrator.generate_all(body.get("prompt"))
        return 200, result.to_dict()
    except InvalidRequest as e:
        log.warning(f"Rejected generate request: {e}")
        return 400, {"error": "Prompt is required"}
    except Exception:  # noqa: BLE001
        log.exception("Error generating SVGs")
        return 500, {"error": GENERIC_FAILURE}
