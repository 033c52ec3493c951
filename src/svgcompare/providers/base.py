from __future__ import annotations

import time
from typing import Any, Protocol
from urllib.parse import urlsplit

import requests

from svgcompare import logger as logger_mod
from svgcompare.prompts import SVG_SYSTEM_PROMPT

from ._json import parse_json, validate_envelope
from ._retry import RetryConfig, execute_with_retry
from .errors import ProviderUnavailable
from .types import ProviderConfig, ProviderId

log = logger_mod.get_logger()


class ProviderClient(Protocol):
    """Prompt in, raw generated text out."""

    provider: ProviderId

    def generate(self, prompt: str) -> str:
        raise NotImplementedError


class HttpProviderClient:
    """Shared HTTP exchange for JSON text-generation APIs.

    Subclasses describe one provider's wire shape:
    - `ENVELOPE_SCHEMA`: JSON Schema the response must satisfy
    - `_endpoint()`, `_headers()`, `_params()`: where and how to authenticate
    - `_build_body(prompt)`: request payload
    - `_extract_text(data)`: pull the completion out of a validated envelope
    """

    ENVELOPE_SCHEMA: dict[str, Any] = {"type": "object"}

    def __init__(
        self,
        config: ProviderConfig,
        *,
        session: requests.Session | None = None,
        retry: RetryConfig | None = None,
        system_prompt: str | None = None,
    ):
        self._cfg = config
        self._session = session or requests.Session()
        self._retry = retry or RetryConfig()
        self._system_prompt = system_prompt or SVG_SYSTEM_PROMPT

    @property
    def provider(self) -> ProviderId:
        return self._cfg.provider

    @property
    def config(self) -> ProviderConfig:
        return self._cfg

    def _endpoint(self) -> str:
        raise NotImplementedError

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    def _params(self) -> dict[str, str]:
        return {}

    def _build_body(self, prompt: str) -> dict[str, Any]:
        raise NotImplementedError

    def _extract_text(self, data: dict[str, Any]) -> str:
        raise NotImplementedError

    def _host(self) -> str:
        return urlsplit(self._endpoint()).netloc

    def _post(self, body: dict[str, Any]) -> requests.Response:
        name = self.provider.value
        try:
            resp = self._session.post(
                self._endpoint(),
                params=self._params() or None,
                headers=self._headers(),
                json=body,
                timeout=self._cfg.timeout_s,
            )
        except requests.Timeout as e:
            raise ProviderUnavailable(
                name, f"Timed out after {self._cfg.timeout_s}s"
            ) from e
        except requests.RequestException as e:
            # Exception text carries the full URL, including any `key=` query secret.
            raise ProviderUnavailable(
                name, f"Request failed: {type(e).__name__} ({self._host()})"
            ) from e

        if not resp.ok:
            raise ProviderUnavailable(
                name,
                f"API request failed: {resp.status_code} {resp.reason}",
                status=resp.status_code,
            )
        return resp

    def generate(self, prompt: str) -> str:
        name = self.provider.value
        if not self._cfg.api_key:
            raise ProviderUnavailable(
                name, f"Missing env var {self._cfg.api_key_env} for {name} API key"
            )

        body = self._build_body(prompt)
        started = time.monotonic()
        resp = execute_with_retry(
            lambda: self._post(body),
            context=f"calling {name} ({self._cfg.model})",
            retry=self._retry,
        )

        data = parse_json(name, resp)
        validate_envelope(name, data, self.ENVELOPE_SCHEMA)
        text = self._extract_text(data).strip()
        log.info(
            f"[{name}] received {len(text)} chars in "
            f"{logger_mod.format_elapsed(time.monotonic() - started)}"
        )
        return text
