from __future__ import annotations

import requests

from svgcompare import config

from ._retry import RetryConfig
from .base import HttpProviderClient
from .deepseek_client import DeepSeekClient
from .errors import SvgCompareError
from .gemini_client import GeminiClient
from .openai_client import OpenAIClient
from .types import ProviderConfig, ProviderId


def config_for(provider: ProviderId | str) -> ProviderConfig:
    """Provider settings as loaded from the environment by `svgcompare.config`."""

    p = ProviderId(str(provider).lower().strip())
    common = dict(
        timeout_s=config.PROVIDER_TIMEOUT_S,
        temperature=config.TEMPERATURE,
        max_output_tokens=config.MAX_OUTPUT_TOKENS,
    )
    if p is ProviderId.DEEPSEEK:
        return ProviderConfig(
            provider=p,
            base_url=config.DEEPSEEK_BASE_URL,
            model=config.DEEPSEEK_MODEL,
            api_key_env="DEEPSEEK_API_KEY",
            api_key=config.DEEPSEEK_API_KEY,
            **common,
        )
    if p is ProviderId.GEMINI:
        return ProviderConfig(
            provider=p,
            base_url=config.GEMINI_BASE_URL,
            model=config.GEMINI_MODEL,
            api_key_env="GEMINI_API_KEY",
            api_key=config.GEMINI_API_KEY,
            **common,
        )
    return ProviderConfig(
        provider=p,
        base_url=config.OPENAI_BASE_URL,
        model=config.OPENAI_MODEL,
        api_key_env="OPENAI_API_KEY",
        api_key=config.OPENAI_API_KEY,
        **common,
    )


def build_client(
    provider: ProviderId | str,
    *,
    cfg: ProviderConfig | None = None,
    session: requests.Session | None = None,
    retry: RetryConfig | None = None,
) -> HttpProviderClient:
    """Factory for provider clients.

    Providers:
    - deepseek
    - gemini
    - openai
    """

    try:
        p = ProviderId(str(provider).lower().strip())
    except ValueError as e:
        raise SvgCompareError(f"Unknown provider: {provider}") from e

    cfg = cfg or config_for(p)
    retry = retry or RetryConfig(max_attempts=config.PROVIDER_MAX_ATTEMPTS)

    if p is ProviderId.DEEPSEEK:
        return DeepSeekClient(cfg, session=session, retry=retry)
    if p is ProviderId.GEMINI:
        return GeminiClient(cfg, session=session, retry=retry)
    return OpenAIClient(cfg, session=session, retry=retry)


def build_all_clients(
    *, session: requests.Session | None = None
) -> dict[ProviderId, HttpProviderClient]:
    """One client per known provider, sharing a single HTTP session."""

    session = session or requests.Session()
    return {p: build_client(p, session=session) for p in ProviderId}
