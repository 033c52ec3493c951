"""Text-generation provider clients (DeepSeek / Gemini / OpenAI).

Design goals:
- Keep each provider's wire format isolated in its own client class.
- Expose one small interface: ``generate(prompt) -> raw text``.
- Fail with ``ProviderUnavailable`` / ``ProviderResponseMalformed`` only.
"""

from .base import ProviderClient
from .errors import (
    ExportNotSupported,
    InvalidRequest,
    ProviderError,
    ProviderResponseMalformed,
    ProviderUnavailable,
    SvgCompareError,
)
from .factory import build_all_clients, build_client
from .types import ProviderConfig, ProviderId, ProviderOutcome

__all__ = [
    "ExportNotSupported",
    "InvalidRequest",
    "ProviderClient",
    "ProviderConfig",
    "ProviderError",
    "ProviderId",
    "ProviderOutcome",
    "ProviderResponseMalformed",
    "ProviderUnavailable",
    "SvgCompareError",
    "build_all_clients",
    "build_client",
]
