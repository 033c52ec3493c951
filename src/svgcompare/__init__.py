"""Compare SVG illustrations generated by several LLM providers.

External code usually needs only:

    from svgcompare import GenerationOrchestrator

    result = GenerationOrchestrator.from_env().generate_all("a red circle")
    result["openai"]  # normalized <svg>...</svg> or ""
"""

from .markup import normalize
from .orchestrator import GenerationOrchestrator, GenerationResultSet, generate_all
from .providers import (
    InvalidRequest,
    ProviderId,
    ProviderResponseMalformed,
    ProviderUnavailable,
)

__all__ = [
    "GenerationOrchestrator",
    "GenerationResultSet",
    "InvalidRequest",
    "ProviderId",
    "ProviderResponseMalformed",
    "ProviderUnavailable",
    "generate_all",
    "normalize",
]
