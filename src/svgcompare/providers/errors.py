from __future__ import annotations


class SvgCompareError(RuntimeError):
    """Base error for svgcompare."""


class InvalidRequest(SvgCompareError):
    """The inbound prompt is missing or blank; no provider is invoked."""


class ExportNotSupported(SvgCompareError):
    """Requested export format needs a transcoder that is not available."""


class ProviderError(SvgCompareError):
    def __init__(self, provider: str, message: str, *, status: int | None = None):
        super().__init__(f"[{provider}] {message}")
        self.provider = provider
        self.status = status


class ProviderUnavailable(ProviderError):
    """Network failure, timeout, missing credentials or a non-2xx HTTP status."""


class ProviderResponseMalformed(ProviderError):
    """Transport succeeded but the envelope lacked the expected completion text."""
