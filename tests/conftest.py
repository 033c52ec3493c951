import sys
from pathlib import Path

import pytest


def pytest_configure():
    # This repo uses a src/ layout; make it importable without an editable install.
    repo_root = Path(__file__).resolve().parents[1]
    src_path = str(repo_root / "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


class FakeResponse:
    """Just enough of `requests.Response` for the provider clients."""

    def __init__(self, status_code=200, payload=None, *, text=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload
        self._text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._text is not None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Records every POST and replays queued responses (or raises queued errors)."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def post(self, url, params=None, headers=None, json=None, timeout=None):
        self.calls.append(
            {
                "url": url,
                "params": params,
                "headers": headers,
                "json": json,
                "timeout": timeout,
            }
        )
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def provider_config():
    """Factory: ProviderConfig with a dummy key and test-friendly timeout."""

    def _factory(provider="openai", **overrides):
        from svgcompare.providers.types import ProviderConfig, ProviderId

        p = ProviderId(provider)
        values = dict(
            provider=p,
            base_url=f"https://{p.value}.example/v1",
            model=f"{p.value}-model",
            api_key_env=f"{p.value.upper()}_API_KEY",
            api_key="sk-test",
            timeout_s=5.0,
        )
        values.update(overrides)
        return ProviderConfig(**values)

    return _factory
