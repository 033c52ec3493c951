import threading

import pytest

from svgcompare.orchestrator import (
    GenerationOrchestrator,
    GenerationResultSet,
    generate_all,
)
from svgcompare.providers.errors import (
    InvalidRequest,
    ProviderResponseMalformed,
    ProviderUnavailable,
)
from svgcompare.providers.types import ProviderId

EXPECTED_CIRCLE = (
    '<svg viewBox="0 0 100 100" width="100%" height="100%"><circle r="10"/></svg>'
)


class StubClient:
    def __init__(self, provider, result=None, error=None, on_call=None):
        self.provider = ProviderId(provider)
        self.result = result
        self.error = error
        self.on_call = on_call
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.on_call:
            self.on_call()
        if self.error is not None:
            raise self.error
        return self.result


def _clients(**overrides):
    clients = {
        p: StubClient(p, result=f'<svg><text>{p.value}</text></svg>') for p in ProviderId
    }
    clients.update(overrides)
    return clients


def test_happy_path_normalizes_every_provider():
    fenced = '```svg\n<svg><circle r="10"/></svg>\n```'
    clients = {p: StubClient(p, result=fenced) for p in ProviderId}

    result = GenerationOrchestrator(clients).generate_all("a red circle")

    assert set(result) == set(ProviderId)
    assert result.to_dict() == {p.value: EXPECTED_CIRCLE for p in ProviderId}
    assert all(c.prompts == ["a red circle"] for c in clients.values())


def test_one_failing_provider_is_isolated():
    clients = _clients(
        gemini=StubClient(
            "gemini", error=ProviderUnavailable("gemini", "500", status=500)
        )
    )

    result = GenerationOrchestrator(clients).generate_all("p")

    assert result["gemini"] == ""
    assert "deepseek" in result["deepseek"]
    assert "openai" in result["openai"]
    assert result.outcome("gemini").error.startswith("[gemini]")
    assert result.outcome("openai").ok is True


def test_all_failure_modes_collapse_to_empty_string():
    clients = {
        ProviderId.DEEPSEEK: StubClient(
            "deepseek", error=ProviderResponseMalformed("deepseek", "no choices")
        ),
        ProviderId.GEMINI: StubClient("gemini", result="I cannot draw that."),
        ProviderId.OPENAI: StubClient("openai", error=RuntimeError("bug in client")),
    }

    result = GenerationOrchestrator(clients).generate_all("p")

    assert result.to_dict() == {"deepseek": "", "gemini": "", "openai": ""}
    assert result.outcome("gemini").error == "No SVG found in response"
    assert "bug in client" in result.outcome("openai").error


def test_unconfigured_providers_still_have_entries():
    clients = {ProviderId.OPENAI: StubClient("openai", result="<svg></svg>")}

    result = GenerationOrchestrator(clients).generate_all("p")

    assert set(result) == set(ProviderId)
    assert result["deepseek"] == ""
    assert result["gemini"] == ""
    assert result["openai"].startswith("<svg viewBox=")


@pytest.mark.parametrize("prompt", ["", "   ", None, 123])
def test_invalid_prompt_fails_before_any_provider_call(prompt):
    clients = _clients()
    with pytest.raises(InvalidRequest):
        GenerationOrchestrator(clients).generate_all(prompt)
    assert all(c.prompts == [] for c in clients.values())


def test_providers_run_concurrently():
    # Every branch waits for the others; a sequential join would time out.
    barrier = threading.Barrier(len(ProviderId), timeout=5)
    clients = {
        p: StubClient(p, result="<svg></svg>", on_call=barrier.wait) for p in ProviderId
    }

    result = GenerationOrchestrator(clients).generate_all("p")

    assert all(result[p] for p in ProviderId)


def test_join_timeout_records_stuck_provider_as_empty():
    release = threading.Event()
    clients = _clients(
        deepseek=StubClient(
            "deepseek", result="<svg></svg>", on_call=lambda: release.wait(5)
        )
    )

    try:
        result = GenerationOrchestrator(clients, join_timeout_s=0.2).generate_all("p")
    finally:
        release.set()

    assert result["deepseek"] == ""
    assert "Timed out" in result.outcome("deepseek").error
    assert result["gemini"] and result["openai"]


def test_result_set_is_immutable_and_fresh_per_call():
    orch = GenerationOrchestrator(_clients())
    first = orch.generate_all("p")
    second = orch.generate_all("p")

    assert first is not second
    assert first == second
    with pytest.raises(TypeError):
        first["openai"] = "x"  # type: ignore[index]
    with pytest.raises(KeyError):
        first["anthropic"]
    assert "anthropic" not in first
    assert first.get("anthropic", "missing") == "missing"


def test_result_set_keys_and_lookup():
    result = GenerationOrchestrator(_clients()).generate_all("p")
    assert isinstance(result, GenerationResultSet)
    assert len(result) == 3
    assert result[ProviderId.OPENAI] == result["openai"]
    assert list(result.to_dict()) == ["deepseek", "gemini", "openai"]


def test_custom_normalizer_is_used():
    result = GenerationOrchestrator(_clients(), normalizer=lambda raw: "").generate_all(
        "p"
    )
    assert set(result.values()) == {""}


def test_module_level_generate_all_uses_given_orchestrator():
    orch = GenerationOrchestrator(_clients())
    assert generate_all("p", orchestrator=orch)["gemini"]


def test_end_to_end_with_fake_http(provider_config, fake_session, fake_response):
    from svgcompare.providers.deepseek_client import DeepSeekClient
    from svgcompare.providers.gemini_client import GeminiClient
    from svgcompare.providers.openai_client import OpenAIClient

    svg = '```svg\n<svg><circle r="10"/></svg>\n```'
    clients = {
        ProviderId.DEEPSEEK: DeepSeekClient(
            provider_config("deepseek"),
            session=fake_session(
                fake_response(200, {"choices": [{"message": {"content": svg}}]})
            ),
        ),
        ProviderId.GEMINI: GeminiClient(
            provider_config("gemini"),
            session=fake_session(fake_response(500, reason="Internal Server Error")),
        ),
        ProviderId.OPENAI: OpenAIClient(
            provider_config("openai"),
            session=fake_session(
                fake_response(
                    200, {"choices": [{"message": {"content": "Just prose."}}]}
                )
            ),
        ),
    }

    result = GenerationOrchestrator(clients).generate_all("a red circle")

    assert result.to_dict() == {
        "deepseek": EXPECTED_CIRCLE,
        "gemini": "",
        "openai": "",
    }


def test_from_env_defaults_join_deadline_to_config(monkeypatch):
    from svgcompare import config
    from svgcompare.providers import factory

    monkeypatch.setattr(config, "JOIN_TIMEOUT_S", 42.0)
    monkeypatch.setattr(factory, "build_all_clients", lambda: _clients())

    assert GenerationOrchestrator.from_env()._join_timeout_s == 42.0
    assert GenerationOrchestrator.from_env(join_timeout_s=3)._join_timeout_s == 3
