from __future__ import annotations

import time
from collections.abc import Mapping
from concurrent.futures import ALL_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Iterator, Optional

from svgcompare import config
from svgcompare import logger as logger_mod

from .markup import normalize
from .providers.base import ProviderClient
from .providers.errors import InvalidRequest, ProviderError
from .providers.types import ProviderId, ProviderOutcome

log = logger_mod.get_logger()

Normalizer = Callable[[str], str]


def validate_prompt(prompt: Any) -> str:
    if not isinstance(prompt, str) or not prompt.strip():
        raise InvalidRequest("Prompt is required")
    return prompt.strip()


class GenerationResultSet(Mapping):
    """Immutable provider -> markup mapping produced by one orchestrated call.

    Keys are always every `ProviderId`; values are normalized markup or "".
    Lookups accept either the enum member or its string id.
    """

    __slots__ = ("_markup", "_outcomes")

    def __init__(self, outcomes: Mapping[ProviderId, ProviderOutcome]):
        self._outcomes = tuple(outcomes[p] for p in ProviderId)
        self._markup = {o.provider: o.markup for o in self._outcomes}

    def __getitem__(self, key: ProviderId | str) -> str:
        try:
            return self._markup[ProviderId(key)]
        except ValueError:
            raise KeyError(key) from None

    def __iter__(self) -> Iterator[ProviderId]:
        return iter(self._markup)

    def __len__(self) -> int:
        return len(self._markup)

    def __repr__(self) -> str:
        ok = [p.value for p, m in self._markup.items() if m]
        return f"GenerationResultSet(ok={ok})"

    @property
    def outcomes(self) -> tuple[ProviderOutcome, ...]:
        return self._outcomes

    def outcome(self, provider: ProviderId | str) -> ProviderOutcome:
        p = ProviderId(provider)
        return next(o for o in self._outcomes if o.provider is p)

    def to_dict(self) -> dict[str, str]:
        return {p.value: m for p, m in self._markup.items()}


class GenerationOrchestrator:
    """Fan one prompt out to every provider and join all outcomes.

    Each provider runs on its own worker thread. A failure in one branch is
    recorded as "" for that provider and never affects the others.
    """

    def __init__(
        self,
        clients: Mapping[ProviderId, ProviderClient],
        *,
        normalizer: Normalizer = normalize,
        join_timeout_s: Optional[float] = None,
    ) -> None:
        self._clients = {ProviderId(p): c for p, c in clients.items()}
        self._normalize = normalizer
        self._join_timeout_s = join_timeout_s

    @classmethod
    def from_env(
        cls, *, join_timeout_s: Optional[float] = None
    ) -> "GenerationOrchestrator":
        """Clients and join deadline from `svgcompare.config`."""

        from .providers.factory import build_all_clients

        if join_timeout_s is None:
            join_timeout_s = config.JOIN_TIMEOUT_S
        return cls(build_all_clients(), join_timeout_s=join_timeout_s)

    def _run_one(self, provider: ProviderId, prompt: str) -> ProviderOutcome:
        client = self._clients[provider]
        started = time.monotonic()
        try:
            raw = client.generate(prompt)
        except ProviderError as e:
            log.warning(f"[{provider.value}] generation failed: {e}")
            return ProviderOutcome(
                provider, "", error=str(e), elapsed_s=time.monotonic() - started
            )
        except Exception as e:  # noqa: BLE001
            log.exception(f"[{provider.value}] unexpected client error")
            return ProviderOutcome(
                provider, "", error=repr(e), elapsed_s=time.monotonic() - started
            )

        markup = self._normalize(raw)
        elapsed = time.monotonic() - started
        if not markup:
            log.info(f"[{provider.value}] no usable <svg> in response")
            return ProviderOutcome(
                provider, "", error="No SVG found in response", elapsed_s=elapsed
            )

        log.info(
            f"✅ [{provider.value}] {len(markup)} chars of markup "
            f"({logger_mod.format_elapsed(elapsed)})"
        )
        return ProviderOutcome(provider, markup, elapsed_s=elapsed)

    def generate_all(self, prompt: Any) -> GenerationResultSet:
        prompt = validate_prompt(prompt)

        outcomes: dict[ProviderId, ProviderOutcome] = {
            p: ProviderOutcome(p, "", error="Provider not configured")
            for p in ProviderId
            if p not in self._clients
        }

        executor = ThreadPoolExecutor(
            max_workers=max(1, len(self._clients)),
            thread_name_prefix="svgcompare",
        )
        try:
            futures: dict[Future, ProviderId] = {
                executor.submit(self._run_one, p, prompt): p for p in self._clients
            }
            done, pending = wait(
                futures, timeout=self._join_timeout_s, return_when=ALL_COMPLETED
            )
            for fut in done:
                p = futures[fut]
                outcomes[p] = fut.result()
            for fut in pending:
                p = futures[fut]
                fut.cancel()
                log.warning(
                    f"[{p.value}] still running after {self._join_timeout_s}s; "
                    "recording as unavailable"
                )
                outcomes[p] = ProviderOutcome(
                    p,
                    "",
                    error=f"Timed out after {self._join_timeout_s}s",
                    elapsed_s=float(self._join_timeout_s or 0.0),
                )
        finally:
            # Do not block on a stuck branch; its result is already discarded.
            executor.shutdown(wait=False, cancel_futures=True)

        result = GenerationResultSet(outcomes)
        log.info(
            f"Generated {sum(1 for o in result.outcomes if o.ok)}/{len(result)} "
            f"SVGs for prompt {prompt[:60]!r}"
        )
        return result


def generate_all(
    prompt: Any, *, orchestrator: GenerationOrchestrator | None = None
) -> GenerationResultSet:
    """Convenience wrapper using clients configured from the environment."""

    orchestrator = orchestrator or GenerationOrchestrator.from_env()
    return orchestrator.generate_all(prompt)
