from __future__ import annotations

import re
from dataclasses import dataclass

STYLE_ID = "animation-styles"

EASING_OPTIONS = (
    "linear",
    "ease",
    "ease-in",
    "ease-out",
    "ease-in-out",
    "cubic-bezier(0.4, 0, 0.2, 1)",
    "cubic-bezier(0, 0, 0.2, 1)",
    "cubic-bezier(0.4, 0, 1, 1)",
)

_KEYFRAMES = {
    "fade": "0% { opacity: 0; } 100% { opacity: 1; }",
    "scale": "0% { transform: scale(0); } 100% { transform: scale(1); }",
    "rotate": "0% { transform: rotate(-90deg); } 100% { transform: rotate(0); }",
    "translate": (
        "0% { transform: translateY(20px); opacity: 0; } "
        "100% { transform: translateY(0); opacity: 1; }"
    ),
}

_STROKED = "path, line, rect, circle, ellipse, polyline, polygon"

ANIMATION_KINDS = tuple(_KEYFRAMES) + ("path",)

_STYLE_RE = re.compile(rf'<style id="{STYLE_ID}">.*?</style>', re.DOTALL)
_OPEN_TAG_RE = re.compile(r"<svg(?=[\s/>])[^>]*>")


@dataclass(frozen=True)
class AnimationSettings:
    kind: str = "fade"
    duration_ms: int = 1000
    delay_ms: int = 0
    easing: str = "ease"

    def __post_init__(self) -> None:
        if self.kind not in ANIMATION_KINDS:
            raise ValueError(f"Unknown animation kind: {self.kind!r}")
        if self.easing not in EASING_OPTIONS:
            raise ValueError(f"Unknown easing: {self.easing!r}")
        if not 100 <= int(self.duration_ms) <= 5000:
            raise ValueError("duration_ms must be between 100 and 5000")
        if not 0 <= int(self.delay_ms) <= 2000:
            raise ValueError("delay_ms must be between 0 and 2000")


def build_style_block(settings: AnimationSettings) -> str:
    timing = f"{settings.duration_ms}ms {settings.easing} {settings.delay_ms}ms forwards"
    if settings.kind == "path":
        rules = (
            "@keyframes pathAnimation { 0% { stroke-dashoffset: 1000; } "
            "100% { stroke-dashoffset: 0; } } "
            f"{_STROKED} {{ stroke-dasharray: 1000; stroke-dashoffset: 1000; "
            f"animation: pathAnimation {timing}; }}"
        )
    else:
        rules = (
            f"@keyframes svgAnimation {{ {_KEYFRAMES[settings.kind]} }} "
            f"* {{ animation: svgAnimation {timing}; }}"
        )
    return f'<style id="{STYLE_ID}">{rules}</style>'


def remove_animation(svg: str) -> str:
    return _STYLE_RE.sub("", svg)


def apply_animation(svg: str, settings: AnimationSettings | None = None) -> str:
    """Inject (or replace) the preview animation style block.

    The block goes right after the root opening tag, so the result still
    starts with `<svg` and ends with `</svg>`.
    """

    if not svg:
        return ""
    settings = settings or AnimationSettings()

    svg = remove_animation(svg)
    m = _OPEN_TAG_RE.search(svg)
    if m is None:
        return svg
    return svg[: m.end()] + build_style_block(settings) + svg[m.end() :]
