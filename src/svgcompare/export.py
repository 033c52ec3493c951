from __future__ import annotations

import datetime
import os
import re
from typing import Optional

from svgcompare import logger as logger_mod

from .animation import remove_animation
from .providers.errors import ExportNotSupported

log = logger_mod.get_logger()

EXPORT_FORMATS = ("svg", "png", "jpg", "gif", "mp4")

_OPEN_TAG_RE = re.compile(r"<svg(?=[\s/>])[^>]*>")


def default_filename(provider: str, fmt: str = "svg") -> str:
    return f"svg-export-{provider}.{fmt}"


def _metadata_element(provider: Optional[str], now: datetime.datetime) -> str:
    parts = ["<generator>svgcompare</generator>"]
    if provider:
        parts.append(f"<provider>{provider}</provider>")
    parts.append(f"<created>{logger_mod.format_date(now)}</created>")
    return f"<metadata>{''.join(parts)}</metadata>"


def prepare_svg(
    svg: str,
    *,
    provider: Optional[str] = None,
    include_metadata: bool = True,
    include_animation: bool = True,
    now: Optional[datetime.datetime] = None,
) -> str:
    """Return the document that would be written for an SVG export."""

    if not svg:
        raise ValueError("Nothing to export: markup is empty")

    if not include_animation:
        svg = remove_animation(svg)

    if include_metadata and "<metadata>" not in svg:
        m = _OPEN_TAG_RE.search(svg)
        if m is not None:
            meta = _metadata_element(provider, now or datetime.datetime.now())
            svg = svg[: m.end()] + meta + svg[m.end() :]
    return svg


def export_svg(
    svg: str,
    path: str,
    *,
    provider: Optional[str] = None,
    include_metadata: bool = True,
    include_animation: bool = True,
) -> str:
    """Write an `.svg` file, creating parent directories if needed."""

    doc = prepare_svg(
        svg,
        provider=provider,
        include_metadata=include_metadata,
        include_animation=include_animation,
    )
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(doc)
    log.info(f"💾 Exported SVG to {path}")
    return path


def export(
    svg: str,
    fmt: str,
    path: Optional[str] = None,
    *,
    provider: str = "svg",
    include_metadata: bool = True,
    include_animation: bool = True,
) -> str:
    """Export markup in `fmt`. Only `svg` is written; raster/video formats raise."""

    fmt = fmt.lower().strip()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format: {fmt!r}")
    if fmt != "svg":
        raise ExportNotSupported(
            f"Export as {fmt.upper()} requires a rasterizer/transcoder"
        )

    return export_svg(
        svg,
        path or default_filename(provider, fmt),
        provider=provider,
        include_metadata=include_metadata,
        include_animation=include_animation,
    )
