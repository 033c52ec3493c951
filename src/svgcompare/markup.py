"""Coerce free-form model output into one embeddable ``<svg>`` fragment.

``normalize`` is total: any input maps either to markup that starts with
``<svg`` and ends with ``</svg>`` (with viewBox, width and height declared) or
to the empty string, which callers treat as "no usable output".
"""

from __future__ import annotations

import re
from typing import Any, Optional

from svgcompare import logger as logger_mod

log = logger_mod.get_logger()

DEFAULT_VIEW_BOX = "0 0 100 100"

OPEN_TOKEN = "<svg"
CLOSE_TOKEN = "</svg>"

# ```svg ... ``` / ```xml ... ``` / ``` ... ```
_FENCE_RE = re.compile(r"```[ \t]*([A-Za-z0-9_+-]*)[ \t]*\r?\n?(.*?)```", re.DOTALL)

_OPEN_TAG_RE = re.compile(r"<svg(?=[\s/>])[^>]*>")


def _has_attr(tag: str, name: str) -> bool:
    # `width` must not match `stroke-width`
    return re.search(rf"(?<![\w:-]){re.escape(name)}\s*=", tag) is not None


def strip_fences(text: str) -> str:
    """Return the body of the first fenced block holding an ``<svg`` tag.

    Text without such a block is returned unchanged.
    """

    for m in _FENCE_RE.finditer(text):
        body = m.group(2)
        if OPEN_TOKEN in body:
            return body.strip()
    return text


def extract_svg(text: str) -> str:
    """First ``<svg ...>`` through the nearest following ``</svg>``, or ``""``."""

    for m in _OPEN_TAG_RE.finditer(text):
        if m.group(0).endswith("/>"):
            # self-closing <svg/> has no body; keep looking
            continue
        end = text.find(CLOSE_TOKEN, m.end())
        if end == -1:
            return ""
        return text[m.start() : end + len(CLOSE_TOKEN)]
    return ""


def _repair_open_tag(tag: str, *, view_box: str, label: Optional[str]) -> str:
    if not _has_attr(tag, "viewBox"):
        tag = f'{OPEN_TOKEN} viewBox="{view_box}"' + tag[len(OPEN_TOKEN) :]

    additions = []
    if not _has_attr(tag, "width"):
        additions.append('width="100%"')
    if not _has_attr(tag, "height"):
        additions.append('height="100%"')
    if label and not (_has_attr(tag, "aria-label") or _has_attr(tag, "aria-labelledby")):
        if not _has_attr(tag, "role"):
            additions.append('role="img"')
        safe = label.replace("&", "&amp;").replace('"', "&quot;").replace("<", "&lt;")
        additions.append(f'aria-label="{safe}"')

    if additions:
        head = tag[:-1].rstrip()
        tag = f"{head} {' '.join(additions)}>"
    return tag


def is_normalized(markup: str) -> bool:
    return markup.startswith(OPEN_TOKEN) and markup.endswith(CLOSE_TOKEN)


def normalize(
    raw: Any,
    *,
    view_box: str = DEFAULT_VIEW_BOX,
    label: Optional[str] = None,
) -> str:
    """Extract and repair an SVG fragment from raw provider text.

    Steps, in order: strip code fences, extract the first ``<svg>`` element,
    add a default ``viewBox`` when missing, add ``width``/``height`` of 100%
    when missing, optionally add an accessible label, then validate the
    boundaries. Returns ``""`` when no usable fragment exists.
    """

    if not isinstance(raw, str) or not raw.strip():
        return ""

    working = strip_fences(raw)
    svg = extract_svg(working)
    if not svg:
        log.debug(f"No <svg> element found in {len(raw)} chars of output")
        return ""

    m = _OPEN_TAG_RE.match(svg)
    if m is None:
        return ""
    svg = _repair_open_tag(m.group(0), view_box=view_box, label=label) + svg[m.end() :]

    if not is_normalized(svg):
        return ""
    return svg
