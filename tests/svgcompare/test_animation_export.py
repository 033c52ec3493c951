import datetime

import pytest

from svgcompare.animation import (
    STYLE_ID,
    AnimationSettings,
    apply_animation,
    build_style_block,
    remove_animation,
)
from svgcompare.export import default_filename, export, export_svg, prepare_svg
from svgcompare.markup import is_normalized
from svgcompare.providers.errors import ExportNotSupported

SVG = '<svg viewBox="0 0 100 100" width="100%" height="100%"><circle r="10"/></svg>'


def test_apply_animation_injects_inside_root():
    out = apply_animation(SVG, AnimationSettings(kind="rotate", duration_ms=500))
    assert is_normalized(out)
    assert out.startswith(
        f'<svg viewBox="0 0 100 100" width="100%" height="100%"><style id="{STYLE_ID}">'
    )
    assert "rotate(-90deg)" in out
    assert "500ms ease 0ms forwards" in out


def test_reapplying_replaces_previous_block():
    once = apply_animation(SVG, AnimationSettings(kind="fade"))
    twice = apply_animation(once, AnimationSettings(kind="scale"))
    assert twice.count(f'<style id="{STYLE_ID}">') == 1
    assert "scale(0)" in twice
    assert "opacity: 0" not in twice


def test_path_animation_targets_stroked_shapes():
    block = build_style_block(AnimationSettings(kind="path", easing="linear"))
    assert "pathAnimation" in block
    assert "stroke-dasharray: 1000" in block
    assert "linear" in block


def test_remove_animation_restores_markup():
    assert remove_animation(apply_animation(SVG)) == SVG


def test_empty_markup_stays_empty():
    assert apply_animation("") == ""


@pytest.mark.parametrize(
    "kwargs",
    [
        {"kind": "morph"},
        {"easing": "bounce"},
        {"duration_ms": 50},
        {"duration_ms": 6000},
        {"delay_ms": -1},
        {"delay_ms": 2500},
    ],
)
def test_invalid_settings_raise(kwargs):
    with pytest.raises(ValueError):
        AnimationSettings(**kwargs)


def test_prepare_svg_adds_metadata_once():
    now = datetime.datetime(2026, 1, 19, 15, 30)
    out = prepare_svg(SVG, provider="openai", now=now)
    assert (
        "<metadata><generator>svgcompare</generator><provider>openai</provider>"
        "<created>2026-01-19 15:30</created></metadata>"
    ) in out
    assert is_normalized(out)
    assert prepare_svg(out, provider="openai").count("<metadata>") == 1


def test_prepare_svg_can_drop_animation_and_metadata():
    animated = apply_animation(SVG)
    out = prepare_svg(animated, include_metadata=False, include_animation=False)
    assert out == SVG


def test_prepare_svg_rejects_empty():
    with pytest.raises(ValueError):
        prepare_svg("")


def test_export_svg_writes_file(tmp_path):
    target = tmp_path / "nested" / "out.svg"
    path = export_svg(SVG, str(target), provider="gemini", include_metadata=False)
    assert path == str(target)
    assert target.read_text(encoding="utf-8") == SVG


def test_export_defaults_filename(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = export(SVG, "SVG", provider="deepseek")
    assert path == default_filename("deepseek") == "svg-export-deepseek.svg"
    assert (tmp_path / path).exists()


@pytest.mark.parametrize("fmt", ["png", "jpg", "gif", "mp4"])
def test_raster_and_video_export_not_supported(fmt, tmp_path):
    with pytest.raises(ExportNotSupported):
        export(SVG, fmt, str(tmp_path / f"x.{fmt}"))


def test_unknown_export_format():
    with pytest.raises(ValueError):
        export(SVG, "bmp")
