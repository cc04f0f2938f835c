from __future__ import annotations

from pathlib import Path

import flet as ft

from pocketledger.desktop.charts import ChartProjector, income_expense_chart_png


def test_chart_png_written():
    path = income_expense_chart_png(100.0, 40.0, currency="TND")
    try:
        assert path.exists()
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
    finally:
        path.unlink(missing_ok=True)


def test_chart_png_handles_all_zero():
    path = income_expense_chart_png(0.0, 0.0)
    try:
        assert path.stat().st_size > 0
    finally:
        path.unlink(missing_ok=True)


def test_update_keeps_only_latest_render(tmp_path):
    calls: list[tuple[float, float]] = []

    def renderer(income: float, expense: float) -> Path:
        calls.append((income, expense))
        target = tmp_path / f"chart_{len(calls)}.png"
        target.write_bytes(b"png")
        return target

    image = ft.Image(src="")
    chart = ChartProjector(image, renderer=renderer)

    chart.update(100, 40)
    first = chart.path
    chart.update(100, 40)
    chart.update(100, 60)

    assert calls == [(100.0, 40.0), (100.0, 60.0)]
    assert chart.values == (100.0, 60.0)
    assert image.src == str(chart.path)
    assert not first.exists()

    chart.close()
    assert not (tmp_path / "chart_2.png").exists()


def test_missing_surface_is_inert():
    rendered = []
    chart = ChartProjector(None, renderer=lambda i, e: rendered.append((i, e)))

    chart.update(1, 2)

    assert chart.available is False
    assert chart.values is None
    assert rendered == []


def test_render_failure_disables_chart():
    def broken(income: float, expense: float) -> Path:
        raise RuntimeError("no backend")

    chart = ChartProjector(ft.Image(src=""), renderer=broken)

    chart.update(1, 2)
    chart.update(3, 4)

    assert chart.available is False
    assert chart.path is None
