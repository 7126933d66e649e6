"""Tests for entgraph.entropy_grapher.plotter -- entropy curve rendering."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from matplotlib.figure import Figure

from entgraph.entropy_grapher import plotter
from entgraph.entropy_grapher.analyzer import EntropyGrapher, GraphResult
from entgraph.entropy_grapher.config import GraphConfig
from entgraph.entropy_grapher.plotter import RenderError, render_plot

_PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def _analyze(data: bytes, output: Path) -> GraphResult:
    config = GraphConfig.from_args("mem", "64", "6.0", output)
    return EntropyGrapher(config).analyze_bytes(data)


class TestRenderPlot:
    """Image output and failure handling."""

    def test_png_written_to_config_output(self, tmp_path: Path) -> None:
        out = tmp_path / "point.png"
        result = _analyze(b"\x00" * 512 + os.urandom(512), out)
        saved = render_plot(result)
        assert saved == out
        assert out.read_bytes().startswith(_PNG_MAGIC)

    def test_explicit_output_overrides_config(self, tmp_path: Path) -> None:
        result = _analyze(os.urandom(256), tmp_path / "ignored.png")
        out = tmp_path / "chosen.svg"
        assert render_plot(result, out) == out
        assert b"<svg" in out.read_bytes()
        assert not (tmp_path / "ignored.png").exists()

    def test_empty_result_still_renders(self, tmp_path: Path) -> None:
        out = tmp_path / "empty.png"
        result = _analyze(b"", out)
        render_plot(result)
        assert out.exists()

    def test_missing_directory_raises_render_error(self, tmp_path: Path) -> None:
        out = tmp_path / "no" / "such" / "dir" / "plot.png"
        result = _analyze(os.urandom(128), out)
        with pytest.raises(RenderError, match="Unable to save plot"):
            render_plot(result)

    def test_unsupported_format_raises_render_error(self, tmp_path: Path) -> None:
        out = tmp_path / "plot.notaformat"
        result = _analyze(os.urandom(128), out)
        with pytest.raises(RenderError):
            render_plot(result)
        assert not out.exists()

    def test_render_error_is_runtime_error(self) -> None:
        assert issubclass(RenderError, RuntimeError)

    def test_drawing_error_raises_render_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Errors other than I/O or format errors are wrapped as well."""

        def _overflow(self: Figure, *args: object, **kwargs: object) -> None:
            raise OverflowError("In draw_path: Exceeded cell block limit")

        monkeypatch.setattr(Figure, "savefig", _overflow)
        result = _analyze(os.urandom(128), tmp_path / "plot.png")
        with pytest.raises(RenderError, match="Exceeded cell block limit") as excinfo:
            render_plot(result)
        assert isinstance(excinfo.value.__cause__, OverflowError)

    def test_figure_creation_error_raises_render_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _broken(*args: object, **kwargs: object) -> None:
            raise RuntimeError("no canvas")

        monkeypatch.setattr(plotter.plt, "subplots", _broken)
        result = _analyze(os.urandom(128), tmp_path / "plot.png")
        with pytest.raises(RenderError, match="no canvas"):
            render_plot(result)
