"""Entropy curve rendering.

Draws the per-block entropy of an analysed file as a line-and-marker plot
against block offset, overlaid with a horizontal line at the suspicious
threshold, and saves it as an image.  The image format follows the output
file extension (``.png``, ``.svg``, ``.pdf``, ...).
"""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib

# No display is needed to save an image.
matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from entgraph.common.entropy import MAX_ENTROPY  # noqa: E402

from .analyzer import GraphResult  # noqa: E402

logger = logging.getLogger(__name__)

# 20 cm x 20 cm
_FIGURE_SIZE_INCHES: tuple[float, float] = (20 / 2.54, 20 / 2.54)
_DPI: int = 100


class RenderError(RuntimeError):
    """Raised when the entropy plot cannot be drawn or saved."""


def render_plot(result: GraphResult, output: Path | None = None) -> Path:
    """Render the entropy curve of *result* to an image file.

    Parameters
    ----------
    result:
        Analysis result from :class:`EntropyGrapher`.
    output:
        Destination path.  Defaults to ``result.config.output``.

    Returns
    -------
    Path
        The path the image was written to.

    Raises
    ------
    RenderError
        If the figure cannot be built or the file cannot be written
        (missing directory, unsupported extension, permission denied,
        or any error raised while drawing).
    """
    output = Path(output) if output is not None else result.config.output

    fig = None
    try:
        fig, ax = plt.subplots(figsize=_FIGURE_SIZE_INCHES, dpi=_DPI)

        xs, ys = result.entropy_series()
        ax.plot(xs, ys, marker="o", markersize=3, linewidth=1, label="line")

        tx, ty = result.threshold_series()
        ax.plot(
            tx,
            ty,
            marker="^",
            markersize=3,
            linewidth=1,
            linestyle="--",
            color="tab:red",
            label="suspicious",
        )

        ax.set_title("Entropy")
        ax.set_xlabel("offsets")
        ax.set_ylabel("Entropy")
        ax.set_ylim(0, MAX_ENTROPY + 0.5)
        ax.grid(True, alpha=0.3)
        ax.legend(loc="lower right")

        fig.savefig(output)
    except Exception as exc:
        raise RenderError(f"Unable to save plot to {output}: {exc}") from exc
    finally:
        if fig is not None:
            plt.close(fig)

    logger.info("Saved entropy plot: %s", output)
    return output
