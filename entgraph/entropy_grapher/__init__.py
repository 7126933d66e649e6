"""Entropy Grapher -- plot per-block entropy and flag suspicious regions.

Splits a file into fixed-size blocks, measures the Shannon entropy of
each block, renders the entropy curve against a threshold line, and
reports the blocks whose entropy suggests compressed, encrypted or
packed content.
"""

from .analyzer import EntropyGrapher, GraphResult
from .config import GraphConfig
from .plotter import RenderError, render_plot

__all__ = [
    "EntropyGrapher",
    "GraphConfig",
    "GraphResult",
    "RenderError",
    "render_plot",
]
