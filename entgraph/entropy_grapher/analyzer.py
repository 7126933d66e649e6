"""Entropy analysis pipeline for a single input file.

The pipeline is strictly linear:

    Read:       Load the whole file read-only into memory.

    Partition:  Split the buffer into fixed-size blocks and compute the
                Shannon entropy of each one.

    Classify:   Keep the blocks whose entropy meets the configured
                suspicious threshold.

The resulting :class:`GraphResult` carries everything the plotter and the
terminal report need.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from entgraph.common.entropy import (
    ClassificationResult,
    EntropyBlock,
    calculate_entropy,
    iter_blocks,
)
from entgraph.common.report import create_progress, format_bytes
from entgraph.common.safe_io import SafeReader

from .config import GraphConfig

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class GraphResult:
    """Complete result of an entropy analysis.

    Attributes
    ----------
    file_path:
        Resolved path of the analysed file.
    file_size:
        Total file size in bytes.
    config:
        The :class:`GraphConfig` used for this analysis.
    total_entropy:
        Shannon entropy of the whole file.
    blocks:
        Per-block entropy measurements, in offset order.
    classification:
        Blocks at or above the suspicious threshold.
    scan_duration_seconds:
        Wall-clock time for reading and measuring the file.
    """

    file_path: Path
    file_size: int
    config: GraphConfig
    total_entropy: float = 0.0
    blocks: list[EntropyBlock] = field(default_factory=list)
    classification: ClassificationResult | None = None
    scan_duration_seconds: float = 0.0

    @property
    def suspicious(self) -> tuple[EntropyBlock, ...]:
        """Suspicious blocks, or an empty tuple before classification."""
        if self.classification is None:
            return ()
        return self.classification.suspicious

    @property
    def peak_block(self) -> EntropyBlock | None:
        """The first block with the highest entropy, if any."""
        if not self.blocks:
            return None
        return max(self.blocks, key=lambda b: b.entropy)

    def entropy_series(self) -> tuple[list[float], list[float]]:
        """Return ``(x, y)`` points of the entropy curve.

        ``x`` is each block's starting offset and ``y`` its entropy.
        """
        xs = [float(b.offset_from) for b in self.blocks]
        ys = [b.entropy for b in self.blocks]
        return xs, ys

    def threshold_series(self) -> tuple[list[float], list[float]]:
        """Return ``(x, y)`` points of the horizontal threshold line.

        The line is sampled at the same offsets as the entropy curve.
        """
        xs = [float(b.offset_from) for b in self.blocks]
        ys = [self.config.suspicious_entropy] * len(xs)
        return xs, ys


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------


class EntropyGrapher:
    """Block entropy analyzer driven by an explicit :class:`GraphConfig`.

    Usage::

        config = GraphConfig.from_args("/samples/packed.exe", "64", "6.5")
        result = EntropyGrapher(config).run()
        for line in result.classification.report_lines():
            print(line)
    """

    def __init__(self, config: GraphConfig) -> None:
        self.config = config

    # -- public API ---------------------------------------------------------

    def run(self) -> GraphResult:
        """Read the configured file and analyse it.

        Raises
        ------
        FileNotFoundError
            If the input file does not exist.
        OSError
            If the input file cannot be read.
        """
        start_time = time.monotonic()

        with SafeReader(self.config.filename) as reader:
            file_path = reader.path
            data = reader.read_all()

        result = self._analyze(data, file_path)
        result.scan_duration_seconds = time.monotonic() - start_time
        return result

    def analyze_bytes(self, data: bytes, file_path: Path | None = None) -> GraphResult:
        """Analyse an in-memory buffer with the configured block size and threshold."""
        start_time = time.monotonic()
        result = self._analyze(data, file_path or self.config.filename)
        result.scan_duration_seconds = time.monotonic() - start_time
        return result

    # -- internals ----------------------------------------------------------

    def _analyze(self, data: bytes, file_path: Path) -> GraphResult:
        block_size = self.config.block_size
        threshold = self.config.suspicious_entropy

        logger.info(
            "Starting entropy scan: %s (%s, block size %d)",
            file_path,
            format_bytes(len(data)),
            block_size,
        )

        blocks = self._measure_blocks(data)
        total_entropy = calculate_entropy(data)
        classification = ClassificationResult.from_blocks(blocks, threshold)

        logger.info(
            "Scan complete: %d block(s), %d at or above %g bits/byte",
            len(blocks),
            classification.count,
            threshold,
        )

        return GraphResult(
            file_path=file_path,
            file_size=len(data),
            config=self.config,
            total_entropy=total_entropy,
            blocks=blocks,
            classification=classification,
        )

    def _measure_blocks(self, data: bytes) -> list[EntropyBlock]:
        """Partition *data* with a progress bar over the block count."""
        block_size = self.config.block_size
        # Validates block_size before anything divides by it.
        block_iter = iter_blocks(data, block_size)
        total_blocks = (len(data) + block_size - 1) // block_size
        blocks: list[EntropyBlock] = []

        with create_progress("Entropy scan") as progress:
            task = progress.add_task("Measuring blocks", total=total_blocks)
            for block in block_iter:
                blocks.append(block)
                progress.update(task, advance=1)

        return blocks
