"""Run configuration for the entropy grapher.

All command-line values are funnelled through :meth:`GraphConfig.from_args`,
which parses and validates them in one step and fails fast with an
:class:`~entgraph.common.entropy.InvalidArgumentError` before any file is
touched.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path

from entgraph.common.entropy import MAX_ENTROPY, InvalidArgumentError

DEFAULT_BLOCK_SIZE: int = 32
DEFAULT_SUSPICIOUS_ENTROPY: float = 5.0
DEFAULT_OUTPUT: str = "point.png"


@dataclass(frozen=True, slots=True)
class GraphConfig:
    """Immutable configuration for a single entropy-graphing run.

    Attributes
    ----------
    filename:
        Path of the file to analyse.
    block_size:
        Size in bytes of each entropy window.  Default 32.
    suspicious_entropy:
        Blocks with entropy at or above this value (bits/byte) are
        reported as suspicious.  Default 5.0.
    output:
        Destination of the rendered plot.  The image format follows the
        file extension.  Default ``point.png``.
    """

    filename: Path
    block_size: int = DEFAULT_BLOCK_SIZE
    suspicious_entropy: float = DEFAULT_SUSPICIOUS_ENTROPY
    output: Path = Path(DEFAULT_OUTPUT)

    @classmethod
    def from_args(
        cls,
        filename: str | os.PathLike[str],
        block_size: str | int | None = None,
        suspicious_entropy: str | float | None = None,
        output: str | os.PathLike[str] | None = None,
    ) -> GraphConfig:
        """Build a validated configuration from raw argument values.

        ``None`` selects the default for that field.  String values are
        parsed as they would arrive from the command line.

        Raises
        ------
        InvalidArgumentError
            If *filename* is empty, *block_size* is not a positive integer,
            or *suspicious_entropy* is not a finite number no greater
            than 8.0.
        """
        if not str(filename):
            raise InvalidArgumentError("filename must not be empty")

        return cls(
            filename=Path(filename),
            block_size=_parse_block_size(block_size),
            suspicious_entropy=_parse_suspicious_entropy(suspicious_entropy),
            output=Path(output) if output else Path(DEFAULT_OUTPUT),
        )


def _parse_block_size(value: str | int | None) -> int:
    if value is None:
        return DEFAULT_BLOCK_SIZE
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Invalid block size: {value!r}")
    try:
        block_size = int(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Invalid block size: {value!r}") from None
    # int("3.5") fails above, but int(3.5) silently truncates.
    if isinstance(value, float) and not value.is_integer():
        raise InvalidArgumentError(f"Invalid block size: {value!r}")
    if block_size <= 0:
        raise InvalidArgumentError(f"Invalid block size: {value!r} (must be positive)")
    return block_size


def _parse_suspicious_entropy(value: str | float | None) -> float:
    if value is None:
        return DEFAULT_SUSPICIOUS_ENTROPY
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Invalid suspicious entropy: {value!r}")
    try:
        threshold = float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Invalid suspicious entropy: {value!r}") from None
    if not math.isfinite(threshold):
        raise InvalidArgumentError(f"Invalid suspicious entropy: {value!r} (must be finite)")
    if threshold > MAX_ENTROPY:
        raise InvalidArgumentError(
            f"Invalid suspicious entropy: {value!r} (must be <= {MAX_ENTROPY:g})"
        )
    return threshold
