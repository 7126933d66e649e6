"""Block-wise Shannon entropy for binary files.

This module splits a byte buffer into fixed-size blocks, measures the
Shannon entropy of each block over the 256-value byte alphabet, and
selects the blocks whose entropy meets a caller-supplied threshold.

Suspicious Entropy
------------------
High local entropy is a cheap heuristic for packed, compressed, or
encrypted content embedded in an otherwise structured file:

- Cipher output and well-compressed data approach the theoretical
  maximum of 8.0 bits/byte.

- Machine code, tables and text sit noticeably lower because of
  byte-value skew and repetition.

- Padding and zero-filled regions have near-zero entropy.

Block size caps the measurable entropy: a block of *n* bytes holds at
most *n* distinct values, so its entropy never exceeds log2(n).  With the
command-line defaults (32-byte blocks, threshold 5.0) only blocks of 32
distinct bytes are flagged.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MAX_ENTROPY: float = 8.0

_REPORT_LINE_FORMAT: str = "[0x{0:08x},0x{1:08x}] -> {2}"


class InvalidArgumentError(ValueError):
    """Raised when a block size, threshold, or numeric argument is invalid."""


# ---------------------------------------------------------------------------
# Core entropy calculation
# ---------------------------------------------------------------------------

def calculate_entropy(data: bytes | memoryview) -> float:
    """Return the Shannon entropy of *data* on a 0.0 -- 8.0 scale.

    Each byte is treated as an independent symbol drawn from a 256-value
    alphabet.  The probability of a symbol is its count divided by the
    actual length of *data*, so a short trailing block is measured
    against its own length rather than the nominal block size.

    * 0.0  -- a single repeated byte value
    * 8.0  -- each of the 256 values equally likely

    Parameters
    ----------
    data:
        Raw bytes to analyse.  An empty buffer returns 0.0.

    Returns
    -------
    float
        Shannon entropy in bits per byte.
    """
    if not data:
        return 0.0

    length = len(data)
    counts = Counter(data)

    # Counter only holds observed symbols, so p is never zero here.
    entropy = 0.0
    for count in counts.values():
        p = count / length
        entropy -= p * math.log2(p)

    return entropy


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EntropyBlock:
    """Entropy measurement for one contiguous window of a buffer.

    Attributes
    ----------
    offset_from:
        Byte offset where the window starts (inclusive).
    offset_to:
        Byte offset where the window ends (exclusive).
    entropy:
        Shannon entropy of the window (0.0 -- 8.0).
    data:
        Read-only view over the window's bytes.  It shares memory with
        the buffer passed to :func:`partition` and is excluded from
        equality checks.
    """

    offset_from: int
    offset_to: int
    entropy: float
    data: memoryview = field(default=memoryview(b""), compare=False, repr=False)

    @property
    def size(self) -> int:
        """Length of the window in bytes."""
        return self.offset_to - self.offset_from


# ---------------------------------------------------------------------------
# Partitioning
# ---------------------------------------------------------------------------

def _check_block_size(block_size: int) -> None:
    if isinstance(block_size, bool) or not isinstance(block_size, int):
        raise InvalidArgumentError(
            f"block_size must be an integer, got {block_size!r}"
        )
    if block_size <= 0:
        raise InvalidArgumentError(f"block_size must be positive, got {block_size}")


def iter_blocks(data: bytes | bytearray | memoryview, block_size: int) -> Iterator[EntropyBlock]:
    """Yield one :class:`EntropyBlock` per *block_size* window of *data*.

    The block size is validated eagerly, before the first block is
    produced, so a bad value fails even if the generator is never
    consumed.

    Raises
    ------
    InvalidArgumentError
        If *block_size* is not a positive integer.
    """
    _check_block_size(block_size)
    return _generate_blocks(memoryview(data).toreadonly(), block_size)


def _generate_blocks(view: memoryview, block_size: int) -> Iterator[EntropyBlock]:
    length = len(view)
    # range() stops before ``length``, so an empty window is never measured.
    for offset_from in range(0, length, block_size):
        offset_to = min(offset_from + block_size, length)
        window = view[offset_from:offset_to]
        yield EntropyBlock(
            offset_from=offset_from,
            offset_to=offset_to,
            entropy=calculate_entropy(window),
            data=window,
        )


def partition(data: bytes | bytearray | memoryview, block_size: int) -> list[EntropyBlock]:
    """Split *data* into consecutive blocks and measure each one.

    Exactly ``ceil(len(data) / block_size)`` blocks are returned.  Every
    block except the last holds *block_size* bytes; the last holds the
    remainder, or a full *block_size* when the length divides evenly.
    Empty *data* produces an empty list.

    Parameters
    ----------
    data:
        Raw bytes to analyse.
    block_size:
        Size of each block in bytes.  Must be a positive integer.

    Returns
    -------
    list[EntropyBlock]
        Blocks in increasing offset order, covering ``[0, len(data))``.

    Raises
    ------
    InvalidArgumentError
        If *block_size* is not a positive integer.
    """
    return list(iter_blocks(data, block_size))


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def classify(blocks: Iterable[EntropyBlock], threshold: float) -> list[EntropyBlock]:
    """Return the blocks whose entropy is at least *threshold*.

    Relative order is preserved and the input is left untouched.  A
    threshold above :data:`MAX_ENTROPY` always produces an empty list.
    """
    return [block for block in blocks if block.entropy >= threshold]


def format_entropy(value: float) -> str:
    """Return the shortest string that round-trips *value*.

    Integral values drop the trailing ``.0`` (``8.0`` -> ``"8"``); all
    other values keep every digit needed to identify them.
    """
    return repr(float(value)).removesuffix(".0")


def format_block(block: EntropyBlock) -> str:
    """Render *block* as ``[0xOFFSET_FROM,0xOFFSET_TO] -> entropy``."""
    return _REPORT_LINE_FORMAT.format(
        block.offset_from, block.offset_to, format_entropy(block.entropy)
    )


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Suspicious blocks selected from a partitioned buffer.

    Attributes
    ----------
    threshold:
        Entropy threshold the blocks were compared against.
    suspicious:
        Blocks with ``entropy >= threshold``, in offset order.
    """

    threshold: float
    suspicious: tuple[EntropyBlock, ...] = ()

    @classmethod
    def from_blocks(
        cls, blocks: Iterable[EntropyBlock], threshold: float
    ) -> ClassificationResult:
        return cls(threshold=threshold, suspicious=tuple(classify(blocks, threshold)))

    @property
    def count(self) -> int:
        """Number of suspicious blocks."""
        return len(self.suspicious)

    def report_lines(self) -> list[str]:
        """Return one formatted line per suspicious block."""
        return [format_block(block) for block in self.suspicious]
