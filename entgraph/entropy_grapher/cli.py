"""CLI entry point for the Entropy Grapher.

Measures the Shannon entropy of a file in fixed-size blocks, plots the
entropy curve against the suspicious threshold, and lists every block at
or above the threshold.

Usage examples::

    # Defaults: 32-byte blocks, threshold 5.0, plot saved to point.png
    python -m entgraph.entropy_grapher.cli /samples/packed.exe

    # 256-byte blocks, flag blocks at 7.2 bits/byte or more, SVG output
    python -m entgraph.entropy_grapher.cli /samples/packed.exe 256 7.2 packed.svg

Each suspicious block is printed as::

    [0x00001000,0x00001100] -> 7.812781224489123

Designed for Python 3.10+.
"""

from __future__ import annotations

import argparse
import logging
import sys

from entgraph.common.entropy import InvalidArgumentError, format_entropy
from entgraph.common.report import (
    format_bytes,
    format_duration,
    format_offset,
    print_banner,
    print_finding,
    print_summary,
)

from .analyzer import EntropyGrapher, GraphResult
from .config import (
    DEFAULT_BLOCK_SIZE,
    DEFAULT_OUTPUT,
    DEFAULT_SUSPICIOUS_ENTROPY,
    GraphConfig,
)
from .plotter import RenderError, render_plot

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Report helpers
# ---------------------------------------------------------------------------


def _print_suspicious_report(result: GraphResult) -> None:
    """Print the suspicious-block count and one line per block."""
    classification = result.classification
    if classification is None or classification.count == 0:
        print("No suspicious blocks")
        return

    print(f"[*] Suspicious blocks : {classification.count}")
    for line in classification.report_lines():
        print(line)


def _print_result_summary(result: GraphResult) -> None:
    """Print a concise summary of the analysis to the terminal."""
    peak = result.peak_block
    stats = {
        "File size": format_bytes(result.file_size),
        "Total entropy": f"{result.total_entropy:.6f}",
        "Blocks": len(result.blocks),
        "Suspicious": len(result.suspicious),
        "Scan time": format_duration(result.scan_duration_seconds),
    }
    if peak is not None:
        stats["Peak block"] = (
            f"[{format_offset(peak.offset_from)},{format_offset(peak.offset_to)}] "
            f"{peak.entropy:.6f}"
        )
    print_summary(f"Analysis: {result.file_path.name}", stats)


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


def _run(config: GraphConfig) -> int:
    """Analyse, plot and report according to *config*."""
    print(
        f"[+] Filename {config.filename}, block size : {config.block_size}, "
        f"suspicious entropy {format_entropy(config.suspicious_entropy)}, "
        f"output {config.output}"
    )

    result = EntropyGrapher(config).run()

    print(f"[*] Total Entropy {format_entropy(result.total_entropy)}")

    print("[+] Graphing..")
    try:
        saved = render_plot(result)
    except RenderError as exc:
        logger.debug("Plot rendering failed", exc_info=True)
        print_finding("Unable to graph", {"Error": str(exc)}, severity="warning")
    else:
        print(f"  Plot saved: {saved}")

    _print_suspicious_report(result)
    _print_result_summary(result)
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="ent-graph",
        description=(
            "Entropy Grapher -- plot the per-block Shannon entropy of a "
            "file and list blocks whose entropy suggests compressed, "
            "encrypted or packed content."
        ),
    )
    parser.add_argument(
        "filename",
        help="Path to the file to analyse.",
    )
    # Numeric values stay strings here; GraphConfig.from_args validates them.
    parser.add_argument(
        "block_size",
        nargs="?",
        default=None,
        help=f"Block size in bytes (default: {DEFAULT_BLOCK_SIZE}).",
    )
    parser.add_argument(
        "suspicious_entropy",
        nargs="?",
        default=None,
        help=(
            "Entropy in bits/byte at or above which a block is reported "
            f"as suspicious, at most 8.0 (default: {DEFAULT_SUSPICIOUS_ENTROPY:g})."
        ),
    )
    parser.add_argument(
        "output",
        nargs="?",
        default=None,
        help=f"Output image path; format follows the extension (default: {DEFAULT_OUTPUT}).",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging.",
    )
    return parser


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for the Entropy Grapher."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = GraphConfig.from_args(
            args.filename,
            args.block_size,
            args.suspicious_entropy,
            args.output,
        )
    except InvalidArgumentError as exc:
        # Prints usage and exits with status 2.
        parser.error(str(exc))

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    print_banner("Entropy Grapher")

    try:
        return _run(config)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nScan interrupted by user.", file=sys.stderr)
        return 130
    except Exception as exc:
        logger.exception("Unexpected error during analysis")
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
