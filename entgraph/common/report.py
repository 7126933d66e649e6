"""Terminal reporting utilities for entropy analysis.

Shared terminal output helpers built on the ``rich`` library: banners,
findings, summary panels and progress bars, plus the plain-text
formatters used in log messages and reports.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.text import Text

# A module-level console instance used by all printing helpers.
_console: Console = Console()

# Severity-to-colour mapping for :func:`print_finding`.
_SEVERITY_STYLES: dict[str, str] = {
    "info": "bold cyan",
    "warning": "bold yellow",
    "critical": "bold red",
}


# ---------------------------------------------------------------------------
# Terminal output
# ---------------------------------------------------------------------------

def print_banner(tool_name: str, version: str = "1.0.0") -> None:
    """Print a styled banner identifying the tool and its version.

    Parameters
    ----------
    tool_name:
        Display name of the tool (e.g. ``"Entropy Grapher"``).
    version:
        Version string shown alongside the tool name.
    """
    title_text = Text(tool_name, style="bold white")
    subtitle = Text(f"v{version}", style="dim")
    panel = Panel(
        title_text,
        subtitle=subtitle,
        border_style="bright_blue",
        expand=False,
        padding=(1, 4),
    )
    _console.print(panel)


def print_finding(
    title: str,
    details: dict[str, Any],
    severity: str = "info",
) -> None:
    """Print a formatted finding to the terminal.

    Parameters
    ----------
    title:
        Short description of the finding.
    details:
        Key/value pairs providing additional context.  Values are printed
        verbatim, without rich markup interpretation.
    severity:
        One of ``"info"``, ``"warning"``, or ``"critical"``.  Controls the
        colour and prefix label of the output.
    """
    severity = severity.lower()
    label = severity.upper()

    style = _SEVERITY_STYLES.get(severity, "bold cyan")
    _console.print(Text(f"[{label}] {title}", style=style))
    for key, value in details.items():
        _console.print(Text(f"  {key}: {value}"))
    _console.print()


def print_summary(title: str, stats: dict[str, Any]) -> None:
    """Print a summary box with key statistics.

    Parameters
    ----------
    title:
        Heading for the summary panel.
    stats:
        Key/value pairs rendered inside the box.
    """
    body = Text()
    for i, (key, value) in enumerate(stats.items()):
        if i:
            body.append("\n")
        body.append(f"{key}:", style="bold")
        body.append(f" {value}")
    panel = Panel(body, title=title, border_style="green", expand=False)
    _console.print(panel)


def create_progress(description: str = "Scanning") -> Progress:
    """Create a configured :class:`rich.progress.Progress` bar.

    The bar shows a spinner, description, bar, count, elapsed time and
    estimated time remaining.  It is transient so it disappears once the
    computation finishes and leaves the report output clean.

    Parameters
    ----------
    description:
        Label displayed next to the progress bar.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        TimeRemainingColumn(),
        console=_console,
        transient=True,
    )


# ---------------------------------------------------------------------------
# Formatting utilities
# ---------------------------------------------------------------------------

_BYTE_UNITS: list[tuple[int, str]] = [
    (1 << 40, "TiB"),
    (1 << 30, "GiB"),
    (1 << 20, "MiB"),
    (1 << 10, "KiB"),
]


def format_bytes(n: int) -> str:
    """Return a human-readable byte-size string using IEC binary units.

    Examples: ``"1.5 GiB"``, ``"256 MiB"``, ``"0 B"``.

    Raises
    ------
    ValueError
        If *n* is negative.
    """
    if n < 0:
        raise ValueError(f"Byte count must be non-negative, got {n}")

    for threshold, unit in _BYTE_UNITS:
        if n >= threshold:
            value = n / threshold
            # Drop the decimal when it would be ".0".
            if value == int(value):
                return f"{int(value)} {unit}"
            return f"{value:.1f} {unit}"

    return f"{n} B"


def format_duration(seconds: float) -> str:
    """Return a human-readable duration string.

    Examples: ``"2m 34s"``, ``"0s"``, ``"1h 5m 0s"``.
    """
    if seconds < 0:
        raise ValueError(f"Duration must be non-negative, got {seconds}")

    total = int(seconds)
    h, remainder = divmod(total, 3600)
    m, s = divmod(remainder, 60)

    if h > 0:
        return f"{h}h {m}m {s}s"
    if m > 0:
        return f"{m}m {s}s"
    return f"{s}s"


def format_offset(offset: int) -> str:
    """Return *offset* as an 8-digit zero-padded hex string (``0x0000abcd``)."""
    if offset < 0:
        raise ValueError(f"Offset must be non-negative, got {offset}")
    return f"0x{offset:08x}"
