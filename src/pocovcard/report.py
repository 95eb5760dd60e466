from __future__ import annotations

from collections import Counter
from pathlib import Path

from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

_console = Console()

# ── Palette ────────────────────────────────────────────────────────────────────
_ACCENT  = "#4d9fff"
_GREEN   = "#3ecf8e"
_AMBER   = "#f0a500"
_DIM     = "#546075"
_BORDER  = "#2a3347"


class DropTally:
    """Drop hook that counts skipped attributes by (attribute, reason)."""

    def __init__(self) -> None:
        self.counts: Counter[tuple[str, str]] = Counter()

    def __call__(self, attribute: str, reason: str) -> None:
        self.counts[(attribute, reason)] += 1

    @property
    def total(self) -> int:
        return sum(self.counts.values())


def build_source_counts(pairs: list[tuple[object, str]]) -> dict[str, int]:
    return dict(Counter(label for _, label in pairs))


def _stat_panel(value: str, label: str, colour: str) -> Panel:
    body = Text()
    body.append(f"{value}\n", style=f"bold {colour}")
    body.append(label, style=f"dim {_DIM}")
    return Panel(body, border_style=_BORDER, padding=(0, 2), expand=True)


def print_summary(
    *,
    card_count: int,
    out_path: Path | str,
    tally: DropTally,
    source_counts: dict[str, int] | None = None,
    target: Console | None = None,
) -> None:
    console = target or _console
    console.print()
    console.print(Text("  CONVERSION SUMMARY", style=f"dim {_DIM}"))
    console.print()
    console.print(Columns([
        _stat_panel(str(card_count), "vCards written", _ACCENT),
        _stat_panel(str(len(source_counts or {})), "source files", _GREEN),
        _stat_panel(str(tally.total), "attributes skipped", _AMBER),
    ], equal=True, expand=True))

    if tally.counts:
        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("Attribute")
        table.add_column("Reason")
        table.add_column("Count", justify="right")
        for (attribute, reason), count in sorted(tally.counts.items()):
            table.add_row(attribute, reason, str(count))
        console.print(table)

    console.print(Text(f"  → {out_path}", style=f"dim {_DIM}"))
    console.print()
