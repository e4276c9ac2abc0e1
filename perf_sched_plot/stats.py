"""Statistics — parse counters and duration sample summaries."""

import json
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from perf_sched_plot.errors import ParseError


@dataclass
class ParseCounts:
    total_lines: int = 0
    parsed: int = 0
    skipped: int = 0
    error_kinds: Counter = field(default_factory=Counter)

    def record_success(self) -> None:
        self.total_lines += 1
        self.parsed += 1

    def record_failure(self, error: ParseError) -> None:
        self.total_lines += 1
        self.skipped += 1
        self.error_kinds[error.kind] += 1


@dataclass
class SampleStats:
    count: int = 0
    minimum: float | None = None
    maximum: float | None = None
    mean: float | None = None
    p50: float | None = None
    p95: float | None = None
    p99: float | None = None


def _percentile(ordered: list[float], pct: float) -> float:
    """Nearest-rank percentile of an already sorted, non-empty list."""
    rank = max(1, math.ceil(pct * len(ordered) / 100))
    return ordered[rank - 1]


def compute_stats(samples: Iterable[float]) -> SampleStats:
    """Consume a sample stream and produce summary statistics."""
    ordered = sorted(samples)
    if not ordered:
        return SampleStats()

    return SampleStats(
        count=len(ordered),
        minimum=ordered[0],
        maximum=ordered[-1],
        mean=math.fsum(ordered) / len(ordered),
        p50=_percentile(ordered, 50),
        p95=_percentile(ordered, 95),
        p99=_percentile(ordered, 99),
    )


def _fmt(value: float | None) -> str:
    return "-" if value is None else f"{value:.3f}"


def format_stats_text(stats: SampleStats, label: str, counts: ParseCounts | None = None) -> str:
    """Human-readable stats summary."""
    lines = []
    if counts is not None:
        lines.append(f"Lines read: {counts.total_lines}")
        lines.append(f"Parsed:     {counts.parsed}")
        lines.append(f"Skipped:    {counts.skipped}")
        for kind, n in counts.error_kinds.most_common():
            lines.append(f"  {kind:22s} {n}")
        lines.append("")

    lines.append(f"{label}:")
    lines.append(f"  samples  {stats.count}")
    lines.append(f"  min      {_fmt(stats.minimum)}")
    lines.append(f"  max      {_fmt(stats.maximum)}")
    lines.append(f"  mean     {_fmt(stats.mean)}")
    lines.append(f"  p50      {_fmt(stats.p50)}")
    lines.append(f"  p95      {_fmt(stats.p95)}")
    lines.append(f"  p99      {_fmt(stats.p99)}")
    return "\n".join(lines)


def format_stats_json(stats: SampleStats, metric: str, counts: ParseCounts | None = None) -> str:
    """JSON stats output."""
    data = {
        "metric": metric,
        "count": stats.count,
        "min": stats.minimum,
        "max": stats.maximum,
        "mean": stats.mean,
        "p50": stats.p50,
        "p95": stats.p95,
        "p99": stats.p99,
    }
    if counts is not None:
        data["lines"] = {
            "total": counts.total_lines,
            "parsed": counts.parsed,
            "skipped": counts.skipped,
            "error_kinds": dict(counts.error_kinds),
        }
    return json.dumps(data, indent=2)
