"""Histogram binning and terminal bar rendering for duration samples."""

import math
from typing import Iterable

from perf_sched_plot.parser import SchedRecord

# metric name -> (record attribute, display label)
METRICS = {
    "sch_delay": ("sch_delay_ms", "sched delay in ms"),
    "wait_time": ("wait_time_ms", "wait time in ms"),
    "run_time": ("run_time_ms", "run time in ms"),
}

BAR_CHAR = "#"


def metric_value(record: SchedRecord, metric: str) -> float:
    attr, _ = METRICS[metric]
    return getattr(record, attr)


def histogram(samples: Iterable[float], lo: float, hi: float, bins: int) -> list[tuple[float, int]]:
    """Count samples into *bins* equal-width bins spanning [lo, hi].

    Returns (bin_start, count) pairs. Non-finite samples and samples outside
    the range are ignored; a sample equal to *hi* lands in the last bin.
    When lo == hi every in-range sample lands in the first bin.
    """
    if bins < 1:
        raise ValueError(f"bins must be >= 1, got {bins}")

    counts = [0] * bins
    step = (hi - lo) / bins

    for value in samples:
        if not math.isfinite(value) or value < lo or value > hi:
            continue
        if step == 0:
            counts[0] += 1
            continue
        idx = int((value - lo) / step)
        counts[min(idx, bins - 1)] += 1

    return [(lo + i * step, count) for i, count in enumerate(counts)]


def render_histogram(dist: list[tuple[float, int]], hi: float, width: int = 60, label: str = "") -> str:
    """Draw one horizontal bar per bin, the longest bar being *width* chars."""
    total = sum(count for _, count in dist)
    peak = max((count for _, count in dist), default=0)

    lines = [f"Y={label}" if label else "Y=samples", f"Samples: {total}", ""]
    for i, (start, count) in enumerate(dist):
        end = dist[i + 1][0] if i + 1 < len(dist) else hi
        bar_len = round(count / peak * width) if peak else 0
        if count and not bar_len:
            bar_len = 1
        lines.append(f"{start:12.3f} - {end:12.3f} | {BAR_CHAR * bar_len} {count}")

    return "\n".join(lines)
