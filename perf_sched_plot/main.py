#!/usr/bin/env python3
"""perf-sched-plot — histogram of scheduler latencies from perf sched timehist."""

import logging
import math
import sys
from argparse import ArgumentParser

from perf_sched_plot.config import load_config, load_yaml_config
from perf_sched_plot.filters import build_filter_chain
from perf_sched_plot.histogram import METRICS, histogram, metric_value, render_histogram
from perf_sched_plot.parser import parse_lines
from perf_sched_plot.reader import TraceSourceError, build_timehist_command, read_lines, stream_command
from perf_sched_plot.stats import ParseCounts, compute_stats, format_stats_json, format_stats_text

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="perf-sched-plot",
        description="Plot a histogram of scheduling latencies reported by `perf sched timehist`.",
    )
    parser.add_argument(
        "-p", "--pid",
        type=int,
        help="Only keep events of this thread id",
    )
    parser.add_argument(
        "-t", "--thread-name",
        help="Only keep events whose task name matches exactly",
    )
    parser.add_argument(
        "--cpu",
        type=int,
        help="Only keep events recorded on this CPU",
    )
    parser.add_argument(
        "-i", "--input",
        help="Read a saved timehist report ('-' for stdin) instead of running perf",
    )
    parser.add_argument(
        "--metric",
        choices=sorted(METRICS),
        help="Duration column to plot (default: sch_delay)",
    )
    parser.add_argument(
        "--bins",
        type=int,
        help="Number of histogram bins (default: 10)",
    )
    parser.add_argument(
        "--width",
        type=int,
        help="Width of the longest bar in characters (default: 60)",
    )
    parser.add_argument(
        "--no-sudo",
        action="store_true",
        help="Run perf directly instead of through sudo",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show summary statistics instead of the histogram",
    )
    parser.add_argument(
        "--output",
        choices=["text", "json"],
        default="text",
        help="Statistics output format (default: text)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output (including skipped lines) to stderr",
    )
    return parser


def run_pipeline(args, config) -> int:
    """Assemble and execute the generator pipeline."""
    filter_fn = build_filter_chain(args)

    if args.input:
        lines = read_lines(args.input)
    else:
        lines = stream_command(build_timehist_command(config.use_sudo, config.perf_binary))

    counts = ParseCounts()
    records = parse_lines(lines, counts)
    records = (r for r in records if filter_fn(r))
    values = [metric_value(r, config.metric) for r in records]

    # overlong digit runs parse as inf
    samples = [v for v in values if math.isfinite(v)]
    dropped = len(values) - len(samples)

    logger.info("Parsed %d of %d lines (%d skipped), %d samples after filtering, %d non-finite dropped",
                counts.parsed, counts.total_lines, counts.skipped, len(samples), dropped)

    _, label = METRICS[config.metric]

    if args.stats:
        stats = compute_stats(samples)
        if args.output == "json":
            print(format_stats_json(stats, config.metric, counts))
        else:
            print(format_stats_text(stats, label, counts))
        return 0

    if not samples:
        print("No samples matched.", file=sys.stderr)
        return 0

    lo, hi = min(samples), max(samples)
    dist = histogram(samples, lo, hi, config.bins)
    print(render_histogram(dist, hi, config.width, label))
    return 0


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [SCHED-PLOT] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args, load_yaml_config(args.config))
        if not args.verbose:
            logging.getLogger().setLevel(config.log_level)
        return run_pipeline(args, config)
    except (TraceSourceError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (KeyboardInterrupt, BrokenPipeError):
        return 0


if __name__ == "__main__":
    sys.exit(main())
