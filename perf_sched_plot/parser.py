"""Timehist line parser — frozen dataclass + field grammar sequencing."""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from perf_sched_plot.errors import ParseError
from perf_sched_plot.grammar import (
    parse_cpu,
    parse_identity,
    parse_number,
    parse_task_name,
    require_whitespace,
    skip_spaces,
    skip_whitespace,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchedRecord:
    time: float
    cpu: int
    task_name: str
    tid: int
    pid: int | None
    wait_time_ms: float
    sch_delay_ms: float
    run_time_ms: float


def parse_line(line: str) -> SchedRecord:
    """Parse one ``perf sched timehist`` line into a SchedRecord.

    Example:
        " 2777601.141980 [0000]  migration/0[18]      0.000      0.002      0.012"

    Raises a ParseError subclass on the first field that does not match.
    Anything after the run time column (e.g. a newline) is ignored.
    """
    pos = skip_spaces(line, 0)

    time, pos = parse_number(line, pos)
    pos = require_whitespace(line, pos)

    cpu, pos = parse_cpu(line, pos)
    pos = require_whitespace(line, pos)

    task_name, pos = parse_task_name(line, pos)
    (tid, pid), pos = parse_identity(line, pos)
    pos = skip_whitespace(line, pos)

    wait_time_ms, pos = parse_number(line, pos)
    pos = require_whitespace(line, pos)
    sch_delay_ms, pos = parse_number(line, pos)
    pos = require_whitespace(line, pos)
    run_time_ms, pos = parse_number(line, pos)

    return SchedRecord(
        time=time,
        cpu=cpu,
        task_name=task_name,
        tid=tid,
        pid=pid,
        wait_time_ms=wait_time_ms,
        sch_delay_ms=sch_delay_ms,
        run_time_ms=run_time_ms,
    )


def try_parse_line(line: str) -> SchedRecord | None:
    """Parse a line, returning None for unparseable lines."""
    try:
        return parse_line(line)
    except ParseError as e:
        logger.debug("Skipping line (%s): %s", e.kind, e)
        return None


def parse_lines(lines: Iterable[str], counts=None) -> Iterator[SchedRecord]:
    """Yield a record for every parseable line, in input order.

    If *counts* (a ParseCounts) is given, every line is tallied into it.
    """
    for line in lines:
        try:
            record = parse_line(line)
        except ParseError as e:
            logger.debug("Skipping line (%s): %s", e.kind, e)
            if counts is not None:
                counts.record_failure(e)
            continue
        if counts is not None:
            counts.record_success()
        yield record
