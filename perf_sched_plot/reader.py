"""Line sources — perf sched timehist subprocess, saved report files, stdin."""

import logging
import subprocess
import sys
from typing import Generator, Iterable

logger = logging.getLogger(__name__)


class TraceSourceError(RuntimeError):
    """The trace-producing process could not be run or failed."""


def build_timehist_command(
    use_sudo: bool = True,
    perf_binary: str = "perf",
    extra_args: Iterable[str] = (),
) -> list[str]:
    """Return argv for ``[sudo] perf sched timehist [extra_args...]``."""
    argv = ["sudo"] if use_sudo else []
    argv += [perf_binary, "sched", "timehist", *extra_args]
    return argv


def stream_command(argv: list[str]) -> Generator[str, None, None]:
    """Spawn *argv* and yield its stdout line by line, in production order.

    Raises TraceSourceError if the command cannot be started or exits
    non-zero. Closing the generator early terminates the child process.
    """
    logger.info("Running: %s", " ".join(argv))
    try:
        proc = subprocess.Popen(
            argv,
            stdout=subprocess.PIPE,
            text=True,
            errors="replace",
            bufsize=1,
        )
    except (FileNotFoundError, PermissionError) as e:
        raise TraceSourceError(f"Cannot run {argv[0]}: {e}") from e

    finished = False
    try:
        for line in proc.stdout:
            yield line
        finished = True
    finally:
        proc.stdout.close()
        if not finished and proc.poll() is None:
            logger.debug("Terminating %s (pid %d)", argv[0], proc.pid)
            proc.terminate()
        returncode = proc.wait()

    if returncode != 0:
        raise TraceSourceError(f"{' '.join(argv)} exited with status {returncode}")


def read_lines(path: str) -> Generator[str, None, None]:
    """Yield lines from a saved timehist report. ``-`` reads stdin."""
    if path == "-":
        yield from sys.stdin
        return
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        yield from f
