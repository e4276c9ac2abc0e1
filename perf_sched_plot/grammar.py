"""Field grammar for perf sched timehist lines.

Each parser takes ``(line, pos)`` and returns ``(value, new_pos)`` with the
cursor placed right after the consumed tokens, or raises a ParseError.

Field shapes:
  time / durations   2777601.141980      [0-9.]+
  cpu                [0005]              exactly 4 digits in brackets
  task name          tokio-runtime-w     everything up to the first '['
  identity           [426106/426078]     tid/pid, or tid alone: [18]
"""

import re

from perf_sched_plot.errors import (
    EmptyTaskName,
    InvalidCpuField,
    InvalidIdentityField,
    MalformedNumber,
    MissingSeparator,
    UnexpectedEndOfInput,
)

_NUMBER_RE = re.compile(r"[0-9.]+")
_CPU_RE = re.compile(r"\[([0-9]{4})\]")
_TID_PID_RE = re.compile(r"([0-9]+)/([0-9]+)")
_TID_RE = re.compile(r"[0-9]+")
_SPACES_RE = re.compile(r" *")
_WHITESPACE_RE = re.compile(r"[ \t\r\n]*")

U16_MAX = 0xFFFF
U64_MAX = 0xFFFFFFFFFFFFFFFF


def _require_input(line: str, pos: int, what: str) -> None:
    if pos >= len(line):
        raise UnexpectedEndOfInput(f"line ended before {what}", line, pos)


# ---------------------------------------------------------------------------
# Whitespace
# ---------------------------------------------------------------------------


def skip_spaces(line: str, pos: int) -> int:
    """Skip literal spaces only (leading indentation)."""
    return _SPACES_RE.match(line, pos).end()


def skip_whitespace(line: str, pos: int) -> int:
    """Skip zero or more whitespace characters."""
    return _WHITESPACE_RE.match(line, pos).end()


def require_whitespace(line: str, pos: int) -> int:
    """Consume one or more whitespace characters."""
    _require_input(line, pos, "separator")
    end = skip_whitespace(line, pos)
    if end == pos:
        raise MissingSeparator(f"expected whitespace, found {line[pos]!r}", line, pos)
    return end


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


def parse_number(line: str, pos: int) -> tuple[float, int]:
    """Parse an unsigned decimal like ``0.002`` or ``2777601.141980``."""
    _require_input(line, pos, "number")
    m = _NUMBER_RE.match(line, pos)
    if not m:
        raise MalformedNumber(f"expected number, found {line[pos]!r}", line, pos)
    try:
        value = float(m.group())
    except ValueError:
        raise MalformedNumber(f"invalid number {m.group()!r}", line, pos) from None
    return value, m.end()


def parse_cpu(line: str, pos: int) -> tuple[int, int]:
    """Parse a bracketed 4-digit CPU index like ``[0005]``."""
    _require_input(line, pos, "cpu field")
    m = _CPU_RE.match(line, pos)
    if not m:
        raise InvalidCpuField("expected [NNNN] cpu field", line, pos)
    cpu = int(m.group(1))
    if cpu > U16_MAX:
        raise InvalidCpuField(f"cpu index {cpu} out of range", line, pos)
    return cpu, m.end()


def parse_task_name(line: str, pos: int) -> tuple[str, int]:
    """Take everything up to the first '['.

    Spaces right before the bracket are kept as part of the name.
    """
    _require_input(line, pos, "task name")
    end = line.find("[", pos)
    if end == -1:
        raise UnexpectedEndOfInput("no '[' after task name", line, len(line))
    if end == pos:
        raise EmptyTaskName("empty task name", line, pos)
    return line[pos:end], end


def _match_uint(pattern: re.Pattern, line: str, pos: int):
    m = pattern.match(line, pos)
    if not m or any(int(g) > U64_MAX for g in m.groups() or (m.group(),)):
        return None
    return m


def parse_identity(line: str, pos: int) -> tuple[tuple[int, int | None], int]:
    """Parse ``[tid/pid]`` or ``[tid]``.

    The tid/pid form is tried first so a tid followed by '/' is never taken
    as a bare tid.
    """
    _require_input(line, pos, "identity field")
    if line[pos] != "[":
        raise InvalidIdentityField("expected '['", line, pos)
    start = pos + 1

    m = _match_uint(_TID_PID_RE, line, start)
    if m:
        ident = (int(m.group(1)), int(m.group(2)))
    else:
        m = _match_uint(_TID_RE, line, start)
        if not m:
            raise InvalidIdentityField("expected tid or tid/pid", line, start)
        ident = (int(m.group()), None)

    end = m.end()
    if end >= len(line) or line[end] != "]":
        raise InvalidIdentityField("expected ']'", line, end)
    return ident, end + 1
