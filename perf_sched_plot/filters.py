"""Filter predicates for sched records — pid, thread name, cpu."""

from typing import Callable

from perf_sched_plot.parser import SchedRecord


def filter_by_pid(record: SchedRecord, pid: int) -> bool:
    """True if the record's tid equals *pid*.

    perf prints threads as [tid/pid]; the filter targets the thread id.
    """
    return record.tid == pid


def filter_by_thread_name(record: SchedRecord, name: str) -> bool:
    """True if the task name equals *name* exactly."""
    return record.task_name == name


def filter_by_cpu(record: SchedRecord, cpu: int) -> bool:
    return record.cpu == cpu


def build_filter_chain(args) -> Callable[[SchedRecord], bool]:
    """Combine all active filters from parsed args into a single callable.

    Returns a function that ANDs all active predicates together.
    """
    predicates = []

    if getattr(args, "pid", None) is not None:
        pid = args.pid
        predicates.append(lambda record, p=pid: filter_by_pid(record, p))

    if getattr(args, "thread_name", None):
        name = args.thread_name
        predicates.append(lambda record, n=name: filter_by_thread_name(record, n))

    if getattr(args, "cpu", None) is not None:
        cpu = args.cpu
        predicates.append(lambda record, c=cpu: filter_by_cpu(record, c))

    if not predicates:
        return lambda record: True

    def combined(record: SchedRecord) -> bool:
        return all(p(record) for p in predicates)

    return combined
