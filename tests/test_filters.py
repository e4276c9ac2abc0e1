"""Tests for perf_sched_plot/filters.py"""

import unittest
from argparse import Namespace

from perf_sched_plot.filters import (
    build_filter_chain,
    filter_by_cpu,
    filter_by_pid,
    filter_by_thread_name,
)
from perf_sched_plot.parser import SchedRecord


def _record(
    task_name="tokio-runtime-w",
    tid=426106,
    pid=426078,
    cpu=5,
    sch_delay_ms=0.002,
) -> SchedRecord:
    """Helper to create a SchedRecord for testing."""
    return SchedRecord(
        time=2777601.142344,
        cpu=cpu,
        task_name=task_name,
        tid=tid,
        pid=pid,
        wait_time_ms=0.0,
        sch_delay_ms=sch_delay_ms,
        run_time_ms=0.004,
    )


class TestFilterByPid(unittest.TestCase):
    def test_matches_tid(self):
        self.assertTrue(filter_by_pid(_record(tid=426106), 426106))

    def test_process_id_does_not_match(self):
        self.assertFalse(filter_by_pid(_record(tid=426106, pid=426078), 426078))

    def test_tid_only_record(self):
        self.assertTrue(filter_by_pid(_record(tid=18, pid=None), 18))


class TestFilterByThreadName(unittest.TestCase):
    def test_exact_match(self):
        self.assertTrue(filter_by_thread_name(_record(task_name="migration/0"), "migration/0"))

    def test_no_partial_match(self):
        self.assertFalse(filter_by_thread_name(_record(task_name="migration/0"), "migration"))

    def test_case_sensitive(self):
        self.assertFalse(filter_by_thread_name(_record(task_name="sshd"), "SSHD"))

    def test_trailing_space_not_trimmed(self):
        self.assertFalse(filter_by_thread_name(_record(task_name="Web Content "), "Web Content"))


class TestFilterByCpu(unittest.TestCase):
    def test_match(self):
        self.assertTrue(filter_by_cpu(_record(cpu=0), 0))

    def test_no_match(self):
        self.assertFalse(filter_by_cpu(_record(cpu=5), 0))


class TestBuildFilterChain(unittest.TestCase):
    def _args(self, **kwargs):
        defaults = {"pid": None, "thread_name": None, "cpu": None}
        defaults.update(kwargs)
        return Namespace(**defaults)

    def test_no_filters_accepts_all(self):
        fn = build_filter_chain(self._args())
        self.assertTrue(fn(_record()))

    def test_pid_filter(self):
        fn = build_filter_chain(self._args(pid=18))
        self.assertTrue(fn(_record(tid=18)))
        self.assertFalse(fn(_record(tid=19)))

    def test_pid_zero_is_active(self):
        fn = build_filter_chain(self._args(pid=0))
        self.assertFalse(fn(_record(tid=18)))

    def test_cpu_zero_is_active(self):
        fn = build_filter_chain(self._args(cpu=0))
        self.assertTrue(fn(_record(cpu=0)))
        self.assertFalse(fn(_record(cpu=1)))

    def test_combined_and(self):
        fn = build_filter_chain(self._args(pid=18, thread_name="migration/0"))
        self.assertTrue(fn(_record(tid=18, task_name="migration/0")))
        self.assertFalse(fn(_record(tid=18, task_name="sshd")))
        self.assertFalse(fn(_record(tid=1, task_name="migration/0")))

    def test_missing_attributes(self):
        fn = build_filter_chain(Namespace())
        self.assertTrue(fn(_record()))


if __name__ == "__main__":
    unittest.main()
