"""Tests for perf_sched_plot/config.py"""

import os
import tempfile
import unittest
from argparse import Namespace
from unittest.mock import patch

from perf_sched_plot.config import Config, load_config, load_yaml_config


def _args(**kwargs) -> Namespace:
    defaults = {"bins": None, "width": None, "metric": None, "no_sudo": False}
    defaults.update(kwargs)
    return Namespace(**defaults)


class TestLoadYamlConfig(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def test_no_path(self):
        self.assertEqual(load_yaml_config(None), {})

    def test_missing_file(self):
        self.assertEqual(load_yaml_config(os.path.join(self.tmpdir, "nope.yml")), {})

    def test_reads_mapping(self):
        path = os.path.join(self.tmpdir, "config.yml")
        with open(path, "w") as f:
            f.write("bins: 20\nmetric: run_time\nuse_sudo: false\n")
        self.assertEqual(load_yaml_config(path), {"bins": 20, "metric": "run_time", "use_sudo": False})

    def test_empty_file(self):
        path = os.path.join(self.tmpdir, "empty.yml")
        open(path, "w").close()
        self.assertEqual(load_yaml_config(path), {})

    def test_non_mapping_rejected(self):
        path = os.path.join(self.tmpdir, "list.yml")
        with open(path, "w") as f:
            f.write("- a\n- b\n")
        with self.assertRaises(ValueError):
            load_yaml_config(path)


@patch.dict(os.environ, {}, clear=True)
class TestLoadConfig(unittest.TestCase):
    def test_defaults(self):
        self.assertEqual(load_config(_args(), {}), Config())

    def test_yaml_values(self):
        config = load_config(_args(), {"bins": 20, "perf_binary": "/opt/perf", "use_sudo": False})
        self.assertEqual(config.bins, 20)
        self.assertEqual(config.perf_binary, "/opt/perf")
        self.assertFalse(config.use_sudo)

    def test_env_overrides_yaml(self):
        with patch.dict(os.environ, {"HIST_BINS": "30", "PERF_USE_SUDO": "no"}):
            config = load_config(_args(), {"bins": 20, "use_sudo": True})
        self.assertEqual(config.bins, 30)
        self.assertFalse(config.use_sudo)

    def test_cli_overrides_env(self):
        with patch.dict(os.environ, {"HIST_METRIC": "wait_time"}):
            config = load_config(_args(metric="run_time"), {})
        self.assertEqual(config.metric, "run_time")

    def test_no_sudo_flag(self):
        with patch.dict(os.environ, {"PERF_USE_SUDO": "true"}):
            config = load_config(_args(no_sudo=True), {})
        self.assertFalse(config.use_sudo)

    def test_log_level_uppercased(self):
        config = load_config(_args(), {"log_level": "info"})
        self.assertEqual(config.log_level, "INFO")

    def test_unknown_metric(self):
        with self.assertRaises(ValueError):
            load_config(_args(metric="latency"), {})

    def test_zero_bins(self):
        with self.assertRaises(ValueError):
            load_config(_args(bins=0), {})

    def test_negative_width(self):
        with self.assertRaises(ValueError):
            load_config(_args(width=-5), {})

    def test_bad_log_level(self):
        with self.assertRaises(ValueError):
            load_config(_args(), {"log_level": "LOUD"})

    def test_frozen(self):
        config = Config()
        with self.assertRaises(AttributeError):
            config.bins = 5


if __name__ == "__main__":
    unittest.main()
