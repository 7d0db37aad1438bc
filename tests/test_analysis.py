"""Tests for statistics, experiment runners, CSV export, config and CLI."""

from contextlib import redirect_stdout
import csv
import io
import json
from pathlib import Path
import sys
import tempfile
import unittest
from unittest import mock

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import matplotlib

matplotlib.use("Agg")

from config_manager import ConfigManager
from queens_puzzle.analysis import cli, settings
from queens_puzzle.analysis.experiments import (
    run_generation_experiments,
    run_generation_experiments_parallel,
    run_seed,
    run_single_generation,
)
from queens_puzzle.analysis.plots import plot_comprehensive_analysis
from queens_puzzle.analysis.reporting import runs_to_frame, save_raw_runs_to_csv, save_summary_to_csv
from queens_puzzle.analysis.stats import compute_detailed_statistics, summarize_runs


def _quiet(fn, *args, **kwargs):
    with redirect_stdout(io.StringIO()):
        return fn(*args, **kwargs)


class StatisticsTests(unittest.TestCase):
    def test_empty_values(self):
        stats = compute_detailed_statistics([])
        self.assertEqual(stats["count"], 0)
        self.assertIsNone(stats["mean"])

    def test_summary_values(self):
        stats = compute_detailed_statistics([4.0, 1.0, 3.0, 2.0])
        self.assertEqual(stats["count"], 4)
        self.assertEqual(stats["mean"], 2.5)
        self.assertEqual(stats["median"], 2.5)
        self.assertEqual(stats["min"], 1.0)
        self.assertEqual(stats["max"], 4.0)
        self.assertEqual(stats["range"], 3.0)
        self.assertEqual(stats["q25"], 2.0)
        self.assertEqual(stats["q75"], 4.0)

    def test_summarize_runs_unique_rate(self):
        record = run_single_generation((6, "deduction", 0, 3, settings.MAX_COMPLETION_ITERATIONS, True))
        other = dict(record, completions=2)
        summary = summarize_runs([record, other])  # type: ignore[list-item]
        self.assertEqual(summary["total_runs"], 2)
        self.assertEqual(summary["unique_rate"], 0.5)
        self.assertEqual(summary["hints"]["count"], 2)


class ExperimentTests(unittest.TestCase):
    def test_run_seed(self):
        self.assertIsNone(run_seed(None, 8, 1))
        self.assertEqual(run_seed(42, 8, 1), 8043)

    def test_single_generation_record(self):
        record = run_single_generation((8, "uniqueness", 2, 10, settings.MAX_COMPLETION_ITERATIONS, True))
        self.assertEqual(record["n"], 8)
        self.assertEqual(record["oracle"], "uniqueness")
        self.assertEqual(record["completions"], 1)
        self.assertAlmostEqual(record["hint_ratio"], record["hints"] / 8)
        self.assertGreaterEqual(record["time"], record["minimize_time"])

    def test_sequential_results_shape(self):
        results = _quiet(run_generation_experiments, [4, 6], 3, ["deduction", "uniqueness"], seed=7, validate=True)
        self.assertEqual(set(results), {"deduction", "uniqueness"})
        for oracle in results:
            self.assertEqual(sorted(results[oracle]), [4, 6])
            for n, entry in results[oracle].items():
                self.assertEqual(entry["total_runs"], 3)
                self.assertEqual(len(entry["raw_runs"]), 3)
                self.assertEqual(entry["unique_rate"], 1.0)
        self.assertEqual(results["deduction"][4]["hints"]["mean"], 1.0)

    def test_same_seed_same_hint_counts(self):
        first = _quiet(run_generation_experiments, [7], 4, ["deduction"], seed=3)
        second = _quiet(run_generation_experiments, [7], 4, ["deduction"], seed=3)
        hints = lambda res: [r["hints"] for r in res["deduction"][7]["raw_runs"]]
        self.assertEqual(hints(first), hints(second))

    def test_parallel_matches_sequential(self):
        sequential = _quiet(run_generation_experiments, [5, 8], 2, ["deduction"], seed=11)
        parallel = _quiet(run_generation_experiments_parallel, [5, 8], 2, ["deduction"], seed=11, workers=2)
        for n in (5, 8):
            self.assertEqual(
                [r["hints"] for r in sequential["deduction"][n]["raw_runs"]],
                [r["hints"] for r in parallel["deduction"][n]["raw_runs"]],
            )

    def test_invalid_inputs_fail_fast(self):
        with self.assertRaises(ValueError):
            run_generation_experiments([3], 1, ["deduction"])
        with self.assertRaises(ValueError):
            run_generation_experiments([8], 1, ["guess"])


class ReportingTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.results = _quiet(run_generation_experiments, [4, 5], 2, ["deduction", "uniqueness"], seed=1)

    def test_csv_exports(self):
        with tempfile.TemporaryDirectory() as tmpdir, mock.patch.object(settings, "DATE_IN_FILENAMES", False):
            summary_path = _quiet(save_summary_to_csv, self.results, tmpdir)
            raw_path = _quiet(save_raw_runs_to_csv, self.results, tmpdir)
            self.assertEqual(Path(summary_path).name, "summary.csv")
            with open(summary_path, newline="") as f:
                rows = list(csv.DictReader(f))
            self.assertEqual(len(rows), 4)
            self.assertIn("hints_mean", rows[0])
            with open(raw_path, newline="") as f:
                raw = list(csv.DictReader(f))
            self.assertEqual(len(raw), 8)
            self.assertEqual({row["oracle"] for row in raw}, {"deduction", "uniqueness"})

    def test_run_tag_suffix(self):
        with tempfile.TemporaryDirectory() as tmpdir, mock.patch.multiple(
            settings, DATE_IN_FILENAMES=False, RUN_TAG="demo"
        ):
            path = _quiet(save_summary_to_csv, self.results, tmpdir)
            self.assertEqual(Path(path).name, "summary_demo.csv")

    def test_runs_to_frame(self):
        frame = runs_to_frame(self.results)
        self.assertEqual(len(frame), 8)
        self.assertEqual(list(frame["n"].unique()), [4, 5])
        self.assertTrue((frame["hints"] >= 1).all())
        self.assertEqual(len(runs_to_frame({})), 0)

    def test_plots_are_written(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            paths = _quiet(plot_comprehensive_analysis, self.results, tmpdir)
            self.assertEqual(len(paths), 4)
            for path in paths:
                self.assertTrue(Path(path).exists())


class ConfigAndCliTests(unittest.TestCase):
    def setUp(self):
        self._saved = {
            name: getattr(settings, name)
            for name in ("SIZES", "RUNS_PER_SIZE", "SEED", "OUT_DIR", "ORACLES", "MAX_COMPLETION_ITERATIONS")
        }

    def tearDown(self):
        for name, value in self._saved.items():
            setattr(settings, name, value)

    def _write_config(self, tmpdir, payload):
        path = Path(tmpdir) / "config.json"
        path.write_text(json.dumps(payload))
        return path

    def test_missing_config_file(self):
        with self.assertRaises(FileNotFoundError):
            ConfigManager("does/not/exist.json")

    def test_getters_read_written_file(self):
        payload = {
            "generation_settings": {"sizes": [6], "oracles": ["uniqueness"]},
            "oracle_settings": {"max_completion_iterations": 500},
        }
        with tempfile.TemporaryDirectory() as tmpdir:
            config = ConfigManager(self._write_config(tmpdir, payload))
        self.assertEqual(config.get_generation_settings()["sizes"], [6])
        self.assertEqual(config.get_oracles(), ["uniqueness"])
        self.assertEqual(config.get_oracle_settings(), {"max_completion_iterations": 500})

    def test_getters_default_when_sections_missing(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = ConfigManager(self._write_config(tmpdir, {}))
        self.assertEqual(config.get_generation_settings(), {})
        self.assertEqual(config.get_oracle_settings(), {})
        self.assertEqual(config.get_oracles(), ["deduction", "uniqueness"])

    def test_apply_configuration(self):
        payload = {
            "generation_settings": {"sizes": [5, 7], "runs_per_size": 3, "oracles": ["uniqueness"], "seed": 9},
            "oracle_settings": {"max_completion_iterations": 1234},
        }
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self._write_config(tmpdir, payload)
            _quiet(cli.apply_configuration, str(path))
        self.assertEqual(settings.SIZES, [5, 7])
        self.assertEqual(settings.RUNS_PER_SIZE, 3)
        self.assertEqual(settings.ORACLES, ["uniqueness"])
        self.assertEqual(settings.SEED, 9)
        self.assertEqual(settings.MAX_COMPLETION_ITERATIONS, 1234)

    def test_configuration_rejects_bad_sizes(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self._write_config(tmpdir, {"generation_settings": {"sizes": [2]}})
            with self.assertRaises(ValueError):
                cli.apply_configuration(str(path))

    def test_iteration_cap_must_be_positive(self):
        with self.assertRaises(ValueError):
            settings.set_iteration_cap(0)

    def test_parse_helpers(self):
        self.assertEqual(cli.parse_sizes(["4-6", "9,4"]), [4, 5, 6, 9])
        self.assertIsNone(cli.parse_sizes(None))
        with self.assertRaises(ValueError):
            cli.parse_sizes(["16"])
        self.assertEqual(cli.parse_oracle_filters(["Deduction,uniqueness", "deduction"]), ["deduction", "uniqueness"])
        with self.assertRaises(ValueError):
            cli.parse_oracle_filters(["guess"])

    def test_generate_command(self):
        out = io.StringIO()
        with redirect_stdout(out):
            cli.main(["generate", "6", "--seed", "3", "--show-solution"])
        text = out.getvalue()
        self.assertIn("=== N = 6, oracle deduction ===", text)
        self.assertIn("solvable by deduction", text)
        self.assertIn("Solution:", text)

    def test_generate_rejects_unsupported_size(self):
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["generate", "3"])
        self.assertEqual(ctx.exception.code, 1)

    def test_missing_config_exits(self):
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["--config", "does/not/exist.json", "generate", "6"])
        self.assertEqual(ctx.exception.code, 1)

    def test_benchmark_command(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            settings.OUT_DIR = tmpdir
            with redirect_stdout(io.StringIO()):
                cli.main(["benchmark", "--sizes", "4,5", "--runs", "2", "--oracle", "deduction", "--no-plots", "--validate"])
            self.assertEqual(len(list(Path(tmpdir).glob("*.csv"))), 2)


if __name__ == "__main__":
    unittest.main()
