"""Tests for the performance profiler."""

import pytest

from json_value import JSONValue
from json_value.profiler import PerformanceMetrics, PerformanceProfiler, get_profiler


class TestPerformanceProfiler:
    """Test cases for PerformanceProfiler."""

    def setup_method(self):
        """Set up test fixtures."""
        self.profiler = PerformanceProfiler()

    def test_profile_operation(self):
        with self.profiler.profile_operation("parse", input_size=2048) as session:
            session.output_size = 10

        assert len(self.profiler.metrics_history) == 1
        metrics = self.profiler.metrics_history[0]
        assert isinstance(metrics, PerformanceMetrics)
        assert metrics.operation_name == "parse"
        assert metrics.input_size == 2048
        assert metrics.output_size == 10
        assert metrics.duration >= 0
        assert metrics.memory_peak_mb >= metrics.memory_start_mb
        assert self.profiler.current_operation is None

    def test_profile_operation_records_on_error(self):
        with pytest.raises(RuntimeError):
            with self.profiler.profile_operation("broken"):
                raise RuntimeError("boom")

        assert self.profiler.metrics_history[0].operation_name == "broken"

    def test_stop_without_start(self):
        with pytest.raises(ValueError, match="No active profiling session"):
            self.profiler.stop_profiling()

    def test_explicit_output_size(self):
        self.profiler.start_profiling("dumps")
        metrics = self.profiler.stop_profiling(output_size=42)

        assert metrics.output_size == 42

    def test_summary(self):
        assert self.profiler.get_performance_summary() == {"total_operations": 0}

        for name in ("loads", "dumps"):
            with self.profiler.profile_operation(name, input_size=1024 * 1024):
                pass

        summary = self.profiler.get_performance_summary()
        assert summary["total_operations"] == 2
        assert summary["total_input_mb"] == 2.0
        assert [op["name"] for op in summary["operations"]] == ["loads", "dumps"]

    def test_export_json(self):
        with self.profiler.profile_operation("loads", input_size=5):
            pass

        exported = JSONValue.load(self.profiler.export_metrics("json"))

        assert exported.length() == 1
        assert exported.at(0).at("operation") == "loads"
        assert exported.at(0).at("input_size") == 5

    def test_export_csv(self):
        with self.profiler.profile_operation("loads"):
            pass

        lines = self.profiler.export_metrics("csv").split("\n")

        assert lines[0].startswith("operation,duration")
        assert lines[1].startswith("loads,")

    def test_export_summary(self):
        assert self.profiler.export_metrics("summary").endswith("Total Operations: 0")

        with self.profiler.profile_operation("loads"):
            pass

        assert "Total Operations: 1" in self.profiler.export_metrics("summary")

    def test_export_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported export format"):
            self.profiler.export_metrics("xml")

    def test_global_profiler(self):
        assert get_profiler() is get_profiler()
