"""Tests for the performance profiler."""

import csv
import io
import json
import pytest
from json_exploder.profiler import PerformanceProfiler, OperationMetrics


class TestPerformanceProfiler:
    """Tests for PerformanceProfiler class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.profiler = PerformanceProfiler()

    def test_profile_operation_records_metrics(self):
        """Test that a profiled block records rows and input size."""
        with self.profiler.profile_operation("explode", input_size=2048) as profiler:
            assert profiler.active_operation == "explode"
            profiler.record_output(rows_produced=12, columns_produced=3)

        assert len(self.profiler.metrics_history) == 1
        metrics = self.profiler.metrics_history[0]
        assert metrics.operation_name == "explode"
        assert metrics.input_size == 2048
        assert metrics.rows_produced == 12
        assert metrics.columns_produced == 3
        assert metrics.duration >= 0
        assert metrics.memory_peak_mb >= metrics.memory_start_mb
        assert metrics.memory_peak_mb >= metrics.memory_end_mb

    def test_profile_operation_records_on_error(self):
        """Test that metrics are kept even when the block raises."""
        with pytest.raises(RuntimeError):
            with self.profiler.profile_operation("explode"):
                raise RuntimeError("boom")

        assert len(self.profiler.metrics_history) == 1
        assert self.profiler.metrics_history[0].rows_produced == 0
        assert self.profiler.active_operation is None

    def test_stop_without_start(self):
        """Test stopping with no active session."""
        with pytest.raises(ValueError, match="No active profiling session"):
            self.profiler.stop_profiling()

    def test_record_output_without_start(self):
        """Test recording output with no active session."""
        with pytest.raises(ValueError, match="No active profiling session"):
            self.profiler.record_output(5)

    def test_rows_per_second(self):
        """Test the derived row rate."""
        metrics = OperationMetrics("explode", 2.0, 0, 10, 1, 1.0, 1.0, 1.0)

        assert metrics.rows_per_second == 5.0
        assert metrics.to_dict()["rows_per_second"] == 5.0

    def test_rows_per_second_zero_duration(self):
        """Test that an instantaneous operation reports no rate."""
        metrics = OperationMetrics("explode", 0.0, 0, 10, 1, 1.0, 1.0, 1.0)

        assert metrics.rows_per_second == 0.0

    def test_summary_empty(self):
        """Test summary with no history."""
        assert self.profiler.get_performance_summary() == {"total_operations": 0}

    def test_summary_totals(self):
        """Test that the summary adds up rows across operations."""
        for rows in (5, 7):
            with self.profiler.profile_operation("explode", input_size=100) as profiler:
                profiler.record_output(rows)

        summary = self.profiler.get_performance_summary()

        assert summary["total_operations"] == 2
        assert summary["total_rows_produced"] == 12
        assert [op["rows"] for op in summary["operations"]] == [5, 7]

    def test_export_json(self):
        """Test exporting metrics as JSON."""
        with self.profiler.profile_operation("explode") as profiler:
            profiler.record_output(3, 2)

        exported = json.loads(self.profiler.export_metrics("json"))

        assert exported[0]["operation_name"] == "explode"
        assert exported[0]["rows_produced"] == 3
        assert exported[0]["columns_produced"] == 2

    def test_export_csv(self):
        """Test exporting metrics as CSV."""
        with self.profiler.profile_operation("explode") as profiler:
            profiler.record_output(3, 2)

        records = list(csv.DictReader(io.StringIO(self.profiler.export_metrics("csv"))))

        assert len(records) == 1
        assert records[0]["operation_name"] == "explode"
        assert records[0]["rows_produced"] == "3"
        assert "rows_per_second" in records[0]

    def test_export_summary(self):
        """Test exporting a text summary."""
        with self.profiler.profile_operation("explode") as profiler:
            profiler.record_output(3)

        assert "Total Rows: 3" in self.profiler.export_metrics("summary")

    def test_export_summary_empty(self):
        """Test exporting a summary before any operation."""
        assert self.profiler.export_metrics("summary") == "Performance Summary:\n  Total Operations: 0"

    def test_export_unsupported_format(self):
        """Test exporting an unknown format."""
        with pytest.raises(ValueError, match="Unsupported export format"):
            self.profiler.export_metrics("xml")
