"""Performance profiler for JSON Exploder operations."""

import csv
import io
import json
import logging
import time
import psutil
from contextlib import contextmanager
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


@dataclass
class OperationMetrics:
    """Measurements for one profiled explode operation."""
    operation_name: str
    duration: float
    input_size: int
    rows_produced: int
    columns_produced: int
    memory_start_mb: float
    memory_end_mb: float
    memory_peak_mb: float

    @property
    def rows_per_second(self) -> float:
        return self.rows_produced / self.duration if self.duration > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["rows_per_second"] = self.rows_per_second
        return data


class PerformanceProfiler:
    """
    Records duration, process memory and output size of explode operations.

    Cross-products can make the output far larger than the input, so each
    record keeps the rows and columns produced next to the input bytes.
    Memory is the resident set size reported by psutil, sampled when an
    operation starts and stops.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[OperationMetrics] = []
        self._process = psutil.Process()
        self._active: Optional[Dict[str, Any]] = None

    @property
    def active_operation(self) -> Optional[str]:
        return self._active["name"] if self._active else None

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0):
        """
        Profile the enclosed block.

        Call :meth:`record_output` inside the block to attach row counts.
        Metrics are recorded even when the block raises.
        """
        self.start_profiling(operation_name, input_size)
        try:
            yield self
        finally:
            self.stop_profiling()

    def start_profiling(self, operation_name: str, input_size: int = 0) -> None:
        memory = self._memory_mb()
        self._active = {
            "name": operation_name,
            "input_size": input_size,
            "started": time.perf_counter(),
            "memory_start": memory,
            "rows": 0,
            "columns": 0,
        }
        self.logger.debug(f"Started profiling: {operation_name} ({memory:.1f} MB resident)")

    def record_output(self, rows_produced: int, columns_produced: int = 0) -> None:
        """Attach output counts to the running operation."""
        if self._active is None:
            raise ValueError("No active profiling session")
        self._active["rows"] = rows_produced
        self._active["columns"] = columns_produced

    def stop_profiling(self) -> OperationMetrics:
        """
        Finish the running operation and add it to the history.

        Raises:
            ValueError: If no operation is being profiled
        """
        if self._active is None:
            raise ValueError("No active profiling session")

        active, self._active = self._active, None
        memory_end = self._memory_mb()

        metrics = OperationMetrics(
            operation_name=active["name"],
            duration=time.perf_counter() - active["started"],
            input_size=active["input_size"],
            rows_produced=active["rows"],
            columns_produced=active["columns"],
            memory_start_mb=active["memory_start"],
            memory_end_mb=memory_end,
            memory_peak_mb=max(active["memory_start"], memory_end)
        )
        self.metrics_history.append(metrics)

        self.logger.info(f"{metrics.operation_name}: {metrics.rows_produced} rows x "
                         f"{metrics.columns_produced} columns in {metrics.duration:.3f}s "
                         f"({metrics.rows_per_second:.0f} rows/s, {memory_end:.1f} MB)")
        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """Aggregate the recorded history."""
        if not self.metrics_history:
            return {"total_operations": 0}

        total_duration = sum(m.duration for m in self.metrics_history)
        total_rows = sum(m.rows_produced for m in self.metrics_history)

        return {
            "total_operations": len(self.metrics_history),
            "total_duration": total_duration,
            "total_input_mb": sum(m.input_size for m in self.metrics_history) / 1024 / 1024,
            "total_rows_produced": total_rows,
            "max_memory_peak_mb": max(m.memory_peak_mb for m in self.metrics_history),
            "average_rows_per_second": total_rows / total_duration if total_duration > 0 else 0,
            "operations": [
                {"name": m.operation_name, "duration": m.duration, "rows": m.rows_produced}
                for m in self.metrics_history
            ]
        }

    def export_metrics(self, format: str = "json") -> str:
        """
        Export the history.

        Args:
            format: "json", "csv" or "summary"

        Returns:
            Formatted metrics string
        """
        records = [m.to_dict() for m in self.metrics_history]

        if format == "json":
            return json.dumps(records, indent=2)

        if format == "csv":
            buffer = io.StringIO()
            fieldnames = list(OperationMetrics.__dataclass_fields__) + ["rows_per_second"]
            writer = csv.DictWriter(buffer, fieldnames=fieldnames, lineterminator="\n")
            writer.writeheader()
            writer.writerows(records)
            return buffer.getvalue()

        if format == "summary":
            summary = self.get_performance_summary()
            lines = ["Performance Summary:", f"  Total Operations: {summary['total_operations']}"]
            if summary["total_operations"]:
                lines.extend([
                    f"  Total Duration: {summary['total_duration']:.3f}s",
                    f"  Total Input: {summary['total_input_mb']:.2f} MB",
                    f"  Total Rows: {summary['total_rows_produced']}",
                    f"  Max Memory Peak: {summary['max_memory_peak_mb']:.1f} MB"
                ])
            return "\n".join(lines)

        raise ValueError(f"Unsupported export format: {format}")

    def _memory_mb(self) -> float:
        try:
            return self._process.memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Memory sampling failed: {e}")
            return 0.0
