"""Performance profiler for parse and serialize operations."""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

import psutil


@dataclass
class PerformanceMetrics:
    """Performance metrics for a single codec operation."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    input_size: int
    output_size: int
    memory_peak_mb: float
    memory_start_mb: float
    memory_end_mb: float
    cpu_percent: float
    throughput_mbps: float


class PerformanceProfiler:
    """
    Wall time, memory and CPU profiler for codec operations.

    Memory figures are resident set size of the current process as
    reported by psutil, in megabytes.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []
        self.current_operation: Optional[str] = None
        self.start_time: Optional[float] = None
        self.start_memory: Optional[float] = None
        self.peak_memory: float = 0
        self.cpu_samples: List[float] = []
        self.input_size = 0
        self.output_size = 0

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0) -> Iterator['PerformanceProfiler']:
        """
        Context manager for profiling operations.

        Set ``output_size`` on the yielded profiler before the block ends
        to record how much text the operation produced.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes
        """
        self.start_profiling(operation_name, input_size)
        try:
            yield self
        finally:
            self.stop_profiling()

    def start_profiling(self, operation_name: str, input_size: int = 0) -> None:
        self.current_operation = operation_name
        self.start_time = time.perf_counter()
        self.input_size = input_size
        self.output_size = 0

        self.start_memory = self._rss_mb()
        self.peak_memory = self.start_memory
        self.cpu_samples = []

        self.logger.debug(f"Started profiling: {operation_name}")

    def sample_performance(self) -> None:
        """Sample current memory and CPU usage."""
        if not self.current_operation:
            return

        try:
            process = psutil.Process()
            self.peak_memory = max(self.peak_memory, process.memory_info().rss / 1024 / 1024)
            self.cpu_samples.append(process.cpu_percent())
        except psutil.Error as e:
            self.logger.warning(f"Performance sampling failed: {e}")

    def stop_profiling(self, output_size: Optional[int] = None) -> PerformanceMetrics:
        """
        Stop profiling and return metrics.

        Args:
            output_size: Size of output data in bytes; defaults to the
                ``output_size`` attribute

        Returns:
            PerformanceMetrics object with collected data

        Raises:
            ValueError: If no operation is being profiled
        """
        if not self.current_operation or self.start_time is None:
            raise ValueError("No active profiling session")

        self.sample_performance()
        end_time = time.perf_counter()
        duration = end_time - self.start_time
        end_memory = self._rss_mb()
        avg_cpu = sum(self.cpu_samples) / len(self.cpu_samples) if self.cpu_samples else 0.0

        if output_size is None:
            output_size = self.output_size
        throughput = (self.input_size / 1024 / 1024) / duration if duration > 0 else 0.0

        metrics = PerformanceMetrics(
            operation_name=self.current_operation,
            start_time=self.start_time,
            end_time=end_time,
            duration=duration,
            input_size=self.input_size,
            output_size=output_size,
            memory_peak_mb=max(self.peak_memory, end_memory),
            memory_start_mb=self.start_memory,
            memory_end_mb=end_memory,
            cpu_percent=avg_cpu,
            throughput_mbps=throughput
        )
        self.metrics_history.append(metrics)

        self.logger.info(
            f"Performance - {self.current_operation}: {duration * 1000:.2f}ms, "
            f"{throughput:.2f} MB/s, peak {metrics.memory_peak_mb:.1f} MB"
        )

        self.current_operation = None
        self.start_time = None
        self.start_memory = None

        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all recorded operations.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        count = len(self.metrics_history)
        total_input = sum(m.input_size for m in self.metrics_history)
        total_output = sum(m.output_size for m in self.metrics_history)

        return {
            "total_operations": count,
            "total_duration": sum(m.duration for m in self.metrics_history),
            "total_input_mb": total_input / 1024 / 1024,
            "total_output_mb": total_output / 1024 / 1024,
            "average_throughput_mbps": sum(m.throughput_mbps for m in self.metrics_history) / count,
            "average_memory_peak_mb": sum(m.memory_peak_mb for m in self.metrics_history) / count,
            "operations": [
                {
                    "name": m.operation_name,
                    "duration": m.duration,
                    "throughput": m.throughput_mbps,
                    "memory_peak": m.memory_peak_mb,
                }
                for m in self.metrics_history
            ]
        }

    def export_metrics(self, format: str = "json") -> str:
        """
        Export performance metrics in specified format.

        Args:
            format: Export format ("json", "csv", "summary")

        Returns:
            Formatted metrics string
        """
        if format == "json":
            from .models.json_value import JSONValue
            return JSONValue([
                {
                    "operation": m.operation_name,
                    "duration": m.duration,
                    "input_size": m.input_size,
                    "output_size": m.output_size,
                    "memory_peak_mb": m.memory_peak_mb,
                    "throughput_mbps": m.throughput_mbps,
                }
                for m in self.metrics_history
            ]).dump()

        elif format == "csv":
            lines = ["operation,duration,input_size,output_size,memory_peak_mb,throughput_mbps"]
            for m in self.metrics_history:
                lines.append(f"{m.operation_name},{m.duration},{m.input_size},{m.output_size},"
                             f"{m.memory_peak_mb},{m.throughput_mbps}")
            return "\n".join(lines)

        elif format == "summary":
            summary = self.get_performance_summary()
            if not summary["total_operations"]:
                return "Performance Summary:\n  Total Operations: 0"
            lines = [
                "Performance Summary:",
                f"  Total Operations: {summary['total_operations']}",
                f"  Total Duration: {summary['total_duration'] * 1000:.2f}ms",
                f"  Total Input: {summary['total_input_mb']:.3f} MB",
                f"  Total Output: {summary['total_output_mb']:.3f} MB",
                f"  Average Throughput: {summary['average_throughput_mbps']:.2f} MB/s",
                f"  Average Memory Peak: {summary['average_memory_peak_mb']:.1f} MB",
            ]
            return "\n".join(lines)

        else:
            raise ValueError(f"Unsupported export format: {format}")

    def _rss_mb(self) -> float:
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Memory sampling failed: {e}")
            return 0.0


# Global profiler instance for easy access
_global_profiler = PerformanceProfiler()


def get_profiler() -> PerformanceProfiler:
    """Get the global profiler instance."""
    return _global_profiler
