#!/usr/bin/env python3
"""
Benchmark suite for JSON value parsing and serialization.

Measures parse, pretty-print and minify throughput over generated
documents of increasing size and nesting, using the codec's profiler
for timing and memory figures.
"""

import statistics
from typing import Any, Dict
from src.json_value import JSONCodec, JSONConfig, JSONValue


class BenchmarkSuite:
    """Benchmark suite for the JSON value codec."""

    def __init__(self, iterations: int = 3):
        """Initialize the benchmark suite."""
        self.iterations = iterations

    def create_test_dataset(self, size_category: str) -> JSONValue:
        """Create test documents of different sizes."""
        if size_category == "small":
            return JSONValue({
                "users": {f"user_{i}": {"name": f"User {i}", "data": f"data_{i}"} for i in range(50)},
                "posts": [{"id": i, "content": f"Post content {i}"} for i in range(100)]
            })
        elif size_category == "medium":
            return JSONValue({
                "users": {
                    f"user_{i}": {
                        "name": f"User {i}",
                        "profile": {"age": 20 + i % 50, "score": i / 7},
                        "posts": [f"post_{j}" for j in range(i % 10)]
                    } for i in range(500)
                },
                "analytics": {
                    f"day_{i}": {"views": i * 100, "ratio": i / 365} for i in range(365)
                }
            })
        elif size_category == "large":
            return JSONValue({
                "dataset": {
                    f"section_{i}": {
                        f"item_{j}": {
                            "id": j,
                            "data": f"Large data content {j}\n" * 20,
                            "metadata": {"created": f"2024-01-{(j % 30) + 1}", "tags": [f"tag_{k}" for k in range(j % 5)]}
                        } for j in range(200)
                    } for i in range(50)
                }
            })
        else:
            raise ValueError(f"Unknown size category: {size_category}")

    def create_nested_dataset(self, depth: int) -> JSONValue:
        """Create a document nested ``depth`` levels deep."""
        value = JSONValue([1, 2.5, "leaf"])
        for level in range(depth - 1):
            value = JSONValue({f"level_{level}": value, "pad": [level]})
        return value

    def benchmark_dataset_sizes(self) -> Dict[str, Any]:
        """Benchmark parse and serialize on documents of different sizes."""
        print("📊 Benchmarking Dataset Sizes...")

        results = {}
        for category in ("small", "medium", "large"):
            print(f"   Testing {category} dataset...")
            results[category] = self._run(self.create_test_dataset(category))

        return results

    def benchmark_nesting(self) -> Dict[str, Any]:
        """Benchmark documents of increasing nesting depth."""
        print("🔬 Benchmarking Nesting Depth...")

        results = {}
        for depth in (8, 64, 200):
            print(f"   Testing depth {depth}...")
            results[f"depth_{depth}"] = self._run(self.create_nested_dataset(depth))

        return results

    def _run(self, value: JSONValue) -> Dict[str, Any]:
        pretty_text = value.dump()
        per_operation = {"loads": [], "dumps": []}
        memory_peaks = []

        for _ in range(self.iterations):
            codec = JSONCodec(JSONConfig(max_depth=512), enable_profiling=True)
            result = codec.loads(pretty_text)
            if not result.ok:
                raise RuntimeError(codec.error_handler.format_errors(result.errors))
            codec.dumps(result.value, minified=True)

            for metrics in codec.profiler.metrics_history:
                per_operation[metrics.operation_name].append(metrics)
            memory_peaks.append(max(m.memory_peak_mb for m in codec.profiler.metrics_history))

        parse_times = [m.duration for m in per_operation["loads"]]
        dump_times = [m.duration for m in per_operation["dumps"]]
        input_mb = len(pretty_text.encode("utf-8")) / 1024 / 1024

        return {
            "input_size_kb": input_mb * 1024,
            "parse_time": statistics.mean(parse_times),
            "dump_time": statistics.mean(dump_times),
            "parse_mbps": input_mb / statistics.mean(parse_times),
            "std_parse_time": statistics.stdev(parse_times) if len(parse_times) > 1 else 0.0,
            "memory_peak_mb": statistics.mean(memory_peaks),
        }

    def print_results(self, results: Dict[str, Any], title: str):
        """Print benchmark results in a formatted table."""
        print(f"\n📈 {title}")
        print("=" * 80)

        if not results:
            print("No results to display.")
            return

        # Determine columns based on first result
        first_key = next(iter(results.keys()))
        columns = list(results[first_key].keys())

        header = f"{'Config':<15}"
        for col in columns:
            header += f"{col:<15}"
        print(header)
        print("-" * len(header))

        for config, data in results.items():
            row = f"{config:<15}"
            for col in columns:
                value = data.get(col, 0)
                if isinstance(value, float):
                    if col.endswith('_time') or col.endswith('_mbps'):
                        row += f"{value:<15.4f}"
                    else:
                        row += f"{value:<15.2f}"
                else:
                    row += f"{value:<15}"
            print(row)

    def run_comprehensive_benchmark(self):
        """Run the complete benchmark suite."""
        print("🚀 JSON Value Benchmark Suite")
        print("=" * 60)

        size_results = self.benchmark_dataset_sizes()
        self.print_results(size_results, "Dataset Size Scaling")

        nesting_results = self.benchmark_nesting()
        self.print_results(nesting_results, "Nesting Depth Impact")

        if size_results:
            print("\n🎯 Analysis:")
            fastest = max(size_results.items(), key=lambda item: item[1]["parse_mbps"])
            print(f"   • Best parse throughput: {fastest[0]} ({fastest[1]['parse_mbps']:.2f} MB/s)")


def main():
    """Run the benchmark suite."""
    benchmark = BenchmarkSuite()
    benchmark.run_comprehensive_benchmark()


if __name__ == "__main__":
    main()
