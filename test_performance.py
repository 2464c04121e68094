#!/usr/bin/env python3
"""
Performance Test Script for the WAVL Tree

Tests:
1. Sequential insert throughput
2. Random insert throughput
3. Random search throughput
4. Order-statistic (select / rank_of) throughput
5. Random delete throughput
6. Mixed workload (insert/delete/search)

Metrics:
- Operations per second (ops/sec)
- Latency (p50, p95, p99)
- Rebalancing steps per operation
- Tree height against log2(n + 1)
"""

import logging
import math
import os
import random
import statistics
import sys
import time
from typing import List

from wavltree import TreeValidator, WAVLTree

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger()


class PerformanceTest:
    def __init__(self, key_count: int, seed: int = 42):
        self.key_count = key_count
        self.rng = random.Random(seed)
        self.tree = WAVLTree()
        self.validator = TreeValidator()

    def reset(self):
        """Start over with an empty tree."""
        self.tree = WAVLTree()

    @staticmethod
    def calculate_stats(latencies: List[int]) -> dict:
        """Calculate latency statistics (latencies in nanoseconds)."""
        if not latencies:
            return {}

        sorted_latencies = sorted(latencies)
        return {
            "min_ms": min(latencies) / 1_000_000,
            "max_ms": max(latencies) / 1_000_000,
            "mean_ms": statistics.mean(latencies) / 1_000_000,
            "median_ms": statistics.median(latencies) / 1_000_000,
            "p95_ms": sorted_latencies[int(len(sorted_latencies) * 0.95)] / 1_000_000,
            "p99_ms": sorted_latencies[int(len(sorted_latencies) * 0.99)] / 1_000_000,
        }

    def _timed(self, name: str, keys: List[int], operation, count_steps: bool = False) -> dict:
        """Run operation on every key, collecting latency and, optionally, step counts."""
        print(f"\n{'='*60}")
        print(f"Test: {name}")
        print(f"{'='*60}")

        latencies = []
        steps = 0
        start_time = time.perf_counter()

        for key in keys:
            op_start = time.perf_counter_ns()
            result = operation(key)
            latencies.append(time.perf_counter_ns() - op_start)
            if count_steps and result > 0:
                steps += result

        elapsed = time.perf_counter() - start_time

        results = {
            "test": name,
            "count": len(keys),
            "elapsed_sec": elapsed,
            "ops_per_sec": len(keys) / elapsed if elapsed > 0 else 0,
            "steps_per_op": steps / len(keys) if keys else 0,
            **self.calculate_stats(latencies),
        }
        self.print_results(results)
        return results

    def test_sequential_insert(self) -> dict:
        self.reset()
        keys = list(range(self.key_count))
        return self._timed("Sequential Insert", keys, lambda k: self.tree.insert(k, k), count_steps=True)

    def test_random_insert(self) -> dict:
        self.reset()
        keys = self.rng.sample(range(self.key_count * 10), self.key_count)
        return self._timed("Random Insert", keys, lambda k: self.tree.insert(k, k), count_steps=True)

    def test_random_search(self) -> dict:
        keys = self.tree.keys_to_array()
        self.rng.shuffle(keys)
        return self._timed("Random Search", keys, self.tree.search)

    def test_order_statistics(self) -> dict:
        positions = [self.rng.randint(1, self.tree.size()) for _ in range(self.key_count)]
        results = self._timed("Select", positions, self.tree.select)

        keys = self.tree.keys_to_array()
        self._timed("Rank Of", keys, self.tree.rank_of)
        return results

    def test_random_delete(self) -> dict:
        keys = self.tree.keys_to_array()
        self.rng.shuffle(keys)
        return self._timed("Random Delete", keys, self.tree.delete, count_steps=True)

    def test_mixed_workload(self, insert_ratio: float = 0.5) -> dict:
        self.reset()
        key_space = self.key_count * 2

        def operation(key: int):
            roll = self.rng.random()
            if roll < insert_ratio:
                return self.tree.insert(key, key)
            elif roll < insert_ratio + 0.25:
                return self.tree.delete(key)
            self.tree.search(key)
            return 0

        keys = [self.rng.randrange(key_space) for _ in range(self.key_count)]
        return self._timed("Mixed Workload", keys, operation, count_steps=True)

    def check_shape(self):
        """Validate the tree and report its height."""
        height = self.validator.validate(self.tree)
        bound = math.log2(self.tree.size() + 1)
        print(f"  Tree size: {self.tree.size()}")
        print(f"  Height: {height} (log2(n+1) = {bound:.2f})")

    @staticmethod
    def print_results(results: dict):
        """Print test results in a formatted way."""
        print(f"\nResults:")
        print(f"  Operations: {results['count']}")
        print(f"  Elapsed: {results['elapsed_sec']:.2f}s")
        print(f"  Throughput: {results['ops_per_sec']:.2f} ops/sec")
        print(f"  Rebalancing steps per op: {results['steps_per_op']:.3f}")

        if 'median_ms' in results:
            print(f"  Latency (p50/p95/p99): {results['median_ms']:.4f}/{results['p95_ms']:.4f}/{results['p99_ms']:.4f} ms")


def run_tests(key_count: int):
    """Run every test against a tree of key_count entries."""
    logger.info(f"Running WAVL tree performance tests with {key_count} keys")
    test = PerformanceTest(key_count)
    all_results = []

    all_results.append(test.test_sequential_insert())
    test.check_shape()

    all_results.append(test.test_random_insert())
    test.check_shape()

    all_results.append(test.test_random_search())
    all_results.append(test.test_order_statistics())

    all_results.append(test.test_random_delete())
    test.check_shape()

    all_results.append(test.test_mixed_workload())
    test.check_shape()

    # Summary
    print(f"\n{'#'*60}")
    print(f"# SUMMARY")
    print(f"{'#'*60}")

    for result in all_results:
        print(f"  {result['test']:<20} {result['ops_per_sec']:>12.2f} ops/sec")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "quick":
        run_tests(10_000)
    else:
        run_tests(200_000)
