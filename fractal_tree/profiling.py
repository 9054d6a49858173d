"""
Opt-in timing of the growth phases.

Decorate a function with @profile or wrap a block in profile_block(name);
nothing is recorded until the profiler is enabled.
"""

import time
from collections import defaultdict
from functools import wraps
from typing import Dict, List, Tuple


class Profiler:
    def __init__(self):
        self.stats: Dict[str, Dict] = defaultdict(lambda: {
            'calls': 0,
            'total_time': 0.0,
            'max_time': 0.0
        })
        self.enabled = False

    def record(self, name: str, elapsed: float):
        if not self.enabled:
            return
        entry = self.stats[name]
        entry['calls'] += 1
        entry['total_time'] += elapsed
        entry['max_time'] = max(entry['max_time'], elapsed)

    def report(self) -> List[Tuple[str, int, float, float]]:
        """(name, calls, total seconds, average ms) sorted by total time."""
        rows = []
        for name, data in self.stats.items():
            calls = data['calls']
            total = data['total_time']
            avg_ms = (total / calls * 1000) if calls > 0 else 0.0
            rows.append((name, calls, total, avg_ms))
        rows.sort(key=lambda row: row[2], reverse=True)
        return rows

    def print_stats(self):
        rows = self.report()
        if not rows:
            return

        print("\n" + "=" * 70)
        print("GROWTH PROFILE")
        print("=" * 70)
        print(f"{'Phase':<35} {'Calls':>10} {'Total(s)':>10} {'Avg(ms)':>10}")
        print("-" * 70)
        for name, calls, total, avg_ms in rows:
            print(f"{name:<35} {calls:>10} {total:>10.3f} {avg_ms:>10.3f}")
        print("=" * 70)

    def reset(self):
        self.stats.clear()


profiler = Profiler()


def profile(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not profiler.enabled:
            return func(*args, **kwargs)
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            profiler.record(func.__qualname__, time.perf_counter() - start)
    return wrapper


class profile_block:
    def __init__(self, name: str):
        self.name = name
        self.start = None

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args):
        profiler.record(self.name, time.perf_counter() - self.start)
