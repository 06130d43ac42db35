"""
scripts/benchmark.py — Encode/decode round-trip latency benchmarking.

Encodes and decodes a set of synthetic ASCII messages, reports p50/p95/p99
latencies per direction, and verifies every round trip reproduced its input.

Usage:
    python scripts/benchmark.py          # after `pip install -e .`
    python scripts/benchmark.py --iterations 500 --length 256
"""

from __future__ import annotations

import argparse
import logging
import random
import statistics
import string
import sys
import time

logger = logging.getLogger(__name__)

_ALPHABET = string.ascii_letters + string.digits + string.punctuation + " \t"


def _setup_logging(level: str = "INFO") -> None:
    """Configure logging for the benchmark script."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stdout,
    )


def _synthetic_messages(count: int, length: int, seed: int) -> list[str]:
    """Generate ``count`` random printable ASCII messages of ``length`` chars."""
    rng = random.Random(seed)
    return ["".join(rng.choice(_ALPHABET) for _ in range(length)) for _ in range(count)]


def _percentile(values: list[float], pct: float) -> float:
    ordered = sorted(values)
    index = min(len(ordered) - 1, int(round(pct / 100.0 * (len(ordered) - 1))))
    return ordered[index]


def _report(label: str, latencies: list[float]) -> None:
    print(
        f"  {label:<7} p50={_percentile(latencies, 50):8.3f}ms  "
        f"p95={_percentile(latencies, 95):8.3f}ms  "
        f"p99={_percentile(latencies, 99):8.3f}ms  "
        f"mean={statistics.mean(latencies):8.3f}ms"
    )


def run_benchmark(iterations: int, length: int, seed: int) -> bool:
    """
    Run the round-trip benchmark and report results.

    Args:
        iterations: Number of messages to encode and decode.
        length: Characters per message.
        seed: Random seed for message generation.

    Returns:
        True if every round trip reproduced its input, False otherwise.
    """
    from decoder import decode
    from encoder import encode

    messages = _synthetic_messages(iterations, length, seed)
    encode_ms: list[float] = []
    decode_ms: list[float] = []
    failures = 0

    print("\n═══ Chuck Norris cipher — Round-trip Benchmark ═════════")
    print(f"  Iterations: {iterations}")
    print(f"  Length:     {length} chars")
    print("═════════════════════════════════════════════════════════\n")

    for text in messages:
        t0 = time.perf_counter()
        encoded = encode(text)
        encode_ms.append((time.perf_counter() - t0) * 1000.0)

        t0 = time.perf_counter()
        result = decode(encoded)
        decode_ms.append((time.perf_counter() - t0) * 1000.0)

        if not result.ok or result.text != text:
            failures += 1
            logger.error("round trip mismatch for %r", text[:40])

    _report("encode", encode_ms)
    _report("decode", decode_ms)
    print(f"\n  Failures: {failures}/{iterations}")
    return failures == 0


def main() -> int:
    p = argparse.ArgumentParser(description="Benchmark Chuck Norris encode/decode")
    p.add_argument("--iterations", type=int, default=200, help="Messages to process")
    p.add_argument("--length", type=int, default=64, help="Characters per message")
    p.add_argument("--seed", type=int, default=7, help="Random seed")
    p.add_argument("--log-level", default="INFO", help="Logging level")
    args = p.parse_args()

    _setup_logging(args.log_level)
    ok = run_benchmark(args.iterations, args.length, args.seed)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
