"""
Prime counting over an int64 sequence, on one thread or split into chunks.

The chunked counter runs on a thread pool by default. The predicate is pure
Python, so on a standard (GIL) CPython build threads give no speedup; use a
free-threaded build, or pass executor_cls=ProcessPoolExecutor.
"""
import operator
import re
from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Anything other than a digit or a minus sign separates tokens
_DELIMITERS = re.compile(r"[^0-9-]+")


class ParallelCountError(RuntimeError):
    """Raised when a chunk task fails and no total can be produced."""


def is_prime(n) -> bool:
    """Trial division over 6k +/- 1 candidates."""
    n = operator.index(n)  # numpy scalars would overflow in i * i; floats are rejected
    if n < 2:
        return False
    if n <= 3:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def count_primes_sequential(numbers, start: int = 0, stop: int | None = None) -> int:
    """Count primes in numbers[start:stop] on the calling thread."""
    if stop is None:
        stop = len(numbers)
    count = 0
    for j in range(start, stop):
        if is_prime(numbers[j]):
            count += 1
    return count


def effective_workers(size: int, requested: int) -> int:
    if requested < 1:
        raise ValueError(f"worker count must be >= 1, got {requested}")
    return max(1, min(requested, size))


def chunk_plan(size: int, workers: int):
    """
    Yields (start, stop) index ranges covering [0, size).
    Every chunk holds ceil(size / workers) items except possibly the last.
    """
    if size <= 0:
        return
    workers = effective_workers(size, workers)
    chunk_size = -(-size // workers)
    start = 0
    while start < size:
        stop = min(start + chunk_size, size)
        yield (start, stop)
        start = stop


def count_primes_parallel_with_workers(numbers, workers: int, executor_cls=ThreadPoolExecutor):
    """
    Count primes using one pool worker per chunk.
    Returns (total, effective worker count).
    """
    size = len(numbers)
    if size == 0:
        return 0, 0
    pool_size = effective_workers(size, workers)

    total = 0
    with executor_cls(max_workers=pool_size) as executor:
        # Each task keeps its own local count; nothing is shared but the read-only input
        futures = [
            executor.submit(count_primes_sequential, numbers, start, stop)
            for start, stop in chunk_plan(size, pool_size)
        ]
        try:
            for fut in as_completed(futures):
                total += fut.result()
        except Exception as exc:
            for pending in futures:
                pending.cancel()
            raise ParallelCountError("parallel prime count could not complete") from exc
    return total, pool_size


def count_primes_parallel(numbers, workers: int, executor_cls=ThreadPoolExecutor) -> int:
    total, _ = count_primes_parallel_with_workers(numbers, workers, executor_cls)
    return total


def parse_numbers(text: str) -> np.ndarray:
    """
    Pull signed 64-bit integers out of free-form text.
    Tokens that do not parse or do not fit in int64 are dropped.
    """
    values = []
    for token in _DELIMITERS.split(text):
        if not token or token == "-":
            continue
        try:
            value = int(token)
        except ValueError:
            continue
        if INT64_MIN <= value <= INT64_MAX:
            values.append(value)
    return np.array(values, dtype=np.int64)


def read_numbers(path) -> np.ndarray:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return parse_numbers(f.read())
