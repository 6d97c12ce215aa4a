# =============================================================================
# Fibonacci Calculators: Pluggable Compute Workload
# =============================================================================
#
# Sequence convention: fib(0) = fib(1) = 1, fib(n) = fib(n-1) + fib(n-2).
# Any n < 2 (including negatives) yields 1.
#
#   FibonacciCalculator (Protocol)
#   ├── RecursiveCalculator: naive exponential recursion (default workload)
#   └── IterativeCalculator: linear loop, same results
#
# The worker only depends on the protocol; FIBCALC_CALCULATOR picks the
# implementation.
# =============================================================================

from __future__ import annotations

from typing import Protocol


class FibonacciCalculator(Protocol):
    """Anything that maps an index to its Fibonacci value."""

    def compute(self, n: int) -> int: ...


def fib(n: int) -> int:
    """Naive recursive Fibonacci. Exponential time; no memoization."""
    if n < 2:
        return 1
    return fib(n - 1) + fib(n - 2)


class RecursiveCalculator:
    name = "recursive"

    def compute(self, n: int) -> int:
        return fib(n)


class IterativeCalculator:
    name = "iterative"

    def compute(self, n: int) -> int:
        a, b = 1, 1
        for _ in range(max(n, 1) - 1):
            a, b = b, a + b
        return b


_CALCULATORS: dict[str, type] = {
    RecursiveCalculator.name: RecursiveCalculator,
    IterativeCalculator.name: IterativeCalculator,
}


def get_calculator(name: str = "recursive") -> FibonacciCalculator:
    """
    Build the calculator registered under ``name``.

    Raises:
        ValueError: unknown calculator name.
    """
    try:
        return _CALCULATORS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown calculator '{name}'. Supported: {sorted(_CALCULATORS)}"
        ) from None
