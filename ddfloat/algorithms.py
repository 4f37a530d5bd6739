"""
Aggregation helpers built on double-double arithmetic.

This module provides compensated reductions (sum, product, dot product,
mean, variance) over Python sequences, numpy arrays and torch tensors,
a streaming accumulator, a batch summator that reports how far plain float
summation drifts from the double-double result, and conversions between
DoubleDouble sequences and (n, 2) arrays of (hi, lo) rows.
"""

import logging
from typing import List, Optional, Sequence, Union

import numpy as np
import torch

from .consts import ONE, ZERO
from .core import DoubleDouble, coerce

logger = logging.getLogger(__name__)

ArrayLike = Union[Sequence[Union[DoubleDouble, float, int]], torch.Tensor, np.ndarray]


def _as_values(values: ArrayLike) -> List[DoubleDouble]:
    """Flatten tensors and arrays and convert every element to DoubleDouble."""
    if isinstance(values, torch.Tensor):
        values = values.detach().cpu().to(torch.float64).flatten().tolist()
    elif isinstance(values, np.ndarray):
        values = values.astype(np.float64).ravel().tolist()
    return [coerce(v) for v in values]


class DoubleDoubleAccumulator:
    """
    Streaming double-double sum.

    Attributes:
        total: The running sum
        count: Number of values added since the last reset
    """

    def __init__(self, initial: Union[DoubleDouble, float, int] = 0.0):
        self.total = coerce(initial)
        self.count = 0

    def add(self, value: Union[DoubleDouble, float, int]):
        """
        Add a single value.

        Args:
            value: Value to add to the running sum
        """
        self.total = self.total.add(coerce(value))
        self.count += 1

    def extend(self, values: ArrayLike):
        """Add every element of a sequence, array or tensor."""
        for value in _as_values(values):
            self.add(value)

    def get(self) -> DoubleDouble:
        """Get the running sum."""
        return self.total

    def reset(self):
        """Reset the accumulator to zero."""
        self.total = ZERO
        self.count = 0


def dd_sum(values: ArrayLike) -> DoubleDouble:
    """
    Sum values in double-double arithmetic.

    Args:
        values: Sequence of values to sum

    Returns:
        The sum, accurate to about 2^-106 relative to the sum of magnitudes
    """
    accumulator = DoubleDoubleAccumulator()
    accumulator.extend(values)
    return accumulator.get()


def tree_reduce_dd(values: ArrayLike) -> DoubleDouble:
    """
    Pairwise (tree) summation in double-double arithmetic.

    Args:
        values: Sequence of values to sum

    Returns:
        The sum
    """
    values = _as_values(values)
    if len(values) == 0:
        return ZERO

    def reduce_range(vals):
        if len(vals) == 1:
            return vals[0]
        mid = len(vals) // 2
        return reduce_range(vals[:mid]).add(reduce_range(vals[mid:]))

    return reduce_range(values)


def dd_prod(values: ArrayLike) -> DoubleDouble:
    """Product of all values; one for empty input."""
    result = ONE
    for value in _as_values(values):
        result = result.multiply(value)
    return result


def dd_dot(a: ArrayLike, b: ArrayLike) -> DoubleDouble:
    """
    Dot product with exact elementwise products.

    Products of plain doubles are formed exactly with two_prod before being
    accumulated.

    Args:
        a: First vector
        b: Second vector

    Returns:
        Sum of a[i] * b[i]

    Raises:
        ValueError: If the vectors have different lengths
    """
    a = _as_values(a)
    b = _as_values(b)
    if len(a) != len(b):
        raise ValueError(f"Length mismatch: {len(a)} != {len(b)}")

    accumulator = DoubleDoubleAccumulator()
    for x, y in zip(a, b):
        if x.lo == 0.0 and y.lo == 0.0:
            accumulator.add(DoubleDouble.new_mul(x.hi, y.hi))
        else:
            accumulator.add(x.multiply(y))
    return accumulator.get()


def dd_mean(values: ArrayLike) -> DoubleDouble:
    """Mean of the values; zero for empty input."""
    values = _as_values(values)
    n = len(values)
    if n == 0:
        return ZERO
    return dd_sum(values).divide(DoubleDouble.from_int(n))


def dd_variance(values: ArrayLike, ddof: int = 1) -> DoubleDouble:
    """
    Two-pass variance in double-double arithmetic.

    Args:
        values: Sequence of values
        ddof: Delta degrees of freedom (1 for sample variance, 0 for population)

    Returns:
        The variance, zero when there are at most ``ddof`` values
    """
    values = _as_values(values)
    n = len(values)
    if n <= ddof:
        return ZERO

    mean = dd_mean(values)
    squared_deviations = []
    for value in values:
        deviation = value.subtract(mean)
        squared_deviations.append(deviation.multiply(deviation))
    return dd_sum(squared_deviations).divide(DoubleDouble.from_int(n - ddof))


class BatchSummator:
    """
    Batch processor for double-double summation.

    Sums many sequences and tracks the gap between the double-double result
    and a plain left-to-right float summation of the same values.
    """

    def __init__(self, track_statistics: bool = True):
        """
        Initialize batch summator.

        Args:
            track_statistics: Whether to track operation statistics
        """
        self.track_statistics = track_statistics
        self.reset_statistics()

    def reset_statistics(self):
        """Reset operation statistics."""
        self.operation_count = 0
        self.total_gap = 0.0
        self.max_gap = 0.0
        self.min_gap = float("inf")

    def sum_batch(self, batch_values: List[ArrayLike], method: str = "sequential") -> List[DoubleDouble]:
        """
        Sum multiple sequences in batch.

        Args:
            batch_values: List of sequences to sum
            method: Summation method ('sequential' or 'tree')

        Returns:
            List of computed sums

        Raises:
            ValueError: If the method is unknown
        """
        if method not in ("sequential", "tree"):
            raise ValueError(f"Unknown method: {method}")

        results = []
        for values in batch_values:
            values = _as_values(values)
            if method == "sequential":
                result = dd_sum(values)
            else:
                result = tree_reduce_dd(values)
            results.append(result)

            if self.track_statistics:
                naive = 0.0
                for value in values:
                    naive += float(value)
                gap = abs(result.subtract(naive).hi)
                self.operation_count += 1
                self.total_gap += gap
                self.max_gap = max(self.max_gap, gap)
                self.min_gap = min(self.min_gap, gap)

        logger.debug("Summed %d sequences with method %s", len(results), method)
        return results

    def get_statistics(self) -> dict:
        """Get operation statistics."""
        if not self.track_statistics or self.operation_count == 0:
            return {}

        return {
            "operation_count": self.operation_count,
            "average_gap": self.total_gap / self.operation_count,
            "max_gap": self.max_gap,
            "min_gap": self.min_gap if self.min_gap != float("inf") else 0.0,
            "total_gap": self.total_gap,
        }


def to_numpy(values: Sequence[DoubleDouble]) -> np.ndarray:
    """
    Pack values into an (n, 2) float64 array of (hi, lo) rows.

    Args:
        values: Sequence of DoubleDouble or real numbers

    Returns:
        Array of shape (n, 2)
    """
    rows = [coerce(v).as_tuple() for v in values]
    return np.array(rows, dtype=np.float64).reshape(-1, 2)


def from_numpy(array: np.ndarray) -> List[DoubleDouble]:
    """
    Unpack an (n, 2) array of (hi, lo) rows.

    Each row goes through the normalizing constructor.

    Raises:
        ValueError: If the array does not have shape (n, 2)
    """
    array = np.asarray(array, dtype=np.float64)
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError(f"Expected an array of shape (n, 2), got {array.shape}")
    return [DoubleDouble(hi, lo) for hi, lo in array.tolist()]


def to_tensor(values: Sequence[DoubleDouble], device: Optional[torch.device] = None) -> torch.Tensor:
    """Pack values into an (n, 2) float64 tensor of (hi, lo) rows."""
    tensor = torch.from_numpy(to_numpy(values))
    if device is not None:
        tensor = tensor.to(device)
    return tensor


def from_tensor(tensor: torch.Tensor) -> List[DoubleDouble]:
    """Unpack an (n, 2) tensor of (hi, lo) rows."""
    return from_numpy(tensor.detach().cpu().to(torch.float64).numpy())
