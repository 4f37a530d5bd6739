#!/usr/bin/env python3
"""
Basic usage examples for the ddfloat library.

This script demonstrates double-double arithmetic, the elementary functions
and the aggregation helpers, and shows where plain float64 loses digits.
"""

import numpy as np
import time
import torch

import sys
sys.path.append('..')

from ddfloat import (
    DoubleDouble,
    PI,
    BatchSummator,
    DoubleDoubleAccumulator,
    ParseError,
    dd_dot,
    dd_mean,
    dd_sum,
    dd_variance,
    exp,
    ln,
    parse,
    sin,
    to_numpy,
    from_numpy,
)


def demonstrate_precision_loss():
    """Show how float64 arithmetic loses precision."""
    print("=" * 60)
    print("DEMONSTRATION: Precision Loss in float64")
    print("=" * 60)

    data = [1e16, 1.0, -1e16, 1.0]

    print(f"Test data: {data}")
    print("Expected result: 2.0")
    print()

    naive_result = 0.0
    for value in data:
        naive_result += value
    print(f"float sum result:        {naive_result}")
    print(f"NumPy sum result:        {np.sum(np.array(data))}")

    dd_result = dd_sum(data)
    print(f"DoubleDouble sum result: {dd_result}")
    print()

    one_third = DoubleDouble(1.0) / 3
    print(f"1/3 as float:            {1.0 / 3.0:.31f}")
    print(f"1/3 as DoubleDouble:     {one_third:.31f}")
    print(f"Components:              {one_third!r}")
    print()


def demonstrate_functions():
    """Evaluate elementary functions to 31 digits."""
    print("=" * 60)
    print("DEMONSTRATION: Elementary Functions")
    print("=" * 60)

    x = DoubleDouble(2.0)
    rows = [
        ("sqrt(2)", x.sqrt()),
        ("exp(1)", exp(DoubleDouble(1.0))),
        ("ln(2)", ln(x)),
        ("sin(pi / 6)", sin(PI / 6)),
        ("2 ** 0.5", x ** 0.5),
    ]

    print(f"{'Expression':<15} {'Value':<40}")
    print("-" * 55)
    for name, value in rows:
        print(f"{name:<15} {value}")
    print()


def demonstrate_parsing():
    """Parse decimal strings beyond float precision."""
    print("=" * 60)
    print("DEMONSTRATION: Parsing and Formatting")
    print("=" * 60)

    text = "3.14159265358979323846264338327950"
    value = parse(text)
    print(f"Input:        {text}")
    print(f"float():      {float(text)!r}")
    print(f"parse():      {value}")
    print(f"Scientific:   {value:.20e}")
    print(f"Padded:       [{value:>40.25f}]")

    for bad in ["", "1.2.3"]:
        try:
            parse(bad)
        except ParseError as e:
            print(f"parse({bad!r}) failed: {e.kind}")
    print()


def demonstrate_incremental_summation():
    """Show incremental summation with DoubleDoubleAccumulator."""
    print("=" * 60)
    print("DEMONSTRATION: Incremental Summation")
    print("=" * 60)

    acc = DoubleDoubleAccumulator()
    values = [1e8, 0.1, 0.2, 0.3, -1e8, 1e-10]

    print("Adding values incrementally:")
    print(f"{'Value':<15} {'Running Sum':<40}")
    print("-" * 55)

    for value in values:
        acc.add(value)
        print(f"{value:<15.3g} {acc.get()}")

    print()
    print(f"Final sum:   {acc.get()}")
    print(f"float sum:   {sum(values)!r}")
    print(f"Values seen: {acc.count}")
    print()


def demonstrate_batch_processing():
    """Show batch processing capabilities."""
    print("=" * 60)
    print("DEMONSTRATION: Batch Processing")
    print("=" * 60)

    np.random.seed(123)
    arrays = [
        np.random.randn(1000),
        np.random.randn(2000) * 1e8,
        torch.randn(1500, dtype=torch.float64),
    ]

    print(f"Processing {len(arrays)} arrays")
    print(f"Sizes: {[len(arr) for arr in arrays]}")
    print()

    batch_processor = BatchSummator(track_statistics=True)

    for method in ["sequential", "tree"]:
        start_time = time.time()
        results = batch_processor.sum_batch(arrays, method=method)
        elapsed = (time.time() - start_time) * 1000

        print(f"{method.capitalize()} method:")
        print(f"  Time: {elapsed:.2f} ms")
        print(f"  Results: {[f'{r:.12e}' for r in results]}")
        print()

    stats = batch_processor.get_statistics()
    if stats:
        print("Gap between float64 and double-double sums:")
        for key, value in stats.items():
            print(f"  {key}: {value:.2e}")
        print()


def demonstrate_statistical_functions():
    """Show double-double statistics."""
    print("=" * 60)
    print("DEMONSTRATION: Statistics")
    print("=" * 60)

    np.random.seed(456)
    data = 1e9 + np.random.randint(0, 100, 1000).astype(np.float64)

    print(f"Data size: {len(data)}")
    print(f"Range: [{data.min():.2f}, {data.max():.2f}]")
    print()

    print(f"{'Statistic':<12} {'float64':<25} {'DoubleDouble':<25}")
    print("-" * 62)
    print(f"{'Mean':<12} {np.mean(data):<25.10f} {dd_mean(data):<25.10f}")
    print(f"{'Variance':<12} {np.var(data, ddof=1):<25.10f} {dd_variance(data):<25.10f}")

    a = np.array([1e16, 1.0, -1e16])
    print(f"{'Dot':<12} {np.dot(a, np.ones(3)):<25.10f} {dd_dot(a, np.ones(3)):<25.10f}")
    print()

    packed = to_numpy([PI, DoubleDouble(1.0) / 3])
    print("Packed as (hi, lo) rows:")
    print(packed)
    print(f"Unpacked: {[str(v) for v in from_numpy(packed)]}")
    print()


def main():
    """Run all demonstrations."""
    print("DDFLOAT LIBRARY - BASIC USAGE EXAMPLES")
    print("=" * 60)
    print()

    demonstrate_precision_loss()
    demonstrate_functions()
    demonstrate_parsing()
    demonstrate_incremental_summation()
    demonstrate_batch_processing()
    demonstrate_statistical_functions()

    print("=" * 60)
    print("All demonstrations completed!")
    print("=" * 60)


if __name__ == "__main__":
    main()
