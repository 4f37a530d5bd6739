#!/usr/bin/env python3
"""
Accuracy comparison benchmarks for double-double arithmetic.

This script measures the error of float64, numpy and ddfloat against a
256-bit mpmath reference, for summation problems and for the elementary
functions.
"""

import numpy as np
import time
import pandas as pd
import matplotlib.pyplot as plt
import mpmath
from typing import Dict, Tuple
import sys
sys.path.append('..')

import ddfloat
from ddfloat import DoubleDouble, dd_sum, tree_reduce_dd

mpmath.mp.prec = 256


def to_mp(value) -> mpmath.mpf:
    if isinstance(value, DoubleDouble):
        return mpmath.mpf(value.hi) + mpmath.mpf(value.lo)
    return mpmath.mpf(float(value))


def relative_error(computed, reference: mpmath.mpf) -> float:
    error = abs(to_mp(computed) - reference)
    if reference == 0:
        return float(error)
    return float(error / abs(reference))


def naive_sum(data: np.ndarray) -> float:
    total = 0.0
    for value in data.tolist():
        total += value
    return total


class AccuracyBenchmark:
    """
    Accuracy benchmark suite for summation and elementary functions.
    """

    def __init__(self):
        self.summation_algorithms = {
            'naive': naive_sum,
            'numpy': lambda x: float(np.sum(x)),
            'dd_sum': dd_sum,
            'dd_tree': tree_reduce_dd,
        }

        self.functions = {
            'exp': (np.exp, ddfloat.exp, mpmath.exp, (-20.0, 20.0)),
            'ln': (np.log, ddfloat.ln, mpmath.log, (1e-3, 1e3)),
            'sin': (np.sin, ddfloat.sin, mpmath.sin, (-10.0, 10.0)),
            'cos': (np.cos, ddfloat.cos, mpmath.cos, (-10.0, 10.0)),
            'tan': (np.tan, ddfloat.tan, mpmath.tan, (-1.5, 1.5)),
            'atan': (np.arctan, ddfloat.atan, mpmath.atan, (-10.0, 10.0)),
            'sinh': (np.sinh, ddfloat.sinh, mpmath.sinh, (-5.0, 5.0)),
            'asinh': (np.arcsinh, ddfloat.asinh, mpmath.asinh, (-5.0, 5.0)),
            'cbrt': (np.cbrt, ddfloat.cbrt, mpmath.cbrt, (1e-3, 1e3)),
        }

        self.results = []

    def generate_test_case(self, case_type: str, size: int) -> Tuple[np.ndarray, mpmath.mpf]:
        """
        Generate test cases with exact reference sums.

        Args:
            case_type: Type of test case
            size: Array size

        Returns:
            Tuple of (test_array, exact_result)
        """
        np.random.seed(42)

        if case_type == 'alternating_large':
            data = np.zeros(size)
            data[::2] = 1e16
            data[1::2] = -1e16
            data[-1] = 1.0

        elif case_type == 'harmonic_series':
            data = 1.0 / np.arange(1, size + 1, dtype=np.float64)

        elif case_type == 'mixed_magnitude':
            large_vals = np.full(size // 2, 1e12)
            small_vals = np.random.uniform(0, 1, size - size // 2)
            data = np.concatenate([large_vals, small_vals])
            np.random.shuffle(data)

        elif case_type == 'pathological_cancellation':
            epsilon = np.finfo(np.float64).eps * 10
            data = np.zeros(size)
            data[::2] = 1.0
            data[1::2] = -1.0 + epsilon

        elif case_type == 'random_normal':
            data = np.random.normal(0, 1, size)

        elif case_type == 'ill_conditioned':
            exponents = np.random.uniform(-10, 10, size)
            signs = np.random.choice([-1, 1], size)
            data = signs * 10.0 ** exponents

        else:
            raise ValueError(f"Unknown test case type: {case_type}")

        # Exact at 256 bits: every partial sum spans far fewer bits
        exact = mpmath.fsum(mpmath.mpf(x) for x in data.tolist())
        return data, exact

    def run_single_benchmark(self, test_name: str, data: np.ndarray, exact: mpmath.mpf) -> Dict:
        """
        Run every summation algorithm on a single test case.

        Args:
            test_name: Name of the test case
            data: Test data
            exact: Exact result

        Returns:
            Dictionary with benchmark results
        """
        results = {
            'test_name': test_name,
            'size': len(data),
            'exact_result': float(exact),
            'condition_number': self._estimate_condition_number(data, exact),
        }

        for alg_name, algorithm in self.summation_algorithms.items():
            start_time = time.perf_counter()
            result = algorithm(data)
            elapsed_time = time.perf_counter() - start_time

            results[f'{alg_name}_time'] = elapsed_time
            results[f'{alg_name}_rel_error'] = relative_error(result, exact)

        return results

    def _estimate_condition_number(self, data: np.ndarray, exact: mpmath.mpf) -> float:
        """Condition number sum(|x|) / |sum(x)| of the summation problem."""
        if len(data) == 0:
            return 1.0
        if exact == 0:
            return np.inf
        abs_sum = mpmath.fsum(abs(mpmath.mpf(x)) for x in data.tolist())
        return float(abs_sum / abs(exact))

    def run_summation_benchmark(self) -> pd.DataFrame:
        """
        Run the summation benchmark across all test cases and sizes.

        Returns:
            DataFrame with all benchmark results
        """
        test_cases = [
            'alternating_large',
            'harmonic_series',
            'mixed_magnitude',
            'pathological_cancellation',
            'random_normal',
            'ill_conditioned',
        ]

        sizes = [101, 1001, 10001]

        print("Running summation accuracy benchmark...")
        print(f"Test cases: {len(test_cases)}")
        print(f"Sizes: {sizes}")
        print()

        total_tests = len(test_cases) * len(sizes)
        test_count = 0

        for case_type in test_cases:
            for size in sizes:
                test_count += 1
                test_name = f"{case_type}_{size}"
                print(f"[{test_count}/{total_tests}] Running {test_name}...")

                data, exact = self.generate_test_case(case_type, size)
                result = self.run_single_benchmark(test_name, data, exact)
                result['case_type'] = case_type
                self.results.append(result)

        return pd.DataFrame(self.results)

    def run_function_benchmark(self, samples: int = 200) -> pd.DataFrame:
        """
        Compare numpy and ddfloat elementary functions on random arguments.

        Args:
            samples: Number of random arguments per function

        Returns:
            DataFrame with one row per function
        """
        rows = []
        rng = np.random.default_rng(42)

        for name, (np_func, dd_func, mp_func, (low, high)) in self.functions.items():
            args = rng.uniform(low, high, samples)
            np_errors = []
            dd_errors = []
            for x in args.tolist():
                reference = mp_func(mpmath.mpf(x))
                np_errors.append(relative_error(np_func(x), reference))
                dd_errors.append(relative_error(dd_func(DoubleDouble(x)), reference))

            rows.append({
                'function': name,
                'numpy_max_rel_error': max(np_errors),
                'ddfloat_max_rel_error': max(dd_errors),
                'ddfloat_median_rel_error': float(np.median(dd_errors)),
            })

        return pd.DataFrame(rows)

    def analyze_results(self, df: pd.DataFrame, functions_df: pd.DataFrame) -> None:
        """
        Display benchmark results.

        Args:
            df: DataFrame with summation results
            functions_df: DataFrame with elementary function results
        """
        print("\n" + "="*80)
        print("ACCURACY BENCHMARK ANALYSIS")
        print("="*80)

        print("\nRELATIVE ERROR BY SUMMATION ALGORITHM:")
        print("-" * 60)
        print(f"{'Algorithm':<12} {'Median Rel Error':<18} {'Max Rel Error':<18}")
        print("-" * 60)

        for alg in self.summation_algorithms:
            col = f'{alg}_rel_error'
            print(f"{alg:<12} {df[col].median():<18.2e} {df[col].max():<18.2e}")

        print("\nERROR BY TEST CASE TYPE:")
        print("-" * 40)

        for case_type in df['case_type'].unique():
            case_df = df[df['case_type'] == case_type]
            print(f"\n{case_type}:")
            for alg in self.summation_algorithms:
                print(f"  {alg}: {case_df[f'{alg}_rel_error'].median():.2e}")

        print("\nPERFORMANCE COMPARISON:")
        print("-" * 45)
        print(f"{'Algorithm':<12} {'Mean Time (ms)':<15} {'Slowdown':<15}")

        numpy_time = df['numpy_time'].mean()
        for alg in self.summation_algorithms:
            mean_time = df[f'{alg}_time'].mean()
            print(f"{alg:<12} {mean_time * 1000:<15.3f} {mean_time / numpy_time:<15.1f}x")

        print("\nELEMENTARY FUNCTIONS:")
        print("-" * 60)
        print(functions_df.to_string(index=False, float_format=lambda v: f"{v:.2e}"))

    def plot_results(self, df: pd.DataFrame, functions_df: pd.DataFrame, save_plots: bool = True) -> None:
        """
        Create visualization plots of benchmark results.

        Args:
            df: DataFrame with summation results
            functions_df: DataFrame with elementary function results
            save_plots: Whether to save plots to files
        """
        colors = ['red', 'blue', 'green', 'orange']
        floor = 1e-34

        plt.figure(figsize=(12, 8))
        for i, alg in enumerate(self.summation_algorithms):
            col = f'{alg}_rel_error'
            plt.scatter(df['condition_number'], df[col].clip(lower=floor),
                        color=colors[i], label=alg, alpha=0.8)

        plt.xlabel('Condition Number')
        plt.ylabel('Relative Error')
        plt.title('Summation Accuracy vs Conditioning')
        plt.xscale('log')
        plt.yscale('log')
        plt.legend()
        plt.grid(True, alpha=0.3)

        if save_plots:
            plt.savefig('summation_accuracy.png', dpi=300, bbox_inches='tight')
        plt.show()

        plt.figure(figsize=(12, 6))
        x_pos = np.arange(len(functions_df))
        bar_width = 0.35
        plt.bar(x_pos, functions_df['numpy_max_rel_error'].clip(lower=floor), bar_width,
                color='red', label='numpy', alpha=0.8)
        plt.bar(x_pos + bar_width, functions_df['ddfloat_max_rel_error'].clip(lower=floor), bar_width,
                color='blue', label='ddfloat', alpha=0.8)

        plt.xlabel('Function')
        plt.ylabel('Max Relative Error (log scale)')
        plt.title('Elementary Function Accuracy')
        plt.yscale('log')
        plt.xticks(x_pos + bar_width / 2, functions_df['function'])
        plt.legend()
        plt.grid(True, alpha=0.3)
        plt.tight_layout()

        if save_plots:
            plt.savefig('function_accuracy.png', dpi=300, bbox_inches='tight')
        plt.show()


def main():
    """Run the complete accuracy benchmark suite."""
    print("DDFLOAT LIBRARY - ACCURACY BENCHMARK")
    print("=" * 60)

    benchmark = AccuracyBenchmark()
    results_df = benchmark.run_summation_benchmark()
    functions_df = benchmark.run_function_benchmark()

    results_df.to_csv('accuracy_benchmark_results.csv', index=False)
    print("\nResults saved to accuracy_benchmark_results.csv")

    benchmark.analyze_results(results_df, functions_df)
    benchmark.plot_results(results_df, functions_df)

    print("\n" + "="*60)
    print("Accuracy benchmark completed!")
    print("="*60)


if __name__ == "__main__":
    main()
