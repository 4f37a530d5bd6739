#!/usr/bin/env python3
"""
Pytest configuration and fixtures for double-double tests.

This file contains shared test fixtures, configuration, and utilities
used across the test suite. Reference values come from mpmath running at
256 bits of precision.
"""

import pytest
import numpy as np
import torch
import mpmath
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ddfloat import DoubleDouble

mpmath.mp.prec = 256


@pytest.fixture(scope="session")
def random_seed():
    """Set random seed for reproducible tests."""
    seed = 42
    np.random.seed(seed)
    torch.manual_seed(seed)
    return seed


@pytest.fixture
def rng():
    """Seeded numpy generator for per-test random data."""
    return np.random.default_rng(42)


def make_random_dd(rng, low=-1.0, high=1.0):
    """Random valid DoubleDouble with both components populated."""
    hi = float(rng.uniform(low, high))
    while hi == 0.0:
        hi = float(rng.uniform(low, high))
    lo = hi * float(rng.uniform(-1.0, 1.0)) * 2.0 ** -54
    return DoubleDouble(hi, lo)


@pytest.fixture
def random_dd(rng):
    """Factory fixture producing random valid DoubleDouble values."""

    def factory(low=-1.0, high=1.0):
        return make_random_dd(rng, low, high)

    return factory


@pytest.fixture
def simple_data():
    """Simple test data for basic functionality tests."""
    return [1.0, 2.0, 3.0, 4.0, 5.0]


@pytest.fixture
def pathological_cancellation():
    """Data whose exact sum is lost entirely by float summation."""
    return [1e16, 1.0, -1e16, 1.0, 1e-20]


@pytest.fixture
def batch_arrays():
    """Collection of arrays for batch processing tests."""
    np.random.seed(42)

    arrays = [
        np.random.randn(100),
        np.random.randn(200),
        np.random.randn(150),
        np.random.randn(300) * 1e8,
        np.random.randn(80),
    ]

    return arrays


class AccuracyChecker:
    """Utility class for checking accuracy against mpmath."""

    @staticmethod
    def to_mp(value) -> mpmath.mpf:
        """Exact value of a DoubleDouble (or float) as an mpf."""
        if isinstance(value, DoubleDouble):
            return mpmath.mpf(value.hi) + mpmath.mpf(value.lo)
        return mpmath.mpf(value)

    @classmethod
    def relative_error(cls, computed, reference) -> float:
        """Calculate relative error of computed against an mpmath reference."""
        computed = cls.to_mp(computed)
        reference = mpmath.mpf(reference)
        if reference == 0:
            return float(abs(computed))
        return float(abs(computed - reference) / abs(reference))

    @classmethod
    def absolute_error(cls, computed, reference) -> float:
        """Calculate absolute error of computed against an mpmath reference."""
        return float(abs(cls.to_mp(computed) - mpmath.mpf(reference)))

    @classmethod
    def assert_relative(cls, computed, reference, max_relative_error):
        """Assert that relative error is within bounds."""
        error = cls.relative_error(computed, reference)
        assert error <= max_relative_error, (
            f"Relative error {error} exceeds threshold {max_relative_error}\n"
            f"Computed: {computed!r}, Reference: {mpmath.nstr(reference, 40)}"
        )

    @classmethod
    def assert_absolute(cls, computed, reference, max_absolute_error):
        """Assert that absolute error is within bounds."""
        error = cls.absolute_error(computed, reference)
        assert error <= max_absolute_error, (
            f"Absolute error {error} exceeds threshold {max_absolute_error}\n"
            f"Computed: {computed!r}, Reference: {mpmath.nstr(reference, 40)}"
        )


@pytest.fixture
def accuracy_checker():
    """Fixture providing accuracy checking utilities."""
    return AccuracyChecker()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "fma: marks tests that depend on the two_prod backend"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        # Mark tests that take long time as slow
        if "large" in item.name or "stress" in item.name:
            item.add_marker(pytest.mark.slow)

        if "fma" in item.name or "dekker" in item.name:
            item.add_marker(pytest.mark.fma)

        # Mark integration tests
        if "integration" in item.name or "end_to_end" in item.name:
            item.add_marker(pytest.mark.integration)
