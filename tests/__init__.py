"""
Test suite for the ddfloat library.

This package contains tests for all components of the double-double
library. Accuracy tests compare against mpmath at 256 bits.

Test Structure:
- test_eft.py: Error-free transformations
- test_core.py: DoubleDouble arithmetic, comparison, sign and rounding
- test_functions.py: Transcendental functions
- test_consts.py: Constant catalog
- test_parse.py: Decimal parsing
- test_formatting.py: Decimal formatting
- test_algorithms.py: Aggregation helpers and array conversions
- conftest.py: Shared fixtures and configuration

Usage:
    # Run all tests
    pytest

    # Run specific test file
    pytest tests/test_core.py

    # Run tests with coverage
    pytest --cov=ddfloat

    # Run only fast tests
    pytest -m "not slow"
"""

__version__ = "1.0.0"
