"""
Unit Tests for the Sheeps & Kittens Engine

This package contains unit tests for all engine components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_engine.py

    # Run with coverage
    pytest tests/ --cov=sheeps_kittens --cov-report=html

    # Run specific test
    pytest tests/test_board.py::TestCaptureTargets::test_orthogonal_capture

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
"""
