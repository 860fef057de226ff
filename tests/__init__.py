"""
Unit Tests for Shogi Engine

This package contains unit tests for all shogi engine components.

Most tests run against real shogi through CShogiRules. Scenarios a real
rules backend never produces (king captures, hand-built game trees) use
the StepRules backend in tests/scripted_rules.py.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_evaluation.py

    # Run with coverage
    pytest tests/ --cov=shogi_engine --cov-report=html

    # Run specific test
    pytest tests/test_search.py::TestMinimax::test_matches_exhaustive_search

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
    - cshogi: Rules backend
"""
