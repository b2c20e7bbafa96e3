"""
Test suites package.

Kept importable so IDE navigation and `run_tests.py` can resolve test
modules by package path.
"""
