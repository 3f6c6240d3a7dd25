"""Pytest configuration.

Run pytest from this project's root. pythonpath in pyproject.toml puts src/
and the project root on sys.path so tests import webtest_conventions and the
shared helpers under tests.unit.
"""
