"""
Test support utilities for radar-spine tests.

Stubs and table builders that don't fit as pytest fixtures but are shared
across test files.
"""
