"""
Test suite for floatfmt

Contains:
- tests/unit/          : Unit tests for individual modules
"""
