"""
Test suite for bc-mathlib

Contains:
- tests/unit/          : Unit tests for individual modules
"""
