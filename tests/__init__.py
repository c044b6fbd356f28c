"""
Test suite for power-expansions

Contains:
- tests/unit/          : Unit tests for individual modules
"""
