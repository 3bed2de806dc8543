"""
Test suite for espigot

Contains:
- tests/unit/          : Unit tests for individual modules
"""
