"""
Test Suite for the fund analytics and compliance engine

Includes:
- End-to-end evaluation of fixture funds
- CLI tests
"""
