"""
Test suite for bigint-engine

Contains:
- tests/unit/          : Unit tests for word kernels, engines and BigInteger
"""
