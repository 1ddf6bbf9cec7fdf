"""
Test suite for land-marketplace

Contains:
- tests/unit/          : Unit tests for domain models, registries and the order engine
"""
