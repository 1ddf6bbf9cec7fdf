"""
Core domain models, contracts, errors and collaborator ports.

This module contains the foundational building blocks that are independent
of concrete registries and token implementations.
"""
