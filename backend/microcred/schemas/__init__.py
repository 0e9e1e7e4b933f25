"""Pydantic Schemas: request validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (query strings)
    - Domain types from core/ used for enum fields
"""
