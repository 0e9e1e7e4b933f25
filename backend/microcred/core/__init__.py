"""Core Layer: pure query and aggregation logic, no IO, no async.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
    - Every function takes its reference time explicitly (no hidden clock reads)
    - Inputs are never mutated; every operation returns new collections
"""
