"""Infrastructure Layer: dataset IO and cross-cutting concerns.

Invariants:
    - File and parse failures are mapped to core/errors.py types
    - Nothing here computes portfolio figures (that is core/)
"""
