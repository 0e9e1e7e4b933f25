"""API Layer: FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return the {success, data, timestamp} envelope

Design Decisions:
    - Thin routes: load dataset, call core, wrap result (impureim sandwich)
"""
