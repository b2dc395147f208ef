"""API Layer — FastAPI routes, dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All JSON endpoints return structured responses with a success/valid indicator

Design Decisions:
    - Thin routes delegate to services (ADR: ExMA impureim sandwich)
"""
