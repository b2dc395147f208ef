"""Services Layer — orchestrates IO around the pure core.

Invariants:
    - Services receive their collaborators (store, provider, settings values) by injection
    - Webhook dispatch uses an explicit dict mapping (no auto-discovery)
"""
