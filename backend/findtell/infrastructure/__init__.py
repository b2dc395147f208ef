"""Infrastructure Layer — database, key-value store, provider client, logging.

Invariants:
    - Infrastructure imports only core boundary types (errors, protocols), never verdict rules
    - External calls wrapped with timeout and error mapping; no silent retries

Design Decisions:
    - Thin wrappers over raw clients (ADR: ExMA single responsibility)
"""
