"""Infrastructure Layer — the HTTP dispatcher and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/
    - All external calls wrapped with retry/timeout/error mapping
"""
