"""Infrastructure Layer — registry client and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All external calls wrapped with retry/timeout/error mapping
"""
