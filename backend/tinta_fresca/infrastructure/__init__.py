"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/ or services/
    - Every external failure is mapped to a core/errors.py type before it leaves this package
"""
