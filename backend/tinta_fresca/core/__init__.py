"""Core Layer — error hierarchy, domain types, and pure helpers; no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell (ADR: ExMA impureim sandwich)
"""
