"""Services Layer — store repositories implementing core/repository_protocols.py.

Invariants:
    - One repository per table, one store operation per method
"""
