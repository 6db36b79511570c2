"""Tinta Fresca API Package — schools and user-profile passthrough over a hosted store.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
