"""Database Metadata — declarative Base shared by models, migrations, and test fixtures.

Invariants:
    - The store owns the tables; this package only maps them
"""
