"""Infrastructure Layer — database client and logging setup.

Invariants:
    - Infrastructure never implements entity rules; it only stores and reports
"""
