"""Services Layer — orchestration between validation and storage.

Invariants:
    - Services return tagged outcomes; HTTP concerns stay in api/
"""
