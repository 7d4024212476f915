"""Core Layer — pure domain logic, no IO, no async, no driver clients.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Validation and outcome mapping are pure and deterministic
"""
