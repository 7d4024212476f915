"""Users REST API — CRUD service for users and groups over MongoDB.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
