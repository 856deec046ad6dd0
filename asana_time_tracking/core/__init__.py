"""Core Layer — pure domain logic, no IO, no HTTP.

Invariants:
    - No module in core/ imports from services/, infrastructure/ or schemas/
    - All functions are pure and deterministic
"""
