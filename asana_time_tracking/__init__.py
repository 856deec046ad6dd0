"""Asana Time Tracking Client — typed access to Asana time tracking entries.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
