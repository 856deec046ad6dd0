"""Pydantic Schemas — typed views of Asana request payloads and response records.

Invariants:
    - Schemas validate at the system boundary (caller payloads, API responses)
    - Services accept either a schema instance or a plain dict
"""
