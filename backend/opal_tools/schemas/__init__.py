"""Pydantic Schemas: boundary models for tool invocations and report payloads.

Invariants:
    - Schemas validate at the system boundary (Opal requests, vendor payloads)
    - Output payloads serialize with the camelCase keys the report service expects
"""
