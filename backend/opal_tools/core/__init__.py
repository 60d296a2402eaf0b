"""Core Layer: pure domain logic, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - All functions are pure and deterministic

Design Decisions:
    - Parameter parsing and results transformation live here so every tool
      shares one well-tested conversion path
"""
