"""Opal Tools Package: Optimizely experimentation and report tools for Opal.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
