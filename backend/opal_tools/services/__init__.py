"""Services Layer: tool schemas, tool handlers, registry and dispatch.

Invariants:
    - One define_*_tools.py and one handle_*.py per capability group
    - Tool dispatch uses an explicit dict mapping (no auto-discovery)
"""
