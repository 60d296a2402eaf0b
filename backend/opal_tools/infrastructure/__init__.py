"""Infrastructure Layer: outbound HTTP client and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every outbound failure is mapped to an OpalToolError subclass
"""
