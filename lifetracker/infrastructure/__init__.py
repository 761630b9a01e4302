"""Infrastructure Layer — cross-cutting concerns for the application shell.

Invariants:
    - Infrastructure never holds domain state
    - core/ never imports from infrastructure/
"""
