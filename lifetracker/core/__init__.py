"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from schemas/ or infrastructure/
    - All state lives in memory; persistence is the caller's job
    - No background threads: elapsed time is recomputed on every read

Design Decisions:
    - Functional core separated from the imperative shell
"""
