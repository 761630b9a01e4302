"""Pydantic Schemas — validation and rendering at the presentation boundary.

Invariants:
    - Schemas validate input before it reaches core/ (names, hex colors, durations)
    - Response models are built from domain objects via from_domain(); core/ never imports them
    - Durations cross the boundary as seconds

Design Decisions:
    - Separate from core dataclasses: schemas are presentation contracts, dataclasses are domain state
"""
