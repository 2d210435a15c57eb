"""Core Layer: pure classification logic and the error hierarchy, no IO, no async.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
    - All functions are pure and deterministic
"""
