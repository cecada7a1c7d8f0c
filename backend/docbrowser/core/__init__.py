"""Core Layer: pure browse logic, no IO, no async, no driver calls.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Functions here are deterministic and raise only BrowserError subclasses
"""
