"""Infrastructure Layer: store client and cross-cutting concerns.

Invariants:
    - Driver exceptions never cross this layer unmapped
"""
