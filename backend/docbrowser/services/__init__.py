"""Services Layer: query operations that run against the store under a deadline.

Invariants:
    - Every operation validates caller input before issuing any store call
    - Every store round trip (cursor consumption included) runs inside one deadline
"""
