"""Document Browser Package: read-only web front-end for a MongoDB database.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
