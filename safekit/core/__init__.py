"""Core Layer: validation, errors and predicates. No IO, no async.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - External collaborators are reached only through Protocols
"""
