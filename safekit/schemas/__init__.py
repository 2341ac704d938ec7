"""Pydantic Schemas: the schema adapter and the result/notification shapes.

Invariants:
    - ModelSchema is the only Schema implementation shipped with the package
    - Result and notification models are validated at the transport boundary
"""
