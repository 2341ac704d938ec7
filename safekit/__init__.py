"""safekit: validation, typed errors and error display helpers for FastAPI/pydantic apps.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
