"""API Layer: FastAPI error handlers and dependencies.

Invariants:
    - Handlers are registered explicitly by the host app (register_error_handlers)
"""
