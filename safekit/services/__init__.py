"""Services Layer: the validation gate and the transport/result adapters.

Invariants:
    - Services orchestrate core functions; decision logic stays in core/
"""
