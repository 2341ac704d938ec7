"""Infrastructure Layer: logging setup and concrete collaborators.

Invariants:
    - Infrastructure never imports from services/ or api/
"""
