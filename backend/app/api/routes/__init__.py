"""Route Modules — one file per resource/concern (health, payment instructions).

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic
"""
