"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (caller input, API responses)
    - Schemas convert to core/ dataclasses before any business logic runs

Design Decisions:
    - Separate from core types: schemas are API contracts, core types are domain (ADR: DDD boundary)
"""
