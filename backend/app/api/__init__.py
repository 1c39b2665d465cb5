"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Success and failure both answer with structured JSON envelopes

Design Decisions:
    - Thin routes delegate to services/transfer_orchestrator (ADR: ExMA impureim sandwich)
"""
