"""Services Layer — orchestration of the pure core for one request.

Invariants:
    - Services compose core/ functions; they own logging and exception raising
    - No HTTP concerns (status codes, envelopes) leak into services

Design Decisions:
    - Plain functions over handler classes: one operation, no per-request state
"""
