"""Services Layer — exhibition workflows on top of the DB and external clients.

Invariants:
    - Services own transactions (commit/refresh); routes only map HTTP to calls
    - Ownership and visibility checks live here, not in routes
    - Each LLM-facing workflow streams through stream_events

Design Decisions:
    - One service module per aggregate or workflow for locality (no god objects)
"""
