"""Core Layer — pure domain logic, no DB, no network, no async.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Reply parsing, text cleanup and gallery layout are deterministic

Design Decisions:
    - Functional core separated from imperative shell: services do the IO,
      core decides what the data means
"""
