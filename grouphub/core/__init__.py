"""Core Layer — identities, entities, errors and store contracts. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/

Design Decisions:
    - Store accessed only through the Protocol in repository_protocols.py; the
      SQLAlchemy implementation lives in infrastructure/
"""
