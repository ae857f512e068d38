"""Services Layer — credential checks, registration, group saga, projections.

Invariants:
    - Services talk to persistence only through RelationshipStore (core/)
    - No service returns a password hash to its caller

Design Decisions:
    - Plain async functions per operation; the saga is a class because it carries
      state for diagnostics
"""
