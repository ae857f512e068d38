"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Identities cross the wire as plain UUIDs; routes wrap them in UserId/GroupId

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
