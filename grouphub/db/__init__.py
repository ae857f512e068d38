"""Declarative Base shared by the ORM models and alembic's env.

The engine and sessions live in grouphub.infrastructure.database.
"""
