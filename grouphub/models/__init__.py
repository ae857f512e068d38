"""ORM Models — SQLAlchemy declarative models for users, groups and memberships.

Invariants:
    - All models inherit from Base (db/base.py)
    - Membership pair uniqueness is a table constraint, not application logic

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from grouphub.models.user import User  # noqa: F401
from grouphub.models.group import Group  # noqa: F401
from grouphub.models.user_group import UserGroup  # noqa: F401
