"""Infrastructure Layer — database engine, relational store, logging setup.

Invariants:
    - Infrastructure implements core/ contracts; core/ never imports from here
    - All SQLAlchemy exceptions mapped to PersistenceError before leaving this layer
"""
