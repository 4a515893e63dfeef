"""
Repository layer for data access.

Repositories encapsulate SQLAlchemy queries for the ninja table and operate on
the AsyncSession handed to them; they flush but never commit.
"""
