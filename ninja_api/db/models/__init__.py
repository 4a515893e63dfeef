"""
ORM models for the ninja registry.

Importing this package ensures model classes are registered with the Base
metadata for Alembic and runtime usage.
"""

from .ninja import Ninja  # noqa: F401
