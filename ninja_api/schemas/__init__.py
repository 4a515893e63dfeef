"""
Public Pydantic schemas used by FastAPI routes, services, and tests.

Includes the ninja request/response models and common reusable models such
as pagination and the problem-detail error envelope.
"""

from .common import MessageResponse, PageRequest, PageResponse, ProblemDetail  # noqa: F401
from .ninja import NinjaCreate, NinjaQuery, NinjaRead, NinjaUpdate  # noqa: F401
