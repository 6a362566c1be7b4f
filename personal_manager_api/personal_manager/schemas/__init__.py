"""
Public Pydantic schemas used by FastAPI routes, services, and tests.

Schemas are grouped by domain module (portfolio, planner, content, auth) and
also include the common response envelope.
"""

from .common import ApiResponse  # noqa: F401
