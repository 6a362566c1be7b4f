"""
Business services: a generic CRUD service specialised per entity, and the
authentication service.
"""

from .auth import AuthService  # noqa: F401
from .base import CrudService, EntityCrudService, apply_patch  # noqa: F401
