"""
Generic storage layer: one repository per entity type, backed either by a JSON
file per collection or by an ORM table.
"""

from .base import EntityNotFoundError, Repository, RepositoryError  # noqa: F401
from .factory import RepositoryFactory  # noqa: F401
from .json_repository import FILE_NAMES, JsonRepository, file_name_for  # noqa: F401
from .sql_repository import SqlRepository  # noqa: F401
