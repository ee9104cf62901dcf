"""
Repository package initialization.
"""
from repositories.file_storage import FileStorageRepository, sanitize_filename
from repositories.user_repository import (
    SqlAlchemyUserRepository,
    UserRepositoryInterface,
)

__all__ = [
    "FileStorageRepository",
    "SqlAlchemyUserRepository",
    "UserRepositoryInterface",
    "sanitize_filename",
]
