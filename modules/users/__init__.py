"""
Users module.

Owns the User entity, its persistence and the CRUD endpoints.

Public API:
- IUserRepository: Interface for user persistence
- InMemoryUserRepository: in-process implementation
- PostgresUserRepository: SQL implementation (modules.users.repository)
- User, UserResponse, UserCreate, UserUpdate: models
- hash_password / verify_password: bcrypt helpers
- User exceptions: UserNotFoundError, UserStoreError, DuplicateEmailError
"""

from .interfaces import IUserRepository
from .memory import InMemoryUserRepository, seeded_repository
from .models import User, UserCreate, UserResponse, UserUpdate
from .passwords import hash_password, verify_password
from .exceptions import DuplicateEmailError, UserNotFoundError, UserStoreError

__all__ = [
    # Interface
    "IUserRepository",
    # Implementations
    "InMemoryUserRepository",
    "seeded_repository",
    # Models
    "User",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
    # Passwords
    "hash_password",
    "verify_password",
    # Exceptions
    "DuplicateEmailError",
    "UserNotFoundError",
    "UserStoreError",
]
