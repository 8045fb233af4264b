"""Repository implementations backed by PostgreSQL and Redis."""

from chatauth.persistence.repository.authorization_state import (
    RedisAuthorizationStateStore,
)
from chatauth.persistence.repository.handoff import RedisHandoffStore
from chatauth.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "RedisAuthorizationStateStore",
    "RedisHandoffStore",
]
