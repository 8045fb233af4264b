"""Repository interfaces for the chat identity domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from chatauth.domain.repository.authorization_state import AuthorizationStateStore
from chatauth.domain.repository.handoff import HandoffStore
from chatauth.domain.repository.user import UserRepository

__all__ = [
    "AuthorizationStateStore",
    "HandoffStore",
    "UserRepository",
]
