"""Domain model entities for chat identity."""

from chatauth.domain.model.user import UserAccount

__all__ = [
    "UserAccount",
]
