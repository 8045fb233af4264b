"""Strongly typed identifiers for chat user accounts.

Using NewType for strong typing prevents mixing up the internal primary
key with the identifier that is exposed to clients and tokens.
"""

from typing import NewType
from uuid import UUID

# Internal database primary key, never exposed outside the service
InternalId = NewType("InternalId", int)

# Stable public identifier, carried in tokens and API responses
ExternalId = NewType("ExternalId", UUID)

# Opaque one-time handoff token (random UUID string)
HandoffToken = NewType("HandoffToken", str)
