"""
PORTS - Interfaces that infrastructure implements

Subfolders:
- repositories/        → Data persistence interfaces (messages, users)
- (root files)         → Other collaborators (credentials, live connections)
"""

from dmchat.domain.ports.connection_handle import ConnectionHandle
from dmchat.domain.ports.credentials import CredentialService, PasswordHasher

__all__ = [
    "ConnectionHandle",
    "CredentialService",
    "PasswordHasher",
]
