"""
DOMAIN LAYER - Direct messaging core types

This layer contains:
- Entities: Message, User
- Value Objects: UserId, MessageId
- Ports: Interfaces that infrastructure implements (stores, credentials)
- Exceptions: Domain-specific errors

RULES:
1. NO framework imports (no FastAPI, Prisma, Pydantic, etc.)
2. NO I/O operations
3. Only depends on Python stdlib
"""
