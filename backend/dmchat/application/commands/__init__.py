"""
COMMANDS - Write operations (CQRS)

- auth/     → register, login
- messages/ → delete conversation
"""
