"""
Infrastructure Layer - Technical implementations of domain ports.

This layer contains:
- persistence/: Prisma-backed message store and user repository
- security/:    password hashing and JWT credentials
"""
