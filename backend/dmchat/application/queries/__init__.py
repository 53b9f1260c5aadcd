"""
QUERIES - Read operations (CQRS)

- messages/ → conversation history between two users
- users/    → directory of other registered users
"""
