"""
APPLICATION LAYER - Use Cases & Orchestration

This layer contains:
- commands/  → Write operations (register, login, delete conversation)
- queries/   → Read operations (history, user listing)
- realtime/  → Identity directory, delivery router, connection sessions
- dto/       → Data Transfer Objects
- common/    → Shared interfaces (Command, Query base classes)

Rules:
- Depends on Domain layer only
- No HTTP/framework code here
"""
