"""
Presentation Layer - API endpoints and request/response handling.

This layer contains:
- api/:          FastAPI routers (auth, users, messages, metrics)
- realtime/:     WebSocket endpoint and transport adapter
- dependencies/: auth dependency for bearer-protected routes
"""
