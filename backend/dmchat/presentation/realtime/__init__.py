"""Realtime (WebSocket) presentation."""

from dmchat.presentation.realtime.websocket import router as realtime_router

__all__ = ["realtime_router"]
