"""
DTOs - Data Transfer Objects

- message.py  → MessageDTO
- user.py     → UserDTO
- realtime.py → WsInbound / WsOutbound envelopes

DTOs are for API input/output, entities are for business logic.
"""

from dmchat.application.dto.message import MessageDTO
from dmchat.application.dto.user import UserDTO
from dmchat.application.dto.realtime import WsInbound, WsOutbound, DM_EVENT, ERROR_EVENT

__all__ = [
    "MessageDTO",
    "UserDTO",
    "WsInbound",
    "WsOutbound",
    "DM_EVENT",
    "ERROR_EVENT",
]
