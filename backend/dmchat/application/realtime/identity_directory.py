"""
Identity Directory - in-memory map of identity -> live connection handles.

One instance is created by the DI container (APP scope) and shared by the
delivery router and every connection session. Nothing here is persisted.

Concurrency:
    The map is split into a fixed number of stripes, each guarded by its own
    lock and chosen by hash(identity). Operations on different identities
    rarely contend and there is no global mutex. Every operation is O(1) and
    never awaits, so holding a threading.Lock is safe inside the event loop.
"""

import logging
import threading
from typing import Hashable

from dmchat.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


class _Stripe:
    __slots__ = ("lock", "handles")

    def __init__(self):
        self.lock = threading.Lock()
        self.handles: dict[UserId, set[Hashable]] = {}


class IdentityDirectory:
    """Registry of live connection handles per identity (multi-device)."""

    def __init__(self, stripes: int = 64):
        if stripes < 1:
            raise ValueError("stripes must be >= 1")
        self._stripes = [_Stripe() for _ in range(stripes)]

    def _stripe(self, identity: UserId) -> _Stripe:
        return self._stripes[hash(identity) % len(self._stripes)]

    def register(self, identity: UserId, handle: Hashable) -> None:
        stripe = self._stripe(identity)
        with stripe.lock:
            stripe.handles.setdefault(identity, set()).add(handle)
        logger.debug("Registered handle for user %s", identity)

    def unregister(self, identity: UserId, handle: Hashable) -> None:
        """Remove exactly this handle. Unknown identities/handles are ignored."""
        stripe = self._stripe(identity)
        with stripe.lock:
            handles = stripe.handles.get(identity)
            if handles is None:
                return
            handles.discard(handle)
            if not handles:
                del stripe.handles[identity]
        logger.debug("Unregistered handle for user %s", identity)

    def active_handles(self, identity: UserId) -> frozenset:
        """Snapshot of the identity's live handles (possibly empty)."""
        stripe = self._stripe(identity)
        with stripe.lock:
            return frozenset(stripe.handles.get(identity, ()))

    def online_identities(self) -> frozenset:
        online = set()
        for stripe in self._stripes:
            with stripe.lock:
                online.update(stripe.handles)
        return frozenset(online)

    def connection_count(self) -> int:
        total = 0
        for stripe in self._stripes:
            with stripe.lock:
                total += sum(len(h) for h in stripe.handles.values())
        return total
