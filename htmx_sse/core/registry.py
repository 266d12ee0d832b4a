import threading
from typing import Dict, Set

from .models import Channel, ClientId


class ChannelRegistry:
    """In-memory client id -> open channels lookup; swap for redis pub/sub if we ever run more than one process."""

    def __init__(self) -> None:
        self._channels: Dict[ClientId, Set[Channel]] = {}
        self._lock = threading.Lock()

    def register(self, client_id: ClientId, channel: Channel) -> None:
        with self._lock:
            self._channels.setdefault(client_id, set()).add(channel)

    def channels_for(self, client_id: ClientId) -> Set[Channel]:
        # copy so broadcasters can iterate while others register/discard
        with self._lock:
            return set(self._channels.get(client_id, ()))

    def discard(self, client_id: ClientId, channel: Channel) -> bool:
        with self._lock:
            channels = self._channels.get(client_id)
            if not channels or channel not in channels:
                return False
            channels.remove(channel)
            if not channels:
                del self._channels[client_id]
            return True

    def client_ids(self) -> Set[ClientId]:
        with self._lock:
            return set(self._channels)

    def channel_count(self) -> int:
        with self._lock:
            return sum(len(c) for c in self._channels.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._channels)
