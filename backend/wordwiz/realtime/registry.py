from __future__ import annotations

from threading import Lock


class ConnectionRegistry:
    """Which room each Socket.IO connection currently belongs to."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._room_by_sid: dict[str, str] = {}

    def bind(self, sid: str, room_code: str) -> None:
        with self._lock:
            self._room_by_sid[sid] = room_code

    def unbind(self, sid: str) -> str | None:
        with self._lock:
            return self._room_by_sid.pop(sid, None)

    def room_of(self, sid: str) -> str | None:
        with self._lock:
            return self._room_by_sid.get(sid)

    def drop_room(self, room_code: str) -> list[str]:
        with self._lock:
            sids = [sid for sid, code in self._room_by_sid.items() if code == room_code]
            for sid in sids:
                del self._room_by_sid[sid]
            return sids
