"""Socket.IO broadcaster for real-time updates to web clients."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from socketio import AsyncServer


class WebSocketBroadcaster:
    """Sends events to every connected browser client through Socket.IO.

    Until the web app hands over its server instance, emitting is a no-op.
    """

    def __init__(self):
        self._sio: AsyncServer | None = None  # Will be set by webapp

    def set_socketio(self, sio: AsyncServer):
        self._sio = sio

    async def emit(self, event: str, data: Any):
        """Emit an event to all connected clients.

        Args:
            event: The event name to emit
            data: The data payload to send with the event
        """
        if self._sio:
            await self._sio.emit(event, data)
