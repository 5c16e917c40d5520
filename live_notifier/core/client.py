from __future__ import annotations

import asyncio
import logging
import webbrowser
from time import time
from typing import TYPE_CHECKING

from live_notifier.api import HelixClient, HTTPClient
from live_notifier.auth import TokenProvider
from live_notifier.config import State
from live_notifier.core.context import NotifierContext
from live_notifier.core.event_bus import EventBus
from live_notifier.models import (
    AuthFailed,
    OpenStreamRequested,
    SyncingEnded,
    SyncingStarted,
    stream_url,
)
from live_notifier.services import (
    ChannelInfoFetcher,
    ChannelSetManager,
    ReconciliationEngine,
    Scheduler,
    UpdateChecker,
)
from live_notifier.utils import canonical_name


if TYPE_CHECKING:
    from live_notifier.config.settings import Settings
    from live_notifier.models import Event


logger = logging.getLogger("LiveNotifier")


class LiveNotifier:
    """
    The application object.

    Wires the polling engine together and exposes the operations the
    presentation layer calls into.
    """

    def __init__(self, settings: Settings):
        self.settings: Settings = settings
        # State management
        self._state: State = State.IDLE if settings.has_credentials else State.SETUP
        self._state_change = asyncio.Event()
        self.context = NotifierContext(settings)
        self.bus = EventBus()
        # API clients and auth
        self._http_client = HTTPClient(settings, self)
        self._token_provider = TokenProvider(settings, self._http_client)
        self._helix = HelixClient(self._http_client, self._token_provider)
        # Services
        self.fetcher = ChannelInfoFetcher(self._helix)
        self.engine = ReconciliationEngine(
            self.context, self.fetcher, self._token_provider, self.bus
        )
        self.update_checker = UpdateChecker(self._http_client, self.bus)
        self.scheduler = Scheduler(settings, self.engine, self.update_checker)
        self.channel_set = ChannelSetManager(self.context, self.scheduler, self.bus)
        self.bus.subscribe(self._on_event)

    @property
    def state(self) -> State:
        return self._state

    def change_state(self, state: State) -> None:
        if self._state is not State.EXIT:
            # prevent state changing once we switch to exit state
            self._state = state
        self._state_change.set()

    def close(self) -> None:
        """
        Called when the application is requested to close by the user,
        usually by the console or application window being closed.
        """
        self.change_state(State.EXIT)

    async def run(self) -> None:
        """Start polling (if the credentials are there) and wait until closed."""
        if self.settings.has_credentials:
            self.start_scheduler()
        else:
            logger.info("No client credentials configured, waiting for setup")
        while self._state is not State.EXIT:
            self._state_change.clear()
            await self._state_change.wait()

    async def shutdown(self) -> None:
        start_time = time()
        await self.scheduler.stop()
        await self._http_client.close()
        self.context.save_settings()
        # wait at least half a second + whatever it takes to complete the closing
        # this allows aiohttp to safely close the session
        await asyncio.sleep(start_time + 0.5 - time())

    def start_scheduler(self) -> None:
        self.scheduler.start()

    def run_pass_now(self) -> None:
        self.scheduler.trigger()

    def add_channel(self, name: str) -> bool:
        logger.info(f"Requested to add {name}")
        return self.channel_set.add(name)

    async def remove_channel(self, name: str) -> bool:
        logger.info(f"Requested to delete {name}")
        return await self.channel_set.remove(name)

    def set_auto_open(self, enabled: bool) -> None:
        self.settings.auto_open_streams = bool(enabled)
        self.context.save_settings()

    def save_credentials(self, client_id: str, client_secret: str) -> None:
        """
        Store new client credentials and start polling with them.
        """
        self.settings.client_id = client_id.strip()
        self.settings.client_secret = client_secret.strip()
        self.settings.initialized = True
        self.context.save_settings()
        self._token_provider.invalidate()
        self.change_state(State.IDLE)
        if self.scheduler.running:
            self.scheduler.trigger()
        else:
            self.start_scheduler()

    def open_stream(self, name: str) -> str:
        url = stream_url(canonical_name(name))
        logger.info(f"Opening {url}")
        webbrowser.open(url)
        return url

    def _on_event(self, event: Event) -> None:
        if isinstance(event, SyncingStarted):
            self.change_state(State.SYNCING)
        elif isinstance(event, SyncingEnded):
            if self._state is State.SYNCING:
                self.change_state(State.IDLE)
        elif isinstance(event, AuthFailed):
            # stays like this until a pass gets through again
            self.change_state(State.AUTH_FAILED)
        elif isinstance(event, OpenStreamRequested):
            self.open_stream(event.identifier)
