from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from dateutil.parser import isoparse

from live_notifier.config import LIVE_STREAM_TYPE, STREAM_URL


if TYPE_CHECKING:
    from live_notifier.config import JsonType


def stream_url(identifier: str) -> str:
    return str(STREAM_URL / identifier)


class ChannelInfo:
    """
    One normalized lookup result for a channel, built from the Helix
    `users`, `streams` and `channels` responses.
    """

    def __init__(
        self,
        identifier: str,
        *,
        display_name: str,
        is_live: bool,
        profile_image_url: str | None = None,
        viewer_count: int = 0,
        game_name: str | None = None,
        stream_title: str | None = None,
        is_mature: bool | None = None,
        started_at: datetime | None = None,
    ):
        self.identifier: str = identifier
        self.display_name: str = display_name
        self.is_live: bool = is_live
        self.profile_image_url: str | None = profile_image_url
        # viewers only mean something while live
        self.viewer_count: int = max(viewer_count, 0) if is_live else 0
        self.game_name: str | None = game_name
        self.stream_title: str | None = stream_title
        self.is_mature: bool | None = is_mature
        self.started_at: datetime | None = started_at if is_live else None

    @classmethod
    def from_helix(
        cls,
        identifier: str,
        user: JsonType,
        stream: JsonType | None,
        channel: JsonType | None,
    ) -> ChannelInfo:
        is_live: bool = stream is not None and stream.get("type") == LIVE_STREAM_TYPE
        game_name: str | None = None
        stream_title: str | None = None
        is_mature: bool | None = None
        if channel is not None:
            game_name = channel.get("game_name")
            stream_title = channel.get("title")
            is_mature = channel.get("is_mature")
        if stream is not None:
            # fill in whatever the channel record didn't have
            if game_name is None:
                game_name = stream.get("game_name")
            if stream_title is None:
                stream_title = stream.get("title")
            if is_mature is None:
                is_mature = stream.get("is_mature")
        started_at: datetime | None = None
        if is_live and stream is not None and stream.get("started_at"):
            started_at = isoparse(stream["started_at"])
        return cls(
            identifier,
            display_name=user.get("display_name") or identifier,
            is_live=is_live,
            profile_image_url=user.get("profile_image_url") or None,
            viewer_count=int((stream or {}).get("viewer_count") or 0),
            game_name=game_name,
            stream_title=stream_title,
            is_mature=is_mature,
            started_at=started_at,
        )

    def __repr__(self) -> str:
        status = f"LIVE({self.viewer_count})" if self.is_live else "OFFLINE"
        return f"ChannelInfo({self.identifier}, {status})"


class ChannelState:
    """
    The last known state of a tracked channel.

    `is_live` stays None until the first successful fetch.
    """

    def __init__(self, identifier: str):
        self.identifier: str = identifier
        self.display_name: str = identifier
        self.is_live: bool | None = None
        self.profile_image_url: str | None = None
        self.viewer_count: int = 0
        self.game_name: str | None = None
        self.stream_title: str | None = None
        self.is_mature: bool | None = None
        self.started_at: datetime | None = None

    def __repr__(self) -> str:
        if self.is_live is None:
            status = "UNKNOWN"
        elif self.is_live:
            status = f"LIVE({self.viewer_count})"
        else:
            status = "OFFLINE"
        return f"ChannelState({self.identifier}, {status})"

    @property
    def observed(self) -> bool:
        return self.is_live is not None

    @property
    def url(self) -> str:
        return stream_url(self.identifier)

    def apply(self, info: ChannelInfo) -> None:
        """
        Overwrite the stored record with a fresh lookup result.

        `is_live` is assigned last, so it keeps the previous value
        while the rest of the record is being replaced.
        """
        self.display_name = info.display_name
        self.profile_image_url = info.profile_image_url
        self.viewer_count = info.viewer_count
        self.game_name = info.game_name
        self.stream_title = info.stream_title
        self.is_mature = info.is_mature
        self.started_at = info.started_at
        self.is_live = info.is_live

    def copy(self) -> ChannelState:
        clone = ChannelState(self.identifier)
        clone.__dict__.update(self.__dict__)
        return clone

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.identifier,
            "name": self.display_name,
            "online": bool(self.is_live),
            "observed": self.observed,
            "image": self.profile_image_url,
            "viewers": self.viewer_count if self.is_live else 0,
            "game": self.game_name,
            "title": self.stream_title,
            "mature": self.is_mature,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "url": self.url,
        }
