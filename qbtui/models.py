"""Data models for the qBittorrent Web API responses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Mapping, TypeVar

_E = TypeVar("_E", bound=Enum)


def _enum_or_none(enum_type: type[_E], value: Any) -> _E | None:
    if value is None:
        return None
    try:
        return enum_type(value)
    except ValueError:
        return None


class TorrentState(Enum):
    """Torrent states as reported by qBittorrent."""

    ERROR = "error"
    MISSING_FILES = "missingFiles"
    UPLOADING = "uploading"
    PAUSED_UP = "pausedUP"
    QUEUED_UP = "queuedUP"
    STALLED_UP = "stalledUP"
    CHECKING_UP = "checkingUP"
    FORCED_UP = "forcedUP"
    ALLOCATING = "allocating"
    DOWNLOADING = "downloading"
    META_DL = "metaDL"
    PAUSED_DL = "pausedDL"
    QUEUED_DL = "queuedDL"
    STALLED_DL = "stalledDL"
    CHECKING_DL = "checkingDL"
    FORCED_DL = "forcedDL"
    CHECKING_RESUME_DATA = "checkingResumeData"
    MOVING = "moving"
    UNKNOWN = "unknown"


class TrackerStatus(IntEnum):
    """Tracker status codes."""

    DISABLED = 0
    NOT_CONTACTED = 1
    WORKING = 2
    UPDATING = 3
    NOT_WORKING = 4


class Priority(IntEnum):
    """File download priorities."""

    DO_NOT_DOWNLOAD = 0
    NORMAL = 1
    MIXED = 4
    HIGH = 6
    MAXIMAL = 7


@dataclass(frozen=True)
class Torrent:
    """One entry of the torrent list."""

    name: str | None = None
    hash: str | None = None
    size: int | None = None
    downloaded: int | None = None
    uploaded: int | None = None
    progress: float | None = None
    state: TorrentState | None = None
    dlspeed: int | None = None
    upspeed: int | None = None
    eta: int | None = None
    ratio: float | None = None
    time_active: int | None = None
    num_complete: int | None = None
    num_seeds: int | None = None
    num_incomplete: int | None = None
    dl_limit: int | None = None
    up_limit: int | None = None
    seq_dl: bool | None = None
    last_activity: int | None = None
    added_on: int | None = None
    completion_on: int | None = None
    save_path: str | None = None
    tracker: str | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Torrent:
        """Build a torrent from a decoded API object; unknown keys are ignored."""
        return cls(
            name=data.get("name"),
            hash=data.get("hash"),
            size=data.get("size"),
            downloaded=data.get("downloaded"),
            uploaded=data.get("uploaded"),
            progress=data.get("progress"),
            state=_enum_or_none(TorrentState, data.get("state")),
            dlspeed=data.get("dlspeed"),
            upspeed=data.get("upspeed"),
            eta=data.get("eta"),
            ratio=data.get("ratio"),
            time_active=data.get("time_active"),
            num_complete=data.get("num_complete"),
            num_seeds=data.get("num_seeds"),
            num_incomplete=data.get("num_incomplete"),
            dl_limit=data.get("dl_limit"),
            up_limit=data.get("up_limit"),
            seq_dl=data.get("seq_dl"),
            last_activity=data.get("last_activity"),
            added_on=data.get("added_on"),
            completion_on=data.get("completion_on"),
            save_path=data.get("save_path"),
            tracker=data.get("tracker"),
        )


@dataclass(frozen=True)
class TorrentContent:
    """One file inside a torrent."""

    name: str
    priority: Priority
    size: int
    progress: float

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> TorrentContent:
        """Build a file entry from a decoded API object."""
        return cls(
            name=data["name"],
            priority=Priority(data["priority"]),
            size=int(data["size"]),
            progress=float(data["progress"]),
        )


@dataclass(frozen=True)
class Tracker:
    """One tracker of a torrent."""

    url: str
    status: TrackerStatus
    num_peers: int
    num_seeds: int

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Tracker:
        """Build a tracker from a decoded API object."""
        return cls(
            url=data["url"],
            status=TrackerStatus(data["status"]),
            num_peers=int(data["num_peers"]),
            num_seeds=int(data["num_seeds"]),
        )


@dataclass(frozen=True)
class Peer:
    """One peer connected to a torrent."""

    address: str = ""
    connection: str | None = None
    country: str | None = None
    downloaded: int | None = None
    uploaded: int | None = None
    progress: float | None = None
    dl_speed: int | None = None
    up_speed: int | None = None
    client: str | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Peer:
        """Build a peer from a decoded API object; the address is ``ip:port``."""
        ip = data.get("ip")
        port = data.get("port")
        if ip is None:
            address = ""
        elif port is None:
            address = str(ip)
        else:
            address = f"{ip}:{port}"
        return cls(
            address=address,
            connection=data.get("connection"),
            country=data.get("country"),
            downloaded=data.get("downloaded"),
            uploaded=data.get("uploaded"),
            progress=data.get("progress"),
            dl_speed=data.get("dl_speed"),
            up_speed=data.get("up_speed"),
            client=data.get("client"),
        )