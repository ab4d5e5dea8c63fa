"""Human-readable text for values returned by qBittorrent."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from qbtui.models import Priority, TorrentState, TrackerStatus

# qBittorrent reports this ETA for torrents that are complete.
ETA_COMPLETE = 8640000

_STATE_LABELS = {
    TorrentState.ERROR: "Error",
    TorrentState.MISSING_FILES: "Missing Files",
    TorrentState.UPLOADING: "Seeding",
    TorrentState.STALLED_UP: "Seeding",
    TorrentState.FORCED_UP: "Seeding",
    TorrentState.CHECKING_UP: "Checking",
    TorrentState.CHECKING_DL: "Checking",
    TorrentState.CHECKING_RESUME_DATA: "Checking",
    TorrentState.PAUSED_UP: "Completed",
    TorrentState.QUEUED_UP: "Queued",
    TorrentState.ALLOCATING: "Allocating",
    TorrentState.DOWNLOADING: "Downloading",
    TorrentState.META_DL: "Downloading",
    TorrentState.FORCED_DL: "Downloading",
    TorrentState.PAUSED_DL: "Paused",
    TorrentState.STALLED_DL: "Stalled",
    TorrentState.MOVING: "Moving",
    TorrentState.UNKNOWN: "Unknown",
}

_TRACKER_LABELS = {
    TrackerStatus.DISABLED: "Disabled",
    TrackerStatus.NOT_CONTACTED: "Not Contacted",
    TrackerStatus.WORKING: "Working",
    TrackerStatus.UPDATING: "Updating",
    TrackerStatus.NOT_WORKING: "Not Working",
}

_PRIORITY_LABELS = {
    Priority.DO_NOT_DOWNLOAD: "Do Not Download",
    Priority.NORMAL: "Normal",
    Priority.MIXED: "Medium",
    Priority.HIGH: "High",
    Priority.MAXIMAL: "Max",
}

_BYTE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB")
_RATE_UNITS = ("B/s", "KiB/s", "MiB/s", "GiB/s", "TiB/s")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def torrent_state_label(state: TorrentState | None) -> str:
    """Return the display label for a torrent state."""
    return _STATE_LABELS.get(state, "Very Unknown")


def tracker_status_label(status: TrackerStatus) -> str:
    """Return the display label for a tracker status."""
    return _TRACKER_LABELS[status]


def priority_label(priority: Priority) -> str:
    """Return the display label for a file priority."""
    return _PRIORITY_LABELS[priority]


def timestamp_human_readable(timestamp: int | None) -> str:
    """Format a Unix timestamp as ``YYYY-MM-DD HH:MM:SS`` in UTC."""
    if timestamp is None:
        return "N/A"
    try:
        moment = _EPOCH + timedelta(seconds=timestamp)
    except OverflowError:
        return "Invalid timestamp"
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def _scaled(value: int, units: tuple[str, ...]) -> str:
    amount = float(value)
    unit = units[0]
    for unit in units[:-1]:
        if amount < 1024.0:
            break
        amount /= 1024.0
    else:
        unit = units[-1]
    if amount == 0.0:
        return f"{amount:.0f} {unit}"
    return f"{amount:.2f} {unit}"


def format_bytes(size: int) -> str:
    """Format a byte count with binary units up to TiB."""
    return _scaled(size, _BYTE_UNITS)


def format_rate(rate: int) -> str:
    """Format a transfer rate in bytes per second with binary units."""
    return _scaled(rate, _RATE_UNITS)


def format_seconds(seconds: int) -> str:
    """Format a duration like ``1W:2D:3H:4M:5S``, omitting zero parts."""
    if seconds == ETA_COMPLETE or seconds <= 0:
        return "0"
    parts = []
    for length, suffix in ((604800, "W"), (86400, "D"), (3600, "H"), (60, "M"), (1, "S")):
        count, seconds = divmod(seconds, length)
        if count > 0:
            parts.append(f"{count}{suffix}")
    return ":".join(parts)