"""Enumerations that drive the application's state machine."""

from __future__ import annotations

from enum import Enum, auto


class Message(Enum):
    """Requests handled by the application's update loop."""

    REFRESH_TORRENTS = auto()
    """Refresh the list of torrents and other displayed torrent data."""
    TORRENT_FILES = auto()
    """Fetch the contents of the selected torrent."""
    TORRENT_TRACKERS = auto()
    """Fetch or refresh the selected torrent's trackers."""
    TORRENT_PEERS = auto()
    """Fetch or refresh the selected torrent's peers."""
    DISPLAY_TORRENT_INFO = auto()
    """Toggle the torrent info panel."""
    DISPLAY_ADD_TORRENT = auto()
    """Toggle the add-torrent popup."""
    ADD_TORRENT_MAGNET = auto()
    """Add a torrent from the entered magnet link."""
    ADD_TORRENT_FILE = auto()
    """Add a torrent from the chosen torrent file."""
    DISPLAY_CFG_EDITOR = auto()
    """Toggle the configuration editor popup."""
    SAVE_CFG = auto()
    """Save the edited configuration to disk."""
    QUIT = auto()
    """Quit the application."""


class ScrollContext(Enum):
    """Which table the scroll keys currently move through."""

    TORRENTS_TABLE = auto()
    INFO_TAB = auto()


class SelectedInfoTab(Enum):
    """The tab shown in the torrent info panel."""

    DETAILS = 0
    FILES = 1
    TRACKERS = 2
    PEERS = 3

    def _shifted(self, step: int) -> SelectedInfoTab:
        tabs = list(type(self))
        return tabs[(tabs.index(self) + step) % len(tabs)]

    def next(self) -> SelectedInfoTab:
        """Return the tab to the right, wrapping after the last one."""
        return self._shifted(1)

    def previous(self) -> SelectedInfoTab:
        """Return the tab to the left, wrapping before the first one."""
        return self._shifted(-1)

    def update_selected(self) -> Message | None:
        """Return the message that loads this tab's data, if it needs any."""
        return {
            SelectedInfoTab.FILES: Message.TORRENT_FILES,
            SelectedInfoTab.TRACKERS: Message.TORRENT_TRACKERS,
            SelectedInfoTab.PEERS: Message.TORRENT_PEERS,
        }.get(self)


class SelectedAddTorrentTab(Enum):
    """The tab shown in the add-torrent popup."""

    MAGNET_LINK = 0
    FILE = 1

    def toggle(self) -> SelectedAddTorrentTab:
        """Return the other tab."""
        if self is SelectedAddTorrentTab.MAGNET_LINK:
            return SelectedAddTorrentTab.FILE
        return SelectedAddTorrentTab.MAGNET_LINK