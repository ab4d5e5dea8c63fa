"""Application state and the message-driven update loop."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Callable
from urllib.parse import urlsplit

from qbtui.api import QbitClient, QbitError
from qbtui.config import AppConfig, load_config, save_config
from qbtui.enums import Message, ScrollContext, SelectedAddTorrentTab, SelectedInfoTab
from qbtui.models import Peer, Torrent, TorrentContent, Tracker

TORRENT_LIST_LIMIT = 10

_HOSTED_SCHEMES = {"http", "https", "ftp", "ws", "wss"}

ClientFactory = Callable[[AppConfig], QbitClient]


def _default_client(config: AppConfig) -> QbitClient:
    return QbitClient(config.api_url, config.username, config.password)


def _is_url(text: str) -> bool:
    try:
        parts = urlsplit(text)
    except ValueError:
        return False
    if not parts.scheme or not text.lower().startswith(parts.scheme + ":"):
        return False
    return parts.scheme not in _HOSTED_SCHEMES or bool(parts.netloc)


def _next_index(current: int | None, length: int) -> int:
    if current is None or current >= length - 1:
        return 0
    return current + 1


def _previous_index(current: int | None, length: int) -> int:
    if current is None:
        return 0
    if current == 0:
        return max(length - 1, 0)
    return current - 1


class App:
    """Everything the interface shows, and the handlers that change it."""

    def __init__(
        self,
        config: AppConfig | None = None,
        client_factory: ClientFactory | None = None,
        config_path: str | Path | None = None,
    ) -> None:
        self.config_path = Path(config_path) if config_path is not None else None
        self.config = config if config is not None else load_config(self.config_path)
        self.input = replace(self.config)
        self._client_factory = client_factory or _default_client
        self.running = True
        self.selected: int | None = None
        self.info_selected: int | None = None
        self.scroll_context = ScrollContext.TORRENTS_TABLE
        self.character_index = 0
        self.cfg_popup = False
        self.torrent_popup = False
        self.info_tab = SelectedInfoTab.DETAILS
        self.add_torrent_popup = False
        self.add_torrent_tab = SelectedAddTorrentTab.MAGNET_LINK
        self.magnet_link = ""
        self.torrent_file_path = ""
        self.torrents: list[Torrent] = []
        self.torrent_trackers: list[Tracker] = []
        self.torrent_peers: list[Peer] | None = None
        self.torrent_content: list[TorrentContent] = []
        self.last_error: str | None = None

    def _client(self) -> QbitClient:
        return self._client_factory(self.config)

    def selected_torrent(self) -> Torrent | None:
        """Return the highlighted torrent, or the first one if none is highlighted."""
        index = self.selected or 0
        if 0 <= index < len(self.torrents):
            return self.torrents[index]
        return None

    def _selected_hash(self) -> str | None:
        torrent = self.selected_torrent()
        return torrent.hash if torrent is not None else None

    def refresh_torrents(self) -> None:
        """Reload the torrent list, keeping the old one on failure."""
        try:
            with self._client() as client:
                self.torrents = client.get_torrent_list(limit=TORRENT_LIST_LIMIT)
        except QbitError as err:
            self.last_error = str(err)

    def load_torrent_contents(self) -> None:
        """Load the files of the selected torrent."""
        torrent_hash = self._selected_hash()
        if torrent_hash is None:
            return
        try:
            with self._client() as client:
                self.torrent_content = client.get_torrent_contents(torrent_hash)
        except QbitError as err:
            self.last_error = str(err)

    def load_torrent_trackers(self) -> None:
        """Load the trackers of the selected torrent."""
        torrent_hash = self._selected_hash()
        if torrent_hash is None:
            return
        try:
            with self._client() as client:
                self.torrent_trackers = client.get_torrent_trackers(torrent_hash)
        except QbitError as err:
            self.last_error = str(err)

    def load_torrent_peers(self) -> None:
        """Load the peers of the selected torrent; they are cleared on failure."""
        torrent_hash = self._selected_hash()
        if torrent_hash is None:
            return
        try:
            with self._client() as client:
                self.torrent_peers = client.get_torrent_peers(torrent_hash)
        except QbitError as err:
            self.last_error = str(err)
            self.torrent_peers = None

    def _add_torrent(self, action: Callable[[QbitClient], None]) -> Message:
        try:
            with self._client() as client:
                action(client)
        except QbitError as err:
            self.last_error = str(err)
            return Message.REFRESH_TORRENTS
        return Message.DISPLAY_ADD_TORRENT

    def add_torrent_magnet(self) -> Message:
        """Add the entered magnet link; raises ValueError if it is empty or malformed."""
        if not self.magnet_link:
            raise ValueError("Magnet link is empty")
        urls = self.magnet_link.split("\n")
        if not all(_is_url(url) for url in urls):
            raise ValueError("Invalid magnet link format")
        return self._add_torrent(lambda client: client.add_torrent_urls(urls))

    def add_torrent_file(self) -> Message:
        """Add the chosen torrent file; raises ValueError if it cannot be read."""
        path = self.torrent_file_path
        if not path:
            raise ValueError("Torrent file path is empty")
        try:
            data = Path(path).read_bytes()
        except OSError as err:
            raise ValueError("Failed to read torrent file") from err
        return self._add_torrent(lambda client: client.add_torrent_files([(path, data)]))

    def info_tab_length(self) -> int:
        """Return the number of rows in the current info tab."""
        if self.info_tab is SelectedInfoTab.TRACKERS:
            return len(self.torrent_trackers)
        if self.info_tab is SelectedInfoTab.PEERS:
            return len(self.torrent_peers or [])
        if self.info_tab is SelectedInfoTab.FILES:
            return len(self.torrent_content)
        return 0

    def scroll_down(self) -> Message | None:
        """Move the selection down, wrapping to the top."""
        if self.scroll_context is ScrollContext.TORRENTS_TABLE:
            self.selected = _next_index(self.selected, len(self.torrents))
            return self.info_tab.update_selected() if self.torrent_popup else None
        self.info_selected = _next_index(self.info_selected, self.info_tab_length())
        return None

    def scroll_up(self) -> Message | None:
        """Move the selection up, wrapping to the bottom."""
        if self.scroll_context is ScrollContext.TORRENTS_TABLE:
            self.selected = _previous_index(self.selected, len(self.torrents))
            return self.info_tab.update_selected() if self.torrent_popup else None
        self.info_selected = _previous_index(self.info_selected, self.info_tab_length())
        return None

    def update(self, msg: Message) -> Message | None:
        """Handle one message and return the follow-up message, if any."""
        if msg is Message.REFRESH_TORRENTS:
            self.refresh_torrents()
            if self.torrent_popup:
                return self.info_tab.update_selected()
        elif msg is Message.TORRENT_FILES:
            self.load_torrent_contents()
        elif msg is Message.TORRENT_TRACKERS:
            self.load_torrent_trackers()
        elif msg is Message.TORRENT_PEERS:
            self.load_torrent_peers()
        elif msg is Message.DISPLAY_TORRENT_INFO:
            self.torrent_popup = not self.torrent_popup
        elif msg is Message.DISPLAY_ADD_TORRENT:
            self.add_torrent_popup = not self.add_torrent_popup
            self.character_index = 0
            return Message.REFRESH_TORRENTS
        elif msg in (Message.ADD_TORRENT_MAGNET, Message.ADD_TORRENT_FILE):
            adder = (
                self.add_torrent_magnet
                if msg is Message.ADD_TORRENT_MAGNET
                else self.add_torrent_file
            )
            try:
                return adder()
            except ValueError as err:
                self.last_error = f"Error adding torrent: {err}"
        elif msg is Message.DISPLAY_CFG_EDITOR:
            self.cfg_popup = not self.cfg_popup
            self.character_index = 0
            return Message.REFRESH_TORRENTS
        elif msg is Message.SAVE_CFG:
            self.config = replace(self.input)
            try:
                save_config(self.input, self.config_path)
            except OSError as err:
                self.last_error = f"Error creating config file: {err}"
            return Message.DISPLAY_CFG_EDITOR
        elif msg is Message.QUIT:
            self.running = False
        return None