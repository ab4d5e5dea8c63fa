"""A small client for the qBittorrent Web API."""

from __future__ import annotations

from dataclasses import replace
from http.cookies import CookieError, SimpleCookie
from typing import Any, Iterable

import httpx

from qbtui.models import Peer, Torrent, TorrentContent, Tracker


class QbitError(Exception):
    """Raised when the qBittorrent Web API cannot be used."""


class QbitClient:
    """Session-based access to the qBittorrent Web API.

    The client logs in on its first request and logs in again once if the
    server answers 403.
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._username = username
        self._password = password
        self._http = httpx.Client(
            base_url=self._base_url,
            transport=transport,
            headers={"Referer": self._base_url},
            timeout=10.0,
        )
        self._logged_in = False
        self._session: str | None = None

    def __enter__(self) -> QbitClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying HTTP connections."""
        self._http.close()

    def _post_login(self) -> httpx.Response:
        try:
            return self._http.post(
                "/api/v2/auth/login",
                data={"username": self._username, "password": self._password},
            )
        except httpx.HTTPError as err:
            raise QbitError(f"cannot reach {self._base_url}: {err}") from err

    def _login(self) -> None:
        response = self._post_login()
        if response.status_code != 200 or response.text.strip() != "Ok.":
            raise QbitError(f"login to {self._base_url} failed")
        self._session = None
        for header in response.headers.get_list("set-cookie"):
            cookie = SimpleCookie()
            try:
                cookie.load(header)
            except CookieError:
                continue
            if "SID" in cookie:
                self._session = cookie["SID"].value
        self._logged_in = True

    def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        headers = {"Cookie": f"SID={self._session}"} if self._session else {}
        try:
            return self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as err:
            raise QbitError(f"{method} {path} failed: {err}") from err

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        if not self._logged_in:
            self._login()
        response = self._send(method, path, **kwargs)
        if response.status_code == 403:
            self._login()
            response = self._send(method, path, **kwargs)
        if response.is_error:
            raise QbitError(f"{method} {path} failed with status {response.status_code}")
        return response

    def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        response = self._request("GET", path, params=params)
        try:
            return response.json()
        except ValueError as err:
            raise QbitError(f"GET {path} returned invalid JSON") from err

    @staticmethod
    def _check_added(response: httpx.Response) -> None:
        if response.text.strip() == "Fails.":
            raise QbitError("qBittorrent refused to add the torrent")

    def get_torrent_list(self, limit: int | None = None) -> list[Torrent]:
        """Return all torrents, at most ``limit`` of them if given."""
        params: dict[str, Any] = {"filter": "all"}
        if limit is not None:
            params["limit"] = limit
        data = self._get_json("/api/v2/torrents/info", params)
        return [Torrent.from_json(item) for item in data]

    def get_torrent_contents(self, torrent_hash: str) -> list[TorrentContent]:
        """Return the files of one torrent."""
        data = self._get_json("/api/v2/torrents/files", {"hash": torrent_hash})
        return [TorrentContent.from_json(item) for item in data]

    def get_torrent_trackers(self, torrent_hash: str) -> list[Tracker]:
        """Return the trackers of one torrent."""
        data = self._get_json("/api/v2/torrents/trackers", {"hash": torrent_hash})
        return [Tracker.from_json(item) for item in data]

    def get_torrent_peers(self, torrent_hash: str) -> list[Peer]:
        """Return the peers of one torrent, addressed as ``ip:port``."""
        data = self._get_json("/api/v2/sync/torrentPeers", {"hash": torrent_hash})
        peers = data.get("peers") or {}
        return [replace(Peer.from_json(info), address=address) for address, info in peers.items()]

    def add_torrent_urls(self, urls: Iterable[str]) -> None:
        """Add torrents from magnet links or URLs."""
        response = self._request("POST", "/api/v2/torrents/add", data={"urls": "\n".join(urls)})
        self._check_added(response)

    def add_torrent_files(self, files: Iterable[tuple[str, bytes]]) -> None:
        """Add torrents from ``(filename, contents)`` pairs."""
        upload = [
            ("torrents", (name, data, "application/x-bittorrent")) for name, data in files
        ]
        if not upload:
            raise ValueError("no torrent files given")
        response = self._request("POST", "/api/v2/torrents/add", files=upload)
        self._check_added(response)