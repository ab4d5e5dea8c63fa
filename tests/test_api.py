from urllib.parse import parse_qs

import httpx
import pytest

from qbtui.api import QbitClient, QbitError
from qbtui.models import Priority, TrackerStatus

BASE_URL = "http://localhost:8080"
password = "password"


class FakeServer:
    def __init__(self, routes, login_reply="Ok."):
        self.routes = routes
        self.login_reply = login_reply
        self.requests = []
        self.logins = 0

    def __call__(self, request):
        self.requests.append(request)
        if request.url.path == "/api/v2/auth/login":
            self.logins += 1
            return httpx.Response(
                200, text=self.login_reply, headers={"set-cookie": "SID=token; path=/"}
            )
        return self.routes[request.url.path](request)

    def api_requests(self):
        return [r for r in self.requests if r.url.path != "/api/v2/auth/login"]


def make_client(server):
    return QbitClient(BASE_URL, "admin", password, transport=httpx.MockTransport(server))


def test_torrent_list_logs_in_and_parses():
    server = FakeServer(
        {"/api/v2/torrents/info": lambda r: httpx.Response(200, json=[{"name": "a", "hash": "h1"}])}
    )
    with make_client(server) as client:
        torrents = client.get_torrent_list(limit=10)
        client.get_torrent_list()
    assert [t.name for t in torrents] == ["a"]
    assert server.logins == 1
    login = server.requests[0]
    assert parse_qs(login.content.decode()) == {"username": ["admin"], "password": [password]}
    first, second = server.api_requests()
    assert first.url.params["filter"] == "all"
    assert first.url.params["limit"] == "10"
    assert "limit" not in second.url.params
    assert first.headers["cookie"] == "SID=token"


def test_failed_login_raises():
    server = FakeServer({}, login_reply="Fails.")
    with make_client(server) as client, pytest.raises(QbitError):
        client.get_torrent_list()


def test_forbidden_triggers_second_login():
    calls = []

    def info(request):
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(403)
        return httpx.Response(200, json=[])

    server = FakeServer({"/api/v2/torrents/info": info})
    with make_client(server) as client:
        assert client.get_torrent_list() == []
    assert server.logins == 2
    assert len(calls) == 2


def test_server_error_raises():
    server = FakeServer({"/api/v2/torrents/info": lambda r: httpx.Response(500)})
    with make_client(server) as client, pytest.raises(QbitError, match="500"):
        client.get_torrent_list()


def test_invalid_json_raises():
    server = FakeServer({"/api/v2/torrents/info": lambda r: httpx.Response(200, text="nope")})
    with make_client(server) as client, pytest.raises(QbitError):
        client.get_torrent_list()


def test_unreachable_server_raises():
    def refuse(request):
        raise httpx.ConnectError("refused", request=request)

    client = QbitClient(BASE_URL, "admin", password, transport=httpx.MockTransport(refuse))
    with client, pytest.raises(QbitError):
        client.get_torrent_list()


def test_contents_and_trackers():
    files = [{"name": "f.bin", "priority": 7, "size": 2048, "progress": 0.5}]
    trackers = [{"url": "udp://tracker.example.com", "status": 2, "num_peers": 3, "num_seeds": 4}]
    server = FakeServer(
        {
            "/api/v2/torrents/files": lambda r: httpx.Response(200, json=files),
            "/api/v2/torrents/trackers": lambda r: httpx.Response(200, json=trackers),
        }
    )
    with make_client(server) as client:
        contents = client.get_torrent_contents("h1")
        found = client.get_torrent_trackers("h1")
    assert contents[0].priority is Priority.MAXIMAL
    assert contents[0].size == 2048
    assert found[0].status is TrackerStatus.WORKING
    assert found[0].url == "udp://tracker.example.com"
    assert all(r.url.params["hash"] == "h1" for r in server.api_requests())


def test_peers_use_keys_as_addresses():
    payload = {"peers": {"10.0.0.1:6881": {"client": "cli", "progress": 1.0}}}
    server = FakeServer({"/api/v2/sync/torrentPeers": lambda r: httpx.Response(200, json=payload)})
    with make_client(server) as client:
        peers = client.get_torrent_peers("h1")
    assert [p.address for p in peers] == ["10.0.0.1:6881"]
    assert peers[0].client == "cli"


def test_peers_missing_gives_empty_list():
    server = FakeServer({"/api/v2/sync/torrentPeers": lambda r: httpx.Response(200, json={"rid": 1})})
    with make_client(server) as client:
        assert client.get_torrent_peers("h1") == []


def test_add_urls_joins_with_newlines():
    server = FakeServer({"/api/v2/torrents/add": lambda r: httpx.Response(200, text="Ok.")})
    with make_client(server) as client:
        client.add_torrent_urls(["magnet:?xt=a", "magnet:?xt=b"])
    (request,) = server.api_requests()
    assert parse_qs(request.content.decode())["urls"] == ["magnet:?xt=a\nmagnet:?xt=b"]


def test_add_refused_raises():
    server = FakeServer({"/api/v2/torrents/add": lambda r: httpx.Response(200, text="Fails.")})
    with make_client(server) as client, pytest.raises(QbitError):
        client.add_torrent_urls(["magnet:?xt=a"])


def test_add_files_sends_multipart():
    server = FakeServer({"/api/v2/torrents/add": lambda r: httpx.Response(200, text="Ok.")})
    with make_client(server) as client:
        client.add_torrent_files([("a.torrent", b"d4:infoe")])
    (request,) = server.api_requests()
    assert b'filename="a.torrent"' in request.content
    assert b"d4:infoe" in request.content
    assert request.headers["content-type"].startswith("multipart/form-data")


def test_add_no_files_raises():
    server = FakeServer({})
    with make_client(server) as client, pytest.raises(ValueError):
        client.add_torrent_files([])