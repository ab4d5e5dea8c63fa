# qbtui

The pieces of a terminal front end for a qBittorrent instance: a client for
the qBittorrent Web API, typed models of its answers, display formatting,
an application state object driven by messages, and `rich` renderables for
the torrent list, the torrent info panel and the popups.

## Modules

| Module              | What it holds                                                        |
|---------------------|----------------------------------------------------------------------|
| `qbtui.config`      | `AppConfig`, `default_config_path`, `load_config`, `save_config`     |
| `qbtui.api`         | `QbitClient`, `QbitError`                                            |
| `qbtui.models`      | `Torrent`, `TorrentContent`, `Tracker`, `Peer`, `TorrentState`, `TrackerStatus`, `Priority` |
| `qbtui.formatting`  | labels for states, statuses and priorities; byte, rate, time formats |
| `qbtui.enums`       | `Message`, `ScrollContext`, `SelectedInfoTab`, `SelectedAddTorrentTab` |
| `qbtui.app`         | `App`, the state and its `update` handler                            |
| `qbtui.views`       | row builders and `rich` tables for torrents, files, trackers, peers  |
| `qbtui.popups`      | footer, configuration editor, add-torrent popup, cursor positions    |

## Configuration

`AppConfig` holds three settings:

| Field      | Default                 |
|------------|-------------------------|
| `api_url`  | `http://localhost:8080` |
| `username` | `admin`                 |
| `password` | empty                   |

They are stored as TOML in `default-config.toml` in the per-user
configuration directory; `default_config_path()` returns that path.
`load_config(path)` reads the file, writing the defaults first if it does
not exist, and raises `ValueError` if a setting is missing or not a string.
`save_config(config, path)` writes the file, creating its directory, and
returns the path written. Both use the default path when `path` is `None`.

```python
from qbtui.config import load_config, save_config

config = load_config()
config.api_url = "http://localhost:8080"
save_config(config)
```

## Talking to qBittorrent

`QbitClient(base_url, username, password, transport=None)` logs in on its
first request and once more if the server answers 403. It is a context
manager and raises `QbitError` when the server cannot be reached, the login
fails, a request returns an error status, or a torrent is refused.

```python
from qbtui.api import QbitClient
from qbtui.config import load_config

config = load_config()
with QbitClient(config.api_url, config.username, config.password) as client:
    for torrent in client.get_torrent_list(10):
        print(torrent.name, torrent.state)
```

- `get_torrent_list(limit=None)` returns `Torrent` objects.
- `get_torrent_contents(hash)`, `get_torrent_trackers(hash)` and
  `get_torrent_peers(hash)` return the files, trackers and peers of one
  torrent; peers carry their `ip:port` address.
- `add_torrent_urls(urls)` adds magnet links or URLs;
  `add_torrent_files(files)` adds `(filename, contents)` pairs.

## Formatting

```python
from qbtui.formatting import format_bytes, format_rate, format_seconds

format_bytes(1536)       # "1.50 KiB"
format_rate(0)           # "0 B/s"
format_seconds(3725)     # "1H:2M:5S"
```

`format_seconds` returns `"0"` for 8640000, the ETA qBittorrent reports for
a finished torrent. `timestamp_human_readable` formats Unix timestamps in
UTC, giving `"N/A"` for `None`. `torrent_state_label`,
`tracker_status_label` and `priority_label` turn API values into labels.

## Application state

`App(config=None, client_factory=None, config_path=None)` holds the torrent
list, the selection, the open popups and the data of the info tabs.
`update(msg)` handles one `Message` and returns the follow-up message, if
any; failures of the API are kept in `app.last_error`.

```python
from rich.console import Console

from qbtui.app import App
from qbtui.enums import Message
from qbtui.views import render_torrents_table

app = App()
msg = Message.REFRESH_TORRENTS
while msg is not None:
    msg = app.update(msg)

Console().print(render_torrents_table(app))
```

`scroll_down()` and `scroll_up()` move the selection with wrap-around, in the
torrent list or in the info tab according to `app.scroll_context`.
`add_torrent_magnet()` and `add_torrent_file()` raise `ValueError` for an
empty or malformed magnet link or an unreadable file.

## Rendering

`qbtui.views.render_torrents_table(app)` builds the striped torrent table
and `render_torrent_info(app)` the Details, Files, Trackers or Peers tab of
the selected torrent. `qbtui.popups` builds the footer, the configuration
editor (the password shown as asterisks) and the add-torrent popup, and
computes popup areas and text cursor cells with `Rect`, `popup_area`,
`cfg_cursor_position` and `magnet_cursor_position`.

## What this package does not do

There is no command to run and no full-screen program: the package has no
event loop, reads no keyboard input, and does not refresh on a timer. The
key help in the footer describes bindings that a caller has to implement.
The torrent file tab has no file browser; it shows `app.torrent_file_path`
as the caller sets it.