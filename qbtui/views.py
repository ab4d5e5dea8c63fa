"""Tables for the torrent list and the torrent info panel."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from qbtui.app import App
from qbtui.enums import ScrollContext, SelectedInfoTab
from qbtui.formatting import (
    ETA_COMPLETE,
    format_bytes,
    format_rate,
    format_seconds,
    priority_label,
    timestamp_human_readable,
    torrent_state_label,
    tracker_status_label,
)
from qbtui.models import Peer, Torrent, TorrentContent, Tracker, TrackerStatus

# Rows an info tab shows before it needs to scroll.
INFO_TAB_DETAILS = 11

HEADER_STYLE = "bold white on black"
SELECTED_ROW_STYLE = "bold black on bright_blue"
EVEN_ROW_STYLE = "white on grey30"
ODD_ROW_STYLE = "white on black"
PLAIN_ROW_STYLE = "white on black"
TAB_HIGHLIGHT_STYLE = "bold bright_red"

INFO_TAB_TITLES = ("Details", "Files", "Trackers", "Peers")

TORRENT_COLUMNS = (
    ("Name", 27),
    ("Size", 10),
    ("Bytes DL", 13),
    ("Progress", 6),
    ("State", 8),
    ("DL Speed", 9),
    ("UL Speed", 9),
    ("ETA", 10),
    ("Ratio", 10),
)
FILE_COLUMNS = (("Name", 50), ("Priority", 20), ("Size", 20), ("Progress", 10))
TRACKER_COLUMNS = (("URL", 70), ("Status", 10), ("Peers", 10), ("Seeds", 10))
PEER_COLUMNS = (
    ("IP", 24),
    ("Link", 4),
    ("Country", 19),
    ("Bytes DL", 7),
    ("Bytes UL", 7),
    ("Progress", 7),
    ("DL Speed", 7),
    ("UL Speed", 7),
    ("Client", 17),
)

_TRACKER_STYLES = {
    TrackerStatus.WORKING: "white on green",
    TrackerStatus.NOT_WORKING: "white on red",
    TrackerStatus.NOT_CONTACTED: "white on yellow",
}
_TRACKER_FALLBACK_STYLE = "white on grey30"

Row = tuple[str, ...]


def _or(value, default):
    return default if value is None else value


def _percent(progress: float) -> str:
    return f"{progress * 100.0:.2f}%"


def _minutes(seconds: int) -> int:
    """Divide by sixty, truncating toward zero."""
    quotient = abs(seconds) // 60
    return -quotient if seconds < 0 else quotient


def _flag(value: bool | None) -> str:
    if value is None:
        return "N/A"
    return "true" if value else "false"


def torrent_rows(torrents: Iterable[Torrent]) -> list[Row]:
    """Return the cells of the torrent list, one tuple per torrent."""
    return [
        (
            _or(torrent.name, ""),
            format_bytes(_or(torrent.size, 0)),
            format_bytes(_or(torrent.downloaded, 0)),
            _percent(_or(torrent.progress, -1.0)),
            torrent_state_label(torrent.state),
            format_rate(_or(torrent.dlspeed, 0)),
            format_rate(_or(torrent.upspeed, 0)),
            format_seconds(_or(torrent.eta, 0)),
            f"{_or(torrent.ratio, -1.0):.4f}",
        )
        for torrent in torrents
    ]


def detail_rows(torrent: Torrent) -> list[Row]:
    """Return the transfer details of one torrent as three-cell rows."""
    eta = _or(torrent.eta, -1)
    eta = 0 if eta == ETA_COMPLETE else _minutes(eta)
    return [
        (
            f"Time Active: {format_seconds(_or(torrent.time_active, 0))}",
            f"Eta: {format_seconds(eta)}",
            f"Connections: {_or(torrent.num_complete, -1)}",
        ),
        (
            f"Downloaded: {format_bytes(_or(torrent.downloaded, 0))}",
            f"Uploaded: {format_bytes(_or(torrent.uploaded, 0))}",
            f"Seeds: {_or(torrent.num_seeds, -1)}",
        ),
        (
            f"Download Speed: {format_rate(_or(torrent.dlspeed, 0))}",
            f"Upload Speed: {format_rate(_or(torrent.upspeed, 0))}",
            f"Peers: {_or(torrent.num_incomplete, -1)}",
        ),
        (
            f"Download Limit: {_or(torrent.dl_limit, -1)}",
            f"Upload Limit: {_or(torrent.up_limit, -1)}",
            f"Sequential Dl: {_flag(torrent.seq_dl)}",
        ),
        (
            f"Share Ratio: {_or(torrent.ratio, -1.0):.6f}",
            f"Status: {torrent_state_label(torrent.state)}",
            f"Last Seen Complete: {timestamp_human_readable(torrent.last_activity)}",
        ),
    ]


def information_rows(torrent: Torrent) -> list[Row]:
    """Return the file and identity details of one torrent as three-cell rows."""
    return [
        (
            f"Total Size: {format_bytes(_or(torrent.size, 0))}",
            f"Hash: {_or(torrent.hash, '')}",
            f"Save Path: {_or(torrent.save_path, '')}",
        ),
        (
            f"Added On: {timestamp_human_readable(torrent.added_on)}",
            f"Completed On: {timestamp_human_readable(torrent.completion_on)}",
            f"Tracker: {_or(torrent.tracker, '')}",
        ),
    ]


def file_rows(contents: Iterable[TorrentContent]) -> list[Row]:
    """Return the cells of the files tab."""
    return [
        (
            item.name,
            priority_label(item.priority),
            format_bytes(item.size),
            _percent(item.progress),
        )
        for item in contents
    ]


def tracker_rows(trackers: Iterable[Tracker]) -> list[Row]:
    """Return the cells of the trackers tab."""
    return [
        (
            tracker.url,
            tracker_status_label(tracker.status),
            str(tracker.num_peers),
            str(tracker.num_seeds),
        )
        for tracker in trackers
    ]


def peer_rows(peers: Iterable[Peer]) -> list[Row]:
    """Return the cells of the peers tab."""
    return [
        (
            peer.address,
            _or(peer.connection, ""),
            _or(peer.country, ""),
            format_bytes(_or(peer.downloaded, 0)),
            format_bytes(_or(peer.uploaded, 0)),
            _percent(_or(peer.progress, 0.0)),
            format_rate(_or(peer.dl_speed, 0)),
            format_rate(_or(peer.up_speed, 0)),
            _or(peer.client, ""),
        )
        for peer in peers
    ]


def _table(
    columns: Sequence[tuple[str, int]],
    rows: Sequence[Row],
    styles: Sequence[str],
    selected: int | None,
) -> Table:
    table = Table(expand=True, box=box.SQUARE, header_style=HEADER_STYLE)
    for header, ratio in columns:
        table.add_column(header, ratio=ratio, no_wrap=True, overflow="ellipsis")
    for index, (row, style) in enumerate(zip(rows, styles)):
        table.add_row(*row, style=SELECTED_ROW_STYLE if index == selected else style)
    return table


def _grid(rows: Sequence[Row], title: str) -> Panel:
    table = Table(expand=True, box=None, show_header=False)
    for _ in range(3):
        table.add_column(ratio=33, no_wrap=True, overflow="ellipsis")
    for row in rows:
        table.add_row(*row)
    return Panel(table, title=title, style=PLAIN_ROW_STYLE)


def _tabs(titles: Sequence[str], selected: int) -> Panel:
    text = Text()
    for index, title in enumerate(titles):
        if index:
            text.append("│")
        text.append(f" {title} ", style=TAB_HIGHLIGHT_STYLE if index == selected else "")
    return Panel(text)


def render_torrents_table(app: App) -> Table:
    """Build the main torrent table with striped rows and the selection highlighted."""
    rows = torrent_rows(app.torrents)
    styles = [EVEN_ROW_STYLE if index % 2 == 0 else ODD_ROW_STYLE for index in range(len(rows))]
    return _table(TORRENT_COLUMNS, rows, styles, app.selected)


def _details(torrent: Torrent) -> RenderableType:
    progress = max(0, int(_or(torrent.progress, 0.0) * 100.0))
    gauge = Panel(
        ProgressBar(total=100, completed=min(progress, 100), complete_style="green"),
        title=_or(torrent.name, ""),
        style=PLAIN_ROW_STYLE,
    )
    return Group(
        gauge,
        _grid(detail_rows(torrent), "Transfer"),
        _grid(information_rows(torrent), "Information"),
    )


def render_torrent_info(app: App) -> RenderableType | None:
    """Build the info panel for the selected torrent.

    Scrolling moves to the info tab when it holds more rows than fit.
    With no torrents the panel is closed and None is returned.
    """
    app.scroll_context = ScrollContext.TORRENTS_TABLE
    torrent = app.selected_torrent()
    if torrent is None:
        app.torrent_popup = False
        return None
    tabs = _tabs(INFO_TAB_TITLES, app.info_tab.value)
    if app.info_tab is SelectedInfoTab.DETAILS:
        return Group(tabs, _details(torrent))

    if app.info_tab is SelectedInfoTab.FILES:
        rows = file_rows(app.torrent_content)
        styles = [PLAIN_ROW_STYLE] * len(rows)
        columns = FILE_COLUMNS
    elif app.info_tab is SelectedInfoTab.TRACKERS:
        rows = tracker_rows(app.torrent_trackers)
        styles = [
            _TRACKER_STYLES.get(tracker.status, _TRACKER_FALLBACK_STYLE)
            for tracker in app.torrent_trackers
        ]
        columns = TRACKER_COLUMNS
    else:
        rows = peer_rows(app.torrent_peers or [])
        styles = ["white"] * len(rows)
        columns = PEER_COLUMNS

    if len(rows) > INFO_TAB_DETAILS:
        app.scroll_context = ScrollContext.INFO_TAB
    return Group(tabs, _table(columns, rows, styles, app.info_selected))