"""Popups, the footer and where their text cursors go."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from rich import box
from rich.console import Console, ConsoleOptions, Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from qbtui.app import App
from qbtui.enums import SelectedAddTorrentTab

POPUP_STYLE = "white on black"
TAB_HIGHLIGHT_STYLE = "bold bright_red"

INFO_TEXT = (
    "(Esc) quit | (Tab) details | (↑) move up | (↓) move down | (←) move left | (→) move right",
    "(Ctrl + e) edit cfg | (r) refresh | (k) move up | (j) move down | (h) move left | (l) move right",
)

CFG_HELP_TEXT = (
    "Press (Ctrl + e) to close this popup (without saving).",
    "Press (Ctrl + s) to save the config.",
)

MAGNET_HELP_TEXT = (
    "(Tab) to toggle tab | (Ctrl + a) to close this popup (without adding torrent).",
    "(Enter) to add the torrent | Press (Ctrl + w) to clear the magnet link.",
)

FILE_HELP_TEXT = (
    "(Tab) to toggle tab | (↑) move up | (↓) move down | (←) move up dir | (→) move down dir",
    "(Enter) select torrent file | (k) move up | (j) move down | (h) move up dir | (l) move down dir",
)

ADD_TORRENT_TAB_TITLES = ("Magnet Link", "Torrent File")

MAGNET_PREFIX = "Magnet Link: "

_CFG_NAMES = ("api_url", "username", "password")
_CFG_LABELS = ("API URL:  ", "Username: ", "Password: ")

# Label and line (inside the border) of each editable setting.
_CFG_FIELDS = {
    name: (label, line)
    for line, (name, label) in enumerate(zip(_CFG_NAMES, _CFG_LABELS), start=1)
}


@dataclass(frozen=True)
class Rect:
    """A rectangle of terminal cells."""

    x: int
    y: int
    width: int
    height: int


def _centered(start: int, total: int, percent: int) -> tuple[int, int]:
    length = total * percent // 100
    return start + (total - length) // 2, length


def popup_area(area: Rect, percent_x: int, percent_y: int) -> Rect:
    """Return a rectangle centred in ``area`` covering the given percentages of it."""
    if not (0 <= percent_x <= 100 and 0 <= percent_y <= 100):
        raise ValueError("percentages must lie between 0 and 100")
    x, width = _centered(area.x, area.width, percent_x)
    y, height = _centered(area.y, area.height, percent_y)
    return Rect(x, y, width, height)


def render_footer() -> Panel:
    """Build the key help shown at the bottom of the screen."""
    text = Text("\n".join(INFO_TEXT), justify="center", style=POPUP_STYLE)
    return Panel(text, box=box.DOUBLE, style=POPUP_STYLE, border_style=POPUP_STYLE)


def _help(lines: tuple[str, ...], justify: str) -> Panel:
    return Panel(Text("\n".join(lines), justify=justify), style=POPUP_STYLE, padding=0)


def render_cfg_popup(app: App) -> Group:
    """Build the configuration editor; the password is shown as asterisks."""
    masked = "*" * len(app.input.password)
    settings = Text(
        "\n".join(
            (
                f"{_CFG_LABELS[0]}{app.input.api_url}",
                f"{_CFG_LABELS[1]}{app.input.username}",
                f"{_CFG_LABELS[2]}{masked}",
            )
        ),
        justify="left",
    )
    editor = Panel(
        settings,
        title=" Edit config ",
        title_align="center",
        style=POPUP_STYLE,
        padding=0,
    )
    return Group(editor, _help(CFG_HELP_TEXT, "left"))


def cfg_cursor_position(area: Rect, current_input: str, character_index: int) -> tuple[int, int]:
    """Return the cursor cell for editing ``current_input`` inside the editor box ``area``.

    ``current_input`` is one of ``api_url``, ``username`` or ``password``.
    """
    try:
        label, line = _CFG_FIELDS[current_input]
    except KeyError:
        raise ValueError(f"unknown setting {current_input!r}") from None
    return area.x + len(label) + character_index + 1, area.y + line


def magnet_scroll_offset(area: Rect, character_index: int) -> int:
    """Return how many columns the magnet input box ``area`` is scrolled."""
    max_visible = max(area.width - (len(MAGNET_PREFIX) + 1), 0)
    return character_index - max_visible if character_index > max_visible else 0


def magnet_cursor_position(area: Rect, character_index: int) -> tuple[int, int]:
    """Return the cursor cell inside the magnet input box ``area``, kept within its border."""
    visible = max(character_index - magnet_scroll_offset(area, character_index), 0)
    x = area.x + len(MAGNET_PREFIX) + visible + 1
    x = min(x, area.x + max(area.width - 2, 0))
    return x, area.y + 1


class _ScrolledLine:
    """A single line scrolled so that the cursor stays visible at render width."""

    def __init__(self, text: str, character_index: int) -> None:
        self._text = text
        self._character_index = character_index

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> Iterator[Text]:
        # The box the offset is measured against includes its two border columns.
        box_area = Rect(0, 0, options.max_width + 2, 3)
        offset = magnet_scroll_offset(box_area, self._character_index)
        yield Text(self._text[offset:], no_wrap=True, overflow="crop")


def _tabs(titles: tuple[str, ...], selected: int) -> Panel:
    text = Text()
    for index, title in enumerate(titles):
        if index:
            text.append("│")
        text.append(f" {title} ", style=TAB_HIGHLIGHT_STYLE if index == selected else "")
    return Panel(text, style=POPUP_STYLE)


def _magnet_tab(app: App) -> Group:
    line = _ScrolledLine(f"{MAGNET_PREFIX}{app.magnet_link}", app.character_index)
    entry = Panel(
        line,
        title=" Add Torrent ",
        title_align="center",
        style=POPUP_STYLE,
        padding=0,
    )
    return Group(entry, _help(MAGNET_HELP_TEXT, "center"))


def _file_tab(app: App) -> Group:
    chosen = app.torrent_file_path or "No file selected"
    chooser = Panel(
        Text(f"Torrent File: {chosen}", no_wrap=True, overflow="ellipsis"),
        style=POPUP_STYLE,
        padding=0,
    )
    return Group(chooser, _help(FILE_HELP_TEXT, "center"))


def render_add_torrent_popup(app: App) -> RenderableType:
    """Build the add-torrent popup for the selected tab."""
    tabs = _tabs(ADD_TORRENT_TAB_TITLES, app.add_torrent_tab.value)
    if app.add_torrent_tab is SelectedAddTorrentTab.MAGNET_LINK:
        body = _magnet_tab(app)
    else:
        body = _file_tab(app)
    return Group(tabs, body)