import io

import pytest
from rich.console import Console

from qbtui.app import App
from qbtui.config import AppConfig
from qbtui.enums import SelectedAddTorrentTab
from qbtui.popups import (
    CFG_HELP_TEXT,
    FILE_HELP_TEXT,
    INFO_TEXT,
    MAGNET_HELP_TEXT,
    Rect,
    cfg_cursor_position,
    magnet_cursor_position,
    magnet_scroll_offset,
    popup_area,
    render_add_torrent_popup,
    render_cfg_popup,
    render_footer,
)


def _render(renderable, width=140):
    console = Console(
        width=width, file=io.StringIO(), color_system=None, legacy_windows=False
    )
    console.print(renderable)
    return console.file.getvalue()


def _app(**config_values):
    return App(config=AppConfig(**config_values))


@pytest.mark.parametrize("px,py", [(50, 50), (70, 50), (33, 80)])
def test_popup_area_is_inside_and_centred(px, py):
    area = Rect(3, 2, 101, 41)
    popup = popup_area(area, px, py)
    assert popup.x >= area.x and popup.y >= area.y
    assert popup.x + popup.width <= area.x + area.width
    assert popup.y + popup.height <= area.y + area.height
    left = popup.x - area.x
    right = area.x + area.width - (popup.x + popup.width)
    assert abs(left - right) <= 1
    top = popup.y - area.y
    bottom = area.y + area.height - (popup.y + popup.height)
    assert abs(top - bottom) <= 1


def test_popup_area_full_percentages_returns_area():
    area = Rect(4, 7, 80, 24)
    assert popup_area(area, 100, 100) == area


def test_popup_area_rejects_bad_percent():
    with pytest.raises(ValueError):
        popup_area(Rect(0, 0, 10, 10), 150, 50)


def test_footer_holds_key_help():
    output = _render(render_footer(), width=200)
    for line in INFO_TEXT:
        assert line in output


def test_cfg_popup_masks_password():
    password = "password"
    output = _render(render_cfg_popup(_app(password=password)))
    assert "API URL:  http://localhost:8080" in output
    assert "Username: admin" in output
    assert "Password: " + "*" * len(password) in output
    assert password not in output
    assert "Edit config" in output
    for line in CFG_HELP_TEXT:
        assert line in output


def test_cfg_popup_shows_edited_input_not_saved_config():
    app = _app()
    app.input.username = "someone"
    output = _render(render_cfg_popup(app))
    assert "Username: someone" in output
    assert "Username: admin" not in output


def test_cfg_cursor_first_field():
    assert cfg_cursor_position(Rect(0, 0, 40, 5), "api_url", 0) == (11, 1)


def test_cfg_cursor_follows_index_and_field():
    area = Rect(10, 5, 40, 5)
    x0, y0 = cfg_cursor_position(area, "username", 0)
    x3, y3 = cfg_cursor_position(area, "username", 3)
    assert x3 - x0 == 3 and y3 == y0
    rows = [cfg_cursor_position(area, name, 0)[1] for name in ("api_url", "username", "password")]
    assert rows == [area.y + 1, area.y + 2, area.y + 3]


def test_cfg_cursor_unknown_field():
    with pytest.raises(ValueError):
        cfg_cursor_position(Rect(0, 0, 40, 5), "port", 0)


def test_magnet_scroll_offset_zero_while_it_fits():
    area = Rect(0, 0, 60, 3)
    assert magnet_scroll_offset(area, 0) == 0
    fits = [index for index in range(100) if magnet_scroll_offset(area, index) == 0]
    limit = max(fits)
    for index in range(limit + 1, limit + 20):
        assert magnet_scroll_offset(area, index) == index - limit


def test_magnet_scroll_offset_narrow_box_scrolls_every_char():
    area = Rect(0, 0, 5, 3)
    assert [magnet_scroll_offset(area, i) for i in range(4)] == [0, 1, 2, 3]


@pytest.mark.parametrize("index", [0, 5, 30, 200])
def test_magnet_cursor_stays_inside_box(index):
    area = Rect(7, 4, 50, 3)
    x, y = magnet_cursor_position(area, index)
    assert y == area.y + 1
    assert area.x < x <= area.x + area.width - 2


def test_magnet_cursor_starts_after_prefix():
    area = Rect(2, 3, 60, 3)
    x, _ = magnet_cursor_position(area, 0)
    assert x == area.x + len("Magnet Link: ") + 1


def test_add_popup_magnet_tab():
    app = _app()
    app.magnet_link = "magnet:?xt=urn:btih:abc"
    output = _render(render_add_torrent_popup(app), width=200)
    assert "Magnet Link: magnet:?xt=urn:btih:abc" in output
    assert "Torrent File" in output
    for line in MAGNET_HELP_TEXT:
        assert line in output


def test_add_popup_magnet_scrolls_to_cursor():
    app = _app()
    app.magnet_link = "magnet:?xt=urn:btih:" + "a" * 40 + "END"
    app.character_index = len(app.magnet_link)
    output = _render(render_add_torrent_popup(app), width=40)
    assert "END" in output
    assert "Magnet Link:" not in output


def test_add_popup_file_tab():
    app = _app()
    app.add_torrent_tab = SelectedAddTorrentTab.FILE
    app.torrent_file_path = "/tmp/sample.torrent"
    output = _render(render_add_torrent_popup(app), width=200)
    assert "/tmp/sample.torrent" in output
    assert "Magnet Link: " not in output
    for line in FILE_HELP_TEXT:
        assert line in output