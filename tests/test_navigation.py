import pytest

from dired_sidebar import UIFlags, WindowHandle

MAIN = WindowHandle(1, 0)


@pytest.fixture
def opened(make_controller):
    '''Sidebar opened from /a/b/file.txt; the host resets flags on every read'''
    ctl = make_controller(document='/a/b/file.txt', defaults=UIFlags(False, True), omit=True)
    ctl.toggle()
    return ctl


def test_open_entry_on_directory_reuses_buffer(opened):
    buffer = opened.state.buffer
    buffer.cursor = '/a/b/sub/'

    opened.open_entry()

    assert buffer.path == '/a/b/sub/'
    assert len(opened.browser.buffers) == 1
    assert opened.windows.showing_count(buffer) == 1


def test_open_entry_keeps_flags(opened):
    buffer = opened.state.buffer
    opened.browser.set_omit_mode(buffer, False)
    buffer.cursor = '/a/b/sub/'

    opened.open_entry()

    assert buffer.details_hidden is True
    assert buffer.omit_mode is False
    assert opened.state.ui_flags == UIFlags(True, False)


def test_open_entry_on_file_closes_origin_window(opened):
    buffer = opened.state.buffer
    buffer.cursor = '/a/b/other.txt'

    opened.open_entry()

    assert opened.browser.opened == ['/a/b/other.txt']
    assert MAIN not in opened.windows.windows
    assert opened.state.origin_window is None


def test_open_entry_on_file_with_stale_origin(opened):
    del opened.windows.windows[MAIN]
    opened.state.buffer.cursor = '/a/b/other.txt'

    opened.open_entry()

    assert opened.browser.opened == ['/a/b/other.txt']


def test_open_entry_keeps_minibuffer_origin(opened):
    opened.windows.minibuffers.add(MAIN)
    opened.state.buffer.cursor = '/a/b/other.txt'

    opened.open_entry()

    assert MAIN in opened.windows.windows
    assert opened.browser.opened == ['/a/b/other.txt']


def test_open_entry_never_closes_sidebar_itself(opened):
    sidebar = opened.sidebar_window()
    opened.state.origin_window = sidebar
    opened.state.buffer.cursor = '/a/b/other.txt'

    opened.open_entry()

    assert opened.sidebar_window() == sidebar
    assert opened.browser.opened == ['/a/b/other.txt']


def test_open_entry_without_selection_is_noop(opened):
    buffer = opened.state.buffer
    buffer.cursor = None

    opened.open_entry()

    assert buffer.path == '/a/b/'
    assert opened.browser.opened == []


def test_navigation_before_first_toggle_is_noop(controller):
    controller.open_entry()
    controller.go_up()
    controller.refresh()

    assert controller.state.buffer is None


def test_go_up_selects_child_in_parent(opened):
    buffer = opened.state.buffer

    opened.go_up()

    assert buffer.path == '/a/'
    assert buffer.cursor == '/a/b/'
    assert len(opened.browser.buffers) == 1


def test_go_up_then_down_restores_selection(opened):
    buffer = opened.state.buffer
    assert buffer.cursor == '/a/b/file.txt'

    opened.go_up()
    opened.open_entry()

    assert buffer.path == '/a/b/'
    assert buffer.cursor == '/a/b/file.txt'


def test_go_up_keeps_flags(opened):
    buffer = opened.state.buffer
    opened.browser.set_omit_mode(buffer, False)

    opened.go_up()

    assert buffer.details_hidden is True
    assert buffer.omit_mode is False


def test_go_up_at_root_is_noop(make_controller):
    ctl = make_controller()
    ctl.toggle('/')
    refreshes = ctl.browser.refreshes

    ctl.go_up()

    assert ctl.state.buffer.path == '/'
    assert ctl.browser.refreshes == refreshes


def test_go_up_within_inserted_listing_selects_subdir_entry(opened):
    buffer = opened.state.buffer
    opened.browser.insert_subdir(buffer, '/a/b/sub/')
    buffer.cursor = '/a/b/sub/deep.txt'

    opened.go_up()

    assert buffer.path == '/a/b/'
    assert buffer.cursor == '/a/b/sub/'


def test_go_up_prefers_inserted_parent_section(opened):
    buffer = opened.state.buffer
    opened.browser.insert_subdir(buffer, '/a/b/sub/')
    calls = []
    goto_entry = opened.browser.goto_entry

    def no_entry(buf, path):
        calls.append(path)
        return False if len(calls) == 1 else goto_entry(buf, path)

    opened.browser.goto_entry = no_entry
    buffer.cursor = '/a/b/sub/deep.txt'
    refreshes = opened.browser.refreshes

    opened.go_up()

    assert buffer.path == '/a/b/'
    assert buffer.cursor == '/a/b/'
    assert calls == ['/a/b/sub/']
    assert opened.browser.refreshes == refreshes


def test_go_up_falls_back_when_no_section_matches(opened, fs):
    buffer = opened.state.buffer
    fs.add('/a/b/sub/inner/x.txt')
    opened.browser.insert_subdir(buffer, '/a/b/sub/inner/')
    buffer.cursor = '/a/b/sub/inner/x.txt'

    opened.go_up()

    assert buffer.path == '/a/b/sub/'
    assert buffer.cursor == '/a/b/sub/inner/'
