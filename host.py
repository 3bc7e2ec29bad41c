'''Sublime Text side of the sidebar: windows are layout groups, the listing is a FileBrowser view'''
from __future__ import annotations
import os
from os.path import dirname, exists, isdir

import sublime
from sublime import Region

from .dired_sidebar.common import ensure_trailing_sep, first, parent_dir
from .dired_sidebar.config import Side
from .dired_sidebar.layout import merge_target, remove_group, size_fraction, split_layout
from .dired_sidebar.state import WindowHandle

SYNTAX_FILE = 'Packages/FileBrowser/dired.sublime-syntax'
PARENT_SYM = "⠤"
SIDEBAR_SETTING = 'dired_sidebar_view'
DELEGATING_SETTING = 'dired_sidebar_delegating'


def is_sidebar_view(view) -> bool:
    return bool(view and view.settings().get(SIDEBAR_SETTING, False))


def find_window(window_id):
    return first(sublime.windows(), lambda w: w.id() == window_id)


class SidebarBuffer:
    '''
    Handle of the sidebar listing.  Sublime cannot keep a view around
    without showing it, so the view is created on demand and created again
    after it was closed; the handle itself lives for the whole session.
    '''
    def __init__(self, name):
        self.name = name
        self.view: sublime.View | None = None
        self.reset_sels = True

    def alive_view(self) -> sublime.View | None:
        if self.view is not None and self.view.is_valid():
            return self.view
        return None

    def __repr__(self):
        view = self.alive_view()
        return '<SidebarBuffer {0!r} view={1}>'.format(self.name, view.id() if view else None)


def create_sidebar_view(window: sublime.Window, buffer: SidebarBuffer) -> sublime.View:
    """Create and return a new, empty dired view owned by the sidebar."""
    view = window.new_file()
    dired_settings = sublime.load_settings('dired.sublime-settings')
    if not dired_settings.get('dired_enable_stock_sublime_history', False):
        view.settings().set('is_widget', True)
    view.set_syntax_file(SYNTAX_FILE)
    view.set_scratch(True)
    view.set_name(buffer.name)
    view.settings().set(SIDEBAR_SETTING, True)
    # FileBrowser opens files from such views in the neighbour group
    view.settings().set('dired_sidebar_mode', True)
    buffer.view = view
    buffer.reset_sels = True
    return view


class FileBrowserDirectoryBrowser:
    """
    Directory listing through FileBrowser's view settings:

        dired_path              root of the listing
        dired_index             full path of every line, '' for header lines
                                and PARENT_SYM for the parent link
        dired_expanded_paths    directories inserted below the root
        dired_show_stats        size/date column
        dired_show_hidden_files dotfiles
    """
    def create_buffer(self, name):
        return SidebarBuffer(name)

    def bound_path(self, buffer) -> str | None:
        view = buffer.alive_view()
        if not view:
            return None
        return view.settings().get('dired_path') or None

    def bind_path(self, buffer, path):
        view = buffer.alive_view()
        if not view:
            return
        path = ensure_trailing_sep(path)
        if view.settings().get('dired_path') != path:
            buffer.reset_sels = True
        view.settings().set('dired_path', path)
        view.settings().set('dired_rename_mode', False)

    def refresh(self, buffer):
        view = buffer.alive_view()
        if not view:
            return
        view.run_command('dired_refresh', {'reset_sels': buffer.reset_sels})
        buffer.reset_sels = False

    def change_directory(self, buffer, path):
        self.bind_path(buffer, path)
        self.refresh(buffer)

    def _index(self, view):
        return view.settings().get('dired_index', [])

    def _row(self, view):
        sels = view.sel()
        if not len(sels):
            return None
        return view.rowcol(sels[0].a)[0]

    def goto_entry(self, buffer, path) -> bool:
        view = buffer.alive_view()
        if not view:
            return False
        candidates = (path, ensure_trailing_sep(path))
        index = self._index(view)
        row = first(range(len(index)), lambda i: index[i] in candidates)
        if row is None:
            return False
        self._put_cursor(view, row)
        return True

    def _put_cursor(self, view, row):
        '''Place cursor where the filename starts (i.e. after icon & whitespace)'''
        line = view.line(view.text_point(row, 0))
        text = view.substr(line)
        indent = len(text) - len(text.lstrip())
        name_point = min(line.a + indent + 2, line.b)
        view.sel().clear()
        view.sel().add(Region(name_point, name_point))
        view.show(name_point, False)

    def goto_subdir(self, buffer, path) -> bool:
        view = buffer.alive_view()
        if not view:
            return False
        path = ensure_trailing_sep(path)
        if path == self.bound_path(buffer):
            index = self._index(view)
            row = first(range(len(index)), lambda i: index[i] not in ('', PARENT_SYM))
            if row is None:
                return False
            self._put_cursor(view, row)
            return True
        if path in self._expanded(view):
            return self.goto_entry(buffer, path)
        return False

    def _expanded(self, view):
        return view.settings().get('dired_expanded_paths') or []

    def has_inserted_subdirs(self, buffer) -> bool:
        view = buffer.alive_view()
        return bool(view and self._expanded(view))

    def selected_entry(self, buffer) -> str | None:
        view = buffer.alive_view()
        if not view:
            return None
        row = self._row(view)
        index = self._index(view)
        if row is None or not 0 <= row < len(index):
            return None
        entry = index[row]
        if entry == PARENT_SYM:
            return parent_dir(self.bound_path(buffer) or '')
        return entry or None

    def current_directory(self, buffer) -> str:
        root = self.bound_path(buffer) or ''
        view = buffer.alive_view()
        if not view:
            return root
        row = self._row(view)
        index = self._index(view)
        if row is None or not 0 <= row < len(index) or index[row] in ('', PARENT_SYM):
            return root
        return ensure_trailing_sep(dirname(index[row].rstrip(os.sep)))

    def is_directory(self, path) -> bool:
        return isdir(path)

    def open_file(self, buffer, path):
        view = buffer.alive_view()
        if not view or not exists(path):
            sublime.status_message('File does not exist ({0})'.format(os.path.basename(path)))
            return
        if self.goto_entry(buffer, path):
            view.settings().set(DELEGATING_SETTING, True)
            try:
                view.run_command('dired_select', {'other_group': True})
            finally:
                view.settings().erase(DELEGATING_SETTING)
        elif view.window():
            view.window().open_file(path)

    def details_hidden(self, buffer) -> bool:
        view = buffer.alive_view()
        if not view:
            return not sublime.load_settings('dired.sublime-settings').get('dired_show_stats', False)
        return not view.settings().get('dired_show_stats', False)

    def set_details_hidden(self, buffer, hidden):
        self._set_view_flag(buffer, 'dired_show_stats', not hidden)

    def omit_mode(self, buffer) -> bool:
        view = buffer.alive_view()
        if not view:
            return not sublime.load_settings('dired.sublime-settings').get('dired_show_hidden_files', True)
        return not view.settings().get('dired_show_hidden_files', True)

    def set_omit_mode(self, buffer, enabled):
        self._set_view_flag(buffer, 'dired_show_hidden_files', not enabled)

    def _set_view_flag(self, buffer, key, value):
        view = buffer.alive_view()
        if not view:
            return
        default = True if key == 'dired_show_hidden_files' else False
        if view.settings().get(key, default) == value:
            return
        view.settings().set(key, value)
        if view.settings().get('dired_path'):
            view.run_command('dired_refresh')


class SublimeWindowManager:
    '''
    A "window" is a group of a Sublime window.  The layout a window had
    before the sidebar split it is remembered so closing the sidebar puts the
    exact same layout back.
    '''
    def __init__(self):
        self.saved_layouts: dict[int, dict] = {}

    def _window(self, handle) -> sublime.Window | None:
        return find_window(handle.window_id) if handle else None

    def active_window(self) -> WindowHandle:
        window = sublime.active_window()
        return WindowHandle(window.id(), window.active_group())

    def is_live(self, handle) -> bool:
        window = self._window(handle)
        return bool(window) and 0 <= handle.group < window.num_groups()

    def is_minibuffer(self, handle) -> bool:
        # panels are not groups; a negative group is how Sublime spells "no group"
        return handle.group < 0

    def split(self, handle, size, side: Side) -> WindowHandle:
        window = self._window(handle)
        layout = window.layout()
        self.saved_layouts[window.id()] = layout

        view = window.active_view()
        if view:
            width, height = view.viewport_extent()
            extent = width if side.horizontal else height
        else:
            extent = 0
        new_layout, group = split_layout(layout, side, size_fraction(size, extent))
        window.set_layout(new_layout)
        return WindowHandle(window.id(), group)

    def show_buffer(self, handle, buffer):
        window = self._window(handle)
        view = buffer.alive_view()
        if view and (not view.window() or view.window().id() != window.id()):
            # a view cannot move between windows
            view.close()
            view = None
        if not view:
            window.focus_group(handle.group)
            view = create_sidebar_view(window, buffer)
        window.set_view_index(view, handle.group, 0)
        window.focus_view(view)

    def select(self, handle):
        window = self._window(handle)
        if not window:
            return
        window.focus_group(handle.group)
        view = window.active_view_in_group(handle.group)
        if view:
            window.focus_view(view)

    def _close_sidebar_views(self, window, group):
        for view in window.views_in_group(group):
            if is_sidebar_view(view):
                view.close()

    def _sidebar_groups(self, window):
        return {window.get_view_index(v)[0] for v in window.views() if is_sidebar_view(v)}

    def _merge_group(self, window, group, target):
        '''
        Move the views of `group` into `target`, then renumber the groups after
        `group` the way dropping its cell from the layout will
        '''
        for view in window.views_in_group(group):
            window.set_view_index(view, target, len(window.views_in_group(target)))
        for g in range(group + 1, window.num_groups()):
            for view in window.views_in_group(g):
                window.set_view_index(view, g - 1, len(window.views_in_group(g - 1)))

    def close(self, handle):
        window = self._window(handle)
        if not window:
            return
        if handle.group in self._sidebar_groups(window):
            self._close_sidebar(window, handle)
        else:
            self._close_group(window, handle)

    def _close_sidebar(self, window, handle):
        self._close_sidebar_views(window, handle.group)
        layout = window.layout()
        saved = self.saved_layouts.get(window.id())
        if (
            saved
            and len(saved['cells']) == len(layout['cells']) - 1
            and handle.group == len(layout['cells']) - 1
        ):
            new_layout = saved
        else:
            new_layout = remove_group(layout, handle.group)
        if new_layout:
            window.set_layout(new_layout)
            self.saved_layouts.pop(window.id(), None)

    def _close_group(self, window, handle):
        # the sidebar opens files in a neighbour group: if the sidebar is the
        # only neighbour left the group stays and the file shows up in it
        layout = window.layout()
        target = merge_target(layout, handle.group, keep=self._sidebar_groups(window))
        new_layout = remove_group(layout, handle.group)
        if target is None or new_layout is None:
            return
        self._merge_group(window, handle.group, target)
        window.set_layout(new_layout)
        self.saved_layouts.pop(window.id(), None)

    def quit_window(self, handle):
        window = self._window(handle)
        if not window:
            return
        self._close_sidebar_views(window, handle.group)
        saved = self.saved_layouts.pop(window.id(), None)
        if saved and window.num_groups() == len(saved['cells']):
            window.set_layout(saved)

    def is_sole_window(self, handle) -> bool:
        window = self._window(handle)
        return bool(window) and window.num_groups() == 1

    def window_showing(self, buffer) -> WindowHandle | None:
        view = buffer.alive_view()
        window = view.window() if view else None
        if not window:
            return None
        group, _ = window.get_view_index(view)
        if group < 0:
            return None
        return WindowHandle(window.id(), group)

    def document_path(self, handle) -> str | None:
        window = self._window(handle)
        if not window:
            return None
        view = window.active_view_in_group(handle.group)
        if not view or is_sidebar_view(view):
            return None
        return view.file_name()

    def working_directory(self) -> str:
        window = sublime.active_window()
        if view := window.active_view():
            if repo_path := view.settings().get("git_savvy.repo_path"):
                return repo_path

        if folders := window.folders():
            return folders[0]
        return os.path.expanduser('~')
