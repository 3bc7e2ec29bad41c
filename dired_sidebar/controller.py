'''Toggle, navigation and the flags that have to survive both'''
from __future__ import annotations
from contextlib import contextmanager
import os
from typing import Iterator

from .common import ensure_trailing_sep, log, parent_dir
from .interfaces import DirectoryBrowser, WindowManager
from .state import SidebarState, UIFlags, WindowHandle


class SidebarController:
    """
    Drives the one sidebar window/buffer pair of a SidebarState.

    All directory listing work is delegated to `browser`, all window work to
    `windows`.  Nothing here raises on a failed lookup: a missing entry or a
    stale window leaves things as they are.
    """
    def __init__(self, state: SidebarState, browser: DirectoryBrowser, windows: WindowManager):
        self.state = state
        self.browser = browser
        self.windows = windows

    def trace(self, msg, *args):
        if self.state.config.debug:
            log(msg % args if args else msg)

    # SLOT ##############################################################

    def ensure_buffer(self):
        if self.state.buffer is None:
            self.state.buffer = self.browser.create_buffer(self.state.config.buffer_name)
            self.trace('created buffer %r', self.state.buffer)
        return self.state.buffer

    def is_sidebar_buffer(self, buffer) -> bool:
        return buffer is not None and buffer is self.state.buffer

    def sidebar_window(self) -> WindowHandle | None:
        if self.state.buffer is None:
            return None
        return self.windows.window_showing(self.state.buffer)

    # TOGGLE ############################################################

    def toggle(self, path: str | None = None) -> None:
        if self.sidebar_window() is not None:
            self.hide()
        else:
            self.show(path)

    def quit(self) -> None:
        self.hide()

    def hide(self) -> None:
        window = self.sidebar_window()
        if window is None:
            return
        if self.windows.is_sole_window(window):
            self.trace('quit sole window %r', window)
            self.windows.quit_window(window)
        else:
            self.trace('close %r', window)
            self.windows.close(window)

    def show(self, path: str | None = None) -> None:
        '''
        path
            directory to list; defaults to the directory of the active document,
            or the working directory if there is no document
        '''
        origin = self.windows.active_window()
        sidebar = self.sidebar_window()
        if origin == sidebar and self.live_origin_window() is not None:
            origin = self.state.origin_window
        document = None
        if path is None:
            document = self.windows.document_path(origin)
            path = os.path.dirname(document) if document else self.windows.working_directory()
        path = ensure_trailing_sep(path)
        buffer = self.ensure_buffer()

        if sidebar is None:
            sidebar = self.windows.split(
                origin, self.state.configured_size, self.state.configured_side)
            self.windows.show_buffer(sidebar, buffer)
            self.state.origin_window = origin
            self.trace('opened %r from %r', sidebar, origin)

        if self.browser.bound_path(buffer) != path:
            self.browser.bind_path(buffer, path)
            self.browser.refresh(buffer)
        self.browser.set_details_hidden(buffer, self.state.ui_flags.details_hidden)
        self.browser.set_omit_mode(buffer, self.state.ui_flags.omit_mode)
        self.windows.select(sidebar)

        if document:
            self.goto_document(buffer, document)

    def goto_document(self, buffer, document: str) -> bool:
        '''Select `document` in the listing; omit mode gets one chance to be the culprit'''
        if self.browser.goto_entry(buffer, document):
            return True
        if self.browser.omit_mode(buffer):
            self.trace('%s not listed, disabling omit mode', document)
            self.set_omit(False)
            return self.browser.goto_entry(buffer, document)
        return False

    # NAVIGATION ########################################################

    def snapshot_flags(self, buffer) -> UIFlags:
        return UIFlags(self.browser.details_hidden(buffer), self.browser.omit_mode(buffer))

    def apply_flags(self, buffer, flags: UIFlags) -> None:
        self.browser.set_details_hidden(buffer, flags.details_hidden)
        self.browser.set_omit_mode(buffer, flags.omit_mode)

    @contextmanager
    def preserving_flags(self, buffer) -> Iterator[UIFlags]:
        '''Snapshot the flags of `buffer`, let the host reset them, put them back'''
        flags = self.snapshot_flags(buffer)
        self.state.ui_flags = flags
        try:
            yield flags
        finally:
            self.apply_flags(buffer, flags)

    def open_entry(self) -> None:
        buffer = self.state.buffer
        if buffer is None:
            return
        entry = self.browser.selected_entry(buffer)
        if not entry:
            return

        with self.preserving_flags(buffer):
            if self.browser.is_directory(entry):
                directory = ensure_trailing_sep(entry)
                self.browser.change_directory(buffer, directory)
                remembered = self.state.last_selection.get(directory)
                if remembered:
                    self.browser.goto_entry(buffer, remembered)
            else:
                self.release_origin_window()
                self.browser.open_file(buffer, entry)

    def live_origin_window(self) -> WindowHandle | None:
        origin = self.state.origin_window
        if origin is None or not self.windows.is_live(origin):
            return None
        return origin

    def release_origin_window(self) -> None:
        '''Close the window the sidebar was opened from, the file replaces it'''
        origin = self.live_origin_window()
        if origin is None or self.windows.is_minibuffer(origin):
            return
        # the sidebar may have been shown in the very window it was opened from
        if origin == self.sidebar_window():
            return
        self.trace('closing origin %r', origin)
        self.windows.close(origin)
        self.state.origin_window = None

    def go_up(self) -> None:
        buffer = self.state.buffer
        if buffer is None:
            return
        current = ensure_trailing_sep(self.browser.current_directory(buffer))
        parent = parent_dir(current)
        if parent == current:
            return

        selected = self.browser.selected_entry(buffer)
        if selected:
            self.state.last_selection[current] = selected

        with self.preserving_flags(buffer):
            inserted = self.browser.has_inserted_subdirs(buffer)
            if inserted and self.browser.goto_entry(buffer, current):
                return
            if inserted and self.browser.goto_subdir(buffer, parent):
                return
            self.browser.change_directory(buffer, parent)
            self.browser.goto_entry(buffer, current)

    # FLAGS #############################################################

    def set_details_hidden(self, hidden: bool) -> None:
        self.state.ui_flags = self.state.ui_flags._replace(details_hidden=hidden)
        if self.state.buffer is not None:
            self.browser.set_details_hidden(self.state.buffer, hidden)

    def set_omit(self, enabled: bool) -> None:
        self.state.ui_flags = self.state.ui_flags._replace(omit_mode=enabled)
        if self.state.buffer is not None:
            self.browser.set_omit_mode(self.state.buffer, enabled)

    def current_flags(self) -> UIFlags:
        '''The buffer may have been switched by the host's own commands'''
        if self.state.buffer is None:
            return self.state.ui_flags
        return self.snapshot_flags(self.state.buffer)

    def toggle_details(self) -> None:
        self.set_details_hidden(not self.current_flags().details_hidden)

    def toggle_omit(self) -> None:
        self.set_omit(not self.current_flags().omit_mode)

    def refresh(self) -> None:
        buffer = self.state.buffer
        if buffer is None or self.browser.bound_path(buffer) is None:
            return
        with self.preserving_flags(buffer):
            self.browser.refresh(buffer)
