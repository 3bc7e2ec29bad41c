'''The two host collaborators the sidebar is built on.

Paths of directories always end with os.sep.  A `buffer` is whatever
object `DirectoryBrowser.create_buffer` returns; the controller only compares
it by identity and hands it back.
'''
from __future__ import annotations
from typing import Any, Protocol

from .config import Side
from .state import WindowHandle


class DirectoryBrowser(Protocol):
    def create_buffer(self, name: str) -> Any: ...

    def bound_path(self, buffer) -> str | None:
        '''Directory the buffer currently lists, None if it lists nothing yet'''

    def bind_path(self, buffer, path: str) -> None: ...

    def refresh(self, buffer) -> None:
        '''(Re)read the bound directory; may reset the buffer's flags'''

    def change_directory(self, buffer, path: str) -> None:
        '''Show `path` in the same buffer; may reset the buffer's flags'''

    def goto_entry(self, buffer, path: str) -> bool:
        '''Put the cursor on `path`; False if it is not listed'''

    def goto_subdir(self, buffer, path: str) -> bool:
        '''Put the cursor on the inserted section for `path`, if there is one'''

    def has_inserted_subdirs(self, buffer) -> bool: ...

    def selected_entry(self, buffer) -> str | None: ...

    def current_directory(self, buffer) -> str:
        '''Directory of the section the cursor is in'''

    def is_directory(self, path: str) -> bool: ...

    def open_file(self, buffer, path: str) -> None: ...

    def details_hidden(self, buffer) -> bool: ...

    def set_details_hidden(self, buffer, hidden: bool) -> None: ...

    def omit_mode(self, buffer) -> bool: ...

    def set_omit_mode(self, buffer, enabled: bool) -> None: ...


class WindowManager(Protocol):
    def active_window(self) -> WindowHandle: ...

    def split(self, window: WindowHandle, size: int | float, side: Side) -> WindowHandle:
        '''Reserve `size` on `side` of `window`, return the new window'''

    def show_buffer(self, window: WindowHandle, buffer) -> None: ...

    def select(self, window: WindowHandle) -> None: ...

    def close(self, window: WindowHandle) -> None: ...

    def quit_window(self, window: WindowHandle) -> None:
        '''Close the only window of a frame by restoring what it showed before'''

    def is_sole_window(self, window: WindowHandle) -> bool: ...

    def window_showing(self, buffer) -> WindowHandle | None: ...

    def is_live(self, window: WindowHandle) -> bool: ...

    def is_minibuffer(self, window: WindowHandle) -> bool: ...

    def document_path(self, window: WindowHandle) -> str | None: ...

    def working_directory(self) -> str: ...
