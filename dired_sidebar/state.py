from __future__ import annotations
from typing import Any, NamedTuple

from .config import Side, SidebarConfig


class UIFlags(NamedTuple):
    details_hidden: bool
    omit_mode: bool


class WindowHandle(NamedTuple):
    '''
    Index into the window manager's registry; may outlive the window it
    points to, so check `WindowManager.is_live` before using it.
    '''
    window_id: int
    group: int


class SidebarState:
    """
    The one sidebar slot of a session.

    buffer
        the reusable listing buffer, `None` until the first toggle asks the
        directory browser to create it
    origin_window
        window that was active when the sidebar opened last time
    ui_flags
        flags reapplied to the buffer whenever the host might have reset them
    last_selection
        directory → entry selected when the listing left that directory
    """
    def __init__(self, config: SidebarConfig | None = None):
        self.config = config or SidebarConfig()
        self.buffer: Any = None
        self.origin_window: WindowHandle | None = None
        self.ui_flags = UIFlags(self.config.hide_details, self.config.omit)
        self.last_selection: dict[str, str] = {}

    @property
    def configured_size(self) -> int | float:
        return self.config.window_size

    @property
    def configured_side(self) -> Side:
        return self.config.window_side

    def __repr__(self):
        return '<SidebarState buffer={0!r} origin={1!r} flags={2!r}>'.format(
            self.buffer, self.origin_window, self.ui_flags)
