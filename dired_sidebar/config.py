from __future__ import annotations
from enum import Enum
from typing import Any, NamedTuple, Protocol

from .common import log


SETTINGS_FILE = 'dired_sidebar.sublime-settings'


class Side(str, Enum):
    LEFT = 'left'
    RIGHT = 'right'
    ABOVE = 'above'
    BELOW = 'below'

    @property
    def horizontal(self) -> bool:
        '''True if the sidebar takes a column, False if it takes a row'''
        return self in (Side.LEFT, Side.RIGHT)

    @property
    def leading(self) -> bool:
        return self in (Side.LEFT, Side.ABOVE)


class SettingsLike(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...


class SidebarConfig(NamedTuple):
    window_size: int | float = 0.25
    window_side: Side = Side.LEFT
    buffer_name: str = 'Dired Sidebar'
    hide_details: bool = True
    omit: bool = False
    debug: bool = False

    @classmethod
    def from_settings(cls, settings: SettingsLike) -> SidebarConfig:
        '''
        Read all `dired_sidebar_*` keys; a bad value is reported in the console
        and replaced by its default, it never prevents the sidebar from opening.
        '''
        defaults = cls()
        return cls(
            window_size=_window_size(settings.get('dired_sidebar_window_size'), defaults.window_size),
            window_side=_window_side(settings.get('dired_sidebar_window_side'), defaults.window_side),
            buffer_name=_string(
                'dired_sidebar_buffer_name',
                settings.get('dired_sidebar_buffer_name'),
                defaults.buffer_name),
            hide_details=_boolean(
                'dired_sidebar_hide_details',
                settings.get('dired_sidebar_hide_details'),
                defaults.hide_details),
            omit=_boolean('dired_sidebar_omit', settings.get('dired_sidebar_omit'), defaults.omit),
            debug=_boolean('dired_sidebar_debug', settings.get('dired_sidebar_debug'), defaults.debug),
        )


def _window_size(value, default):
    if value is None:
        return default
    # bool is an int subclass, `true` is not a size
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        log('dired_sidebar_window_size must be a number, got %r' % (value,))
        return default
    if isinstance(value, float):
        if not 0.0 < value < 1.0:
            log('dired_sidebar_window_size as float must be within (0, 1), got %r' % value)
            return default
        return value
    if value <= 0:
        log('dired_sidebar_window_size in pixels must be positive, got %r' % value)
        return default
    return value


def _window_side(value, default):
    if value is None:
        return default
    try:
        return Side(str(value).lower())
    except ValueError:
        log('dired_sidebar_window_side must be one of %s, got %r' % (
            ', '.join(s.value for s in Side), value))
        return default


def _string(key, value, default):
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        log('%s must be a non-empty string, got %r' % (key, value))
        return default
    return value


def _boolean(key, value, default):
    if value is None:
        return default
    if not isinstance(value, bool):
        log('%s must be true or false, got %r' % (key, value))
        return default
    return value
