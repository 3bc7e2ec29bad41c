from .config import Side, SidebarConfig, SETTINGS_FILE
from .controller import SidebarController
from .state import SidebarState, UIFlags, WindowHandle

__all__ = [
    'Side', 'SidebarConfig', 'SETTINGS_FILE',
    'SidebarController',
    'SidebarState', 'UIFlags', 'WindowHandle',
]
