'''
FileBrowser commands that run the sidebar's way inside the sidebar view.

FileBrowser's keymap is loaded after ours, so its Enter/Backspace bindings
win on every `text.dired` view.  The commands it issues in the sidebar view
are rewritten instead.
'''
from __future__ import annotations
from typing import Optional, Tuple

REROUTED = {
    'dired_select': 'dired_sidebar_open_entry',
    'dired_up': 'dired_sidebar_up',
    'dired_toggle_stats': 'dired_sidebar_toggle_details',
    'dired_toggle_hidden_files': 'dired_sidebar_toggle_omit',
}


def reroute(command_name, args=None, delegating=False) -> Optional[Tuple[str, dict]]:
    '''
    command_name, args  what FileBrowser is about to run in the sidebar view
    delegating          the sidebar itself asked FileBrowser to run it
    return (command, args) to run instead, None to let FileBrowser have it
    '''
    if delegating or command_name not in REROUTED:
        return None
    # opening in a new view is FileBrowser's business, the sidebar only
    # replaces its listing or the origin window
    if command_name == 'dired_select' and (args or {}).get('new_view'):
        return None
    return REROUTED[command_name], {}
