'''Main module; commands, key binding context and plugin lifecycle'''
from __future__ import annotations
import operator as op
import sys
from textwrap import dedent

import sublime
from sublime_plugin import EventListener, TextCommand, WindowCommand

from .dired_sidebar import SETTINGS_FILE, SidebarConfig, SidebarController, SidebarState
from .dired_sidebar.commands import reroute
from .dired_sidebar.common import log
from .host import DELEGATING_SETTING, FileBrowserDirectoryBrowser, SublimeWindowManager, is_sidebar_view

controller: SidebarController | None = None


def file_browser_loaded():
    return 'FileBrowser.dired' in sys.modules


def load_config() -> SidebarConfig:
    return SidebarConfig.from_settings(sublime.load_settings(SETTINGS_FILE))


def plugin_loaded():
    if not file_browser_loaded():
        print(dedent('''
            DiredSidebar: FileBrowser is not loaded, hence the sidebar has nothing to show.
             • Install FileBrowser via Package Control and restart Sublime Text.
             • If it is installed under another name, the sidebar cannot find its commands.
        '''))

    settings = sublime.load_settings(SETTINGS_FILE)
    settings.add_on_change('dired_sidebar', reload_config)


def plugin_unloaded():
    sublime.load_settings(SETTINGS_FILE).clear_on_change('dired_sidebar')


def reload_config():
    if controller:
        controller.state.config = load_config()


def get_controller() -> SidebarController:
    '''The sidebar state is created on first use and lives until Sublime exits'''
    global controller
    if controller is None:
        config = load_config()
        controller = SidebarController(
            SidebarState(config), FileBrowserDirectoryBrowser(), SublimeWindowManager())
        if config.debug:
            log('created', controller.state)
    return controller


def owns(view) -> bool:
    if controller is None or not is_sidebar_view(view):
        return False
    buffer = controller.state.buffer
    return controller.is_sidebar_buffer(buffer) and buffer.alive_view() == view


class dired_sidebar_toggle(WindowCommand):
    """
    Show or hide the sidebar.

    `path` is the directory to list; without it the sidebar lists the
    directory of the active file and puts the cursor on that file, or falls
    back to the first project folder (or the home directory).
    """
    def is_enabled(self):
        return file_browser_loaded()

    def run(self, path=None):
        get_controller().toggle(path)


class dired_sidebar_reveal(WindowCommand):
    '''Like dired_sidebar_toggle, but never hides the sidebar'''
    def is_enabled(self):
        return file_browser_loaded()

    def run(self, path=None):
        get_controller().show(path)


class dired_sidebar_quit(WindowCommand):
    def is_enabled(self):
        return controller is not None and controller.sidebar_window() is not None

    def run(self):
        get_controller().quit()


class DiredSidebarTextCommand(TextCommand):
    def is_enabled(self):
        return owns(self.view)


class dired_sidebar_open_entry(DiredSidebarTextCommand):
    '''Directories are listed in the sidebar itself, files open next to it'''
    def run(self, edit):
        get_controller().open_entry()


class dired_sidebar_up(DiredSidebarTextCommand):
    def run(self, edit):
        get_controller().go_up()


class dired_sidebar_toggle_details(DiredSidebarTextCommand):
    def run(self, edit):
        ctl = get_controller()
        ctl.toggle_details()
        state = 'Off' if ctl.state.ui_flags.details_hidden else 'On'
        sublime.status_message('DiredSidebar: Details {}'.format(state))


class dired_sidebar_toggle_omit(DiredSidebarTextCommand):
    def run(self, edit):
        ctl = get_controller()
        ctl.toggle_omit()
        state = 'Off' if ctl.state.ui_flags.omit_mode else 'On'
        sublime.status_message('DiredSidebar: Hidden {}'.format(state))


class dired_sidebar_refresh(DiredSidebarTextCommand):
    def run(self, edit):
        get_controller().refresh()


class DiredSidebarContext(EventListener):
    def on_query_context(self, view, key, operator, operand, match_all):
        if key != "dired_sidebar":
            return None

        if operator not in (sublime.OP_EQUAL, sublime.OP_NOT_EQUAL):
            print(
                "Context '{key}' only supports operator 'equal' and 'not_equal'."
                .format(key=key)
            )
            return False

        if operand not in (True, False):
            print(
                "Context '{key}' only supports operand 'true' and 'false'."
                .format(key=key)
            )
            return False

        return (op.eq if operator == sublime.OP_EQUAL else op.ne)(owns(view), operand)


class DiredSidebarReroute(EventListener):
    def on_text_command(self, view, command_name, args):
        if not owns(view):
            return None
        return reroute(command_name, args, view.settings().get(DELEGATING_SETTING, False))
