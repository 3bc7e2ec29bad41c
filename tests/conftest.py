# tests/conftest.py
import pytest

from dired_sidebar import SidebarConfig, SidebarController, SidebarState, UIFlags

from fakes import FakeDirectoryBrowser, FakeFS, FakeWindowManager


@pytest.fixture
def fs():
    return FakeFS(
        '/a/b/file.txt',
        '/a/b/other.txt',
        '/a/b/.hidden',
        '/a/b/sub/deep.txt',
        '/a/c.txt',
        '/home/user/notes.md',
    )


@pytest.fixture
def browser(fs):
    return FakeDirectoryBrowser(fs)


@pytest.fixture
def windows():
    return FakeWindowManager()


@pytest.fixture
def config():
    return SidebarConfig()


@pytest.fixture
def controller(config, browser, windows):
    return SidebarController(SidebarState(config), browser, windows)


@pytest.fixture
def make_controller(fs):
    '''Build a controller with custom host defaults, document and config'''
    def factory(document=None, defaults=UIFlags(False, False), **config):
        browser = FakeDirectoryBrowser(fs, defaults=defaults)
        windows = FakeWindowManager(document=document)
        state = SidebarState(SidebarConfig(**config))
        return SidebarController(state, browser, windows)
    return factory
