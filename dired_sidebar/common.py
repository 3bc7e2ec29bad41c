'''Common stuff, used in other modules'''
from __future__ import annotations
import os

LOG_PREFIX = 'DiredSidebar:'


def first(seq, pred):
    '''similar to built-in any() but return the object instead of boolean'''
    return next((item for item in seq if pred(item)), None)


def ensure_trailing_sep(s):
    return s if s.endswith(os.sep) else (s + os.sep)


def parent_dir(path: str) -> str:
    '''
    foo/bar/ → foo/
    foo/bar  → foo/
    /        → /
    '''
    parent = os.path.dirname(path.rstrip(os.sep) or os.sep)
    return ensure_trailing_sep(parent)


def log(*args):
    print(LOG_PREFIX, *args)
