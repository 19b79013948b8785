#!/usr/bin/python
# -*- coding: utf-8 -*-
from __future__ import annotations

from enum import Enum, IntEnum

import Xlib.X
import Xlib.Xutil


class Props:
    """
    Static registry of the protocol names used to discover windows and apply hints.

    Names are never turned into atoms here. Use AtomResolver.resolve() (or session.atom()) on the member (or its
    value) so the resolver stays the single source of truth for atom values.
    """

    class Window(Enum):
        NAME = "_NET_WM_NAME"
        WM_WINDOW_TYPE = "_NET_WM_WINDOW_TYPE"
        CHANGE_STATE = "WM_CHANGE_STATE"
        WM_STATE = "_NET_WM_STATE"
        ICON = "_NET_WM_ICON"
        PID = "_NET_WM_PID"
        MOTIF_HINTS = "_MOTIF_WM_HINTS"

    class WindowType(Enum):
        DESKTOP = "_NET_WM_WINDOW_TYPE_DESKTOP"
        DOCK = "_NET_WM_WINDOW_TYPE_DOCK"
        TOOLBAR = "_NET_WM_WINDOW_TYPE_TOOLBAR"
        MENU = "_NET_WM_WINDOW_TYPE_MENU"
        UTILITY = "_NET_WM_WINDOW_TYPE_UTILITY"
        SPLASH = "_NET_WM_WINDOW_TYPE_SPLASH"
        DIALOG = "_NET_WM_WINDOW_TYPE_DIALOG"
        DROPDOWN_MENU = "_NET_WM_WINDOW_TYPE_DROPDOWN_MENU"
        POPUP_MENU = "_NET_WM_WINDOW_TYPE_POPUP_MENU"
        TOOLTIP = "_NET_WM_WINDOW_TYPE_TOOLTIP"
        NOTIFICATION = "_NET_WM_WINDOW_TYPE_NOTIFICATION"
        COMBO = "_NET_WM_WINDOW_TYPE_COMBO"
        DND = "_NET_WM_WINDOW_TYPE_DND"
        NORMAL = "_NET_WM_WINDOW_TYPE_NORMAL"

    class State(Enum):
        NULL = "0"
        MAXIMIZED_VERT = "_NET_WM_STATE_MAXIMIZED_VERT"
        MAXIMIZED_HORZ = "_NET_WM_STATE_MAXIMIZED_HORZ"
        SKIP_TASKBAR = "_NET_WM_STATE_SKIP_TASKBAR"
        HIDDEN = "_NET_WM_STATE_HIDDEN"
        FULLSCREEN = "_NET_WM_STATE_FULLSCREEN"
        ABOVE = "_NET_WM_STATE_ABOVE"

    class StateAction(IntEnum):
        REMOVE = 0
        ADD = 1
        TOGGLE = 2

    class Source(IntEnum):
        # Source indication in requests (EWMH)
        LEGACY = 0
        APPLICATION = 1
        PAGER = 2

    class DataFormat(IntEnum):
        STR = 8
        INT = 32

    class Mode(IntEnum):
        REPLACE = Xlib.X.PropModeReplace
        APPEND = Xlib.X.PropModeAppend
        PREPEND = Xlib.X.PropModePrepend

    class WmState(IntEnum):
        WITHDRAWN = Xlib.Xutil.WithdrawnState
        NORMAL = Xlib.Xutil.NormalState
        ICONIC = Xlib.Xutil.IconicState

    class MotifHints(IntEnum):
        # _MOTIF_WM_HINTS is 5 x CARD32: flags, functions, decorations, input_mode, status
        FLAG_FUNCTIONS = 1 << 0
        FLAG_DECORATIONS = 1 << 1
        LENGTH = 5
