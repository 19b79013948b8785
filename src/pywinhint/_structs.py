#!/usr/bin/python
# -*- coding: utf-8 -*-
from __future__ import annotations

from enum import Enum, IntEnum
from typing import NamedTuple, Optional, List, Union

from typing_extensions import TypedDict

from ._props import Props


class SizeMode(Enum):
    MAX = "max"
    MIN = "min"
    FULLSCREEN = "fullscreen"


class MinimizeMode(Enum):
    """
    How a MIN size request is sent to the Window Manager:

        - ICONIFY: legacy ICCCM WM_CHANGE_STATE message with IconicState
        - HIDDEN: add _NET_WM_STATE_HIDDEN through a _NET_WM_STATE message

    Not all Window Managers honor both, so this is left to the caller.
    """
    ICONIFY = "iconify"
    HIDDEN = "hidden"


class MatchKind(Enum):
    PID = "pid"
    CLASS = "class"
    NAME = "name"


class Strategy(Enum):
    POLL = "poll"
    EVENT = "event"


class Edge(IntEnum):
    NEAR = 0  # '+': offset from left / top edge
    FAR = 1   # '-': offset from right / bottom edge


class Size(NamedTuple):
    width: int
    height: int


class Offset(NamedTuple):
    xEdge: Edge
    x: int
    yEdge: Edge
    y: int


class Geometry(NamedTuple):
    """Parsed geometry string. Either (or both) fields may be None"""
    size: Optional[Size]
    offset: Optional[Offset]


class ResolvedGeometry(TypedDict, total=False):
    """
    Container class to handle the values passed to a ConfigureWindow request.
    Only the determined keys are present:

        - x (int): final x coordinate of the window
        - y (int): final y coordinate of the window
        - width (int): final width of the window
        - height (int): final height of the window
    """
    x: int
    y: int
    width: int
    height: int


class ScreenInfo(TypedDict):
    """
    Container class to handle ScreenInfo struct:

        - screen_number (int): screen number within the display
        - root (int): root window id belonging to screen
        - width (int): screen width in pixels
        - height (int): screen height in pixels
    """
    screen_number: int
    root: int
    width: int
    height: int


class IconImage(NamedTuple):
    """
    Icon ready to be written as _NET_WM_ICON:

        - data: LE u32 width, LE u32 height, then one BGRA word per pixel (row-major)
        - length: number of 32-bit elements in data (width * height + 2)
    """
    width: int
    height: int
    data: bytes
    length: int


class MatchSpec(NamedTuple):
    kind: MatchKind
    value: Union[int, str]


class HintSet(NamedTuple):
    icon: Optional[IconImage] = None
    size: Optional[SizeMode] = None
    above: bool = False
    noDecoration: bool = False
    windowType: Optional[Props.WindowType] = None
    geometry: Optional[Geometry] = None
    skipTaskbar: bool = False
    minimizeMode: MinimizeMode = MinimizeMode.ICONIFY


class LaunchResult(NamedTuple):
    pid: int
    window: Optional[int]
    failures: List[Exception]
