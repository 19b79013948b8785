#!/usr/bin/python
# -*- coding: utf-8 -*-

__all__ = [
    "version", "launch", "main",
    "XSession", "AtomResolver", "Props",
    "parseGeometry", "resolveGeometry", "loadIcon", "packIcon",
    "WindowMatcher", "findInTree", "byPid", "byClass", "byName",
    "PollFinder", "EventFinder", "applyHints",
    "Edge", "Size", "Offset", "Geometry", "IconImage", "MatchSpec", "MatchKind", "HintSet", "SizeMode",
    "MinimizeMode", "Strategy", "LaunchResult",
    "PyWinHintError", "GeometryError", "IconError", "SpawnError", "DisplayError", "AtomError", "RequestError",
    "HintError"
]

__version__ = "0.1.0"


def version(numberOnly: bool = True) -> str:
    """Returns the current version of PyWinHint module, in the form ''x.x.xx'' as string"""
    return ("" if numberOnly else "PyWinHint-")+__version__


from ._atoms import AtomResolver
from ._cli import main
from ._discovery import EventFinder, PollFinder, launch
from ._errors import (AtomError, DisplayError, GeometryError, HintError, IconError, PyWinHintError,
                      RequestError, SpawnError)
from ._geometry import parseGeometry, resolveGeometry
from ._hints import applyHints
from ._icon import loadIcon, packIcon
from ._matcher import WindowMatcher, byClass, byName, byPid, findInTree
from ._props import Props
from ._structs import (Edge, Geometry, HintSet, IconImage, LaunchResult, MatchKind, MatchSpec, MinimizeMode,
                       Offset, Size, SizeMode, Strategy)
from ._xsession import XSession
