#!/usr/bin/python
# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Optional, List, Union

import Xlib.X
import Xlib.Xatom

from ._props import Props
from ._structs import MatchKind, MatchSpec

logger = logging.getLogger(__name__)


def byPid(pid: int) -> MatchSpec:
    return MatchSpec(MatchKind.PID, pid)


def byClass(klass: str) -> MatchSpec:
    return MatchSpec(MatchKind.CLASS, klass)


def byName(name: str) -> MatchSpec:
    return MatchSpec(MatchKind.NAME, name)


def _cardinals(prop) -> Optional[List[int]]:
    # Only 32-bit values are accepted. Anything else is handled as "not present"
    if prop is None or getattr(prop, "format", 0) != Props.DataFormat.INT:
        return None
    return [int(a) for a in prop.value]


def _text(prop) -> Optional[bytes]:
    if prop is None or getattr(prop, "format", 0) != Props.DataFormat.STR:
        return None
    value: Union[bytes, str] = prop.value
    return value.encode("latin-1") if isinstance(value, str) else bytes(value)


class WindowMatcher:
    """
    Decides whether a window is the one the caller is waiting for.

    Match criteria (MatchSpec):

        - PID: _NET_WM_PID holds exactly one 32-bit value, equal to target pid. If ''requireIcon'' is set, the
          window must also have a non-empty _NET_WM_ICON, which is taken as a sign the window is fully set up
          (many toolkits set _NET_WM_PID on several hidden windows, e.g. client leaders)
        - CLASS: any NUL-separated segment of WM_CLASS is byte-for-byte equal to target (same length, no case
          folding, so "firefox" doesn't match "firefox-esr")
        - NAME: WM_NAME is byte-for-byte equal to target
    """

    def __init__(self, session, spec: MatchSpec, requireIcon: bool = True):

        self.session = session
        self.spec = spec
        self.requireIcon = requireIcon
        if spec.kind == MatchKind.PID:
            self._target: Union[int, bytes] = int(spec.value)
        else:
            self._target = str(spec.value).encode("utf-8")

    def matches(self, winId: int) -> bool:
        if self.spec.kind == MatchKind.PID:
            return self._matchPid(winId)
        elif self.spec.kind == MatchKind.CLASS:
            return self._matchClass(winId)
        return self._matchName(winId)

    __call__ = matches

    def _matchPid(self, winId: int) -> bool:
        pid = _cardinals(self.session.getProperty(winId, Props.Window.PID, Xlib.Xatom.CARDINAL, 1))
        if pid is None or len(pid) != 1 or pid[0] != self._target:
            return False
        if self.requireIcon:
            icon = _cardinals(self.session.getProperty(winId, Props.Window.ICON, Xlib.Xatom.CARDINAL, 1))
            if not icon:
                logger.debug("Window 0x%x belongs to pid %d but has no icon yet", winId, self._target)
                return False
        return True

    def _matchClass(self, winId: int) -> bool:
        value = _text(self.session.getFullProperty(winId, Xlib.Xatom.WM_CLASS, Xlib.Xatom.STRING))
        if not value:
            return False
        target = self._target
        for segment in value.split(b"\x00"):
            if segment and len(segment) == len(target) and segment == target:
                return True
        return False

    def _matchName(self, winId: int) -> bool:
        value = _text(self.session.getFullProperty(winId, Xlib.Xatom.WM_NAME, Xlib.X.AnyPropertyType))
        if value is None:
            return False
        return len(value) == len(self._target) and value == self._target


def findInTree(session, matcher: WindowMatcher, start: Optional[int] = None) -> Optional[int]:
    """
    Walk the window tree depth-first, looking for the first window accepted by matcher.

    Siblings are visited in the order returned by the server. An explicit stack is used, so deep trees don't
    hit the recursion limit.

    :param session: XSession (or compatible) used to query the tree
    :param matcher: WindowMatcher to apply to each window
    :param start: window where the walk starts (defaults to root, which is also checked)
    :return: id of matching window or None
    """
    stack: List[int] = [session.root if start is None else start]
    while stack:
        winId = stack.pop()
        if matcher.matches(winId):
            return winId
        stack.extend(reversed(session.getChildren(winId)))
    return None
