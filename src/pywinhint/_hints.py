#!/usr/bin/python
# -*- coding: utf-8 -*-
from __future__ import annotations

import functools
import logging
from typing import Callable, List, Tuple

import Xlib.Xatom

from ._errors import GeometryError, HintError, RequestError
from ._geometry import resolveGeometry
from ._icon import iconCardinals
from ._props import Props
from ._structs import Geometry, HintSet, IconImage, MinimizeMode, SizeMode

logger = logging.getLogger(__name__)


def _checked(hint: str):
    # Turns request failures into HintError so every hint can be reported on its own
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (RequestError, GeometryError) as err:
                raise HintError(hint, err) from err
        return wrapper
    return decorator


def changeWmState(session, winId: int, action: Props.StateAction, state: Props.State,
                  state2: Props.State = Props.State.NULL):
    """
    Ask the Window Manager to change up to two _NET_WM_STATE values of given window at once.

    l[0] is the action (REMOVE 0 / ADD 1 / TOGGLE 2), l[1] and l[2] the state atoms (l[2] is 0 if only one state
    is changed) and l[3] the source indication (1 for applications).

    :param session: XSession to use
    :param winId: id of the target window
    :param action: Action to perform with the state: ADD/REMOVE/TOGGLE (Props.StateAction.*)
    :param state: Target new state as State (Props.State.*)
    :param state2: Up to two states can be changed at once. Defaults to NULL (no second state to change).
    """
    st1: int = session.atom(state)
    st2: int = session.atom(state2) if state2 != Props.State.NULL else 0
    session.sendMessage(winId, Props.Window.WM_STATE, [action.value, st1, st2, Props.Source.APPLICATION.value])


@_checked("icon")
def setIcon(session, winId: int, icon: IconImage):
    """Replace _NET_WM_ICON of given window"""
    session.changeProperty(winId, Props.Window.ICON, iconCardinals(icon), Xlib.Xatom.CARDINAL)


@_checked("size")
def setSizeMode(session, winId: int, size: SizeMode, minimizeMode: MinimizeMode = MinimizeMode.ICONIFY):
    """
    Maximize, minimize or set fullscreen given window.

    MIN is sent as a legacy WM_CHANGE_STATE / IconicState message or as a _NET_WM_STATE_HIDDEN request,
    depending on minimizeMode.
    """
    if size == SizeMode.MAX:
        changeWmState(session, winId, Props.StateAction.ADD, Props.State.MAXIMIZED_VERT,
                      Props.State.MAXIMIZED_HORZ)
    elif size == SizeMode.FULLSCREEN:
        changeWmState(session, winId, Props.StateAction.ADD, Props.State.FULLSCREEN)
    elif minimizeMode == MinimizeMode.HIDDEN:
        changeWmState(session, winId, Props.StateAction.ADD, Props.State.HIDDEN)
    else:
        session.sendMessage(winId, Props.Window.CHANGE_STATE, [Props.WmState.ICONIC.value])


@_checked("above")
def setAbove(session, winId: int):
    changeWmState(session, winId, Props.StateAction.ADD, Props.State.ABOVE)


@_checked("decoration")
def removeDecoration(session, winId: int):
    """
    Ask the Window Manager not to decorate given window, using Motif hints.

    Only the decorations field is flagged as valid, and it's set to 0 (no decorations). Window Managers which
    don't know about _MOTIF_WM_HINTS will just ignore it.
    """
    hints = [0] * Props.MotifHints.LENGTH
    hints[0] = Props.MotifHints.FLAG_DECORATIONS.value
    session.changeProperty(winId, Props.Window.MOTIF_HINTS, hints, Props.Window.MOTIF_HINTS)


@_checked("type")
def setWindowType(session, winId: int, winType: Props.WindowType):
    session.changeProperty(winId, Props.Window.WM_WINDOW_TYPE, [session.atom(winType)], Xlib.Xatom.ATOM)


@_checked("geometry")
def setGeometry(session, winId: int, geometry: Geometry):
    """
    Move and / or resize given window. Far-edge offsets are resolved against the screen size and the requested
    size, or the current window size if no size was requested.
    """
    values = resolveGeometry(geometry, session.screenWidth, session.screenHeight,
                             lambda: session.getSize(winId))
    if values:
        logger.debug("Configuring window 0x%x: %s", winId, values)
        session.configure(winId, **values)


@_checked("taskbar")
def setSkipTaskbar(session, winId: int):
    changeWmState(session, winId, Props.StateAction.ADD, Props.State.SKIP_TASKBAR)


def requestedHints(hints: HintSet) -> List[Tuple[str, Callable[..., None], tuple]]:
    """
    List the hint operations needed for given HintSet, in application order:
    icon, size, above, decoration, type, geometry, taskbar.

    :param hints: HintSet struct
    :return: list of (name, function, extra args) tuples
    """
    ops: List[Tuple[str, Callable[..., None], tuple]] = []
    if hints.icon is not None:
        ops.append(("icon", setIcon, (hints.icon,)))
    if hints.size is not None:
        ops.append(("size", setSizeMode, (hints.size, hints.minimizeMode)))
    if hints.above:
        ops.append(("above", setAbove, ()))
    if hints.noDecoration:
        ops.append(("decoration", removeDecoration, ()))
    if hints.windowType is not None:
        ops.append(("type", setWindowType, (hints.windowType,)))
    if hints.geometry is not None:
        ops.append(("geometry", setGeometry, (hints.geometry,)))
    if hints.skipTaskbar:
        ops.append(("taskbar", setSkipTaskbar, ()))
    return ops


def applyHints(session, winId: int, hints: HintSet) -> List[HintError]:
    """
    Apply all requested hints to given window. A failing hint doesn't prevent the rest from being applied.

    :param session: XSession to use
    :param winId: id of the target window
    :param hints: HintSet struct
    :return: list of HintError, one for each failed hint (empty if all were applied)
    """
    failures: List[HintError] = []
    for name, func, args in requestedHints(hints):
        try:
            func(session, winId, *args)
            logger.info("Applied %s hint to window 0x%x", name, winId)
        except HintError as err:
            logger.error("%s", err)
            failures.append(err)
    return failures
