#!/usr/bin/python
# -*- coding: utf-8 -*-
from __future__ import annotations

import sys
assert sys.platform == "linux"

import logging
import select
import struct
from enum import Enum
from typing import Optional, Union, List, Tuple

import Xlib.display
import Xlib.error
import Xlib.protocol
import Xlib.X
import Xlib.Xatom
from Xlib.xobject.drawable import Window as XWindow

from ._atoms import AtomResolver
from ._errors import DisplayError, RequestError
from ._props import Props
from ._structs import ScreenInfo

logger = logging.getLogger(__name__)

PropName = Union[str, int, Enum]


class XSession:
    """
    Single connection to the X server, used for every read and write.

    Apart from given methods, there are some values you can use with python-xlib:

    - display: XDisplay connection

    - screen: screen Struct

    - root: root window id

    - atoms: AtomResolver bound to this connection

    Write requests (changeProperty, sendMessage, configure) are checked: the connection is synced right after the
    request and any error reported by the server is raised as RequestError.

    Not thread-safe. Use one session per flow of control.
    """

    def __init__(self, displayName: Optional[str] = None):

        try:
            self.display: Xlib.display.Display = Xlib.display.Display(displayName)
        except (Xlib.error.DisplayError, Xlib.error.ConnectionClosedError) as err:
            raise DisplayError("Cannot open display %s: %s" % (displayName or "(default)", err)) from err
        self.screen = self.display.screen()
        self.root: int = self.screen.root.id
        self.screenWidth: int = self.screen.width_in_pixels
        self.screenHeight: int = self.screen.height_in_pixels
        self.atoms = AtomResolver(self.display)
        logger.debug("Connected to %s: %s", self.display.get_display_name(), self.screenInfo())

    def __enter__(self) -> XSession:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self):
        self.display.close()

    def screenInfo(self) -> ScreenInfo:
        return {
            "screen_number": self.display.get_default_screen(),
            "root": self.root,
            "width": self.screenWidth,
            "height": self.screenHeight
        }

    def atom(self, name: PropName) -> int:
        """
        Get the atom for given property / state / type name (see AtomResolver)

        :param name: name as str, Props.* member or atom (int, returned as is)
        :return: atom as int
        """
        if isinstance(name, int) and not isinstance(name, Enum):
            return name
        return self.atoms.resolve(name)

    def _window(self, winId: int) -> XWindow:
        return self.display.create_resource_object('window', winId)

    def getProperty(self, winId: int, prop: PropName, prop_type: int = Xlib.X.AnyPropertyType,
                    length: int = 1) -> Optional[Xlib.protocol.request.GetProperty]:
        """
        Read the first ''length'' 32-bit units of given window property

        Windows may disappear at any moment, so errors while reading are considered as "property not present"

        :param winId: id of the window
        :param prop: property to retrieve as int or str (will be translated to int)
        :param prop_type: property type (e.g. Xlib.X.AnyPropertyType or Xlib.Xatom.CARDINAL)
        :param length: number of 32-bit units to read
        :return: Xlib.protocol.request.GetProperty struct or None (property couldn't be obtained)
        """
        try:
            return self._window(winId).get_property(self.atom(prop), prop_type, 0, length)
        except Xlib.error.XError as err:
            logger.debug("Cannot read %s from window 0x%x: %s", prop, winId, err)
            return None

    def getFullProperty(self, winId: int, prop: PropName, prop_type: int = Xlib.X.AnyPropertyType,
                        sizehint: int = 10) -> Optional[Xlib.protocol.request.GetProperty]:
        """
        Read the whole value of given window property (see getProperty())

        :param winId: id of the window
        :param prop: property to retrieve as int or str (will be translated to int)
        :param prop_type: property type (e.g. Xlib.X.AnyPropertyType or Xlib.Xatom.STRING)
        :param sizehint: Expected data length hint (defaults to 10)
        :return: Xlib.protocol.request.GetProperty struct or None (property couldn't be obtained)
        """
        try:
            return self._window(winId).get_full_property(self.atom(prop), prop_type, sizehint)
        except Xlib.error.XError as err:
            logger.debug("Cannot read %s from window 0x%x: %s", prop, winId, err)
            return None

    def getChildren(self, winId: int) -> List[int]:
        """
        Get the ids of the direct children of given window, in server (stacking) order

        :param winId: id of the parent window
        :return: list of window ids (empty if window is gone)
        """
        try:
            return [child.id for child in self._window(winId).query_tree().children]
        except Xlib.error.XError as err:
            logger.debug("Cannot query tree of window 0x%x: %s", winId, err)
            return []

    def getSize(self, winId: int) -> Tuple[int, int]:
        """
        Get current size of given window

        :param winId: id of the window
        :return: (width, height) tuple
        """
        try:
            geom = self._window(winId).get_geometry()
        except Xlib.error.XError as err:
            raise RequestError("GetGeometry", err) from err
        return geom.width, geom.height

    def changeProperty(self, winId: int, prop: PropName, data: Union[List[int], bytes],
                       prop_type: PropName = Xlib.Xatom.ATOM, propMode: Props.Mode = Props.Mode.REPLACE):
        """
        Change given window property and wait for the server to process the request

        :param winId: id of the window to which change the property
        :param prop: property to change as int or str (will be translated to int)
        :param data: data of the property as bytes (format 8) or list of int (format 32)
        :param prop_type: property type (e.g. Xlib.Xatom.CARDINAL or Xlib.Xatom.ATOM)
        :param propMode: Property mode: APPEND/PREPEND/REPLACE (defaults to REPLACE)
        """
        dataFormat = Props.DataFormat.STR if isinstance(data, bytes) else Props.DataFormat.INT
        ec = Xlib.error.CatchError()
        self._window(winId).change_property(self.atom(prop), self.atom(prop_type), dataFormat.value, data,
                                            propMode.value, onerror=ec)
        self._check(ec, "ChangeProperty")

    def sendMessage(self, winId: int, prop: PropName, data: List[int]):
        """
        Send a ClientMessage about given window to the root, so the Window Manager can act on it

        :param winId: window id (int) the message refers to
        :param prop: message type as int or str (will be translated to int)
        :param data: data of the message as a list of up to 5 integers (format 32)
        """
        data = (data + [0] * (5 - len(data)))[:5]
        ev = Xlib.protocol.event.ClientMessage(window=winId, client_type=self.atom(prop),
                                               data=(Props.DataFormat.INT.value, data))
        mask: int = Xlib.X.SubstructureRedirectMask | Xlib.X.SubstructureNotifyMask
        ec = Xlib.error.CatchError()
        self.screen.root.send_event(ev, event_mask=mask, onerror=ec)
        self._check(ec, "SendEvent")

    def configure(self, winId: int, **values: int):
        """
        Issue a ConfigureWindow request with given values (x, y, width, height)

        :param winId: id of the window
        :param values: values to change
        """
        ec = Xlib.error.CatchError()
        try:
            self._window(winId).configure(onerror=ec, **values)
        except struct.error as err:
            raise RequestError("ConfigureWindow", err) from err
        self._check(ec, "ConfigureWindow")

    def _check(self, ec: Xlib.error.CatchError, request: str):
        try:
            self.display.sync()
        except Xlib.error.XError as err:
            raise RequestError(request, err) from err
        err = ec.get_error()
        if err:
            raise RequestError(request, err)

    def selectRootEvents(self, mask: int):
        """
        Select which events are reported on the root window. Use Xlib.X.NoEventMask to stop listening.

        :param mask: event mask as integer: Xlib.X.mask1 | Xlib.X.mask2 | ...
        """
        self.screen.root.change_attributes(event_mask=mask)
        self.display.flush()

    def nextEvent(self, timeout: float) -> Optional[Xlib.protocol.rq.Event]:
        """
        Wait up to ''timeout'' seconds for the next event

        :param timeout: max seconds to wait
        :return: event or None if no event arrived in time
        """
        if not self.display.pending_events():
            readable, _, _ = select.select([self.display], [], [], max(0.0, timeout))
            if not readable:
                return None
        return self.display.next_event()
