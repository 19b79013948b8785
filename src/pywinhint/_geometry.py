#!/usr/bin/python
# -*- coding: utf-8 -*-
from __future__ import annotations

import re
from typing import Callable, Optional, Tuple

from ._errors import GeometryError
from ._structs import Edge, Geometry, Offset, ResolvedGeometry, Size

# Limits of the CARD16 (width / height) and INT16 (x / y) fields of a ConfigureWindow request
MAX_SIZE = 65535
MAX_OFFSET = 32767
MIN_POSITION = -32768

_GEOMETRY_RE = re.compile(
    r"(?:(?P<width>[0-9]{1,5})[xX](?P<height>[0-9]{1,5}))?"
    r"(?:(?P<xsign>[+-])(?P<x>[0-9]{1,5})(?P<ysign>[+-])(?P<y>[0-9]{1,5}))?"
)


def parseGeometry(text: str) -> Geometry:
    """
    Parse a geometry string with the form [<width>x<height>][{+-}<x>{+-}<y>]

    Both blocks are optional, but if present, size must come first. A '+' sign means the offset is measured from
    the left / top edge of the screen, while a '-' sign measures it from the right / bottom edge.

    Examples:
        "200x200+100-100" -> size (200, 200), offset (NEAR, 100, FAR, 100)
        "-100-100" -> no size, offset (FAR, 100, FAR, 100)

    :param text: geometry string
    :return: Geometry struct (size and offset are None if not present)
    """
    match = _GEOMETRY_RE.fullmatch(text)
    if match is None:
        raise GeometryError("Invalid geometry: %r (expected [<width>x<height>][{+-}<x>{+-}<y>])" % text)

    size: Optional[Size] = None
    if match.group("width") is not None:
        width = int(match.group("width"))
        height = int(match.group("height"))
        if not (0 < width <= MAX_SIZE and 0 < height <= MAX_SIZE):
            raise GeometryError("Invalid geometry size: %r (must be 1..%d)" % (text, MAX_SIZE))
        size = Size(width, height)

    offset: Optional[Offset] = None
    if match.group("xsign") is not None:
        x = int(match.group("x"))
        y = int(match.group("y"))
        if x > MAX_OFFSET or y > MAX_OFFSET:
            raise GeometryError("Invalid geometry offset: %r (must be 0..%d)" % (text, MAX_OFFSET))
        offset = Offset(_edge(match.group("xsign")), x, _edge(match.group("ysign")), y)

    return Geometry(size, offset)


def _edge(sign: str) -> Edge:
    return Edge.FAR if sign == "-" else Edge.NEAR


def _position(axis: str, value: int) -> int:
    if not MIN_POSITION <= value <= MAX_OFFSET:
        raise GeometryError("Resolved %s position %d is out of range (%d..%d)"
                            % (axis, value, MIN_POSITION, MAX_OFFSET))
    return value


def resolveGeometry(geometry: Geometry, screenWidth: int, screenHeight: int,
                    currentSize: Callable[[], Tuple[int, int]]) -> ResolvedGeometry:
    """
    Translate a parsed geometry into the values of a ConfigureWindow request.

    Far-edge offsets are converted into absolute coordinates: screen extent - offset - window extent. The window
    extent is the requested size if given, or the current window size otherwise. currentSize() is invoked at most
    once, and only if a far-edge axis has no requested size.
    Raises GeometryError if a resolved position doesn't fit the INT16 x / y fields of the request.

    :param geometry: parsed Geometry struct
    :param screenWidth: width of the screen in pixels
    :param screenHeight: height of the screen in pixels
    :param currentSize: callable returning current (width, height) of the target window
    :return: dict with the determined keys among x, y, width and height
    """
    values: ResolvedGeometry = {}
    size, offset = geometry
    if size is not None:
        values["width"] = size.width
        values["height"] = size.height

    if offset is not None:
        cached: Optional[Tuple[int, int]] = None

        def windowSize() -> Tuple[int, int]:
            nonlocal cached
            if size is not None:
                return size.width, size.height
            if cached is None:
                cached = currentSize()
            return cached

        if offset.xEdge == Edge.FAR:
            values["x"] = _position("x", screenWidth - offset.x - windowSize()[0])
        else:
            values["x"] = offset.x
        if offset.yEdge == Edge.FAR:
            values["y"] = _position("y", screenHeight - offset.y - windowSize()[1])
        else:
            values["y"] = offset.y

    return values
