#!/usr/bin/python
# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Optional


class PyWinHintError(Exception):
    """Base class for all errors raised by PyWinHint"""


class GeometryError(PyWinHintError, ValueError):
    """Geometry string doesn't follow [<width>x<height>][{+-}<x>{+-}<y>]"""


class IconError(PyWinHintError):
    """Icon file is missing, unreadable or can't be decoded"""


class SpawnError(PyWinHintError):
    """Target command couldn't be started"""


class DisplayError(PyWinHintError):
    """Connection to the X server couldn't be established"""


class AtomError(PyWinHintError):
    """X server couldn't intern a protocol name"""


class RequestError(PyWinHintError):
    """
    An X request was rejected by the server.

    :param request: name of the failed request (e.g. "ChangeProperty")
    :param error: X error returned by the server, if any
    """

    def __init__(self, request: str, error: Optional[object] = None):
        self.request = request
        self.error = error
        super().__init__("%s failed: %s" % (request, error))


class HintError(PyWinHintError):
    """
    A single hint couldn't be applied to the target window.

    :param hint: name of the hint (e.g. "icon", "geometry")
    :param detail: reason, usually the underlying RequestError
    """

    def __init__(self, hint: str, detail: object = None):
        self.hint = hint
        self.detail = detail
        super().__init__("Failed to apply %s hint: %s" % (hint, detail))
