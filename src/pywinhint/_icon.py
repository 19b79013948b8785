#!/usr/bin/python
# -*- coding: utf-8 -*-
from __future__ import annotations

import os
import struct
from typing import List

from PIL import Image, UnidentifiedImageError

from ._errors import IconError
from ._structs import IconImage


def loadIcon(path: str) -> IconImage:
    """
    Decode an image file and pack it as a _NET_WM_ICON property value.

    Any format Pillow is able to open is accepted. The image is converted to RGBA before packing.

    :param path: path to the image file
    :return: IconImage struct
    """
    if not os.path.isfile(path):
        raise IconError("Icon file not found: %s" % path)
    try:
        with Image.open(path) as img:
            rgba = img.convert("RGBA")
            width, height = rgba.size
            pixels = rgba.tobytes()
    except (OSError, UnidentifiedImageError, SyntaxError, ValueError) as err:
        raise IconError("Failed to decode icon %s: %s" % (path, err)) from err
    return packIcon(width, height, pixels)


def packIcon(width: int, height: int, rgba: bytes) -> IconImage:
    """
    Pack RGBA pixels (4 bytes per pixel, row-major, no padding) into _NET_WM_ICON layout:
    two little-endian 32-bit words (width, height) followed by one BGRA word per pixel.

    Read as little-endian CARD32, every BGRA word is the ARGB cardinal the EWMH spec expects.

    :param width: icon width in pixels
    :param height: icon height in pixels
    :param rgba: pixel data in RGBA order
    :return: IconImage struct
    """
    if width <= 0 or height <= 0:
        raise IconError("Invalid icon size: %dx%d" % (width, height))
    if len(rgba) != width * height * 4:
        raise IconError("Icon data has %d bytes, expected %d for %dx%d RGBA"
                        % (len(rgba), width * height * 4, width, height))

    data = bytearray(struct.pack("<II", width, height))
    pixels = bytearray(rgba)
    # swap R and B in place, keeping G and A
    pixels[0::4], pixels[2::4] = pixels[2::4], pixels[0::4]
    data += pixels
    return IconImage(width, height, bytes(data), width * height + 2)


def iconCardinals(icon: IconImage) -> List[int]:
    """
    Get icon data as a list of 32-bit values, as expected by python-xlib for format 32 properties

    :param icon: IconImage struct
    :return: list of int
    """
    return list(struct.unpack("<%dI" % icon.length, icon.data))
