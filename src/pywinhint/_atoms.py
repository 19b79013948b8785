#!/usr/bin/python
# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Union

import Xlib.display
import Xlib.error

from ._errors import AtomError

logger = logging.getLogger(__name__)


class AtomResolver:
    """
    Translates protocol names (e.g. "_NET_WM_PID") into the atoms assigned by the X server.

    Every name is interned only once per connection. Later requests for the same name are answered from the
    table without a round trip. The table is never invalidated, since atoms live as long as the server does.
    """

    def __init__(self, display: Xlib.display.Display):
        self.display = display
        self._atoms: Dict[str, int] = {}

    def resolve(self, name: Union[str, Enum]) -> int:
        """
        Get the atom for the given protocol name, creating it on the server if needed

        :param name: protocol name as str or as a Props.* member
        :return: atom as int
        """
        if isinstance(name, Enum):
            name = name.value
        if not isinstance(name, str) or not name:
            raise ValueError("Atom name must be a non-empty string, got %r" % (name,))

        atom = self._atoms.get(name)
        if atom is None:
            try:
                atom = self.display.intern_atom(name, only_if_exists=False)
            except Xlib.error.XError as err:
                raise AtomError("Failed to create atom %s: %s" % (name, err)) from err
            if not atom:
                raise AtomError("Failed to create atom %s" % name)
            logger.debug("Interned %s = %d", name, atom)
            self._atoms[name] = atom
        return atom

    __getitem__ = resolve

    def __contains__(self, name: object) -> bool:
        if isinstance(name, Enum):
            name = name.value
        return name in self._atoms

    def __len__(self) -> int:
        return len(self._atoms)
