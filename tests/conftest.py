#!/usr/bin/python
# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from xfakes import FakeSession


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()
