#!/usr/bin/python
# -*- coding: utf-8 -*-

import sys

from ._cli import main

sys.exit(main())
